# vault_indexer/cli.py

"""
Vault Indexer CLI

Usage: vault-indexer --config config/mainnet.yaml [command] [options]
"""

from pathlib import Path

import click
import msgspec

from .core.config import IndexerConfig
from .core.logging import IndexerLogger
from .database.connection import DatabaseManager
from .processor import EventProcessor
from .types.errors import ConfigurationError, IndexerError
from .types.events import event_decoder


@click.group()
@click.option('--config', 'config_path', required=True, type=click.Path(dir_okay=False),
              help='YAML configuration file')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, config_path, verbose):
    """Vault Indexer - pool, swap and liquidity accounting from vault events"""
    ctx.ensure_object(dict)

    try:
        config = IndexerConfig.from_file(config_path)
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    log_level = "DEBUG" if verbose else config.logging.log_level
    IndexerLogger.reset()
    IndexerLogger.configure(
        log_dir=Path(config.logging.log_dir) if config.logging.log_dir else None,
        log_level=log_level,
        console_enabled=config.logging.console_enabled,
        file_enabled=config.logging.file_enabled,
        structured_format=config.logging.structured_format,
    )

    ctx.obj['config'] = config
    ctx.obj['verbose'] = verbose


def _database(config: IndexerConfig) -> DatabaseManager:
    db_manager = DatabaseManager(config.database)
    db_manager.initialize()
    return db_manager


@cli.command('init-db')
@click.pass_context
def init_db(ctx):
    """Create all entity tables"""
    config = ctx.obj['config']
    db_manager = _database(config)
    try:
        db_manager.create_schema()
    finally:
        db_manager.shutdown()
    click.echo("✅ Schema created")


@cli.command('process')
@click.argument('events_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--create-schema/--no-create-schema', default=True,
              help='Create missing tables before processing')
@click.pass_context
def process(ctx, events_file, create_schema):
    """Apply decoded events from a JSON lines file, in file order"""
    config = ctx.obj['config']
    db_manager = _database(config)

    try:
        if create_schema:
            db_manager.create_schema()

        processor = EventProcessor(db_manager, config)
        with open(events_file, 'rb') as f:
            events = [event_decoder.decode(line) for line in f if line.strip()]

        stats = processor.process_all(events)
    except msgspec.DecodeError as e:
        raise click.ClickException(f"Invalid event record: {e}")
    except IndexerError as e:
        raise click.ClickException(str(e))
    finally:
        db_manager.shutdown()

    click.echo(f"✅ Processed {stats['processed']} events")
    for event_type, count in sorted(stats.items()):
        if event_type != 'processed':
            click.echo(f"   {event_type}: {count}")


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
