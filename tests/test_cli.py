# tests/test_cli.py

import copy

import msgspec
import pytest
import yaml
from click.testing import CliRunner
from sqlalchemy import create_engine, inspect, text

from vault_indexer.cli import cli

from .factories import (
    CONFIG_DATA,
    DAI,
    WETH,
    WETH_DAI_POOL,
    WETH_DAI_POOL_ID,
    balance_changed,
    pool_created,
    swap,
    units,
)


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'vault.db'}"


@pytest.fixture
def config_file(tmp_path, db_url):
    data = copy.deepcopy(CONFIG_DATA)
    data['database'] = {'url': db_url}
    data['logging'] = {'log_level': 'INFO', 'console_enabled': False}
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(data))
    return path


@pytest.fixture
def events_file(tmp_path):
    events = [
        pool_created(WETH_DAI_POOL, block=1),
        balance_changed(WETH_DAI_POOL_ID, [WETH, DAI], [units(100), units(200000)], block=2),
        swap(WETH_DAI_POOL_ID, WETH, DAI, units(1), units(1980), block=3),
    ]
    path = tmp_path / "events.jsonl"
    path.write_bytes(b"\n".join(msgspec.json.encode(event) for event in events) + b"\n")
    return path


def test_init_db(config_file, db_url, monkeypatch):
    monkeypatch.delenv('VAULT_INDEXER_DB_URL', raising=False)
    result = CliRunner().invoke(cli, ['--config', str(config_file), 'init-db'], obj={})

    assert result.exit_code == 0, result.output
    assert "Schema created" in result.output
    table_names = inspect(create_engine(db_url)).get_table_names()
    assert 'pool' in table_names
    assert 'batch_swap' in table_names


def test_process_events(config_file, events_file, db_url, monkeypatch):
    monkeypatch.delenv('VAULT_INDEXER_DB_URL', raising=False)
    result = CliRunner().invoke(cli, ['--config', str(config_file), 'process', str(events_file)],
                                obj={})

    assert result.exit_code == 0, result.output
    assert "Processed 3 events" in result.output
    assert "SwapEvent: 1" in result.output

    with create_engine(db_url).connect() as conn:
        assert conn.execute(text("SELECT swaps_count FROM pool")).scalar() == 1


def test_invalid_event_record(config_file, tmp_path, monkeypatch):
    monkeypatch.delenv('VAULT_INDEXER_DB_URL', raising=False)
    bad = tmp_path / "bad.jsonl"
    bad.write_text('{"type": "Unheard", "block_number": 1}\n')

    result = CliRunner().invoke(cli, ['--config', str(config_file), 'process', str(bad)], obj={})

    assert result.exit_code == 1
    assert "Invalid event record" in result.output


def test_missing_config(tmp_path):
    result = CliRunner().invoke(cli, ['--config', str(tmp_path / "absent.yaml"), 'init-db'],
                                obj={})

    assert result.exit_code == 1
    assert "Config file not found" in result.output
