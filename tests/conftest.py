# tests/conftest.py
"""
pytest fixtures: an in-memory SQLite store and a handler context wired
to configuration-backed token and pool readers
"""

from decimal import Decimal

import pytest

from vault_indexer.core.config import IndexerConfig
from vault_indexer.core.logging import IndexerLogger
from vault_indexer.database.connection import DatabaseManager
from vault_indexer.database.ids import get_latest_price_id, get_pool_token_id
from vault_indexer.database.store import EntityStore
from vault_indexer.database.tables import LatestPrice, PoolToken
from vault_indexer.handlers import HandlerContext, PoolFactoryHandler
from vault_indexer.services.contracts import StaticPoolReader
from vault_indexer.services.tokens import StaticTokenMetadata

from .factories import CONFIG_DATA, pool_created


@pytest.fixture(autouse=True)
def quiet_logging():
    """Fresh logging state per test; records still reach caplog through propagation"""
    IndexerLogger.reset()
    IndexerLogger.configure(log_level="DEBUG", console_enabled=False)
    yield
    IndexerLogger.reset()


@pytest.fixture
def indexer_config():
    return IndexerConfig.from_dict(CONFIG_DATA, env_vars={})


@pytest.fixture
def db_manager(indexer_config):
    manager = DatabaseManager(indexer_config.database)
    manager.initialize()
    manager.create_schema()
    yield manager
    manager.shutdown()


@pytest.fixture
def session(db_manager):
    with db_manager.get_session() as session:
        yield session


@pytest.fixture
def store(session, indexer_config):
    return EntityStore(session, indexer_config.vault_id)


@pytest.fixture
def handler_context(store, indexer_config):
    return HandlerContext(
        store=store,
        config=indexer_config,
        token_reader=StaticTokenMetadata(indexer_config.tokens),
        pool_reader=StaticPoolReader(indexer_config.pools),
    )


@pytest.fixture
def pricing(handler_context):
    return handler_context.pricing


@pytest.fixture
def create_pool(handler_context):
    """Register a configured pool through the factory handler"""
    handler = PoolFactoryHandler(handler_context)

    def _create(pool_address: str, factory: str = "weighted"):
        return handler.handle_new_pool(pool_created(pool_address, factory))

    return _create


@pytest.fixture
def set_balances(store):
    """Overwrite pool token balances with human-scale amounts"""
    def _set(pool_id: str, balances: dict):
        for token, amount in balances.items():
            pool_token = store.load_required(PoolToken, get_pool_token_id(pool_id, token))
            pool_token.balance = Decimal(str(amount))
            store.save(pool_token)

    return _set


@pytest.fixture
def set_latest_price(store):
    """Seed the latest-price cache as if an earlier swap had observed it"""
    def _set(token: str, pricing_asset: str, price, block: int = 1, pool_id: str = "seed"):
        return store.save(LatestPrice(
            id=get_latest_price_id(token, pricing_asset),
            asset=token,
            pricing_asset=pricing_asset,
            price=Decimal(str(price)),
            block=block,
            pool_id=pool_id,
        ))

    return _set
