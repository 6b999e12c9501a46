# vault_indexer/handlers/context.py

from ..core.config import IndexerConfig
from ..database.store import EntityStore
from ..services.contracts import PoolContractReader
from ..services.pricing import PricingEngine
from ..services.tokens import TokenMetadataReader


class HandlerContext:
    """Everything a handler may touch while applying one event"""

    def __init__(self,
                 store: EntityStore,
                 config: IndexerConfig,
                 token_reader: TokenMetadataReader,
                 pool_reader: PoolContractReader):
        self.store = store
        self.config = config
        self.token_reader = token_reader
        self.pool_reader = pool_reader
        self.pricing = PricingEngine(store, config.pricing)
