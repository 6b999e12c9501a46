# vault_indexer/processor.py

from typing import Any, Dict, Iterable, Optional, Tuple, Type

from .core.config import IndexerConfig
from .core.logging import LoggingMixin, WARNING, ERROR
from .database.connection import DatabaseManager
from .database.store import EntityStore
from .handlers import BalanceHandler, HandlerContext, PoolFactoryHandler, SwapHandler
from .services.contracts import PoolContractReader, StaticPoolReader
from .services.tokens import StaticTokenMetadata, TokenMetadataReader
from .types.errors import IndexerError, UnknownEventError
from .types.events import (
    InternalBalanceChanged,
    PoolBalanceChanged,
    PoolBalanceManaged,
    PoolCreated,
    SwapEvent,
    VaultEvent,
)


class EventProcessor(LoggingMixin):
    """
    Applies decoded vault and factory events one at a time.

    Each event runs in its own database transaction: either all of its
    writes commit or none do. Events must arrive in chain order; they are
    never reordered here.
    """

    def __init__(self,
                 db_manager: DatabaseManager,
                 config: IndexerConfig,
                 token_reader: Optional[TokenMetadataReader] = None,
                 pool_reader: Optional[PoolContractReader] = None):
        self.db_manager = db_manager
        self.config = config
        self.token_reader = token_reader or StaticTokenMetadata(config.tokens)
        self.pool_reader = pool_reader or StaticPoolReader(config.pools)
        self._last_position: Optional[Tuple[int, int]] = None

        self.handler_map: Dict[Type[VaultEvent], Tuple[type, str]] = {
            SwapEvent: (SwapHandler, 'handle_swap_event'),
            PoolBalanceChanged: (BalanceHandler, 'handle_balance_change'),
            PoolBalanceManaged: (BalanceHandler, 'handle_balance_manage'),
            InternalBalanceChanged: (BalanceHandler, 'handle_internal_balance_change'),
            PoolCreated: (PoolFactoryHandler, 'handle_new_pool'),
        }

    def process(self, event: VaultEvent) -> Any:
        entry = self.handler_map.get(type(event))
        if entry is None:
            raise UnknownEventError(f"No handler for event type {type(event).__name__}")
        handler_class, method_name = entry

        if self._last_position is not None and event.position < self._last_position:
            self.log_event(WARNING, "Event received out of chain order", event)
        self._last_position = event.position

        try:
            with self.db_manager.get_transaction() as session:
                ctx = HandlerContext(
                    store=EntityStore(session, self.config.vault_id),
                    config=self.config,
                    token_reader=self.token_reader,
                    pool_reader=self.pool_reader,
                )
                handler = handler_class(ctx)
                return getattr(handler, method_name)(event)
        except IndexerError as e:
            self.log_event(ERROR, "Event processing failed", event, error=str(e))
            raise

    def process_all(self, events: Iterable[VaultEvent]) -> Dict[str, int]:
        stats = {'processed': 0}
        for event in events:
            self.process(event)
            stats['processed'] += 1
            stats[event.event_type] = stats.get(event.event_type, 0) + 1

        self.log_info("Events processed", **stats)
        return stats
