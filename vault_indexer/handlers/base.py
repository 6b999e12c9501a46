# vault_indexer/handlers/base.py

from abc import ABC
from typing import Optional

from ..core.logging import LoggingMixin, WARNING
from ..database.tables import Pool, Token
from ..services.tokens import get_token
from ..types.events import VaultEvent
from ..types.new import EvmAddress
from .context import HandlerContext


class BaseHandler(ABC, LoggingMixin):
    def __init__(self, ctx: HandlerContext):
        self.ctx = ctx
        self.store = ctx.store
        self.pricing = ctx.pricing
        self.name = self.__class__.__name__

    def load_pool(self, pool_id: str, event: VaultEvent) -> Optional[Pool]:
        """Pool for an event, or None after a warning. Unknown pools are skipped, not fatal."""
        pool = self.store.load(Pool, pool_id)
        if pool is None:
            self.log_event(WARNING, "Pool not found", event, pool_id=pool_id)
        return pool

    def get_token(self, address: EvmAddress) -> Token:
        return get_token(self.store, self.ctx.token_reader, address)
