# vault_indexer/handlers/__init__.py

from .context import HandlerContext
from .balances import BalanceHandler
from .swaps import SwapHandler
from .pool_factory import PoolFactoryHandler

__all__ = ['HandlerContext', 'BalanceHandler', 'SwapHandler', 'PoolFactoryHandler']
