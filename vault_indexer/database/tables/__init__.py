# vault_indexer/database/tables/__init__.py

from .pool import Balancer, Pool, PoolToken, Token, Investment
from .pricing import TokenPrice, LatestPrice, PoolHistoricalLiquidity, TradePair, TradePairPrice
from .events import Swap, BatchSwap, JoinExit, User, UserInternalBalance
from .snapshots import PoolSnapshot, BalancerSnapshot, UserSnapshot, TokenSnapshot, TradePairSnapshot

__all__ = [
    'Balancer',
    'Pool',
    'PoolToken',
    'Token',
    'Investment',
    'TokenPrice',
    'LatestPrice',
    'PoolHistoricalLiquidity',
    'TradePair',
    'TradePairPrice',
    'Swap',
    'BatchSwap',
    'JoinExit',
    'User',
    'UserInternalBalance',
    'PoolSnapshot',
    'BalancerSnapshot',
    'UserSnapshot',
    'TokenSnapshot',
    'TradePairSnapshot',
]
