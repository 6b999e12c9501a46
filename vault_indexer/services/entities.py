# vault_indexer/services/entities.py
"""
Load-or-create helpers shared by the event handlers
"""

from typing import Optional

from ..database.store import EntityStore
from ..database.tables import BatchSwap, PoolToken, Swap, TradePair, TradePairPrice, User
from ..database.ids import canonical_pair, get_pool_token_id, get_trade_pair_id
from ..types.new import EvmAddress


def get_user(store: EntityStore, address: EvmAddress) -> User:
    user = store.load(User, address)
    if user is None:
        user = store.save(User(id=address))
    return user


def load_pool_token(store: EntityStore, pool_id: str, token: EvmAddress) -> Optional[PoolToken]:
    return store.load(PoolToken, get_pool_token_id(pool_id, token))


def require_pool_token(store: EntityStore, pool_id: str, token: EvmAddress, **context) -> PoolToken:
    return store.load_required(PoolToken, get_pool_token_id(pool_id, token), pool_id=pool_id, **context)


def create_pool_token(store: EntityStore, pool_id: str, token: EvmAddress) -> PoolToken:
    pool_token = load_pool_token(store, pool_id, token)
    if pool_token is None:
        pool_token = store.save(PoolToken(
            id=get_pool_token_id(pool_id, token),
            pool_id=pool_id,
            address=token,
        ))
    return pool_token


def get_trade_pair(store: EntityStore, token_a: EvmAddress, token_b: EvmAddress) -> TradePair:
    pair_id = get_trade_pair_id(token_a, token_b)
    pair = store.load(TradePair, pair_id)
    if pair is None:
        token0, token1 = canonical_pair(token_a, token_b)
        pair = store.save(TradePair(id=pair_id, token0=token0, token1=token1))
    return pair


def get_trade_pair_price(store: EntityStore, pair: TradePair, block: int, timestamp: int) -> TradePairPrice:
    price_id = f"{pair.id}-{timestamp}"
    price = store.load(TradePairPrice, price_id)
    if price is None:
        price = TradePairPrice(id=price_id, pair_id=pair.id, block=block, timestamp=timestamp)
    return price


def get_batch_swap(store: EntityStore, swap: Swap) -> BatchSwap:
    """Batch for the swap's transaction, seeded from its first swap"""
    batch = store.load(BatchSwap, swap.batch)
    if batch is None:
        batch = BatchSwap(
            id=swap.batch,
            token_in=swap.token_in,
            token_out=swap.token_out,
            swaps=[],
            timestamp=swap.timestamp,
        )
    return batch
