# vault_indexer/services/snapshots.py
"""
Day-bucketed rollups for pools, the protocol, users and trade pairs
"""

from decimal import Decimal

from ..database.store import EntityStore
from ..database.tables import (
    Balancer,
    BalancerSnapshot,
    Pool,
    PoolSnapshot,
    PoolToken,
    TradePair,
    TradePairSnapshot,
    UserSnapshot,
)
from ..database.ids import get_day_id, get_pool_token_id, get_snapshot_id
from ..types.new import EvmAddress
from ..utils.amounts import ZERO_BD


def create_pool_snapshot(store: EntityStore, pool_id: str, timestamp: int) -> None:
    pool = store.load(Pool, pool_id)
    if pool is None:
        return

    snapshot_id = get_snapshot_id(pool_id, timestamp)
    snapshot = store.load(PoolSnapshot, snapshot_id)
    if snapshot is None:
        snapshot = PoolSnapshot(id=snapshot_id, pool_id=pool_id, day_id=get_day_id(timestamp))

    amounts = []
    for token_address in pool.tokens_list:
        pool_token = store.load(PoolToken, get_pool_token_id(pool_id, token_address))
        amounts.append(pool_token.balance if pool_token else ZERO_BD)

    snapshot.amounts = amounts
    snapshot.liquidity = pool.liquidity if pool.liquidity is not None else ZERO_BD
    snapshot.swaps_count = pool.swaps_count
    store.save(snapshot)


def save_swap_to_snapshot(store: EntityStore, pool_id: str, timestamp: int,
                          volume: Decimal, fees: Decimal) -> None:
    snapshot_id = get_snapshot_id(pool_id, timestamp)
    snapshot = store.load(PoolSnapshot, snapshot_id)
    if snapshot is None:
        create_pool_snapshot(store, pool_id, timestamp)
        snapshot = store.load(PoolSnapshot, snapshot_id)
        if snapshot is None:
            return

    snapshot.swap_volume = snapshot.swap_volume + volume
    snapshot.swap_fees = snapshot.swap_fees + fees
    store.save(snapshot)


def get_balancer_snapshot(store: EntityStore, vault: Balancer, timestamp: int) -> BalancerSnapshot:
    snapshot_id = get_snapshot_id(vault.id, timestamp)
    snapshot = store.load(BalancerSnapshot, snapshot_id)
    if snapshot is None:
        snapshot = BalancerSnapshot(id=snapshot_id, vault_id=vault.id, day_id=get_day_id(timestamp))

    snapshot.pool_count = vault.pool_count
    snapshot.total_liquidity = vault.total_liquidity
    return snapshot


def get_user_snapshot(store: EntityStore, user: EvmAddress, timestamp: int) -> UserSnapshot:
    snapshot_id = get_snapshot_id(user, timestamp)
    snapshot = store.load(UserSnapshot, snapshot_id)
    if snapshot is None:
        snapshot = UserSnapshot(id=snapshot_id, user=user, day_id=get_day_id(timestamp))
    return snapshot


def get_trade_pair_snapshot(store: EntityStore, pair: TradePair, timestamp: int) -> TradePairSnapshot:
    snapshot_id = get_snapshot_id(pair.id, timestamp)
    snapshot = store.load(TradePairSnapshot, snapshot_id)
    if snapshot is None:
        snapshot = TradePairSnapshot(id=snapshot_id, pair_id=pair.id, day_id=get_day_id(timestamp))
    return snapshot
