# vault_indexer/database/tables/snapshots.py
"""
Day-bucketed rollups. Volume, fee and count columns accumulate within the
day; balance and liquidity columns carry the latest value seen that day.
"""

from sqlalchemy import Column, Integer, String

from ...utils.amounts import ZERO_BD
from ..base import DBEntity
from ..types import DecimalListType, DecimalType, EvmAddressType


class PoolSnapshot(DBEntity):
    __tablename__ = 'pool_snapshot'

    pool_id = Column(String, nullable=False, index=True)
    day_id = Column(Integer, nullable=False)
    amounts = Column(DecimalListType(), nullable=False)
    liquidity = Column(DecimalType(), nullable=False, default=ZERO_BD)
    swap_volume = Column(DecimalType(), nullable=False, default=ZERO_BD)
    swap_fees = Column(DecimalType(), nullable=False, default=ZERO_BD)
    swaps_count = Column(Integer, nullable=False, default=0)


class BalancerSnapshot(DBEntity):
    __tablename__ = 'balancer_snapshot'

    vault_id = Column(String, nullable=False)
    day_id = Column(Integer, nullable=False)
    pool_count = Column(Integer, nullable=False, default=0)
    total_liquidity = Column(DecimalType(), nullable=False, default=ZERO_BD)
    total_swap_volume = Column(DecimalType(), nullable=False, default=ZERO_BD)
    total_swap_fee = Column(DecimalType(), nullable=False, default=ZERO_BD)
    total_swap_count = Column(Integer, nullable=False, default=0)


class UserSnapshot(DBEntity):
    __tablename__ = 'user_snapshot'

    user = Column(EvmAddressType(), nullable=False, index=True)
    day_id = Column(Integer, nullable=False)
    swap_volume = Column(DecimalType(), nullable=False, default=ZERO_BD)
    swap_fee = Column(DecimalType(), nullable=False, default=ZERO_BD)
    swap_count = Column(Integer, nullable=False, default=0)


class TokenSnapshot(DBEntity):
    __tablename__ = 'token_snapshot'

    token = Column(EvmAddressType(), nullable=False, index=True)
    day_id = Column(Integer, nullable=False)
    total_swap_count = Column(Integer, nullable=False, default=0)
    total_volume_usd = Column(DecimalType(), nullable=False, default=ZERO_BD)
    total_volume_notional = Column(DecimalType(), nullable=False, default=ZERO_BD)
    total_balance_notional = Column(DecimalType(), nullable=False, default=ZERO_BD)


class TradePairSnapshot(DBEntity):
    __tablename__ = 'trade_pair_snapshot'

    pair_id = Column(String, nullable=False, index=True)
    day_id = Column(Integer, nullable=False)
    swap_volume = Column(DecimalType(), nullable=False, default=ZERO_BD)
    swap_fee = Column(DecimalType(), nullable=False, default=ZERO_BD)
