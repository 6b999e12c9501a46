# vault_indexer/database/tables/pool.py

from sqlalchemy import Column, Integer, String

from ...utils.amounts import ZERO_BD
from ..base import DBEntity
from ..types import AddressListType, DecimalType, EvmAddressType, EvmHashType


class Balancer(DBEntity):
    """Protocol-wide totals. A single row keyed by the configured vault id."""
    __tablename__ = 'balancer'

    pool_count = Column(Integer, nullable=False, default=0)
    total_liquidity = Column(DecimalType(), nullable=False, default=ZERO_BD)
    total_swap_volume = Column(DecimalType(), nullable=False, default=ZERO_BD)
    total_swap_fee = Column(DecimalType(), nullable=False, default=ZERO_BD)
    total_swap_count = Column(Integer, nullable=False, default=0)


class Pool(DBEntity):
    __tablename__ = 'pool'

    address = Column(EvmAddressType(), index=True)
    pool_type = Column(String(32))
    tokens_list = Column(AddressListType(), nullable=False)
    tokens_count = Column(Integer, nullable=False, default=0)

    # unset until the first liquidity estimate with a USD route
    liquidity = Column(DecimalType(), nullable=True)

    swap_fee = Column(DecimalType(), nullable=False, default=ZERO_BD)
    swaps_count = Column(Integer, nullable=False, default=0)
    total_swap_volume = Column(DecimalType(), nullable=False, default=ZERO_BD)
    total_swap_fee = Column(DecimalType(), nullable=False, default=ZERO_BD)
    total_weight = Column(DecimalType(), nullable=True)
    amp = Column(String, nullable=True)

    create_time = Column(Integer, nullable=True)
    tx = Column(EvmHashType(), nullable=True)


class PoolToken(DBEntity):
    __tablename__ = 'pool_token'

    pool_id = Column(String, nullable=False, index=True)
    address = Column(EvmAddressType(), nullable=False, index=True)
    balance = Column(DecimalType(), nullable=False, default=ZERO_BD)
    invested = Column(DecimalType(), nullable=False, default=ZERO_BD)
    weight = Column(DecimalType(), nullable=True)


class Token(DBEntity):
    __tablename__ = 'token'

    address = Column(EvmAddressType(), nullable=False)
    symbol = Column(String, nullable=True)
    decimals = Column(Integer, nullable=True)

    total_swap_count = Column(Integer, nullable=False, default=0)
    total_volume_usd = Column(DecimalType(), nullable=False, default=ZERO_BD)
    total_volume_notional = Column(DecimalType(), nullable=False, default=ZERO_BD)
    total_balance_notional = Column(DecimalType(), nullable=False, default=ZERO_BD)


class Investment(DBEntity):
    __tablename__ = 'investment'

    asset_manager_address = Column(EvmAddressType(), nullable=False)
    pool_token_id = Column(String, nullable=False, index=True)
    amount = Column(DecimalType(), nullable=False)
    timestamp = Column(Integer, nullable=False)
