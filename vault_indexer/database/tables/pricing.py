# vault_indexer/database/tables/pricing.py

from sqlalchemy import Column, Integer, String

from ...utils.amounts import ZERO_BD
from ..base import DBEntity
from ..types import DecimalType, EvmAddressType


class TokenPrice(DBEntity):
    """Price of `asset` in units of `pricing_asset`, observed in one pool at one block"""
    __tablename__ = 'token_price'

    pool_id = Column(String, nullable=False, index=True)
    asset = Column(EvmAddressType(), nullable=False, index=True)
    pricing_asset = Column(EvmAddressType(), nullable=False)
    amount = Column(DecimalType(), nullable=False)
    price = Column(DecimalType(), nullable=False)
    block = Column(Integer, nullable=False, index=True)
    timestamp = Column(Integer, nullable=False)


class LatestPrice(DBEntity):
    """Most recent price of `asset` in `pricing_asset`, across all pools"""
    __tablename__ = 'latest_price'

    asset = Column(EvmAddressType(), nullable=False)
    pricing_asset = Column(EvmAddressType(), nullable=False)
    price = Column(DecimalType(), nullable=False)
    block = Column(Integer, nullable=False)
    pool_id = Column(String, nullable=False)


class PoolHistoricalLiquidity(DBEntity):
    __tablename__ = 'pool_historical_liquidity'

    pool_id = Column(String, nullable=False, index=True)
    pricing_asset = Column(EvmAddressType(), nullable=False)
    block = Column(Integer, nullable=False)
    timestamp = Column(Integer, nullable=True)
    pool_liquidity = Column(DecimalType(), nullable=False, default=ZERO_BD)


class TradePair(DBEntity):
    __tablename__ = 'trade_pair'

    token0 = Column(EvmAddressType(), nullable=False)
    token1 = Column(EvmAddressType(), nullable=False)
    total_swap_volume = Column(DecimalType(), nullable=False, default=ZERO_BD)
    total_swap_fee = Column(DecimalType(), nullable=False, default=ZERO_BD)


class TradePairPrice(DBEntity):
    """token1 per token0 as of one swap"""
    __tablename__ = 'trade_pair_price'

    pair_id = Column(String, nullable=False, index=True)
    block = Column(Integer, nullable=False)
    timestamp = Column(Integer, nullable=False)
    price = Column(DecimalType(), nullable=True)
