# vault_indexer/database/tables/events.py

from sqlalchemy import Boolean, Column, Integer, JSON, String

from ...utils.amounts import ZERO_BD
from ..base import DBEntity, BlockchainTimestampMixin
from ..types import DecimalListType, DecimalType, EvmAddressType, EvmHashType


class Swap(DBEntity, BlockchainTimestampMixin):
    __tablename__ = 'swap'

    pool_id = Column(String, nullable=False, index=True)
    caller = Column(EvmAddressType(), nullable=False)
    user_address = Column(EvmAddressType(), nullable=False, index=True)

    token_in = Column(EvmAddressType(), nullable=False)
    token_in_sym = Column(String, nullable=True)
    token_amount_in = Column(DecimalType(), nullable=False)

    token_out = Column(EvmAddressType(), nullable=False)
    token_out_sym = Column(String, nullable=True)
    token_amount_out = Column(DecimalType(), nullable=False)

    tx = Column(EvmHashType(), nullable=False, index=True)
    batch = Column(String, nullable=False, index=True)


class BatchSwap(DBEntity, BlockchainTimestampMixin):
    """All swaps of one transaction, keyed by transaction hash"""
    __tablename__ = 'batch_swap'

    user = Column(EvmAddressType(), nullable=True)
    token_in = Column(EvmAddressType(), nullable=False)
    token_amount_in = Column(DecimalType(), nullable=False, default=ZERO_BD)
    token_out = Column(EvmAddressType(), nullable=False)
    token_amount_out = Column(DecimalType(), nullable=False, default=ZERO_BD)
    matching_tokens = Column(Boolean, nullable=False, default=False)
    swaps = Column(JSON, nullable=False)


class JoinExit(DBEntity, BlockchainTimestampMixin):
    __tablename__ = 'join_exit'

    type = Column(String(4), nullable=False)
    sender = Column(EvmAddressType(), nullable=False)
    amounts = Column(DecimalListType(), nullable=False)
    pool_id = Column(String, nullable=False, index=True)
    user = Column(EvmAddressType(), nullable=False, index=True)
    tx = Column(EvmHashType(), nullable=False)


class User(DBEntity):
    __tablename__ = 'user'

    total_swap_volume = Column(DecimalType(), nullable=False, default=ZERO_BD)
    total_swap_fee = Column(DecimalType(), nullable=False, default=ZERO_BD)
    total_swap_count = Column(Integer, nullable=False, default=0)


class UserInternalBalance(DBEntity):
    __tablename__ = 'user_internal_balance'

    user_address = Column(EvmAddressType(), nullable=False, index=True)
    token = Column(EvmAddressType(), nullable=False)
    balance = Column(DecimalType(), nullable=False, default=ZERO_BD)
