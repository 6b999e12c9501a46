# vault_indexer/types/events.py

from typing import List, Literal, Union

import msgspec
from msgspec import Struct

from .new import EvmAddress, EvmHash, PoolId, IntStr

HEX_FIELDS = frozenset({
    "tx_hash", "sender", "pool_id", "pool", "token", "token_in", "token_out",
    "liquidity_provider", "asset_manager", "user",
})


class VaultEvent(Struct, kw_only=True):
    """Decoded log plus the block/transaction fields every handler keys on"""
    block_number: int
    block_timestamp: int
    tx_hash: EvmHash
    log_index: int
    sender: EvmAddress

    def __post_init__(self):
        # hex identifiers are compared lower-case everywhere
        for name in self.__struct_fields__:
            if name in HEX_FIELDS:
                setattr(self, name, getattr(self, name).lower())
            elif name == "tokens":
                self.tokens = [token.lower() for token in self.tokens]

    @property
    def event_type(self) -> str:
        return self.__class__.__name__

    @property
    def position(self) -> tuple:
        return (self.block_number, self.log_index)

    @property
    def event_id(self) -> str:
        return f"{self.tx_hash}{self.log_index}"

    def to_dict(self):
        return msgspec.structs.asdict(self)


class SwapEvent(VaultEvent, tag="Swap"):
    pool_id: PoolId
    token_in: EvmAddress
    token_out: EvmAddress
    amount_in: IntStr
    amount_out: IntStr


class PoolBalanceChanged(VaultEvent, tag=True):
    pool_id: PoolId
    liquidity_provider: EvmAddress
    tokens: List[EvmAddress]
    deltas: List[IntStr]


class PoolBalanceManaged(VaultEvent, tag=True):
    pool_id: PoolId
    token: EvmAddress
    asset_manager: EvmAddress
    managed_delta: IntStr
    cash_delta: IntStr = IntStr("0")


class InternalBalanceChanged(VaultEvent, tag=True):
    user: EvmAddress
    token: EvmAddress
    delta: IntStr


class PoolCreated(VaultEvent, tag=True):
    pool: EvmAddress
    factory: Literal["weighted", "stable", "liquidity_bootstrapping", "investment"] = "weighted"


VaultEventUnion = Union[
    SwapEvent,
    PoolBalanceChanged,
    PoolBalanceManaged,
    InternalBalanceChanged,
    PoolCreated,
]

event_decoder = msgspec.json.Decoder(VaultEventUnion)
