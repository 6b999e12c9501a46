# vault_indexer/types/new.py

from typing import NewType

EvmAddress = NewType('EvmAddress', str)
EvmHash = NewType('EvmHash', str)
PoolId = NewType('PoolId', str)

# uint256 / int256 amounts travel as base-10 strings
IntStr = NewType('IntStr', str)


def to_address(value: str) -> EvmAddress:
    return EvmAddress(value.lower())
