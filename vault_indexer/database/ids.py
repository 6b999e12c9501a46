# vault_indexer/database/ids.py
"""
Composite entity keys. Addresses are lower-case hex, so keys built from
the same inputs are always identical.
"""

from typing import Tuple

from ..types.new import EvmAddress, EvmHash

SECONDS_PER_DAY = 86400


def get_pool_token_id(pool_id: str, token: EvmAddress) -> str:
    return f"{pool_id}-{token}"


def get_token_price_id(pool_id: str, asset: EvmAddress, pricing_asset: EvmAddress, block: int) -> str:
    return f"{pool_id}-{asset}-{pricing_asset}-{block}"


def get_latest_price_id(token: EvmAddress, pricing_asset: EvmAddress) -> str:
    """Order-sensitive: the priced token comes first"""
    return f"{token}-{pricing_asset}"


def get_pool_historical_liquidity_id(pool_id: str, pricing_asset: EvmAddress, block: int) -> str:
    return f"{pool_id}-{pricing_asset}-{block}"


def get_event_id(tx_hash: EvmHash, log_index: int) -> str:
    return f"{tx_hash}{log_index}"


def get_swap_id(tx_hash: EvmHash, log_index: int) -> str:
    return get_event_id(tx_hash, log_index)


def canonical_pair(token_a: EvmAddress, token_b: EvmAddress) -> Tuple[EvmAddress, EvmAddress]:
    return (token_a, token_b) if token_a < token_b else (token_b, token_a)


def get_trade_pair_id(token_a: EvmAddress, token_b: EvmAddress) -> str:
    token0, token1 = canonical_pair(token_a, token_b)
    return f"{token0}-{token1}"


def get_day_id(timestamp: int) -> int:
    return timestamp // SECONDS_PER_DAY


def get_snapshot_id(entity_id: str, timestamp: int) -> str:
    return f"{entity_id}-{get_day_id(timestamp)}"
