# vault_indexer/types/configs.py

from typing import List, Optional

from msgspec import Struct

from .new import EvmAddress, PoolId, IntStr


class DatabaseConfig(Struct):
    url: str
    pool_size: int = 5
    max_overflow: int = 10
    echo: bool = False


class LoggingConfig(Struct):
    log_level: str = "INFO"
    log_dir: Optional[str] = None
    console_enabled: bool = True
    file_enabled: bool = False
    structured_format: bool = True


class PricingConfig(Struct):
    """Valuation anchors.

    `usd_anchors` is ordered: the first entry is the primary USD route and
    the rest are tried in turn when it has no price yet.
    """
    pricing_assets: List[EvmAddress]
    usd_stable_assets: List[EvmAddress]
    usd_anchors: List[EvmAddress]

    def validate(self):
        if not self.usd_anchors:
            raise ValueError("usd_anchors must name at least one USD stable asset")
        missing = [a for a in self.usd_anchors if a not in self.usd_stable_assets]
        if missing:
            raise ValueError(f"usd_anchors must be USD stable assets, got {missing}")


class TokenConfig(Struct):
    address: EvmAddress
    symbol: str
    decimals: int = 18

    def validate(self):
        if self.decimals < 0 or self.decimals > 77:
            raise ValueError(f"ERC20 decimals must be 0-77, got {self.decimals}")


class PoolConfig(Struct):
    address: EvmAddress
    pool_id: PoolId
    tokens: List[EvmAddress]
    swap_fee: IntStr = IntStr("0")
    weights: Optional[List[IntStr]] = None
    amp: Optional[IntStr] = None
