# vault_indexer/services/contracts.py

from typing import Dict, Iterable, List, Optional, Protocol

from ..core.logging import LoggingMixin
from ..types.configs import PoolConfig
from ..types.new import EvmAddress, PoolId


class PoolContractReader(Protocol):
    """Pool and vault contract views. Every method returns None when the call reverts."""

    def pool_id(self, pool: EvmAddress) -> Optional[PoolId]:
        ...

    def swap_fee(self, pool: EvmAddress) -> Optional[int]:
        ...

    def pool_tokens(self, pool_id: PoolId) -> Optional[List[EvmAddress]]:
        ...

    def normalized_weights(self, pool: EvmAddress) -> Optional[List[int]]:
        ...

    def amplification(self, pool: EvmAddress) -> Optional[int]:
        ...


class StaticPoolReader(LoggingMixin):
    """Answers contract reads from configured pools"""

    def __init__(self, pools: Iterable[PoolConfig] = ()):
        self.pools: Dict[EvmAddress, PoolConfig] = {p.address: p for p in pools}
        self.by_id: Dict[PoolId, PoolConfig] = {p.pool_id: p for p in self.pools.values()}

    def _get(self, pool: EvmAddress) -> Optional[PoolConfig]:
        config = self.pools.get(pool)
        if config is None:
            self.log_warning("Pool contract read reverted", pool=pool)
        return config

    def pool_id(self, pool: EvmAddress) -> Optional[PoolId]:
        config = self._get(pool)
        return config.pool_id if config else None

    def swap_fee(self, pool: EvmAddress) -> Optional[int]:
        config = self._get(pool)
        return int(config.swap_fee) if config else None

    def pool_tokens(self, pool_id: PoolId) -> Optional[List[EvmAddress]]:
        config = self.by_id.get(pool_id)
        return list(config.tokens) if config else None

    def normalized_weights(self, pool: EvmAddress) -> Optional[List[int]]:
        config = self._get(pool)
        if config is None or config.weights is None:
            return None
        return [int(w) for w in config.weights]

    def amplification(self, pool: EvmAddress) -> Optional[int]:
        config = self._get(pool)
        if config is None or config.amp is None:
            return None
        return int(config.amp)
