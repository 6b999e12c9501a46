# vault_indexer/types/__init__.py

from .new import EvmAddress, EvmHash, PoolId, IntStr

from .configs import (
    DatabaseConfig,
    LoggingConfig,
    PricingConfig,
    TokenConfig,
    PoolConfig,
)

from .events import (
    VaultEvent,
    SwapEvent,
    PoolBalanceChanged,
    PoolBalanceManaged,
    InternalBalanceChanged,
    PoolCreated,
    VaultEventUnion,
    event_decoder,
)

from .pricing import PriceLookup, PriceStatus

from .errors import (
    IndexerError,
    MissingEntityError,
    ConfigurationError,
    UnknownEventError,
)
