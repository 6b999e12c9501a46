# vault_indexer/services/__init__.py

from .pricing import PricingEngine
from .tokens import StaticTokenMetadata, TokenMetadataReader
from .contracts import PoolContractReader, StaticPoolReader

__all__ = [
    'PricingEngine',
    'StaticTokenMetadata',
    'TokenMetadataReader',
    'PoolContractReader',
    'StaticPoolReader',
]
