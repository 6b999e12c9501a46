# vault_indexer/database/types.py

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import JSON, String, Text
from sqlalchemy.types import TypeDecorator

from ..types.new import EvmAddress, EvmHash


class EvmAddressType(TypeDecorator):
    impl = String(42)
    cache_ok = True

    def process_bind_param(self, value: Optional[EvmAddress], dialect) -> Optional[str]:
        return str(value).lower() if value else None

    def process_result_value(self, value: Optional[str], dialect) -> Optional[EvmAddress]:
        return EvmAddress(value) if value else None


class EvmHashType(TypeDecorator):
    impl = String(66)
    cache_ok = True

    def process_bind_param(self, value: Optional[EvmHash], dialect) -> Optional[str]:
        return str(value).lower() if value else None

    def process_result_value(self, value: Optional[str], dialect) -> Optional[EvmHash]:
        return EvmHash(value) if value else None


class DecimalType(TypeDecorator):
    """Arbitrary precision decimal stored as text so every backend round-trips it exactly"""
    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Optional[Decimal], dialect) -> Optional[str]:
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value: Optional[str], dialect) -> Optional[Decimal]:
        return Decimal(value) if value is not None else None


class DecimalListType(TypeDecorator):
    impl = JSON
    cache_ok = True

    def process_bind_param(self, value: Optional[List[Decimal]], dialect) -> Optional[List[str]]:
        if value is None:
            return None
        return [str(Decimal(v)) for v in value]

    def process_result_value(self, value: Optional[List[str]], dialect) -> Optional[List[Decimal]]:
        if value is None:
            return None
        return [Decimal(v) for v in value]


class AddressListType(TypeDecorator):
    impl = JSON
    cache_ok = True

    def process_bind_param(self, value: Optional[List[EvmAddress]], dialect) -> Optional[List[str]]:
        if value is None:
            return None
        return [str(v).lower() for v in value]

    def process_result_value(self, value: Optional[List[str]], dialect) -> Optional[List[EvmAddress]]:
        if value is None:
            return None
        return [EvmAddress(v) for v in value]
