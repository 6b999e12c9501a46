# vault_indexer/types/pricing.py

from decimal import Decimal
from typing import Literal, Optional

from msgspec import Struct

from .new import EvmAddress


PriceStatus = Literal["resolved", "no_route", "not_attempted"]


class PriceLookup(Struct, frozen=True):
    """Outcome of resolving a price for an asset in terms of a pricing asset.

    `no_route` means the lookup ran and nothing is known yet; it is a normal
    outcome and counts as zero value downstream. `not_attempted` marks a
    lookup that was never run (e.g. the asset is the pricing asset itself).
    """
    asset: EvmAddress
    pricing_asset: EvmAddress
    status: PriceStatus = "not_attempted"
    price: Optional[Decimal] = None
    source: Optional[Literal["token_price", "latest_price", "identity"]] = None

    @classmethod
    def resolved(cls, asset: EvmAddress, pricing_asset: EvmAddress, price: Decimal,
                 source: str) -> 'PriceLookup':
        return cls(asset=asset, pricing_asset=pricing_asset, status="resolved",
                   price=price, source=source)

    @classmethod
    def not_attempted(cls, asset: EvmAddress, pricing_asset: EvmAddress) -> 'PriceLookup':
        return cls(asset=asset, pricing_asset=pricing_asset)

    @classmethod
    def no_route(cls, asset: EvmAddress, pricing_asset: EvmAddress) -> 'PriceLookup':
        return cls(asset=asset, pricing_asset=pricing_asset, status="no_route")

    @property
    def is_resolved(self) -> bool:
        return self.status == "resolved"

    def value_of(self, amount: Decimal) -> Optional[Decimal]:
        if not self.is_resolved:
            return None
        return amount * self.price
