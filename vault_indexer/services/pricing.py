# vault_indexer/services/pricing.py

from decimal import Decimal
from typing import Optional

from ..core.logging import LoggingMixin
from ..database.store import EntityStore
from ..database.tables import LatestPrice, Pool, PoolHistoricalLiquidity, PoolToken, TokenPrice
from ..database import ids
from ..types.configs import PricingConfig
from ..types.errors import MissingEntityError
from ..types.new import EvmAddress
from ..types.pricing import PriceLookup
from ..utils.amounts import ZERO_BD, accounting_precision


class PricingEngine(LoggingMixin):
    """
    Values assets through a small set of pricing assets.

    Prices are only ever observed from swaps against a pricing asset
    (TokenPrice rows, one per pool/asset/pricing asset/block). The
    LatestPrice cache keeps the most recent observation per asset pair so
    that pools can be valued at blocks where nothing traded. USD values go
    one hop further: pricing asset -> first USD anchor with a known price.

    Pool liquidity is an estimate. It is computed through whichever pricing
    asset first yields a full USD route, so the figure depends on the order
    of the pool's token list.
    """

    def __init__(self, store: EntityStore, config: PricingConfig):
        self.store = store
        self.pricing_assets = frozenset(config.pricing_assets)
        self.usd_stable_assets = frozenset(config.usd_stable_assets)
        self.usd_anchors = list(config.usd_anchors)

    def is_pricing_asset(self, asset: EvmAddress) -> bool:
        return asset in self.pricing_assets

    def is_usd_stable(self, asset: EvmAddress) -> bool:
        return asset in self.usd_stable_assets

    @staticmethod
    def get_latest_price_id(token: EvmAddress, pricing_asset: EvmAddress) -> str:
        return ids.get_latest_price_id(token, pricing_asset)

    def get_latest_price(self, token: EvmAddress, pricing_asset: EvmAddress) -> Optional[LatestPrice]:
        return self.store.load(LatestPrice, self.get_latest_price_id(token, pricing_asset))

    # === USD conversion ===

    def resolve_usd_rate(self, asset: EvmAddress) -> PriceLookup:
        """USD per unit of `asset`, trying each USD anchor in order"""
        if self.is_usd_stable(asset):
            return PriceLookup.resolved(asset, asset, Decimal(1), "identity")

        for anchor in self.usd_anchors:
            latest = self.get_latest_price(asset, anchor)
            if latest is not None:
                return PriceLookup.resolved(asset, anchor, latest.price, "latest_price")

        return PriceLookup.no_route(asset, self.usd_anchors[0] if self.usd_anchors else asset)

    @accounting_precision
    def value_in_usd(self, amount: Decimal, asset: EvmAddress) -> Optional[Decimal]:
        """None when the asset has no USD route yet"""
        if self.is_usd_stable(asset):
            return amount
        return self.resolve_usd_rate(asset).value_of(amount)

    @accounting_precision
    def pool_liquidity_in_usd(self, pool_value: Decimal, pricing_asset: EvmAddress) -> Optional[Decimal]:
        if self.is_usd_stable(pricing_asset):
            return pool_value
        return self.resolve_usd_rate(pricing_asset).value_of(pool_value)

    # === Pool valuation ===

    def resolve_token_price(self, pool_id: str, token: EvmAddress, pricing_asset: EvmAddress,
                            block: int) -> PriceLookup:
        """Price observed in this pool at this block, else the latest cached price.

        No lookup is made for the pricing asset itself.
        """
        if token == pricing_asset:
            return PriceLookup.not_attempted(token, pricing_asset)

        token_price = self.store.load(
            TokenPrice, ids.get_token_price_id(pool_id, token, pricing_asset, block)
        )
        if token_price is not None:
            return PriceLookup.resolved(token, pricing_asset, token_price.price, "token_price")

        latest = self.get_latest_price(token, pricing_asset)
        if latest is not None:
            return PriceLookup.resolved(token, pricing_asset, latest.price, "latest_price")

        return PriceLookup.no_route(token, pricing_asset)

    def refresh_latest_price(self, token: EvmAddress, pricing_asset: EvmAddress, price: Decimal,
                             block: int, pool_id: str) -> LatestPrice:
        latest = self.get_latest_price(token, pricing_asset)
        if latest is None:
            latest = LatestPrice(
                id=self.get_latest_price_id(token, pricing_asset),
                asset=token,
                pricing_asset=pricing_asset,
            )
        latest.price = price
        latest.block = block
        latest.pool_id = pool_id
        return self.store.save(latest)

    @accounting_precision
    def update_pool_liquidity(self, pool_id: str, block: int, pricing_asset: EvmAddress,
                              timestamp: Optional[int] = None,
                              actor: Optional[EvmAddress] = None) -> bool:
        """
        Re-estimate a pool's USD liquidity through one pricing asset.

        Every token is valued in `pricing_asset`; tokens without a price
        contribute nothing. The pool value is recorded as a historical
        liquidity row whether or not it converts to USD. Only when it does
        are `pool.liquidity` and the protocol total updated.

        Returns True when the USD conversion succeeded.
        """
        pool = self.store.load(Pool, pool_id)
        if pool is None:
            return False
        if pool.tokens_count < 2 or not pool.tokens_list:
            return False

        pool_value = ZERO_BD
        for token_address in pool.tokens_list:
            pool_token = self.store.load(PoolToken, ids.get_pool_token_id(pool_id, token_address))
            if pool_token is None:
                raise MissingEntityError('PoolToken', ids.get_pool_token_id(pool_id, token_address),
                                         pool_id=pool_id, block_number=block)

            lookup = self.resolve_token_price(pool_id, token_address, pricing_asset, block)
            if lookup.status == "not_attempted":
                # already denominated in the pricing asset
                pool_value = pool_value + pool_token.balance
                continue
            if lookup.source == "token_price":
                self.refresh_latest_price(token_address, pricing_asset, lookup.price, block, pool_id)

            token_value = lookup.value_of(pool_token.balance)
            if token_value is None:
                self.log_debug("No price route for token",
                               pool_id=pool_id,
                               token=token_address,
                               pricing_asset=pricing_asset,
                               block_number=block)
                continue
            pool_value = pool_value + token_value

        self.store.save(PoolHistoricalLiquidity(
            id=ids.get_pool_historical_liquidity_id(pool_id, pricing_asset, block),
            pool_id=pool_id,
            pricing_asset=pricing_asset,
            block=block,
            timestamp=timestamp,
            pool_liquidity=pool_value,
        ))

        new_liquidity = self.pool_liquidity_in_usd(pool_value, pricing_asset)
        if new_liquidity is None:
            self.log_debug("Pricing asset has no USD route",
                           pool_id=pool_id,
                           pricing_asset=pricing_asset,
                           block_number=block)
            return False

        old_liquidity = pool.liquidity if pool.liquidity is not None else ZERO_BD
        vault = self.store.find_or_initialize_vault()
        vault.total_liquidity = vault.total_liquidity + (new_liquidity - old_liquidity)
        self.store.save(vault)

        pool.liquidity = new_liquidity
        self.store.save(pool)

        self.log_debug("Pool liquidity updated",
                       pool_id=pool_id,
                       pricing_asset=pricing_asset,
                       block_number=block,
                       actor=actor,
                       liquidity=str(new_liquidity))
        return True

    @accounting_precision
    def update_liquidity_for_pricing_assets(self, pool: Pool, block: int, timestamp: int,
                                            actor: Optional[EvmAddress] = None) -> Optional[EvmAddress]:
        """
        Try the pool's pricing assets in token-list order and stop at the
        first one with a USD route. Returns that pricing asset, or None.
        """
        for token_address in pool.tokens_list:
            if not self.is_pricing_asset(token_address):
                continue
            if self.update_pool_liquidity(pool.id, block, token_address, timestamp, actor):
                return token_address
        return None
