# vault_indexer/handlers/swaps.py

from decimal import Decimal
from typing import Optional

from ..core.logging import DEBUG
from ..database.ids import get_swap_id, get_token_price_id
from ..database.tables import BatchSwap, Pool, Swap, TokenPrice
from ..services.entities import (
    get_batch_swap,
    get_trade_pair,
    get_trade_pair_price,
    get_user,
    require_pool_token,
)
from ..services.snapshots import (
    create_pool_snapshot,
    get_balancer_snapshot,
    get_trade_pair_snapshot,
    get_user_snapshot,
    save_swap_to_snapshot,
)
from ..services.tokens import SWAP_IN, SWAP_OUT, update_token_balances, uptick_swaps_for_token
from ..services.weights import is_variable_weight_pool, update_pool_weights
from ..types.events import SwapEvent
from ..types.new import EvmAddress
from ..utils.amounts import ZERO_BD, accounting_precision, safe_div, scale_down
from .base import BaseHandler


class SwapHandler(BaseHandler):

    @accounting_precision
    def handle_swap_event(self, event: SwapEvent) -> Optional[Swap]:
        get_user(self.store, event.sender)

        pool = self.load_pool(event.pool_id, event)
        if pool is None:
            return None

        # weights of these pools move with time
        if is_variable_weight_pool(pool):
            update_pool_weights(self.store, self.ctx.pool_reader, pool)

        token_in = self.get_token(event.token_in)
        token_out = self.get_token(event.token_out)
        pool_token_in = require_pool_token(self.store, pool.id, event.token_in, tx_hash=event.tx_hash)
        pool_token_out = require_pool_token(self.store, pool.id, event.token_out, tx_hash=event.tx_hash)

        amount_in = scale_down(event.amount_in, token_in.decimals)
        amount_out = scale_down(event.amount_out, token_out.decimals)
        timestamp = event.block_timestamp

        swap = self.store.save(Swap(
            id=get_swap_id(event.tx_hash, event.log_index),
            pool_id=pool.id,
            caller=event.sender,
            user_address=event.sender,
            token_in=event.token_in,
            token_in_sym=token_in.symbol,
            token_amount_in=amount_in,
            token_out=event.token_out,
            token_out_sym=token_out.symbol,
            token_amount_out=amount_out,
            timestamp=timestamp,
            tx=event.tx_hash,
            batch=event.tx_hash,
        ))

        batch = self.aggregate_batch(swap, event.sender)

        swap_value_usd = self.pricing.value_in_usd(amount_out, event.token_out)
        if swap_value_usd is None:
            swap_value_usd = self.pricing.value_in_usd(amount_in, event.token_in)
        if swap_value_usd is None:
            swap_value_usd = ZERO_BD
        swap_fees_usd = swap_value_usd * pool.swap_fee

        self._update_counters(pool, event, swap_value_usd, swap_fees_usd)

        pool_token_in.balance = pool_token_in.balance + amount_in
        self.store.save(pool_token_in)
        pool_token_out.balance = pool_token_out.balance - amount_out
        self.store.save(pool_token_out)

        uptick_swaps_for_token(self.store, token_in, timestamp)
        uptick_swaps_for_token(self.store, token_out, timestamp)
        update_token_balances(self.store, token_in, swap_value_usd, amount_in, SWAP_IN, timestamp)
        update_token_balances(self.store, token_out, swap_value_usd, amount_out, SWAP_OUT, timestamp)

        # trade pairs are only counted for directional batches, not round trips
        if batch.token_in != batch.token_out:
            self._update_trade_pair(event, amount_in, amount_out, swap_value_usd, swap_fees_usd)

        self._capture_prices(pool, event, amount_in, amount_out)

        create_pool_snapshot(self.store, pool.id, timestamp)
        save_swap_to_snapshot(self.store, pool.id, timestamp, swap_value_usd, swap_fees_usd)
        return swap

    def aggregate_batch(self, swap: Swap, user: EvmAddress) -> BatchSwap:
        """
        Fold a swap into the batch of its transaction.

        The inbound total only grows while swaps keep entering with the
        batch's first inbound token. The outbound total is recomputed for
        this swap's outbound token over the whole batch.
        """
        batch = get_batch_swap(self.store, swap)
        if batch.token_in == swap.token_in:
            batch.token_amount_in = batch.token_amount_in + swap.token_amount_in

        total_amount_out = swap.token_amount_out
        for swap_id in batch.swaps:
            prior = self.store.load_required(Swap, swap_id, tx_hash=swap.tx)
            if prior.token_out == swap.token_out:
                total_amount_out = total_amount_out + prior.token_amount_out

        batch.token_out = swap.token_out
        batch.token_amount_out = total_amount_out

        if batch.token_in == batch.token_out:
            batch.matching_tokens = True

        # appended after summing so the current swap is counted once
        batch.swaps = list(batch.swaps) + [swap.id]
        batch.user = user
        return self.store.save(batch)

    def _update_counters(self, pool: Pool, event: SwapEvent,
                         swap_value_usd: Decimal, swap_fees_usd: Decimal) -> None:
        pool.swaps_count = pool.swaps_count + 1
        pool.total_swap_volume = pool.total_swap_volume + swap_value_usd
        pool.total_swap_fee = pool.total_swap_fee + swap_fees_usd
        self.store.save(pool)

        vault = self.store.find_or_initialize_vault()
        vault.total_swap_volume = vault.total_swap_volume + swap_value_usd
        vault.total_swap_fee = vault.total_swap_fee + swap_fees_usd
        vault.total_swap_count = vault.total_swap_count + 1
        self.store.save(vault)

        vault_snapshot = get_balancer_snapshot(self.store, vault, event.block_timestamp)
        vault_snapshot.total_swap_volume = vault_snapshot.total_swap_volume + swap_value_usd
        vault_snapshot.total_swap_fee = vault_snapshot.total_swap_fee + swap_fees_usd
        vault_snapshot.total_swap_count = vault_snapshot.total_swap_count + 1
        self.store.save(vault_snapshot)

        user = get_user(self.store, event.sender)
        user.total_swap_volume = user.total_swap_volume + swap_value_usd
        user.total_swap_fee = user.total_swap_fee + swap_fees_usd
        user.total_swap_count = user.total_swap_count + 1
        self.store.save(user)

        user_snapshot = get_user_snapshot(self.store, event.sender, event.block_timestamp)
        user_snapshot.swap_volume = user_snapshot.swap_volume + swap_value_usd
        user_snapshot.swap_fee = user_snapshot.swap_fee + swap_fees_usd
        user_snapshot.swap_count = user_snapshot.swap_count + 1
        self.store.save(user_snapshot)

    def _update_trade_pair(self, event: SwapEvent, amount_in: Decimal, amount_out: Decimal,
                           swap_value_usd: Decimal, swap_fees_usd: Decimal) -> None:
        pair = get_trade_pair(self.store, event.token_in, event.token_out)
        pair.total_swap_volume = pair.total_swap_volume + swap_value_usd
        pair.total_swap_fee = pair.total_swap_fee + swap_fees_usd
        self.store.save(pair)

        pair_snapshot = get_trade_pair_snapshot(self.store, pair, event.block_timestamp)
        pair_snapshot.swap_volume = pair_snapshot.swap_volume + swap_value_usd
        pair_snapshot.swap_fee = pair_snapshot.swap_fee + swap_fees_usd
        self.store.save(pair_snapshot)

        if event.token_in == pair.token0:
            price = safe_div(amount_out, amount_in)
        else:
            price = safe_div(amount_in, amount_out)
        if price is None:
            return

        pair_price = get_trade_pair_price(self.store, pair, event.block_number, event.block_timestamp)
        pair_price.price = price
        self.store.save(pair_price)

    def _capture_prices(self, pool: Pool, event: SwapEvent,
                        amount_in: Decimal, amount_out: Decimal) -> None:
        """Record a price for each leg traded against a pricing asset, then revalue the pool"""
        out_per_in = safe_div(amount_out, amount_in)
        in_per_out = safe_div(amount_in, amount_out)
        if out_per_in is None or in_per_out is None:
            self.log_event(DEBUG, "Zero amount leg, skipping price capture", event, pool_id=pool.id)
            return

        if self.pricing.is_pricing_asset(event.token_in):
            self._record_token_price(pool, event, asset=event.token_out, pricing_asset=event.token_in,
                                     amount=amount_in, price=in_per_out)
            self.pricing.update_pool_liquidity(pool.id, event.block_number, event.token_in,
                                               event.block_timestamp, event.sender)

        if self.pricing.is_pricing_asset(event.token_out):
            self._record_token_price(pool, event, asset=event.token_in, pricing_asset=event.token_out,
                                     amount=amount_out, price=out_per_in)
            self.pricing.update_pool_liquidity(pool.id, event.block_number, event.token_out,
                                               event.block_timestamp, event.sender)

    def _record_token_price(self, pool: Pool, event: SwapEvent, asset: EvmAddress,
                            pricing_asset: EvmAddress, amount: Decimal, price: Decimal) -> TokenPrice:
        return self.store.save(TokenPrice(
            id=get_token_price_id(pool.id, asset, pricing_asset, event.block_number),
            pool_id=pool.id,
            asset=asset,
            pricing_asset=pricing_asset,
            amount=amount,
            price=price,
            block=event.block_number,
            timestamp=event.block_timestamp,
        ))
