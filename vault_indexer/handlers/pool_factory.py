# vault_indexer/handlers/pool_factory.py

from typing import Optional

from ..core.logging import INFO, WARNING
from ..database.tables import Pool
from ..services.entities import create_pool_token
from ..services.weights import update_pool_weights
from ..types.events import PoolCreated
from ..utils.amounts import accounting_precision, scale_down
from .base import BaseHandler

SWAP_FEE_DECIMALS = 18

POOL_TYPES = {
    'weighted': 'Weighted',
    'stable': 'Stable',
    'liquidity_bootstrapping': 'LiquidityBootstrapping',
    'investment': 'Investment',
}

WEIGHTED_FACTORIES = ('weighted', 'liquidity_bootstrapping', 'investment')


class PoolFactoryHandler(BaseHandler):
    """Registers pools announced by the factories.

    Contract reads that revert leave the corresponding fields unset.
    """

    @accounting_precision
    def handle_new_pool(self, event: PoolCreated) -> Optional[Pool]:
        reader = self.ctx.pool_reader

        pool_id = reader.pool_id(event.pool)
        if pool_id is None:
            self.log_event(WARNING, "Pool id read reverted, skipping pool", event, pool=event.pool)
            return None
        pool_id = pool_id.lower()

        vault = self.store.find_or_initialize_vault()

        pool = self.store.load(Pool, pool_id)
        if pool is None:
            swap_fee = reader.swap_fee(event.pool)
            pool = self.store.save(Pool(
                id=pool_id,
                address=event.pool,
                pool_type=POOL_TYPES[event.factory],
                tokens_list=[],
                tokens_count=0,
                swap_fee=scale_down(swap_fee or 0, SWAP_FEE_DECIMALS),
                create_time=event.block_timestamp,
                tx=event.tx_hash,
            ))
            vault.pool_count = vault.pool_count + 1
            self.store.save(vault)

        tokens = reader.pool_tokens(pool_id)
        if tokens is not None:
            tokens_list = list(pool.tokens_list)
            for token_address in tokens:
                token_address = token_address.lower()
                if token_address not in tokens_list:
                    tokens_list.append(token_address)
                self.get_token(token_address)
                create_pool_token(self.store, pool_id, token_address)
            pool.tokens_list = tokens_list
            pool.tokens_count = len(tokens_list)
            self.store.save(pool)

        if event.factory in WEIGHTED_FACTORIES:
            if pool.tokens_list:
                update_pool_weights(self.store, reader, pool)
        else:
            amp = reader.amplification(event.pool)
            if amp is not None:
                pool.amp = str(amp)
                self.store.save(pool)

        self.log_event(INFO, "Pool registered", event, pool_id=pool_id, token_count=pool.tokens_count)
        return pool
