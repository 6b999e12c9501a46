# vault_indexer/services/weights.py

from ..core.logging import IndexerLogger, log_with_context, WARNING
from ..database.store import EntityStore
from ..database.tables import Pool, PoolToken
from ..database.ids import get_pool_token_id
from ..utils.amounts import scale_down, ZERO_BD
from .contracts import PoolContractReader

VARIABLE_WEIGHT_POOL_TYPES = ('LiquidityBootstrapping', 'Investment')
WEIGHT_DECIMALS = 18

logger = IndexerLogger.get_logger('services.weights')


def is_variable_weight_pool(pool: Pool) -> bool:
    return pool.pool_type in VARIABLE_WEIGHT_POOL_TYPES


def update_pool_weights(store: EntityStore, reader: PoolContractReader, pool: Pool) -> bool:
    """Re-read normalized weights and write them onto the pool tokens.

    A reverted read leaves the stored weights untouched.
    """
    weights = reader.normalized_weights(pool.address)
    if weights is None or len(weights) != len(pool.tokens_list):
        log_with_context(logger, WARNING, "Could not refresh pool weights",
                         pool_id=pool.id,
                         weight_count=None if weights is None else len(weights))
        return False

    total_weight = ZERO_BD
    for token_address, raw_weight in zip(pool.tokens_list, weights):
        pool_token = store.load_required(PoolToken, get_pool_token_id(pool.id, token_address),
                                         pool_id=pool.id)
        weight = scale_down(raw_weight, WEIGHT_DECIMALS)
        pool_token.weight = weight
        store.save(pool_token)
        total_weight = total_weight + weight

    pool.total_weight = total_weight
    store.save(pool)
    return True
