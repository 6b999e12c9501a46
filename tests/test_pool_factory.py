# tests/test_pool_factory.py

import logging
from decimal import Decimal

from vault_indexer.database.ids import get_pool_token_id
from vault_indexer.database.tables import Balancer, Pool, PoolToken, Token

from .factories import (
    BAL,
    BAL_GNO_POOL,
    BAL_GNO_POOL_ID,
    DAI,
    GNO,
    T0,
    TX_1,
    WETH,
    WETH_DAI_POOL,
    WETH_DAI_POOL_ID,
)


def test_weighted_pool_registered(store, create_pool):
    pool = create_pool(WETH_DAI_POOL)

    assert pool.id == WETH_DAI_POOL_ID
    assert pool.address == WETH_DAI_POOL
    assert pool.pool_type == 'Weighted'
    assert pool.tokens_list == [WETH, DAI]
    assert pool.tokens_count == 2
    assert pool.swap_fee == Decimal("0.003")
    assert pool.create_time == T0
    assert pool.tx == TX_1
    assert pool.liquidity is None


def test_pool_tokens_and_tokens_created(store, create_pool):
    create_pool(WETH_DAI_POOL)

    for address in (WETH, DAI):
        pool_token = store.load(PoolToken, get_pool_token_id(WETH_DAI_POOL_ID, address))
        assert pool_token.balance == Decimal(0)
        assert pool_token.weight == Decimal("0.5")

    assert store.load(Token, WETH).symbol == 'WETH'
    assert store.load(Token, DAI).decimals == 18
    assert store.load(Pool, WETH_DAI_POOL_ID).total_weight == Decimal(1)


def test_vault_counts_new_pools_only(store, create_pool):
    create_pool(WETH_DAI_POOL)
    create_pool(WETH_DAI_POOL)

    assert store.load(Balancer, '2').pool_count == 1
    assert store.count(Pool) == 1
    assert store.count(PoolToken) == 2


def test_stable_pool_reads_amplification(store, create_pool):
    pool = create_pool(BAL_GNO_POOL, factory="stable")

    assert pool.pool_type == 'Stable'
    assert pool.amp == '200'
    assert pool.total_weight is None
    assert store.load(PoolToken, get_pool_token_id(BAL_GNO_POOL_ID, BAL)).weight is None


def test_token_without_metadata(store, create_pool):
    create_pool(BAL_GNO_POOL, factory="stable")

    gno = store.load(Token, GNO)
    assert gno.decimals is None
    assert gno.symbol is None


def test_reverted_pool_id_skips_pool(store, create_pool, caplog):
    with caplog.at_level(logging.WARNING):
        assert create_pool("0x00000000000000000000000000000000000fffff") is None

    assert "Pool id read reverted" in caplog.text
    assert store.count(Pool) == 0
    assert store.count(Balancer) == 0
