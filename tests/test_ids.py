# tests/test_ids.py

from vault_indexer.database import ids

from .factories import BAL, DAI, T0, TX_1, WETH, WETH_DAI_POOL_ID


def test_pool_token_id():
    assert ids.get_pool_token_id(WETH_DAI_POOL_ID, WETH) == f"{WETH_DAI_POOL_ID}-{WETH}"


def test_token_price_id_includes_block():
    price_id = ids.get_token_price_id(WETH_DAI_POOL_ID, WETH, DAI, 123)
    assert price_id == f"{WETH_DAI_POOL_ID}-{WETH}-{DAI}-123"
    assert price_id != ids.get_token_price_id(WETH_DAI_POOL_ID, WETH, DAI, 124)


def test_latest_price_id_is_order_sensitive():
    assert ids.get_latest_price_id(WETH, DAI) == f"{WETH}-{DAI}"
    assert ids.get_latest_price_id(WETH, DAI) != ids.get_latest_price_id(DAI, WETH)


def test_pool_historical_liquidity_id():
    assert ids.get_pool_historical_liquidity_id(WETH_DAI_POOL_ID, DAI, 7) == f"{WETH_DAI_POOL_ID}-{DAI}-7"


def test_event_id_concatenates_hash_and_log_index():
    assert ids.get_event_id(TX_1, 3) == f"{TX_1}3"
    assert ids.get_swap_id(TX_1, 3) == ids.get_event_id(TX_1, 3)


def test_trade_pair_id_is_order_independent():
    assert ids.get_trade_pair_id(WETH, BAL) == ids.get_trade_pair_id(BAL, WETH)
    token0, token1 = ids.canonical_pair(WETH, BAL)
    assert token0 < token1
    assert ids.get_trade_pair_id(WETH, BAL) == f"{token0}-{token1}"


def test_snapshot_ids_bucket_by_day():
    day = T0 // ids.SECONDS_PER_DAY
    assert ids.get_day_id(T0) == day
    assert ids.get_snapshot_id("pool", T0) == f"pool-{day}"
    assert ids.get_snapshot_id("pool", T0) != ids.get_snapshot_id("pool", T0 + ids.SECONDS_PER_DAY)
