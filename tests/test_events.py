# tests/test_events.py

import msgspec
import pytest

from vault_indexer.types.events import PoolBalanceChanged, SwapEvent, event_decoder

from .factories import TX_1, WETH, WETH_DAI_POOL_ID, swap, units


def test_decode_tagged_event():
    raw = (
        b'{"type": "Swap", "block_number": 5, "block_timestamp": 100, '
        b'"tx_hash": "0xABC", "log_index": 2, "sender": "0xDEF", '
        b'"pool_id": "0xAA", "token_in": "0xB0", "token_out": "0xC0", '
        b'"amount_in": "10", "amount_out": "9"}'
    )

    event = event_decoder.decode(raw)

    assert isinstance(event, SwapEvent)
    assert event.tx_hash == "0xabc"
    assert event.sender == "0xdef"
    assert event.pool_id == "0xaa"
    assert event.position == (5, 2)
    assert event.event_id == "0xabc2"


def test_token_lists_lower_cased():
    event = PoolBalanceChanged(
        block_number=1, block_timestamp=0, tx_hash=TX_1, log_index=0, sender=WETH,
        pool_id=WETH_DAI_POOL_ID, liquidity_provider=WETH,
        tokens=["0xAB", "0xCD"], deltas=["1", "-1"],
    )
    assert event.tokens == ["0xab", "0xcd"]


def test_encode_decode_preserves_type():
    event = swap(WETH_DAI_POOL_ID, WETH, WETH, units(1), units(1))
    decoded = event_decoder.decode(msgspec.json.encode(event))

    assert decoded == event
    assert decoded.to_dict()['amount_in'] == units(1)


def test_unknown_tag_rejected():
    with pytest.raises(msgspec.ValidationError):
        event_decoder.decode(b'{"type": "Mint", "block_number": 1}')
