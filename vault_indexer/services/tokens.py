# vault_indexer/services/tokens.py

from decimal import Decimal
from typing import Dict, Iterable, Literal, Optional, Protocol

from ..core.logging import LoggingMixin
from ..database.store import EntityStore
from ..database.tables import Token, TokenSnapshot
from ..database.ids import get_snapshot_id, get_day_id
from ..types.configs import TokenConfig
from ..types.new import EvmAddress

SWAP_IN = 'in'
SWAP_OUT = 'out'
SwapDirection = Literal['in', 'out']


class TokenMetadataReader(Protocol):
    """ERC20 metadata source. None means the call reverted."""

    def decimals(self, token: EvmAddress) -> Optional[int]:
        ...

    def symbol(self, token: EvmAddress) -> Optional[str]:
        ...


class StaticTokenMetadata(LoggingMixin):
    """Serves token metadata from configuration; unknown tokens behave like reverted calls"""

    def __init__(self, tokens: Iterable[TokenConfig] = ()):
        self.tokens: Dict[EvmAddress, TokenConfig] = {t.address: t for t in tokens}

    def decimals(self, token: EvmAddress) -> Optional[int]:
        config = self.tokens.get(token)
        if config is None:
            self.log_debug("No decimals for token", token=token)
            return None
        return config.decimals

    def symbol(self, token: EvmAddress) -> Optional[str]:
        config = self.tokens.get(token)
        return config.symbol if config else None


def get_token(store: EntityStore, reader: TokenMetadataReader, address: EvmAddress) -> Token:
    token = store.load(Token, address)
    if token is not None:
        return token

    token = Token(
        id=address,
        address=address,
        decimals=reader.decimals(address),
        symbol=reader.symbol(address),
    )
    return store.save(token)


def get_token_snapshot(store: EntityStore, token: Token, timestamp: int) -> TokenSnapshot:
    snapshot_id = get_snapshot_id(token.id, timestamp)
    snapshot = store.load(TokenSnapshot, snapshot_id)
    if snapshot is None:
        snapshot = TokenSnapshot(id=snapshot_id, token=token.address, day_id=get_day_id(timestamp))
    return snapshot


def uptick_swaps_for_token(store: EntityStore, token: Token, timestamp: int) -> None:
    token.total_swap_count = token.total_swap_count + 1
    store.save(token)

    snapshot = get_token_snapshot(store, token, timestamp)
    snapshot.total_swap_count = snapshot.total_swap_count + 1
    store.save(snapshot)


def update_token_balances(store: EntityStore, token: Token, usd_value: Decimal, notional: Decimal,
                          direction: SwapDirection, timestamp: int) -> None:
    token.total_volume_usd = token.total_volume_usd + usd_value
    token.total_volume_notional = token.total_volume_notional + notional
    if direction == SWAP_IN:
        token.total_balance_notional = token.total_balance_notional + notional
    else:
        token.total_balance_notional = token.total_balance_notional - notional
    store.save(token)

    snapshot = get_token_snapshot(store, token, timestamp)
    snapshot.total_volume_usd = snapshot.total_volume_usd + usd_value
    snapshot.total_volume_notional = snapshot.total_volume_notional + notional
    snapshot.total_balance_notional = token.total_balance_notional
    store.save(snapshot)
