# vault_indexer/handlers/balances.py

from typing import Literal, Optional

from ..core.logging import DEBUG
from ..database.ids import get_event_id
from ..database.tables import Investment, JoinExit, UserInternalBalance
from ..services.entities import get_user, require_pool_token
from ..services.snapshots import create_pool_snapshot
from ..types.errors import IndexerError
from ..types.events import InternalBalanceChanged, PoolBalanceChanged, PoolBalanceManaged
from ..utils.amounts import accounting_precision, add_amounts, amount_to_int, is_positive, scale_down
from .base import BaseHandler

JOIN = 'Join'
EXIT = 'Exit'


class BalanceHandler(BaseHandler):
    """Vault balance changes: pool joins/exits, asset manager moves, internal balances"""

    @accounting_precision
    def handle_balance_change(self, event: PoolBalanceChanged) -> Optional[JoinExit]:
        if not event.deltas:
            return None

        # classified by the net sign only; every delta is still applied as given
        if is_positive(add_amounts(event.deltas)):
            return self._handle_pool_balance_change(event, JOIN)
        return self._handle_pool_balance_change(event, EXIT)

    def _handle_pool_balance_change(self, event: PoolBalanceChanged,
                                    kind: Literal['Join', 'Exit']) -> Optional[JoinExit]:
        pool = self.load_pool(event.pool_id, event)
        if pool is None:
            return None

        tokens_list = pool.tokens_list
        deltas = [amount_to_int(delta) for delta in event.deltas]
        if len(deltas) != len(tokens_list):
            raise IndexerError("Balance deltas do not align with pool tokens", {
                'pool_id': pool.id,
                'tx_hash': event.tx_hash,
                'delta_count': len(deltas),
                'token_count': len(tokens_list),
            })

        # exits are recorded as positive amounts removed
        sign = 1 if kind == JOIN else -1
        amounts = [
            scale_down(sign * delta, self.get_token(token_address).decimals)
            for token_address, delta in zip(tokens_list, deltas)
        ]

        join_exit = self.store.save(JoinExit(
            id=get_event_id(event.tx_hash, event.log_index),
            type=kind,
            sender=event.liquidity_provider,
            amounts=amounts,
            pool_id=pool.id,
            user=event.liquidity_provider,
            timestamp=event.block_timestamp,
            tx=event.tx_hash,
        ))

        for token_address, amount in zip(tokens_list, amounts):
            pool_token = require_pool_token(self.store, pool.id, token_address, tx_hash=event.tx_hash)
            pool_token.balance = pool_token.balance + sign * amount
            self.store.save(pool_token)

        self.pricing.update_liquidity_for_pricing_assets(
            pool, event.block_number, event.block_timestamp, event.liquidity_provider
        )
        create_pool_snapshot(self.store, pool.id, event.block_timestamp)

        self.log_event(DEBUG, f"Pool {kind.lower()} applied", event, pool_id=pool.id)
        return join_exit

    @accounting_precision
    def handle_balance_manage(self, event: PoolBalanceManaged) -> Optional[Investment]:
        pool = self.load_pool(event.pool_id, event)
        if pool is None:
            return None

        token = self.get_token(event.token)
        pool_token = require_pool_token(self.store, pool.id, event.token, tx_hash=event.tx_hash)

        managed_amount = scale_down(event.managed_delta, token.decimals)
        pool_token.invested = pool_token.invested + managed_amount
        self.store.save(pool_token)

        return self.store.save(Investment(
            id=f"{pool_token.id}{event.asset_manager}",
            asset_manager_address=event.asset_manager,
            pool_token_id=pool_token.id,
            amount=managed_amount,
            timestamp=event.block_timestamp,
        ))

    @accounting_precision
    def handle_internal_balance_change(self, event: InternalBalanceChanged) -> UserInternalBalance:
        get_user(self.store, event.user)

        balance_id = f"{event.user}{event.token}"
        user_balance = self.store.load(UserInternalBalance, balance_id)
        if user_balance is None:
            user_balance = UserInternalBalance(
                id=balance_id,
                user_address=event.user,
                token=event.token,
            )

        token = self.get_token(event.token)
        user_balance.balance = user_balance.balance + scale_down(event.delta, token.decimals)
        return self.store.save(user_balance)
