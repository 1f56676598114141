"""Ante decorator enforcing the fee model's minimum gas price."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from coreum.context import Context
from coreum.decimal import Dec, DecCoin
from coreum.errors import InsufficientFeeError, InvalidCoinsError, TxDecodeError


@dataclass(frozen=True)
class FeeTx:
    """Transaction declaring a gas limit and fees in denomination order."""

    gas: int
    fee: Mapping[str, int] = field(default_factory=dict)
    msgs: tuple = ()

    def amount_of(self, denom: str) -> int:
        return self.fee.get(denom, 0)


class FeeDecorator:
    """Rejects transactions offering less than the current minimum gas price."""

    def __init__(self, keeper: Any) -> None:
        self.keeper = keeper

    def ante_handle(
        self,
        ctx: Context,
        tx: Any,
        simulate: bool,
        next_handler: Callable[[Context, Any, bool], Any],
    ) -> Any:
        if ctx.block_height == 0:
            # The fee model is not enforced on the genesis block.
            return next_handler(ctx, tx, simulate)
        if not isinstance(tx, FeeTx):
            raise TxDecodeError("Tx must be a FeeTx")
        self._act_on_fee_model_output(ctx, tx)
        self.keeper.track_gas(ctx, tx.gas)
        return next_handler(ctx, tx, simulate)

    def _act_on_fee_model_output(self, ctx: Context, tx: FeeTx) -> None:
        min_gas_price = self.keeper.get_min_gas_price(ctx)
        if not tx.fee:
            raise InsufficientFeeError("no fee declared for transaction")
        first_denom = next(iter(tx.fee))
        if first_denom != min_gas_price.denom:
            raise InvalidCoinsError(f"fee must be paid in '{min_gas_price.denom}' coin only")

        gas_declared = Dec.from_int(tx.gas)
        fee_offered = DecCoin(min_gas_price.denom, Dec.from_int(tx.amount_of(min_gas_price.denom)))
        fee_required = DecCoin(min_gas_price.denom, gas_declared * min_gas_price.amount)
        if fee_offered.is_lt(fee_required):
            raise InsufficientFeeError(
                f"insufficient fees; got: {fee_offered} required: {fee_required}"
            )