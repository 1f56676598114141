"""Fee model application module: genesis handling and the end-block price update."""

from __future__ import annotations

from typing import Any

from coreum.context import Context
from coreum.decimal import DecCoin
from coreum.feemodel_keeper import FeeModelGenesis, FeeModelQueryService, default_genesis_state
from coreum.feemodel_model import MODULE_NAME, ROUTER_KEY, Model, calculate_ema


class FeeModelModule:
    """Application module wiring the fee model keeper into the block lifecycle."""

    name = MODULE_NAME
    querier_route = ROUTER_KEY
    consensus_version = 1

    def __init__(self, keeper: Any) -> None:
        self.keeper = keeper
        self.query_service = FeeModelQueryService(keeper)

    def default_genesis(self) -> bytes:
        return default_genesis_state().to_json()

    def validate_genesis(self, data: bytes | str) -> None:
        try:
            genesis = FeeModelGenesis.from_json(data)
        except ValueError as exc:
            raise ValueError(f"failed to unmarshal {MODULE_NAME} genesis state: {exc}") from exc
        genesis.validate()

    def init_genesis(self, ctx: Context, data: bytes | str) -> list:
        genesis = FeeModelGenesis.from_json(data)
        self.keeper.set_params(ctx, genesis.params)
        self.keeper.set_min_gas_price(ctx, genesis.min_gas_price)
        return []

    def export_genesis(self, ctx: Context) -> bytes:
        genesis = FeeModelGenesis(
            params=self.keeper.get_params(ctx),
            min_gas_price=self.keeper.get_min_gas_price(ctx),
        )
        return genesis.to_json()

    def end_block(self, ctx: Context) -> list:
        """Update the moving averages and the minimum gas price for the next block."""
        current_gas_usage = self.keeper.tracked_gas(ctx)
        params = self.keeper.get_params(ctx)
        model = Model(params.model)
        previous_min_gas_price = self.keeper.get_min_gas_price(ctx)

        new_short_ema = calculate_ema(
            self.keeper.get_short_ema_gas(ctx), current_gas_usage, params.model.short_ema_block_length
        )
        new_long_ema = calculate_ema(
            self.keeper.get_long_ema_gas(ctx), current_gas_usage, params.model.long_ema_block_length
        )
        new_min_gas_price = model.calculate_next_gas_price(new_short_ema, new_long_ema)

        self.keeper.set_short_ema_gas(ctx, new_short_ema)
        self.keeper.set_long_ema_gas(ctx, new_long_ema)
        self.keeper.set_min_gas_price(ctx, DecCoin(previous_min_gas_price.denom, new_min_gas_price))
        return []