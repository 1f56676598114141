"""Deterministic gas: ante decorators and a message router charging fixed gas."""

from __future__ import annotations

from typing import Any, Callable, Protocol

from coreum.context import Context, GasMeter, InfiniteGasMeter

# Handlers of deterministic messages get this many times the required gas,
# so they succeed while still running under a limit.
GAS_MULTIPLIER = 5

AnteHandler = Callable[[Context, Any, bool], Context]
MsgHandler = Callable[[Context, Any], Any]


class GasRequirements(Protocol):
    """What the decorators and router need to know about deterministic gas."""

    fixed_gas: int

    def tx_base_gas(self, params: Any) -> int: ...

    def gas_required_by_message(self, msg: Any) -> int | None: ...


class SetInfiniteGasMeterDecorator:
    """Charges the fixed gas up front, then runs the chain on an infinite meter.

    Must be the first decorator after context set-up.
    """

    def __init__(self, requirements: GasRequirements) -> None:
        self.requirements = requirements

    def ante_handle(
        self, ctx: Context, tx: Any, simulate: bool, next_handler: AnteHandler
    ) -> Context:
        # Fail early if the declared gas cannot even cover the fixed charge.
        ctx.gas_meter.consume_gas(self.requirements.fixed_gas, "Fixed")
        return next_handler(ctx.with_gas_meter(InfiniteGasMeter()), tx, simulate)


class AddBaseGasDecorator:
    """Gives free base gas covering transaction size and signature checks."""

    def __init__(self, account_keeper: Any, requirements: GasRequirements) -> None:
        self.account_keeper = account_keeper
        self.requirements = requirements

    def ante_handle(
        self, ctx: Context, tx: Any, simulate: bool, next_handler: AnteHandler
    ) -> Context:
        if simulate or ctx.block_height == 0:
            meter: GasMeter = InfiniteGasMeter()
        else:
            params = self.account_keeper.get_params(ctx)
            meter = GasMeter(tx.gas + self.requirements.tx_base_gas(params))
        return next_handler(ctx.with_gas_meter(meter), tx, simulate)


class ChargeFixedGasDecorator:
    """Creates the meter for message handlers and charges the ante handler's gas.

    Gas used above the free base gas is charged, together with the fixed gas.
    Unused base gas is not passed on to the message handlers.
    """

    def __init__(self, account_keeper: Any, requirements: GasRequirements) -> None:
        self.account_keeper = account_keeper
        self.requirements = requirements

    def ante_handle(
        self, ctx: Context, tx: Any, simulate: bool, next_handler: AnteHandler
    ) -> Context:
        params = self.account_keeper.get_params(ctx)
        if simulate or ctx.block_height == 0:
            meter: GasMeter = InfiniteGasMeter()
        else:
            meter = GasMeter(tx.gas)

        consumed = ctx.gas_meter.gas_consumed()
        bonus = self.requirements.tx_base_gas(params)
        if consumed > bonus:
            meter.consume_gas(consumed - bonus, "OverBonus")
        meter.consume_gas(self.requirements.fixed_gas, "Fixed")
        return next_handler(ctx.with_gas_meter(meter), tx, simulate)


def chain_ante_decorators(*args: Any) -> AnteHandler | None:
    """Chain decorators into one ante handler; the last one ends with the context."""
    if not args:
        return None

    def terminator(ctx: Context, tx: Any, simulate: bool) -> Context:
        return ctx

    handler: AnteHandler = terminator
    for decorator in reversed(args):
        handler = _link(decorator, handler)
    return handler


def _link(decorator: Any, next_handler: AnteHandler) -> AnteHandler:
    def handler(ctx: Context, tx: Any, simulate: bool) -> Context:
        return decorator.ante_handle(ctx, tx, simulate, next_handler)

    return handler


def ctx_for_deterministic_gas(ctx: Context, msg: Any, requirements: GasRequirements) -> Context:
    """Charge the fixed gas of a deterministic message and give its handler a new meter."""
    gas_required = requirements.gas_required_by_message(msg)
    if gas_required is None:
        return ctx
    ctx.gas_meter.consume_gas(
        gas_required,
        f"DeterministicGas (gas required: {gas_required}, message type: {type(msg).__name__})",
    )
    return ctx.with_gas_meter(GasMeter(GAS_MULTIPLIER * gas_required))


class _MsgRouter:
    """Plain path-to-handler router."""

    def __init__(self) -> None:
        self._routes: dict[str, MsgHandler] = {}

    def add_route(self, path: str, handler: MsgHandler) -> _MsgRouter:
        if not path:
            raise ValueError("route path must not be empty")
        if path in self._routes:
            raise ValueError(f"route {path} has already been initialized")
        self._routes[path] = handler
        return self

    def route(self, ctx: Context, path: str) -> MsgHandler | None:
        return self._routes.get(path)


class DeterministicGasRouter:
    """Router whose handlers charge deterministic gas for configured message types."""

    def __init__(self, requirements: GasRequirements, base_router: Any = None) -> None:
        self.requirements = requirements
        self.base_router = base_router if base_router is not None else _MsgRouter()

    def add_route(self, path: str, handler: MsgHandler) -> DeterministicGasRouter:
        self.base_router.add_route(path, self._wrap(handler))
        return self

    def route(self, ctx: Context, path: str) -> MsgHandler | None:
        return self.base_router.route(ctx, path)

    def _wrap(self, handler: MsgHandler) -> MsgHandler:
        def wrapped(ctx: Context, msg: Any) -> Any:
            return handler(ctx_for_deterministic_gas(ctx, msg, self.requirements), msg)

        return wrapped