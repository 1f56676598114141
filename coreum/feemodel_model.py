"""Fee model: parameters and the minimum gas price curve."""

from __future__ import annotations

from dataclasses import dataclass

from coreum.decimal import Dec

MODULE_NAME = "feemodel"
STORE_KEY = MODULE_NAME
TRANSIENT_STORE_KEY = "transient_" + MODULE_NAME
ROUTER_KEY = MODULE_NAME
KEY_MODEL = b"Model"

# How slowly the price moves away from the discounted price; lower is faster.
_EXPONENT = 2
_U64 = 1 << 64
_U32_MASK = 0xFFFFFFFF


@dataclass(frozen=True)
class ModelParams:
    """Parameters of the fee model."""

    initial_gas_price: Dec | None = None
    max_gas_price_multiplier: Dec | None = None
    max_discount: Dec | None = None
    escalation_start_fraction: Dec | None = None
    max_block_gas: int = 0
    short_ema_block_length: int = 0
    long_ema_block_length: int = 0

    def validate_basic(self) -> None:
        _validate_model_params(self)


@dataclass(frozen=True)
class Params:
    """Module parameters of the fee model."""

    model: ModelParams

    def validate_basic(self) -> None:
        _validate_model_params(self.model)


def _validate_model_params(value: object) -> None:
    if not isinstance(value, ModelParams):
        raise ValueError(f"invalid parameter type: {type(value).__name__}")
    one = Dec.from_int(1)
    zero = Dec.from_int(0)

    if value.initial_gas_price is None:
        raise ValueError("initial gas price is not set")
    if value.max_gas_price_multiplier is None:
        raise ValueError("max gas price multiplier is not set")
    if value.max_discount is None:
        raise ValueError("max discount is not set")

    if not value.initial_gas_price.is_positive():
        raise ValueError("initial gas price must be positive")
    if value.max_gas_price_multiplier <= one:
        raise ValueError("max gas price multiplier must be greater than one")
    if value.max_discount <= zero:
        raise ValueError("max discount must be greater than 0")
    if value.max_discount >= one:
        raise ValueError("max discount must be less than 1")

    if value.escalation_start_fraction is None:
        raise ValueError("escalation start fraction is not set")
    if value.escalation_start_fraction <= zero:
        raise ValueError("escalation start fraction must be greater than 0")
    if value.escalation_start_fraction >= one:
        raise ValueError("escalation start fraction must be less than 1")
    if value.short_ema_block_length == 0:
        raise ValueError("short EMA block length must be greater than 0")
    if value.long_ema_block_length <= value.short_ema_block_length:
        raise ValueError("long EMA block length must be greater than short EMA block length")


def default_params() -> Params:
    return Params(
        model=ModelParams(
            initial_gas_price=Dec.from_str("0.0625"),
            max_gas_price_multiplier=Dec.from_str("1000.0"),
            max_discount=Dec.from_str("0.5"),
            escalation_start_fraction=Dec.from_str("0.8"),
            max_block_gas=50_000_000,
            short_ema_block_length=50,
            long_ema_block_length=1000,
        )
    )


@dataclass(frozen=True)
class Model:
    """Computes the minimum gas price for the next block."""

    params: ModelParams

    def calculate_next_gas_price(self, short_ema: int, long_ema: int) -> Dec:
        params = self.params
        if short_ema >= params.max_block_gas:
            return self.calculate_max_gas_price()
        if short_ema > self.calculate_escalation_start_block_gas():
            return self._gas_price_in_escalation_region(short_ema)
        if short_ema >= long_ema:
            return self.calculate_gas_price_with_max_discount()
        if long_ema > 0:
            return self._gas_price_in_discount_region(short_ema, long_ema)
        return params.initial_gas_price

    def calculate_gas_price_with_max_discount(self) -> Dec:
        return self.params.initial_gas_price * (Dec.from_int(1) - self.params.max_discount)

    def calculate_max_gas_price(self) -> Dec:
        return self.params.initial_gas_price * self.params.max_gas_price_multiplier

    def calculate_escalation_start_block_gas(self) -> int:
        start = Dec.from_int(self.params.max_block_gas) * self.params.escalation_start_fraction
        return start.truncate_int()

    def _gas_price_in_escalation_region(self, short_ema: int) -> Dec:
        discounted = self.calculate_gas_price_with_max_discount()
        start = self.calculate_escalation_start_block_gas()
        height = self.calculate_max_gas_price() - discounted
        width = Dec.from_int(self.params.max_block_gas - start)
        x = Dec.from_int(short_ema - start)
        return discounted + height * x.quo(width).power(_EXPONENT)

    def _gas_price_in_discount_region(self, short_ema: int, long_ema: int) -> Dec:
        discounted = self.calculate_gas_price_with_max_discount()
        height = self.params.initial_gas_price - discounted
        width = Dec.from_int(long_ema)
        x = Dec.from_int(short_ema)
        distance = abs(x.quo(width) - Dec.from_int(1))
        return discounted + height * distance.power(_EXPONENT)


def default_model() -> Model:
    return Model(default_params().model)


def calculate_ema(previous_ema: int, new_value: int, num_of_blocks: int) -> int:
    """Next exponential moving average, in unsigned 64-bit arithmetic."""
    blocks = num_of_blocks & _U32_MASK
    weight = (blocks - 1) & _U32_MASK
    total = (weight * (previous_ema % _U64) + new_value % _U64) % _U64
    result = total // blocks
    return result - _U64 if result >= 1 << 63 else result