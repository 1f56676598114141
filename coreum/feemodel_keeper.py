"""Fee model state: genesis, keeper storage and query service."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from coreum.context import Context
from coreum.decimal import Dec, DecCoin
from coreum.feemodel_model import (
    KEY_MODEL,
    MODULE_NAME,
    STORE_KEY,
    TRANSIENT_STORE_KEY,
    ModelParams,
    Params,
    default_params,
)

DEFAULT_BOND_DENOM = "stake"
PARAM_SUBSPACE = "params/" + MODULE_NAME

_GAS_TRACKING_KEY = b"\x00"
_GAS_PRICE_KEY = b"\x01"
_SHORT_EMA_GAS_KEY = b"\x02"
_LONG_EMA_GAS_KEY = b"\x03"

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT32_MAX = (1 << 32) - 1


def _encode_int(value: int) -> bytes:
    return str(int(value)).encode()


def _decode_int64(data: bytes) -> int:
    value = int(data.decode())
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise OverflowError(f"{value} does not fit in int64")
    return value


def _dec_from_json(value: Any) -> Dec | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"decimal must be a string, got {value!r}")
    return Dec.from_str(value)


def _int_from_json(value: Any, low: int, high: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"invalid integer {value!r}")
    number = int(value)
    if not low <= number <= high:
        raise ValueError(f"integer {number} out of range")
    return number


def _model_to_dict(model: ModelParams) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for name in (
        "initial_gas_price",
        "max_gas_price_multiplier",
        "max_discount",
        "escalation_start_fraction",
    ):
        value = getattr(model, name)
        if value is not None:
            result[name] = str(value)
    result["max_block_gas"] = str(model.max_block_gas)
    result["short_ema_block_length"] = model.short_ema_block_length
    result["long_ema_block_length"] = model.long_ema_block_length
    return result


def _model_from_dict(data: Any) -> ModelParams:
    if not isinstance(data, dict):
        raise ValueError("model params must be an object")
    return ModelParams(
        initial_gas_price=_dec_from_json(data.get("initial_gas_price")),
        max_gas_price_multiplier=_dec_from_json(data.get("max_gas_price_multiplier")),
        max_discount=_dec_from_json(data.get("max_discount")),
        escalation_start_fraction=_dec_from_json(data.get("escalation_start_fraction")),
        max_block_gas=_int_from_json(data.get("max_block_gas", 0), _INT64_MIN, _INT64_MAX),
        short_ema_block_length=_int_from_json(data.get("short_ema_block_length", 0), 0, _UINT32_MAX),
        long_ema_block_length=_int_from_json(data.get("long_ema_block_length", 0), 0, _UINT32_MAX),
    )


def _dec_coin_to_dict(coin: DecCoin) -> dict[str, Any]:
    return {"denom": coin.denom, "amount": str(coin.amount)}


def _dec_coin_from_dict(data: Any) -> DecCoin:
    if not isinstance(data, dict):
        raise ValueError("decimal coin must be an object")
    denom = data.get("denom", "")
    if not isinstance(denom, str):
        raise ValueError(f"invalid denom {denom!r}")
    amount = _dec_from_json(data.get("amount"))
    return DecCoin(denom, amount if amount is not None else Dec(0))


@dataclass(frozen=True)
class FeeModelGenesis:
    """Genesis state of the fee model module."""

    params: Params
    min_gas_price: DecCoin

    def validate(self) -> None:
        self.min_gas_price.validate()
        self.params.validate_basic()

    def to_json(self) -> bytes:
        document = {
            "params": {"model": _model_to_dict(self.params.model)},
            "min_gas_price": _dec_coin_to_dict(self.min_gas_price),
        }
        return json.dumps(document, sort_keys=True).encode()

    @classmethod
    def from_json(cls, data: bytes | str) -> FeeModelGenesis:
        try:
            document = json.loads(data)
            if not isinstance(document, dict):
                raise ValueError("genesis state must be an object")
            params = document.get("params") or {}
            if not isinstance(params, dict):
                raise ValueError("params must be an object")
            model = _model_from_dict(params.get("model") or {})
            min_gas_price = _dec_coin_from_dict(document.get("min_gas_price") or {})
        except (TypeError, AttributeError, UnicodeDecodeError) as exc:
            raise ValueError(str(exc)) from exc
        return cls(params=Params(model=model), min_gas_price=min_gas_price)


def default_genesis_state() -> FeeModelGenesis:
    params = default_params()
    return FeeModelGenesis(
        params=params,
        min_gas_price=DecCoin(DEFAULT_BOND_DENOM, params.model.initial_gas_price),
    )


class FeeModelKeeper:
    """Stores fee model parameters, moving averages and the minimum gas price."""

    def __init__(
        self,
        store_key: str = STORE_KEY,
        transient_store_key: str = TRANSIENT_STORE_KEY,
        param_subspace: str = PARAM_SUBSPACE,
    ) -> None:
        self.store_key = store_key
        self.transient_store_key = transient_store_key
        self.param_subspace = param_subspace

    def tracked_gas(self, ctx: Context) -> int:
        """Gas declared by the transactions handled so far in the current block."""
        data = ctx.transient_store(self.transient_store_key).get(_GAS_TRACKING_KEY)
        return 0 if data is None else _decode_int64(data)

    def track_gas(self, ctx: Context, gas: int) -> None:
        total = self.tracked_gas(ctx) + gas
        ctx.transient_store(self.transient_store_key).set(_GAS_TRACKING_KEY, _encode_int(total))

    def set_params(self, ctx: Context, params: Params) -> None:
        encoded = json.dumps(_model_to_dict(params.model), sort_keys=True).encode()
        ctx.kv_store(self.param_subspace).set(KEY_MODEL, encoded)

    def get_params(self, ctx: Context) -> Params:
        data = ctx.kv_store(self.param_subspace).get(KEY_MODEL)
        if data is None:
            raise LookupError(f"parameter {KEY_MODEL.decode()} not set")
        return Params(model=_model_from_dict(json.loads(data)))

    def _get_int(self, ctx: Context, key: bytes) -> int:
        data = ctx.kv_store(self.store_key).get(key)
        return 0 if data is None else _decode_int64(data)

    def get_short_ema_gas(self, ctx: Context) -> int:
        return self._get_int(ctx, _SHORT_EMA_GAS_KEY)

    def set_short_ema_gas(self, ctx: Context, ema_gas: int) -> None:
        ctx.kv_store(self.store_key).set(_SHORT_EMA_GAS_KEY, _encode_int(ema_gas))

    def get_long_ema_gas(self, ctx: Context) -> int:
        return self._get_int(ctx, _LONG_EMA_GAS_KEY)

    def set_long_ema_gas(self, ctx: Context, ema_gas: int) -> None:
        ctx.kv_store(self.store_key).set(_LONG_EMA_GAS_KEY, _encode_int(ema_gas))

    def get_min_gas_price(self, ctx: Context) -> DecCoin:
        data = ctx.kv_store(self.store_key).get(_GAS_PRICE_KEY)
        if data is None:
            # Genesis initialisation did not run correctly.
            raise LookupError("min gas price not set")
        return _dec_coin_from_dict(json.loads(data))

    def set_min_gas_price(self, ctx: Context, min_gas_price: DecCoin) -> None:
        encoded = json.dumps(_dec_coin_to_dict(min_gas_price), sort_keys=True).encode()
        ctx.kv_store(self.store_key).set(_GAS_PRICE_KEY, encoded)


class FeeModelQueryService:
    """Answers queries about the fee model."""

    def __init__(self, keeper: Any) -> None:
        self.keeper = keeper

    def min_gas_price(self, ctx: Context, request: Any) -> DecCoin:
        if request is None:
            raise ValueError("empty request")
        return self.keeper.get_min_gas_price(ctx)

    def params(self, ctx: Context, request: Any) -> Params:
        if request is None:
            raise ValueError("empty request")
        return self.keeper.get_params(ctx)