"""Custom chain parameters: staking params, their keeper, query service and module."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from coreum.context import Context

MODULE_NAME = "customparams"
STORE_KEY = MODULE_NAME
ROUTER_KEY = MODULE_NAME
CUSTOM_PARAMS_STAKING = "customparamsstaking"
PARAM_STORE_KEY_MIN_SELF_DELEGATION = b"minselfdelegation"
PARAM_SUBSPACE = "params/" + CUSTOM_PARAMS_STAKING


def _validate_min_self_delegation(value: object) -> None:
    if value is None:
        raise ValueError("param min_self_delegation must be not nil")
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"invalid parameter type: {type(value).__name__}")
    if value < 0:
        raise ValueError(f"param min_self_delegation must be positive: {value}")


def _int_from_json(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"invalid integer {value!r}")
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"invalid integer {value!r}") from exc


@dataclass(frozen=True)
class StakingParams:
    """Custom staking parameters."""

    min_self_delegation: int | None = None

    def validate_basic(self) -> None:
        _validate_min_self_delegation(self.min_self_delegation)

    def to_dict(self) -> dict[str, Any]:
        if self.min_self_delegation is None:
            return {}
        return {"min_self_delegation": str(self.min_self_delegation)}

    @classmethod
    def from_dict(cls, data: Any) -> StakingParams:
        if not isinstance(data, dict):
            raise ValueError("staking params must be an object")
        return cls(min_self_delegation=_int_from_json(data.get("min_self_delegation")))


def default_staking_params() -> StakingParams:
    return StakingParams(min_self_delegation=1)


@dataclass(frozen=True)
class CustomParamsGenesis:
    """Genesis state of the customparams module."""

    staking_params: StakingParams

    def validate(self) -> None:
        self.staking_params.validate_basic()

    def to_json(self) -> bytes:
        document = {"staking_params": self.staking_params.to_dict()}
        return json.dumps(document, sort_keys=True).encode()

    @classmethod
    def from_json(cls, data: bytes | str) -> CustomParamsGenesis:
        try:
            document = json.loads(data)
        except (TypeError, UnicodeDecodeError) as exc:
            raise ValueError(str(exc)) from exc
        if not isinstance(document, dict):
            raise ValueError("genesis state must be an object")
        staking = document.get("staking_params") or {}
        return cls(staking_params=StakingParams.from_dict(staking))


def default_customparams_genesis() -> CustomParamsGenesis:
    return CustomParamsGenesis(staking_params=default_staking_params())


class CustomParamsKeeper:
    """Keeps the custom staking parameters in a parameter store."""

    def __init__(self, param_subspace: str = PARAM_SUBSPACE) -> None:
        self.param_subspace = param_subspace

    def get_staking_params(self, ctx: Context) -> StakingParams:
        data = ctx.kv_store(self.param_subspace).get(PARAM_STORE_KEY_MIN_SELF_DELEGATION)
        if data is None:
            raise LookupError(
                f"parameter {PARAM_STORE_KEY_MIN_SELF_DELEGATION.decode()} not set"
            )
        return StakingParams(min_self_delegation=_int_from_json(json.loads(data)))

    def set_staking_params(self, ctx: Context, params: StakingParams) -> None:
        _validate_min_self_delegation(params.min_self_delegation)
        encoded = json.dumps(str(params.min_self_delegation)).encode()
        ctx.kv_store(self.param_subspace).set(PARAM_STORE_KEY_MIN_SELF_DELEGATION, encoded)

    def init_genesis(self, ctx: Context, genesis: CustomParamsGenesis) -> None:
        self.set_staking_params(ctx, genesis.staking_params)

    def export_genesis(self, ctx: Context) -> CustomParamsGenesis:
        return CustomParamsGenesis(staking_params=self.get_staking_params(ctx))


class CustomParamsQueryService:
    """Answers queries about the custom parameters."""

    def __init__(self, keeper: Any) -> None:
        self.keeper = keeper

    def staking_params(self, ctx: Context, request: Any) -> StakingParams:
        if request is None:
            raise ValueError("empty request")
        return self.keeper.get_staking_params(ctx)


class CustomParamsModule:
    """Application module for the custom parameters."""

    name = MODULE_NAME
    querier_route = ROUTER_KEY
    consensus_version = 1

    def __init__(self, keeper: CustomParamsKeeper) -> None:
        self.keeper = keeper
        self.query_service = CustomParamsQueryService(keeper)

    def default_genesis(self) -> bytes:
        return default_customparams_genesis().to_json()

    def validate_genesis(self, data: bytes | str) -> None:
        try:
            genesis = CustomParamsGenesis.from_json(data)
        except ValueError as exc:
            raise ValueError(f"failed to unmarshal {MODULE_NAME} genesis state: {exc}") from exc
        genesis.validate()

    def init_genesis(self, ctx: Context, data: bytes | str) -> list:
        self.keeper.init_genesis(ctx, CustomParamsGenesis.from_json(data))
        return []

    def export_genesis(self, ctx: Context) -> bytes:
        return self.keeper.export_genesis(ctx).to_json()