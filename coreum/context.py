"""Execution context: gas meters, key-value stores and events."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from coreum.errors import OutOfGasError


class GasMeter:
    """Gas meter with a fixed limit; exceeding it raises OutOfGasError."""

    def __init__(self, limit: int | None) -> None:
        if limit is not None and limit < 0:
            raise ValueError("gas limit must not be negative")
        self.limit = limit
        self._consumed = 0

    def consume_gas(self, amount: int, descriptor: str) -> None:
        if amount < 0:
            raise ValueError("gas amount must not be negative")
        self._consumed += amount
        if self.limit is not None and self._consumed > self.limit:
            raise OutOfGasError(descriptor)

    def gas_consumed(self) -> int:
        return self._consumed

    def __repr__(self) -> str:
        return f"{type(self).__name__}(limit={self.limit}, consumed={self._consumed})"


class InfiniteGasMeter(GasMeter):
    """Gas meter that tracks consumption but never runs out."""

    def __init__(self) -> None:
        super().__init__(None)


class KVStore:
    """In-memory byte key-value store."""

    def __init__(self) -> None:
        self._data: dict[bytes, bytes] = {}

    def get(self, key: bytes) -> bytes | None:
        return self._data.get(bytes(key))

    def set(self, key: bytes, value: bytes) -> None:
        if value is None:
            raise ValueError("value is nil")
        self._data[bytes(key)] = bytes(value)


class EventManager:
    """Collects events emitted while handling a transaction or block."""

    def __init__(self) -> None:
        self.events: list[Any] = []

    def emit(self, event: Any) -> None:
        self.events.append(event)


@dataclass
class Context:
    """Block execution context; copies made with ``with_gas_meter`` share stores."""

    block_height: int = 0
    gas_meter: GasMeter = field(default_factory=InfiniteGasMeter)
    event_manager: EventManager = field(default_factory=EventManager)
    stores: dict[str, KVStore] = field(default_factory=dict, repr=False)
    transient_stores: dict[str, KVStore] = field(default_factory=dict, repr=False)

    def kv_store(self, name: str) -> KVStore:
        return self.stores.setdefault(name, KVStore())

    def transient_store(self, name: str) -> KVStore:
        return self.transient_stores.setdefault(name, KVStore())

    def with_gas_meter(self, meter: GasMeter) -> Context:
        return replace(self, gas_meter=meter)


@dataclass(frozen=True)
class InfiniteAccountKeeper:
    """Account keeper wrapper whose calls run on a fresh infinite gas meter.

    Gas consumed by the real keeper is not deterministic, so it is kept off the
    caller's meter.
    """

    account_keeper: Any

    def get_params(self, ctx: Context) -> Any:
        return self.account_keeper.get_params(ctx.with_gas_meter(InfiniteGasMeter()))

    def get_account(self, ctx: Context, address: Any) -> Any:
        return self.account_keeper.get_account(ctx.with_gas_meter(InfiniteGasMeter()), address)

    def set_account(self, ctx: Context, account: Any) -> None:
        self.account_keeper.set_account(ctx.with_gas_meter(InfiniteGasMeter()), account)

    def get_module_address(self, module_name: str) -> Any:
        return self.account_keeper.get_module_address(module_name)