import pytest

from coreum.context import (
    Context,
    EventManager,
    GasMeter,
    InfiniteAccountKeeper,
    InfiniteGasMeter,
    KVStore,
)
from coreum.errors import OutOfGasError


def test_gas_meter_accumulates():
    meter = GasMeter(100)
    meter.consume_gas(30, "a")
    meter.consume_gas(40, "b")
    assert meter.gas_consumed() == 70


def test_gas_meter_out_of_gas():
    meter = GasMeter(100)
    meter.consume_gas(100, "exact")
    with pytest.raises(OutOfGasError):
        meter.consume_gas(1, "Fixed")


def test_gas_meter_rejects_negative_amount():
    with pytest.raises(ValueError):
        GasMeter(10).consume_gas(-1, "x")


def test_infinite_gas_meter_never_runs_out():
    meter = InfiniteGasMeter()
    meter.consume_gas(10**30, "big")
    assert meter.gas_consumed() == 10**30
    assert meter.limit is None


def test_kv_store_get_set():
    store = KVStore()
    assert store.get(b"\x00") is None
    store.set(b"\x00", b"value")
    assert store.get(b"\x00") == b"value"
    with pytest.raises(ValueError):
        store.set(b"\x01", None)


def test_event_manager_emit():
    manager = EventManager()
    manager.emit("first")
    manager.emit("second")
    assert manager.events == ["first", "second"]


def test_with_gas_meter_shares_stores():
    ctx = Context(block_height=5)
    ctx.kv_store("feemodel").set(b"\x01", b"a")
    ctx.transient_store("transient_feemodel").set(b"\x00", b"b")
    meter = GasMeter(10)
    other = ctx.with_gas_meter(meter)
    assert other.gas_meter is meter
    assert ctx.gas_meter is not meter
    assert other.block_height == 5
    assert other.kv_store("feemodel").get(b"\x01") == b"a"
    assert other.transient_store("transient_feemodel").get(b"\x00") == b"b"
    assert other.event_manager is ctx.event_manager


class _GasHungryAccountKeeper:
    def __init__(self):
        self.accounts = {}

    def get_params(self, ctx):
        ctx.gas_meter.consume_gas(10**6, "params")
        return {"max_memo_characters": 256}

    def get_account(self, ctx, address):
        ctx.gas_meter.consume_gas(10**6, "get")
        return self.accounts.get(address)

    def set_account(self, ctx, account):
        ctx.gas_meter.consume_gas(10**6, "set")
        self.accounts[account["address"]] = account

    def get_module_address(self, module_name):
        return "module-" + module_name


def test_infinite_account_keeper_does_not_charge_caller():
    inner = _GasHungryAccountKeeper()
    keeper = InfiniteAccountKeeper(inner)
    ctx = Context(block_height=1, gas_meter=GasMeter(10))

    assert keeper.get_params(ctx) == {"max_memo_characters": 256}
    account = {"address": "addr1"}
    keeper.set_account(ctx, account)
    assert keeper.get_account(ctx, "addr1") is account
    assert ctx.gas_meter.gas_consumed() == 0


def test_infinite_account_keeper_module_address():
    keeper = InfiniteAccountKeeper(_GasHungryAccountKeeper())
    assert keeper.get_module_address("feemodel") == "module-feemodel"