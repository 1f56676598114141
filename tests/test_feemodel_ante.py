import pytest

from coreum.context import Context
from coreum.decimal import Dec, DecCoin
from coreum.errors import InsufficientFeeError, InvalidCoinsError, TxDecodeError
from coreum.feemodel_ante import FeeDecorator, FeeTx
from coreum.feemodel_keeper import FeeModelKeeper


def _next(ctx, tx, simulate):
    return ("next", ctx, tx, simulate)


@pytest.fixture
def env():
    ctx = Context(block_height=5)
    keeper = FeeModelKeeper()
    keeper.set_min_gas_price(ctx, DecCoin("stake", Dec.from_str("0.5")))
    return ctx, keeper, FeeDecorator(keeper)


def test_sufficient_fee_passes_and_tracks_gas(env):
    ctx, keeper, decorator = env
    tx = FeeTx(gas=100, fee={"stake": 50})
    result = decorator.ante_handle(ctx, tx, False, _next)
    assert result == ("next", ctx, tx, False)
    assert keeper.tracked_gas(ctx) == 100


def test_gas_accumulates_over_transactions(env):
    ctx, keeper, decorator = env
    decorator.ante_handle(ctx, FeeTx(gas=100, fee={"stake": 60}), False, _next)
    decorator.ante_handle(ctx, FeeTx(gas=20, fee={"stake": 60}), False, _next)
    assert keeper.tracked_gas(ctx) == 120


def test_insufficient_fee(env):
    ctx, keeper, decorator = env
    with pytest.raises(InsufficientFeeError, match="insufficient fees"):
        decorator.ante_handle(ctx, FeeTx(gas=100, fee={"stake": 49}), False, _next)
    assert keeper.tracked_gas(ctx) == 0


def test_no_fee(env):
    ctx, _, decorator = env
    with pytest.raises(InsufficientFeeError, match="no fee declared"):
        decorator.ante_handle(ctx, FeeTx(gas=100), False, _next)


def test_wrong_denom(env):
    ctx, _, decorator = env
    with pytest.raises(InvalidCoinsError, match="'stake' coin only"):
        decorator.ante_handle(ctx, FeeTx(gas=100, fee={"other": 1000}), False, _next)


def test_not_a_fee_tx(env):
    ctx, _, decorator = env
    with pytest.raises(TxDecodeError):
        decorator.ante_handle(ctx, object(), False, _next)


def test_genesis_block_not_enforced():
    ctx = Context(block_height=0)
    keeper = FeeModelKeeper()
    decorator = FeeDecorator(keeper)
    tx = FeeTx(gas=100)
    assert decorator.ante_handle(ctx, tx, True, _next) == ("next", ctx, tx, True)
    assert keeper.tracked_gas(ctx) == 0