# coreum

Pure-Python building blocks for a chain application's fee and asset logic.

## What is in the package

- **Fee model** (`coreum.feemodel_model`)
  - `Model.calculate_next_gas_price(short_ema, long_ema)` gives the next block's minimum gas price. It works from short and long moving averages of block gas, which `calculate_ema` computes.
  - When the short average is below the long one, the price falls from the initial price towards the discounted price.
  - Between the long average and the escalation threshold, the price stays at the discounted price.
  - Above the threshold, it rises quadratically up to the maximum price at `max_block_gas`.
  - `ModelParams` and `Params` hold the settings, and `validate_basic()` checks them.
  - `default_params()` and `default_model()` give the standard settings.
- **Fee model state** (`coreum.feemodel_keeper`)
  - `FeeModelKeeper` stores:
    - the parameters,
    - the gas tracked in the current block,
    - the short and long averages,
    - the minimum gas price.
  - `FeeModelGenesis` reads and writes genesis JSON (`from_json`, `to_json`, `validate`).
  - `default_genesis_state()` returns the default genesis state.
  - `FeeModelQueryService` answers `min_gas_price` and `params` queries.
- **Fee check** (`coreum.feemodel_ante`)
  - `FeeDecorator.ante_handle` rejects a `FeeTx` in these cases:
    - it declares no fee,
    - it pays in a denomination other than the minimum price's,
    - it offers less than `gas × min price`.
  - It then adds the declared gas to the tracked gas.
  - It does not check anything at block height 0.
- **Fee model module** (`coreum.feemodel_module`)
  - `FeeModelModule` handles genesis: `default_genesis`, `validate_genesis`, `init_genesis`, `export_genesis`.
  - `end_block` updates the averages and the minimum gas price.
- **Deterministic gas** (`coreum.deterministicgas`)
  - `SetInfiniteGasMeterDecorator`, `AddBaseGasDecorator` and `ChargeFixedGasDecorator` charge a fixed gas amount per transaction.
  - `chain_ante_decorators(*decorators)` joins decorators into one handler.
  - `DeterministicGasRouter` and `ctx_for_deterministic_gas` charge a fixed gas amount for known message types. They hand each such handler a meter of five times that amount.
- **Custom parameters** (`coreum.customparams`)
  - `StakingParams` holds the minimum self-delegation.
  - `CustomParamsKeeper` stores it.
  - `CustomParamsGenesis` and `CustomParamsModule` handle genesis import and export.
  - `CustomParamsQueryService` answers `staking_params` queries.
- **NFT assets** (`coreum.nft_types`, `coreum.nft_keeper`)
  - `MsgIssueClass.validate_basic` and `MsgMint.validate_basic` check messages against the length, symbol and id rules.
  - `build_class_id` builds a class id and `deconstruct_class_id` takes one apart.
  - `AssetNFTKeeper.issue_class` and `AssetNFTKeeper.mint` perform the operations. Only a class's issuer may mint in it.
  - `NFTMsgServer` turns messages into keeper calls.
- **Addresses** (`coreum.bech32`)
  - `bech32_encode` and `bech32_decode` encode and decode bech32 strings.
  - `AccAddress.from_bech32` parses an address. The default prefix is `devcore`.
- **Support** (`coreum.decimal`, `coreum.context`, `coreum.errors`)
  - `Dec` is an 18-place fixed-point decimal that rounds half to even. `DecCoin` pairs a `Dec` with a denomination.
  - `Context` carries the block height, a `GasMeter` or `InfiniteGasMeter`, in-memory `KVStore`s and an `EventManager`.
  - `InfiniteAccountKeeper` wraps an account keeper so that its calls run on a fresh infinite meter.
  - Errors are subclasses of `CoreumError`, for example `InvalidInputError`, `UnauthorizedError`, `InsufficientFeeError` and `OutOfGasError`. `CoreumError.is_of` tests an error's kind.

## Example

```python
from coreum.context import Context
from coreum.feemodel_keeper import FeeModelKeeper
from coreum.feemodel_model import calculate_ema, default_model
from coreum.feemodel_module import FeeModelModule

model = default_model()
short = calculate_ema(0, 30_000_000, model.params.short_ema_block_length)
long_ = calculate_ema(0, 30_000_000, model.params.long_ema_block_length)
print(model.calculate_next_gas_price(short, long_))

module = FeeModelModule(FeeModelKeeper())
ctx = Context(block_height=1)
module.init_genesis(ctx, module.default_genesis())
module.keeper.track_gas(ctx, 1_000_000)
module.end_block(ctx)
print(module.keeper.get_min_gas_price(ctx))
```

## What it does not do

- It is a library, not a node: it runs no network service, has no command line, and keeps state only in memory in a `Context`'s `KVStore`s.
- Nothing in it stores NFT classes and tokens. `AssetNFTKeeper` needs an object providing `save_class`, `has_class`, `get_classes`, `has_nft` and `mint`, as described by `coreum.nft_types.NFTKeeper`.
- It does not define the gas amount of each message type. The deterministic gas decorators and router need a requirements object with `fixed_gas`, `tx_base_gas(params)` and `gas_required_by_message(msg)`.
- It does not include an account keeper. The base-gas decorators and `InfiniteAccountKeeper` need one with `get_params`.

## Tests

```
pip install -e .[test]
pytest
```