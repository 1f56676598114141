"""Fee model, deterministic gas, custom parameters and NFT asset logic for a chain application."""

__version__ = "0.1.0"