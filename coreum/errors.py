"""Error types raised by the chain modules."""

from __future__ import annotations


class CoreumError(Exception):
    """Base error carrying a registered codespace, code and description."""

    codespace = "sdk"
    code = 1
    description = "internal"

    def __init__(self, message: str = "") -> None:
        self.message = message
        text = f"{message}: {self.description}" if message else self.description
        super().__init__(text)

    def is_of(self, kind) -> bool:
        """Tell whether this error is of the given error class, instance or tuple of them."""
        if isinstance(kind, tuple):
            return any(self.is_of(item) for item in kind)
        if isinstance(kind, CoreumError):
            return (self.codespace, self.code) == (kind.codespace, kind.code)
        if isinstance(kind, type):
            return isinstance(self, kind)
        return False


class InvalidInputError(CoreumError):
    """Common error for invalid input to the asset NFT module."""

    codespace = "assetnft"
    code = 1
    description = "invalid input"


class InvalidIDError(CoreumError):
    """The provided id is not of a valid format."""

    codespace = "assetnft"
    code = 2
    description = "id format is not valid"


class TxDecodeError(CoreumError):
    codespace = "sdk"
    code = 2
    description = "tx parse error"


class UnauthorizedError(CoreumError):
    codespace = "sdk"
    code = 4
    description = "unauthorized"


class InvalidAddressError(CoreumError):
    codespace = "sdk"
    code = 7
    description = "invalid address"


class InvalidCoinsError(CoreumError):
    codespace = "sdk"
    code = 10
    description = "invalid coins"


class OutOfGasError(CoreumError):
    codespace = "sdk"
    code = 11
    description = "out of gas"


class InsufficientFeeError(CoreumError):
    codespace = "sdk"
    code = 13
    description = "insufficient fee"


class LogicError(CoreumError):
    codespace = "sdk"
    code = 35
    description = "internal logic error"