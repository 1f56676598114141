"""Asset NFT types: settings, messages and identifier rules."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Protocol

from coreum.bech32 import AccAddress
from coreum.context import Context
from coreum.errors import InvalidAddressError, InvalidIDError, InvalidInputError

MODULE_NAME = "assetnft"
STORE_KEY = MODULE_NAME
ROUTER_KEY = MODULE_NAME
QUERIER_ROUTE = MODULE_NAME

NFT_CLASS_MAX_NAME_LENGTH = 128
NFT_CLASS_MAX_DESCRIPTION_LENGTH = 256
NFT_MAX_URI_LENGTH = 256
NFT_MAX_URI_HASH_LENGTH = 128
NFT_MAX_DATA_SIZE = 5 * 1000

_SYMBOL_PATTERN = r"^[a-zA-Z][a-zA-Z0-9]{0,40}$"
_SYMBOL_RE = re.compile(r"[a-zA-Z][a-zA-Z0-9]{0,40}")
_ID_PATTERN = r"^[a-zA-Z][a-zA-Z0-9/:-]{2,100}$"
_ID_RE = re.compile(r"[a-zA-Z][a-zA-Z0-9/:-]{2,100}")
_CLASS_ID_SEPARATOR = "-"


class NFTKeeper(Protocol):
    """Storage of NFT classes and tokens used by the asset NFT keeper."""

    def save_class(self, ctx: Context, nft_class: Any) -> None: ...

    def has_class(self, ctx: Context, class_id: str) -> bool: ...

    def get_classes(self, ctx: Context) -> list: ...

    def has_nft(self, ctx: Context, class_id: str, token_id: str) -> bool: ...

    def mint(self, ctx: Context, token: Any, receiver: AccAddress) -> None: ...


@dataclass(frozen=True)
class IssueClassSettings:
    """Parameters for issuing a non-fungible token class."""

    issuer: AccAddress
    name: str = ""
    symbol: str = ""
    description: str = ""
    uri: str = ""
    uri_hash: str = ""
    data: bytes | None = None


@dataclass(frozen=True)
class MintSettings:
    """Parameters for minting a non-fungible token."""

    sender: AccAddress
    class_id: str = ""
    id: str = ""
    uri: str = ""
    uri_hash: str = ""
    data: bytes | None = None


def build_class_id(symbol: str, issuer: AccAddress) -> str:
    return symbol.lower() + _CLASS_ID_SEPARATOR + str(issuer)


def deconstruct_class_id(class_id: str) -> AccAddress:
    """Return the issuer address encoded in a class id."""
    parts = class_id.split(_CLASS_ID_SEPARATOR)
    if len(parts) != 2:
        raise InvalidInputError("classID must match format [symbol]-[issuer-address]")
    try:
        return AccAddress.from_bech32(parts[1])
    except ValueError as exc:
        raise InvalidInputError(f"invalid issuer address in classID,err:{exc}") from exc


def validate_class_symbol(symbol: str) -> None:
    if not _SYMBOL_RE.fullmatch(symbol):
        raise InvalidInputError(f"symbol must match regex format '{_SYMBOL_PATTERN}'")


def validate_token_id(token_id: str) -> None:
    if not _ID_RE.fullmatch(token_id):
        raise InvalidIDError(f"id must match regex format '{_ID_PATTERN}'")


def _byte_length(text: str) -> int:
    return len(text.encode())


def _validate_uri_and_data(uri: str, uri_hash: str, data: bytes | None) -> None:
    if _byte_length(uri) > NFT_MAX_URI_LENGTH:
        raise InvalidInputError(
            f"invalid URI {_byte_length(uri)}, the length must be less than or equal "
            f"{NFT_MAX_URI_LENGTH}"
        )
    if _byte_length(uri_hash) > NFT_MAX_URI_HASH_LENGTH:
        raise InvalidInputError(
            f"invalid URI hash {_byte_length(uri_hash)}, the length must be less than or equal "
            f"{NFT_MAX_URI_HASH_LENGTH}"
        )
    if data is not None and len(data) > NFT_MAX_DATA_SIZE:
        raise InvalidInputError(f"invalid data, it's allowed to use {NFT_MAX_DATA_SIZE} bytes")


@dataclass(frozen=True)
class MsgIssueClass:
    """Message issuing a non-fungible token class."""

    issuer: str
    symbol: str
    name: str = ""
    description: str = ""
    uri: str = ""
    uri_hash: str = ""
    data: bytes | None = None

    def validate_basic(self) -> None:
        try:
            AccAddress.from_bech32(self.issuer)
        except ValueError as exc:
            raise InvalidAddressError(f"invalid issuer account {self.issuer}") from exc
        if _byte_length(self.name) > NFT_CLASS_MAX_NAME_LENGTH:
            raise InvalidInputError(
                f"invalid name {self.name!r}, the length must be less than or equal "
                f"{NFT_CLASS_MAX_NAME_LENGTH}"
            )
        validate_class_symbol(self.symbol)
        if _byte_length(self.description) > NFT_CLASS_MAX_DESCRIPTION_LENGTH:
            raise InvalidInputError(
                f"invalid description {self.description!r}, the length must be less than "
                f"or equal {NFT_CLASS_MAX_DESCRIPTION_LENGTH}"
            )
        _validate_uri_and_data(self.uri, self.uri_hash, self.data)

    def get_signers(self) -> list[AccAddress]:
        return [AccAddress.from_bech32(self.issuer)]


@dataclass(frozen=True)
class MsgMint:
    """Message minting a non-fungible token."""

    sender: str
    class_id: str
    id: str
    uri: str = ""
    uri_hash: str = ""
    data: bytes | None = None

    def validate_basic(self) -> None:
        try:
            AccAddress.from_bech32(self.sender)
        except ValueError as exc:
            raise InvalidAddressError(f"invalid sender account {self.sender}") from exc
        try:
            validate_token_id(self.id)
        except InvalidIDError as exc:
            raise InvalidInputError(str(exc)) from exc
        try:
            deconstruct_class_id(self.class_id)
        except InvalidInputError as exc:
            raise InvalidInputError(str(exc)) from exc
        _validate_uri_and_data(self.uri, self.uri_hash, self.data)

    def get_signers(self) -> list[AccAddress]:
        return [AccAddress.from_bech32(self.sender)]