"""Asset NFT keeper and message server."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from coreum.bech32 import AccAddress
from coreum.context import Context
from coreum.errors import CoreumError, InvalidIDError, InvalidInputError, UnauthorizedError
from coreum.nft_types import (
    STORE_KEY,
    IssueClassSettings,
    MintSettings,
    MsgIssueClass,
    MsgMint,
    build_class_id,
    deconstruct_class_id,
    validate_class_symbol,
    validate_token_id,
)


@dataclass(frozen=True)
class NFTClass:
    """A stored non-fungible token class."""

    id: str
    symbol: str = ""
    name: str = ""
    description: str = ""
    uri: str = ""
    uri_hash: str = ""
    data: bytes | None = None


@dataclass(frozen=True)
class NFT:
    """A stored non-fungible token."""

    class_id: str
    id: str
    uri: str = ""
    uri_hash: str = ""
    data: bytes | None = None


@dataclass(frozen=True)
class ClassIssuedEvent:
    """Emitted when a non-fungible token class is issued."""

    id: str
    issuer: str
    symbol: str
    name: str
    description: str
    uri: str
    uri_hash: str


def _validate_minting_allowed(sender: AccAddress, class_id: str) -> None:
    issuer = deconstruct_class_id(class_id)
    if str(issuer) != str(sender):
        raise UnauthorizedError(
            f'address "{sender}" is unauthorized to perform the mint operation'
        )


class AssetNFTKeeper:
    """Issues NFT classes and mints tokens on top of an NFT store."""

    def __init__(self, nft_keeper: Any, store_key: str = STORE_KEY) -> None:
        self.nft_keeper = nft_keeper
        self.store_key = store_key

    def issue_class(self, ctx: Context, settings: IssueClassSettings) -> str:
        """Issue a new class and return its id."""
        validate_class_symbol(settings.symbol)
        class_id = build_class_id(settings.symbol, settings.issuer)

        if self.nft_keeper.has_class(ctx, class_id):
            raise InvalidInputError(
                f'symbol "{settings.symbol}" already used for the address "{settings.issuer}"'
            )

        try:
            self.nft_keeper.save_class(
                ctx,
                NFTClass(
                    id=class_id,
                    symbol=settings.symbol,
                    name=settings.name,
                    description=settings.description,
                    uri=settings.uri,
                    uri_hash=settings.uri_hash,
                    data=settings.data,
                ),
            )
        except (CoreumError, ValueError) as exc:
            raise InvalidInputError(f"can't save non-fungible token: {exc}") from exc

        ctx.event_manager.emit(
            ClassIssuedEvent(
                id=class_id,
                issuer=str(settings.issuer),
                symbol=settings.symbol,
                name=settings.name,
                description=settings.description,
                uri=settings.uri,
                uri_hash=settings.uri_hash,
            )
        )
        return class_id

    def mint(self, ctx: Context, settings: MintSettings) -> None:
        """Mint a new token owned by the sender, who must be the class issuer."""
        try:
            validate_token_id(settings.id)
        except InvalidIDError as exc:
            raise InvalidInputError(str(exc)) from exc

        _validate_minting_allowed(settings.sender, settings.class_id)

        if not self.nft_keeper.has_class(ctx, settings.class_id):
            raise InvalidInputError(f'classID "{settings.class_id}" not found')
        if self.nft_keeper.has_nft(ctx, settings.class_id, settings.id):
            raise InvalidInputError(f'ID "{settings.id}" already defined for the class')

        try:
            self.nft_keeper.mint(
                ctx,
                NFT(
                    class_id=settings.class_id,
                    id=settings.id,
                    uri=settings.uri,
                    uri_hash=settings.uri_hash,
                    data=settings.data,
                ),
                settings.sender,
            )
        except (CoreumError, ValueError) as exc:
            raise InvalidInputError(f"can't save non-fungible token: {exc}") from exc


class NFTMsgServer:
    """Handles asset NFT transaction messages."""

    def __init__(self, keeper: Any) -> None:
        self.keeper = keeper

    def issue_class(self, ctx: Context, request: MsgIssueClass) -> None:
        try:
            issuer = AccAddress.from_bech32(request.issuer)
        except ValueError as exc:
            raise InvalidInputError("invalid issuer in MsgIssueClass") from exc
        self.keeper.issue_class(
            ctx,
            IssueClassSettings(
                issuer=issuer,
                name=request.name,
                symbol=request.symbol,
                description=request.description,
                uri=request.uri,
                uri_hash=request.uri_hash,
                data=request.data,
            ),
        )

    def mint(self, ctx: Context, request: MsgMint) -> None:
        try:
            owner = AccAddress.from_bech32(request.sender)
        except ValueError as exc:
            raise InvalidInputError("invalid sender") from exc
        self.keeper.mint(
            ctx,
            MintSettings(
                sender=owner,
                class_id=request.class_id,
                id=request.id,
                uri=request.uri,
                uri_hash=request.uri_hash,
                data=request.data,
            ),
        )