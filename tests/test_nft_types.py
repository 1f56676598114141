from dataclasses import replace

import pytest

from coreum.bech32 import AccAddress, Bech32Error
from coreum.errors import InvalidAddressError, InvalidIDError, InvalidInputError
from coreum.nft_types import (
    MsgIssueClass,
    MsgMint,
    build_class_id,
    deconstruct_class_id,
    validate_class_symbol,
    validate_token_id,
)

ISSUER = "devcore172rc5sz2uclpsy3vvx3y79ah5dk450z5ruq2r5"
DATA = b"metadata"

VALID_ISSUE = MsgIssueClass(
    issuer=ISSUER,
    name="name",
    symbol="Symbol",
    description="description",
    uri="https://my.invalid",
    uri_hash="sha-hash",
    data=DATA,
)

VALID_MINT = MsgMint(
    sender=ISSUER,
    id="my-id",
    class_id="symbol-" + ISSUER,
    uri="https://my.invalid",
    uri_hash="content-hash",
    data=DATA,
)


def test_issue_class_valid_message():
    VALID_ISSUE.validate_basic()
    signers = VALID_ISSUE.get_signers()
    assert [str(signer) for signer in signers] == [ISSUER]


@pytest.mark.parametrize(
    "changes, expected",
    [
        ({"issuer": "devcore172rc5sz2uc"}, InvalidAddressError),
        ({"name": "x" * 129}, InvalidInputError),
        ({"symbol": ""}, InvalidInputError),
        ({"symbol": "#x#"}, InvalidInputError),
        ({"description": "\x00" * 257}, InvalidInputError),
        ({"uri": "\x00" * 257}, InvalidInputError),
        ({"uri_hash": "x" * 129}, InvalidInputError),
        ({"data": bytes(5001)}, InvalidInputError),
    ],
    ids=[
        "invalid issuer",
        "invalid name",
        "invalid empty symbol",
        "invalid char symbol",
        "invalid description",
        "invalid uri",
        "invalid uri hash",
        "invalid data",
    ],
)
def test_issue_class_invalid_messages(changes, expected):
    with pytest.raises(expected) as info:
        replace(VALID_ISSUE, **changes).validate_basic()
    assert info.value.is_of(expected)


def test_mint_valid_message():
    VALID_MINT.validate_basic()
    assert [str(signer) for signer in VALID_MINT.get_signers()] == [ISSUER]


@pytest.mark.parametrize(
    "changes, expected",
    [
        ({"id": "id?"}, InvalidInputError),
        ({"sender": "devcore172rc5sz2uc"}, InvalidAddressError),
        ({"class_id": "x"}, InvalidInputError),
        ({"uri": "\x00" * 257}, InvalidInputError),
        ({"uri_hash": "x" * 129}, InvalidInputError),
        ({"data": bytes(5001)}, InvalidInputError),
    ],
    ids=[
        "invalid id",
        "invalid sender",
        "invalid classID",
        "invalid uri",
        "invalid uri hash",
        "invalid data",
    ],
)
def test_mint_invalid_messages(changes, expected):
    with pytest.raises(expected) as info:
        replace(VALID_MINT, **changes).validate_basic()
    assert info.value.is_of(expected)


def test_signers_of_bad_address_raise():
    good = replace(VALID_MINT, sender=ISSUER)
    assert [str(signer) for signer in good.get_signers()] == [ISSUER]
    with pytest.raises(Bech32Error):
        replace(VALID_MINT, sender="devcore172rc5sz2uc").get_signers()


def test_build_and_deconstruct_class_id():
    issuer = AccAddress.from_bech32(ISSUER)
    class_id = build_class_id("Symbol", issuer)
    assert class_id == "symbol-" + ISSUER
    assert deconstruct_class_id(class_id) == issuer


@pytest.mark.parametrize("class_id", ["x", "a-b-c", "abc-devcore172rc5sz2uc"])
def test_deconstruct_invalid_class_id(class_id):
    with pytest.raises(InvalidInputError):
        deconstruct_class_id(class_id)


@pytest.mark.parametrize("symbol", ["a", "Symbol", "abc123", "a" * 41])
def test_valid_symbols(symbol):
    validate_class_symbol(symbol)
    assert build_class_id(symbol, AccAddress.from_bech32(ISSUER)).startswith(symbol.lower() + "-")


@pytest.mark.parametrize("symbol", ["", "1abc", "a-b", "a" * 42, "abc\n"])
def test_invalid_symbols(symbol):
    with pytest.raises(InvalidInputError, match="symbol must match"):
        validate_class_symbol(symbol)


@pytest.mark.parametrize("token_id", ["", "ab", "1abc", "id?", "a" * 102, "abc\n"])
def test_invalid_token_ids(token_id):
    with pytest.raises(InvalidIDError, match="id must match"):
        validate_token_id(token_id)


@pytest.mark.parametrize("token_id", ["abc", "my-id", "nft-1", "a/b:c"])
def test_valid_token_ids_mint(token_id):
    message = replace(VALID_MINT, id=token_id)
    message.validate_basic()
    assert message.id == token_id