import os

import pytest

from coreum.bech32 import (
    DEFAULT_PREFIX,
    AccAddress,
    Bech32Error,
    bech32_decode,
    bech32_encode,
)

SOURCE_ADDRESS = "devcore172rc5sz2uclpsy3vvx3y79ah5dk450z5ruq2r5"
EXAMPLE_ADDRESS = "devcore1tr3w86yesnj8f290l6ve02cqhae8x4ze0nk0a8"


@pytest.mark.parametrize("text", [SOURCE_ADDRESS, EXAMPLE_ADDRESS])
def test_known_addresses_round_trip(text):
    address = AccAddress.from_bech32(text)
    assert str(address) == text
    assert address.prefix == "devcore"


def test_decode_known_address_gives_standard_length():
    hrp, data = bech32_decode(SOURCE_ADDRESS)
    assert hrp == "devcore"
    assert len(data) == 20


def test_empty_payload_worked_example():
    assert bech32_encode("a", b"") == "a12uel5l"
    assert bech32_decode("A12UEL5L") == ("a", b"")


@pytest.mark.parametrize("size", [1, 20, 32, 255])
def test_encode_decode_round_trip(size):
    data = os.urandom(size)
    text = bech32_encode(DEFAULT_PREFIX, data)
    assert text.startswith(DEFAULT_PREFIX + "1")
    assert bech32_decode(text) == (DEFAULT_PREFIX, data)
    assert AccAddress.from_bech32(text).data == data


def test_bad_checksum_rejected():
    broken = SOURCE_ADDRESS[:-1] + ("6" if SOURCE_ADDRESS[-1] != "6" else "7")
    with pytest.raises(Bech32Error):
        bech32_decode(broken)


def test_truncated_address_rejected():
    with pytest.raises(Bech32Error):
        AccAddress.from_bech32("devcore172rc5sz2uc")


def test_mixed_case_rejected():
    mixed = SOURCE_ADDRESS[:3].upper() + SOURCE_ADDRESS[3:]
    with pytest.raises(Bech32Error, match="lowercase"):
        bech32_decode(mixed)


def test_wrong_prefix_rejected():
    with pytest.raises(Bech32Error, match="prefix"):
        AccAddress.from_bech32(SOURCE_ADDRESS, prefix="core")


def test_custom_prefix_accepted():
    text = bech32_encode("core", os.urandom(20))
    address = AccAddress.from_bech32(text, prefix="core")
    assert str(address) == text


def test_empty_address_rejected():
    with pytest.raises(Bech32Error, match="empty"):
        AccAddress.from_bech32("   ")


def test_empty_payload_address_rejected():
    with pytest.raises(Bech32Error, match="cannot be empty"):
        AccAddress.from_bech32(bech32_encode(DEFAULT_PREFIX, b""))


def test_too_long_address_rejected():
    with pytest.raises(Bech32Error, match="max length"):
        AccAddress.from_bech32(bech32_encode(DEFAULT_PREFIX, bytes(256)))


def test_invalid_charset_character_rejected():
    with pytest.raises(Bech32Error):
        bech32_decode("devcore1bbbbbbbbbbbbbbbbb")


def test_uppercase_hrp_rejected_on_encode():
    with pytest.raises(Bech32Error):
        bech32_encode("DEV", b"\x01")