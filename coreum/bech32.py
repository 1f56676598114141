"""Bech32 encoding and bech32-encoded account addresses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

DEFAULT_PREFIX = "devcore"
MAX_ADDRESS_LENGTH = 255

_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_CHARSET_INDEX = {char: index for index, char in enumerate(_CHARSET)}
_GENERATOR = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)
_CHECKSUM_LENGTH = 6
_MAX_STRING_LENGTH = 1023


class Bech32Error(ValueError):
    """A string is not valid bech32 or not a valid address."""


def _polymod(values: Iterable[int]) -> int:
    checksum = 1
    for value in values:
        top = checksum >> 25
        checksum = (checksum & 0x1FFFFFF) << 5 ^ value
        for bit, generator in enumerate(_GENERATOR):
            if (top >> bit) & 1:
                checksum ^= generator
    return checksum


def _hrp_expand(hrp: str) -> list[int]:
    return [ord(char) >> 5 for char in hrp] + [0] + [ord(char) & 31 for char in hrp]


def _create_checksum(hrp: str, values: list[int]) -> list[int]:
    polymod = _polymod(_hrp_expand(hrp) + values + [0] * _CHECKSUM_LENGTH) ^ 1
    return [(polymod >> 5 * (5 - position)) & 31 for position in range(_CHECKSUM_LENGTH)]


def _convert_bits(data: Iterable[int], from_bits: int, to_bits: int, pad: bool) -> list[int]:
    accumulator = 0
    bits = 0
    result: list[int] = []
    max_value = (1 << to_bits) - 1
    max_accumulator = (1 << (from_bits + to_bits - 1)) - 1
    for value in data:
        if value < 0 or value >> from_bits:
            raise Bech32Error(f"invalid data range: {value}")
        accumulator = ((accumulator << from_bits) | value) & max_accumulator
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            result.append((accumulator >> bits) & max_value)
    if pad:
        if bits:
            result.append((accumulator << (to_bits - bits)) & max_value)
    elif bits >= from_bits or (accumulator << (to_bits - bits)) & max_value:
        raise Bech32Error("invalid padding when converting bits")
    return result


def bech32_encode(hrp: str, data: bytes) -> str:
    """Encode bytes under a human-readable part."""
    if not hrp:
        raise Bech32Error("human-readable part must not be empty")
    if hrp.lower() != hrp:
        raise Bech32Error("human-readable part must be lower case")
    values = _convert_bits(bytes(data), 8, 5, pad=True)
    checksum = _create_checksum(hrp, values)
    return hrp + "1" + "".join(_CHARSET[value] for value in values + checksum)


def bech32_decode(text: str) -> tuple[str, bytes]:
    """Decode a bech32 string into its human-readable part and payload bytes."""
    if len(text) > _MAX_STRING_LENGTH:
        raise Bech32Error(f"string too long: {len(text)} characters")
    if any(not 33 <= ord(char) <= 126 for char in text):
        raise Bech32Error("invalid character in string")
    if text.lower() != text and text.upper() != text:
        raise Bech32Error("string not all lowercase or all uppercase")
    text = text.lower()
    separator = text.rfind("1")
    if separator < 1 or separator + _CHECKSUM_LENGTH + 1 > len(text):
        raise Bech32Error("invalid separator index")
    hrp = text[:separator]
    try:
        values = [_CHARSET_INDEX[char] for char in text[separator + 1 :]]
    except KeyError as exc:
        raise Bech32Error(f"invalid character not part of charset: {exc.args[0]}") from exc
    if _polymod(_hrp_expand(hrp) + values) != 1:
        raise Bech32Error("invalid checksum")
    payload = _convert_bits(values[:-_CHECKSUM_LENGTH], 5, 8, pad=False)
    return hrp, bytes(payload)


@dataclass(frozen=True)
class AccAddress:
    """Account address: raw bytes shown in bech32 under a prefix."""

    data: bytes
    prefix: str = DEFAULT_PREFIX

    @classmethod
    def from_bech32(cls, text: str, prefix: str | None = None) -> AccAddress:
        """Parse an address, requiring the given (or default) prefix."""
        if not text.strip():
            raise Bech32Error("empty address string is not allowed")
        expected = DEFAULT_PREFIX if prefix is None else prefix
        hrp, data = bech32_decode(text)
        if hrp != expected:
            raise Bech32Error(f"invalid Bech32 prefix; expected {expected}, got {hrp}")
        if not data:
            raise Bech32Error("addresses cannot be empty")
        if len(data) > MAX_ADDRESS_LENGTH:
            raise Bech32Error(f"address max length is {MAX_ADDRESS_LENGTH}, got {len(data)}")
        return cls(data, expected)

    def __str__(self) -> str:
        return bech32_encode(self.prefix, self.data)