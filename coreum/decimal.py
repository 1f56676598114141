"""Fixed-point decimals with 18 fractional digits and decimal coins."""

from __future__ import annotations

import re
from dataclasses import dataclass

from coreum.errors import InvalidCoinsError

PRECISION = 18
_SCALE = 10**PRECISION
_DEC_RE = re.compile(r"(-?)(\d*)(?:\.(\d+))?")
_DENOM_RE = re.compile(r"[a-zA-Z][a-zA-Z0-9/:._-]{2,127}")


def _trunc_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return -quotient if (numerator < 0) != (denominator < 0) else quotient


def _chop_and_round(value: int) -> int:
    """Remove the precision factor, rounding half to even."""
    if value < 0:
        return -_chop_and_round(-value)
    quotient, remainder = divmod(value, _SCALE)
    half = _SCALE // 2
    if remainder < half:
        return quotient
    if remainder > half:
        return quotient + 1
    return quotient + (quotient & 1)


@dataclass(frozen=True, order=True)
class Dec:
    """Signed decimal; ``raw`` is the value scaled by 10**18."""

    raw: int

    @classmethod
    def from_int(cls, value: int) -> Dec:
        return cls(int(value) * _SCALE)

    @classmethod
    def from_str(cls, text: str) -> Dec:
        match = _DEC_RE.fullmatch(text)
        if match is None or not (match[2] or match[3]):
            raise ValueError(f"invalid decimal string: {text!r}")
        fraction = match[3] or ""
        if len(fraction) > PRECISION:
            raise ValueError(f"value {text!r} has too much precision, maximum {PRECISION}")
        raw = int((match[2] or "0") + fraction.ljust(PRECISION, "0"))
        return cls(-raw if match[1] else raw)

    def __add__(self, other: Dec) -> Dec:
        if not isinstance(other, Dec):
            return NotImplemented
        return Dec(self.raw + other.raw)

    def __sub__(self, other: Dec) -> Dec:
        if not isinstance(other, Dec):
            return NotImplemented
        return Dec(self.raw - other.raw)

    def __mul__(self, other: Dec) -> Dec:
        if not isinstance(other, Dec):
            return NotImplemented
        return Dec(_chop_and_round(self.raw * other.raw))

    def __neg__(self) -> Dec:
        return Dec(-self.raw)

    def __abs__(self) -> Dec:
        return Dec(abs(self.raw))

    def quo(self, other: Dec) -> Dec:
        """Divide, rounding half to even at the last digit."""
        if other.raw == 0:
            raise ZeroDivisionError("division by zero")
        quotient = _trunc_div(self.raw * _SCALE * _SCALE, other.raw)
        return Dec(_chop_and_round(quotient))

    def power(self, exponent: int) -> Dec:
        if exponent < 0:
            raise ValueError("exponent must not be negative")
        if exponent == 0:
            return Dec.from_int(1)
        base = self
        accumulator = Dec.from_int(1)
        remaining = exponent
        while remaining > 1:
            if remaining % 2:
                accumulator = accumulator * base
            remaining //= 2
            base = base * base
        return base * accumulator

    def truncate_int(self) -> int:
        return _trunc_div(self.raw, _SCALE)

    def is_positive(self) -> bool:
        return self.raw > 0

    def is_negative(self) -> bool:
        return self.raw < 0

    def __str__(self) -> str:
        sign = "-" if self.raw < 0 else ""
        whole, fraction = divmod(abs(self.raw), _SCALE)
        return f"{sign}{whole}.{fraction:0{PRECISION}d}"


@dataclass(frozen=True)
class DecCoin:
    """An amount of a denomination expressed as a decimal."""

    denom: str
    amount: Dec

    def validate(self) -> None:
        if not _DENOM_RE.fullmatch(self.denom):
            raise InvalidCoinsError(f"invalid denom: {self.denom}")
        if self.amount.is_negative():
            raise InvalidCoinsError(f"negative decimal coin amount: {self.amount}")

    def is_lt(self, other: DecCoin) -> bool:
        if self.denom != other.denom:
            raise ValueError(f"invalid coin denominations; {self.denom}, {other.denom}")
        return self.amount < other.amount

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"