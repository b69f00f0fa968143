"""Borsh layouts of the Namada query responses used by the adapter."""

from decimal import Decimal
from typing import Sequence

from borsh_construct import CStruct, Option, String, U8, U64

# Namada token amounts and decimals are 256-bit integers stored as four
# little-endian u64 limbs.
Uint = U64[4]

Epoch = U64

ValidatorMetaData = CStruct(
    "email" / String,
    "description" / Option(String),
    "website" / Option(String),
    "discord_handle" / Option(String),
    "avatar" / Option(String),
)

CommissionPair = CStruct(
    "commission_rate" / Uint,
    "max_commission_change_per_epoch" / Uint,
)

MaybeValidatorMetaData = Option(ValidatorMetaData)
MaybeCommissionPair = Option(CommissionPair)
MaybeValidatorStateTag = Option(U8)
MaybeAmount = Option(Uint)

NATIVE_DECIMAL_PLACES = 6
DEC_DECIMAL_PLACES = 12


def uint_from_limbs(limbs: Sequence[int]) -> int:
    value = 0
    for i, limb in enumerate(limbs):
        value |= limb << (64 * i)
    return value


def int_from_limbs(limbs: Sequence[int]) -> int:
    """Interpret the limbs as a two's complement signed 256-bit integer."""
    value = uint_from_limbs(limbs)
    if value >= 1 << 255:
        value -= 1 << 256
    return value


def scaled_decimal(value: int, places: int) -> Decimal:
    """Build ``value * 10**-places`` exactly, independent of the decimal context."""
    sign = 1 if value < 0 else 0
    digits = tuple(int(d) for d in str(abs(value)))
    return Decimal((sign, digits, -places))


def strip_trailing_zeros(value: Decimal) -> Decimal:
    if value.is_zero():
        return Decimal(0)
    sign, digits, exponent = value.as_tuple()
    digits = list(digits)
    while exponent < 0 and digits[-1] == 0:
        digits.pop()
        exponent += 1
    return Decimal((sign, tuple(digits), exponent))


def native_amount(limbs: Sequence[int]) -> Decimal:
    """Token amount in native display units."""
    return scaled_decimal(uint_from_limbs(limbs), NATIVE_DECIMAL_PLACES)


def dec_value(limbs: Sequence[int]) -> Decimal:
    """Proof-of-stake fixed point decimal, without trailing zeros."""
    return strip_trailing_zeros(scaled_decimal(int_from_limbs(limbs), DEC_DECIMAL_PLACES))
