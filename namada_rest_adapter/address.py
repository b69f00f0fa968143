"""Namada address parsing.

Namada addresses are bech32m strings (BIP-350) carrying a 21 byte payload:
one discriminant byte followed by a 20 byte hash. The ``bech32`` package only
ships the original bech32 checksum, so the bech32m constant is applied on top
of its polymod primitives here.
"""

import bech32

from .errors import InvalidAddressError

BECH32M_CONST = 0x2BC830A3
ADDRESS_PAYLOAD_LEN = 21
MAX_ADDRESS_LEN = 90


def parse_address(text: str, hrp: str) -> str:
    """
    Validate a Namada address and return its canonical (lowercase) form.

    Args:
        text: Address as received from the client
        hrp: Expected human-readable part (e.g. "tnam")

    Raises:
        InvalidAddressError: If the string is not a bech32m address with the
            expected prefix and payload length
    """
    if not text or len(text) > MAX_ADDRESS_LEN:
        raise InvalidAddressError(f"Invalid address length: {len(text or '')}")
    if text.lower() != text and text.upper() != text:
        raise InvalidAddressError("Address must not mix upper and lower case")

    lowered = text.lower()
    sep = lowered.rfind("1")
    if sep < 1 or sep + 7 > len(lowered):
        raise InvalidAddressError(f"Malformed address: {text}")

    prefix = lowered[:sep]
    if prefix != hrp:
        raise InvalidAddressError(
            f"Unexpected address prefix '{prefix}', expected '{hrp}'"
        )

    try:
        data = [bech32.CHARSET.index(char) for char in lowered[sep + 1:]]
    except ValueError:
        raise InvalidAddressError(f"Invalid character in address: {text}") from None

    if bech32.bech32_polymod(bech32.bech32_hrp_expand(prefix) + data) != BECH32M_CONST:
        raise InvalidAddressError(f"Invalid address checksum: {text}")

    payload = bech32.convertbits(data[:-6], 5, 8, False)
    if payload is None or len(payload) != ADDRESS_PAYLOAD_LEN:
        raise InvalidAddressError(f"Invalid address payload: {text}")

    return lowered


def encode_address(hrp: str, payload: bytes) -> str:
    """Encode a raw address payload as a bech32m string."""
    if len(payload) != ADDRESS_PAYLOAD_LEN:
        raise ValueError(f"Address payload must be {ADDRESS_PAYLOAD_LEN} bytes")

    data = bech32.convertbits(list(payload), 8, 5)
    polymod = bech32.bech32_polymod(bech32.bech32_hrp_expand(hrp) + data + [0] * 6) ^ BECH32M_CONST
    checksum = [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]
    return hrp + "1" + "".join(bech32.CHARSET[d] for d in data + checksum)
