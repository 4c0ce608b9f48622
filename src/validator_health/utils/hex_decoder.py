"""Decoding of hexadecimal block numbers returned by the node."""

import re

from ..errors import InvalidFormatError

HEX_DIGITS_PATTERN: re.Pattern[str] = re.compile(r"[0-9a-fA-F]+")


def decode_block_number(value: str) -> int:
    """
    Convert a hex block number such as ``0x3039`` into an integer.

    Args:
        value: Hex string, with or without a ``0x`` prefix

    Returns:
        The decoded, non-negative block number

    Raises:
        InvalidFormatError: If the value is not a string of hex digits
    """
    if not isinstance(value, str):
        raise InvalidFormatError(f"Invalid hex value: {value!r}")

    digits = value.removeprefix("0x")
    if not HEX_DIGITS_PATTERN.fullmatch(digits):
        raise InvalidFormatError(f"Invalid hex value: {digits}")

    return int(digits, 16)
