#!/usr/bin/env python3
"""Tests for hex block number decoding."""

import pytest

from src.validator_health.errors import InvalidFormatError
from src.validator_health.utils.hex_decoder import decode_block_number


class TestDecodeBlockNumber:
    """Tests for decode_block_number."""

    @pytest.mark.parametrize("value,expected", [
        ("0x0", 0),
        ("0x3039", 12345),
        ("3039", 12345),
        ("0xABCdef", 0xABCDEF),
        ("0x0000ff", 255),
    ])
    def test_valid_values(self, value, expected):
        """Test that valid hex strings decode to their base-16 value."""
        assert decode_block_number(value) == expected

    def test_values_beyond_64_bits(self):
        """Test that magnitude is not bounded by fixed-width integers."""
        value = "0x" + "f" * 40
        assert decode_block_number(value) == 16 ** 40 - 1

    @pytest.mark.parametrize("value", [
        "",
        "0x",
        "0xg1",
        "12 34",
        "-0x10",
        "0X10",
        "0x0x10",
        "0x10\n",
        "０x10",
    ])
    def test_invalid_values(self, value):
        """Test that anything outside ^(0x)?[0-9a-fA-F]+$ is rejected."""
        with pytest.raises(InvalidFormatError, match="Invalid hex value"):
            decode_block_number(value)

    @pytest.mark.parametrize("value", [None, 12345, ["0x1"]])
    def test_non_string_values(self, value):
        """Test that non-string input is rejected rather than coerced."""
        with pytest.raises(InvalidFormatError):
            decode_block_number(value)

    def test_invalid_format_is_value_error(self):
        """Test that callers catching ValueError also see format errors."""
        with pytest.raises(ValueError):
            decode_block_number("xyz")
