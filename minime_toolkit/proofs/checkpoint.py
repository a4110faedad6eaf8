"""MiniMe checkpoint value codec"""

from fractions import Fraction
from typing import Tuple

from minime_toolkit.proofs.types import MinimeCheckpoint
from minime_toolkit.shared.constants import MinimeConstants


def decode_checkpoint(value: bytes) -> MinimeCheckpoint:
    """
    Split a MiniMe storage value into balance and checkpoint block.

    The value may come with its leading zero bytes trimmed, so it is
    left-padded to 32 bytes first. Bytes [0:16] hold the balance and
    bytes [16:32] the block number, both big-endian.
    """
    padded = bytes(value).rjust(MinimeConstants.VALUE_SIZE, b"\x00")
    size = MinimeConstants.FIELD_SIZE
    return MinimeCheckpoint(
        balance=int.from_bytes(padded[:size], byteorder="big"),
        block=int.from_bytes(padded[size:], byteorder="big"),
    )


def parse_minime_value(
    value: bytes, decimals: int = 0
) -> Tuple[Fraction, int, int]:
    """
    Decode a MiniMe storage value.

    Args:
        value: Raw storage value, at most 32 bytes
        decimals: Token decimals used for the scaled balance (0 = none)

    Returns:
        Tuple[Fraction, int, int]: scaled balance, raw balance, block number
    """
    checkpoint = decode_checkpoint(value)
    return (
        checkpoint.scaled_balance(decimals),
        checkpoint.balance,
        checkpoint.block,
    )


def encode_minime_value(balance: int, block: int) -> bytes:
    """Pack balance and block into the 32-byte MiniMe storage layout"""
    for name, field_value in (("balance", balance), ("block", block)):
        if not 0 <= field_value < MinimeConstants.FIELD_MAX:
            raise ValueError(
                f"{name} out of range for a 128-bit field: {field_value}"
            )
    size = MinimeConstants.FIELD_SIZE
    return balance.to_bytes(size, byteorder="big") + block.to_bytes(
        size, byteorder="big"
    )
