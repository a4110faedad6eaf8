"""Checks that proof keys are the holder's consecutive checkpoint slots"""

from minime_toolkit.proofs.slots import Address, get_minime_base_slot
from minime_toolkit.shared.constants import MinimeConstants
from minime_toolkit.shared.exceptions import (
    KeyOffsetOverflowError,
    KeysNotConsecutiveError,
)
from minime_toolkit.shared.logging import get_logger

_logger = get_logger(__name__)


def check_minime_keys(
    key0: bytes,
    key1: bytes,
    holder: Address,
    map_index_slot: int,
    max_checkpoints: int = MinimeConstants.MAX_CHECKPOINTS,
) -> int:
    """
    Check that two proof keys belong to a holder's checkpoint array.

    Each MiniMe checkpoint adds +1 to the storage key, so key1 must follow
    key0 and key0 must sit less than max_checkpoints slots past the
    holder's array base.

    Args:
        key0: Key of the checkpoint at or before the target block
        key1: Key of the following checkpoint
        holder: The token holder address
        map_index_slot: Slot of the balances mapping
        max_checkpoints: Tolerated number of checkpoints per holder

    Returns:
        int: The checkpoint index of key0 within the holder's array.

    Raises:
        KeysNotConsecutiveError: If key1 != key0 + 1
        KeyOffsetOverflowError: If key0 is outside [base, base + max_checkpoints)
    """
    base = get_minime_base_slot(holder, map_index_slot)
    key0_index = int.from_bytes(key0, byteorder="big")
    key1_index = int.from_bytes(key1, byteorder="big")

    if key0_index + 1 != key1_index:
        raise KeysNotConsecutiveError("keys are not consecutive")

    offset = key0_index - base
    if offset < 0 or offset >= max_checkpoints:
        raise KeyOffsetOverflowError("key offset overflow")

    _logger.debug(f"Proof keys match checkpoint index {offset}")
    return offset
