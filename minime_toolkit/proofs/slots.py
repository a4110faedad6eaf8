"""Storage slot derivation for MiniMe balance checkpoints"""

from typing import Union

from eth_abi import encode
from eth_utils import is_address, keccak, to_canonical_address

from minime_toolkit.shared.constants import MinimeConstants
from minime_toolkit.shared.exceptions import MalformedInputError

Address = Union[str, bytes]


def to_holder_bytes(holder: Address) -> bytes:
    """
    Normalize a holder address (hex string or raw bytes) to 20 bytes.

    Raises:
        MalformedInputError: If holder is not a valid address.
    """
    if isinstance(holder, (bytes, bytearray)):
        if len(holder) != MinimeConstants.ADDRESS_SIZE:
            raise MalformedInputError(
                f"holder length is wrong. Expected {MinimeConstants.ADDRESS_SIZE}, got {len(holder)}"
            )
        return bytes(holder)
    if not isinstance(holder, str) or not is_address(holder):
        raise MalformedInputError(f"Invalid holder address: {holder!r}")
    return to_canonical_address(holder)


def get_map_slot(holder: Address, map_index_slot: int) -> bytes:
    """
    Calculate the storage slot of a mapping entry keyed by holder.

    Args:
        holder: The token holder address.
        map_index_slot: Declaration slot of the mapping in the contract.

    Returns:
        bytes: keccak256(abi.encode(holder, map_index_slot))
    """
    return keccak(
        encode(["address", "uint256"], [to_holder_bytes(holder), map_index_slot])
    )


def hash_from_position(slot: bytes) -> bytes:
    """Data location of a dynamic array whose length is stored at slot"""
    return keccak(slot)


def get_minime_base_slot(holder: Address, map_index_slot: int) -> int:
    """
    Calculate the first checkpoint slot for a holder.

    MiniMe stores `mapping(address => Checkpoint[]) balances`; the holder's
    array starts at keccak256(mapSlot) and checkpoint i lives at base + i.

    Returns:
        int: The base slot as an unsigned integer.
    """
    map_slot = get_map_slot(holder, map_index_slot)
    return int.from_bytes(hash_from_position(map_slot), byteorder="big")


def get_checkpoint_key(holder: Address, map_index_slot: int, index: int) -> bytes:
    """32-byte storage key of the index-th checkpoint of holder"""
    if index < 0:
        raise ValueError(f"checkpoint index must be >= 0, got {index}")
    slot = get_minime_base_slot(holder, map_index_slot) + index
    return slot.to_bytes(MinimeConstants.KEY_SIZE, byteorder="big")
