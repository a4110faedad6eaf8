"""
Type definitions for MiniMe storage proofs.
"""

from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any, Dict, List, Protocol

from hexbytes import HexBytes

from minime_toolkit.shared.constants import MinimeConstants
from minime_toolkit.shared.exceptions import MalformedInputError

# =============================================================================
# PROOF TYPES
# =============================================================================


@dataclass
class StorageProof:
    """One EIP-1186 storage proof entry."""

    key: bytes  # Storage slot, 32 bytes
    value: bytes  # Slot content, 0..32 bytes (empty = non-existence)
    proof: List[bytes] = field(default_factory=list)  # RLP encoded trie nodes

    @classmethod
    def from_rpc(cls, entry: Dict[str, Any]) -> "StorageProof":
        """
        Build a StorageProof from an eth_getProof storageProof entry.

        The key is left-padded to 32 bytes and the value is reduced to its
        minimal big-endian form, so a zero value becomes a non-existence
        proof.
        """
        try:
            key = HexBytes(entry["key"])
            value = HexBytes(entry["value"])
            nodes = [HexBytes(node) for node in entry["proof"]]
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedInputError(
                f"Invalid storage proof entry: {e}"
            ) from e

        if len(key) > MinimeConstants.KEY_SIZE:
            raise MalformedInputError(
                f"key length is wrong. Expected <= {MinimeConstants.KEY_SIZE}, got {len(key)}"
            )

        return cls(
            key=bytes(key).rjust(MinimeConstants.KEY_SIZE, b"\x00"),
            value=bytes(value).lstrip(b"\x00"),
            proof=[bytes(node) for node in nodes],
        )

    @property
    def is_non_existence(self) -> bool:
        return len(self.value) == 0


@dataclass(frozen=True)
class MinimeCheckpoint:
    """A decoded MiniMe checkpoint: balance as of (and after) block."""

    balance: int  # Full units, no decimals
    block: int  # Block number the checkpoint was recorded at

    def scaled_balance(self, decimals: int) -> Fraction:
        """Balance divided by 10**decimals"""
        if decimals < 0:
            raise ValueError(f"decimals must be >= 0, got {decimals}")
        return Fraction(self.balance, 10**decimals)


# =============================================================================
# COLLABORATORS
# =============================================================================


class StorageTrieVerifier(Protocol):
    """
    Authenticates a storage slot value against a storage root.

    Returns True when the proof path derives value under root, False when
    it derives something else. May raise when the path itself is broken.
    """

    def __call__(
        self, root: bytes, key: bytes, value: bytes, proof: List[bytes]
    ) -> bool: ...
