"""
Exception hierarchy for the MiniMe toolkit.

Exception Categories:
- ConfigurationException: Startup/config errors that prevent operation
- VerificationError: A MiniMe balance proof was rejected. Always terminal
  for the verification call, never retried here.

VerificationError kinds:
- MalformedInputError -> wrong proof count, bad key/value sizes, missing params
- KeyMismatchError -> proof keys are not the holder's checkpoint slots
- BalanceMismatchError -> checkpoint balance differs from the claimed balance
- BlockRangeError -> target block outside the checkpoint interval
- CryptographicInvalidityError -> a proof does not authenticate against the root
"""

from typing import Optional


class MinimeToolkitException(Exception):
    """Base class for all toolkit exceptions."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationException(MinimeToolkitException):
    """
    Exception for configuration/startup errors.

    Use when:
    - Environment variables hold invalid values
    - Required CLI inputs cannot be loaded
    """

    pass


class VerificationError(MinimeToolkitException):
    """Base class for rejected MiniMe proofs."""

    kind = "verification"


class MalformedInputError(VerificationError):
    """Proof set or query parameters are structurally invalid."""

    kind = "malformed_input"


class KeyMismatchError(VerificationError):
    """Proof keys do not belong to the holder's checkpoint array."""

    kind = "key_mismatch"


class KeysNotConsecutiveError(KeyMismatchError):
    pass


class KeyOffsetOverflowError(KeyMismatchError):
    pass


class BalanceMismatchError(VerificationError):
    """Checkpoint balance differs from the claimed balance."""

    kind = "balance_mismatch"

    def __init__(self, message: str, proof_balance: int, target_balance: int):
        super().__init__(message)
        self.proof_balance = proof_balance
        self.target_balance = target_balance


class BlockRangeError(VerificationError):
    """Target block is not covered by the checkpoint interval."""

    kind = "block_range"


class CryptographicInvalidityError(VerificationError):
    """
    A storage proof does not authenticate against the storage root.

    proof_index identifies which of the two proofs failed, when known.
    """

    kind = "cryptographic_invalidity"

    def __init__(self, message: str, proof_index: Optional[int] = None):
        super().__init__(message)
        self.proof_index = proof_index


class TrieProofError(CryptographicInvalidityError):
    """
    Raised by the trie walker when a proof is structurally broken
    (missing node, undecodable RLP, hash mismatch).
    """

    pass
