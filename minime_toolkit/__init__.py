"""MiniMe Proof Toolkit - verify MiniMe token balances with storage proofs."""

__version__ = "0.1.0"

from .proofs import MinimeProofs, StorageProof, verify_minime_proof

__all__ = ["MinimeProofs", "StorageProof", "verify_minime_proof"]
