from minime_toolkit.proofs.checkpoint import (
    encode_minime_value,
    parse_minime_value,
)
from minime_toolkit.proofs.keys import check_minime_keys
from minime_toolkit.proofs.manager import MinimeProofs
from minime_toolkit.proofs.slots import get_checkpoint_key, get_minime_base_slot
from minime_toolkit.proofs.trie import verify_storage_proof
from minime_toolkit.proofs.types import MinimeCheckpoint, StorageProof
from minime_toolkit.proofs.verifier import verify_minime_proof

__all__ = [
    "MinimeProofs",
    "MinimeCheckpoint",
    "StorageProof",
    "check_minime_keys",
    "encode_minime_value",
    "get_checkpoint_key",
    "get_minime_base_slot",
    "parse_minime_value",
    "verify_minime_proof",
    "verify_storage_proof",
]
