"""
Merkle Patricia storage proof verification.

A storage proof is the list of RLP encoded trie nodes on the path from the
storage root to keccak256(slot). The leaf holds rlp(value) with leading
zero bytes stripped; a path that ends without a matching leaf proves the
slot was never written.
"""

from typing import List, Sequence

import rlp
from eth_utils import keccak
from rlp.exceptions import DecodingError
from trie import HexaryTrie
from trie.exceptions import BadTrieProof, ValidationError

from minime_toolkit.shared.exceptions import TrieProofError


def _decode_nodes(proof: Sequence[bytes]) -> List:
    try:
        return [rlp.decode(bytes(node)) for node in proof]
    except DecodingError as e:
        raise TrieProofError(f"Undecodable proof node: {e}") from e


def get_storage_value(root: bytes, key: bytes, proof: Sequence[bytes]) -> bytes:
    """
    Walk a storage proof and return the raw leaf content for key.

    Returns:
        bytes: rlp(value) stored at key, or b"" when the proof shows the
        key is absent under root.

    Raises:
        TrieProofError: If the proof is missing nodes, holds a node of
        invalid shape, or cannot be decoded.
    """
    nodes = _decode_nodes(proof)
    try:
        return HexaryTrie.get_from_proof(bytes(root), keccak(bytes(key)), nodes)
    except BadTrieProof as e:
        raise TrieProofError(f"Bad trie proof: {e}") from e
    except ValidationError as e:
        raise TrieProofError(f"Invalid trie node: {e}") from e


def verify_storage_proof(
    root: bytes, key: bytes, value: bytes, proof: Sequence[bytes]
) -> bool:
    """
    Check that proof authenticates value at storage slot key under root.

    Only an empty value is checked as a proof of non-existence. Storage
    never holds zero, so a non-empty value of zero bytes cannot match.
    """
    stored = get_storage_value(root, key, proof)
    if len(value) == 0:
        return stored == b""
    expected = bytes(value).lstrip(b"\x00")
    if not expected:
        return False
    return stored == rlp.encode(expected)
