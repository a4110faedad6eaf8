"""
Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests.
"""

from typing import Callable, Dict
from unittest.mock import MagicMock

import pytest
import rlp
from eth_utils import keccak
from trie import HexaryTrie

from minime_toolkit.proofs.checkpoint import encode_minime_value
from minime_toolkit.proofs.slots import get_checkpoint_key
from minime_toolkit.proofs.types import StorageProof


@pytest.fixture
def sample_holder() -> str:
    """Sample token holder address for tests."""
    return "0x52f541764E6e90eeBc5c21Ff570De0e2D63766B6"


@pytest.fixture
def other_holder() -> str:
    """A second holder whose checkpoints live elsewhere in storage."""
    return "0x7E1444BA99dcdFfE8fBdb42C02fb0DA4AAAcE4d5"


@pytest.fixture
def map_index_slot() -> int:
    """Slot of the balances mapping used across tests."""
    return 3


@pytest.fixture
def sample_root() -> bytes:
    """Arbitrary storage root for tests using a fake trie verifier."""
    return b"\xab" * 32


@pytest.fixture
def checkpoint_key(sample_holder, map_index_slot) -> Callable[[int], bytes]:
    """Storage key of the holder's i-th checkpoint."""

    def _key(index: int) -> bytes:
        return get_checkpoint_key(sample_holder, map_index_slot, index)

    return _key


@pytest.fixture
def accepting_verifier() -> MagicMock:
    """Trie verifier that accepts every proof."""
    return MagicMock(return_value=True)


@pytest.fixture
def make_proofs(checkpoint_key) -> Callable[..., list]:
    """
    Build [proof0, proof1] for checkpoints index and index + 1.

    next_checkpoint=None produces an empty proof 1 value (non-existence).
    """

    def _make(checkpoint, next_checkpoint=None, index: int = 0) -> list:
        value1 = (
            encode_minime_value(*next_checkpoint)
            if next_checkpoint is not None
            else b""
        )
        return [
            StorageProof(
                key=checkpoint_key(index),
                value=encode_minime_value(*checkpoint),
                proof=[b"\x01"],
            ),
            StorageProof(
                key=checkpoint_key(index + 1),
                value=value1,
                proof=[b"\x02"],
            ),
        ]

    return _make


@pytest.fixture
def storage_trie() -> Callable[[Dict[bytes, bytes]], HexaryTrie]:
    """Build an in-memory storage trie from {slot key: value}."""

    def _build(slots: Dict[bytes, bytes]) -> HexaryTrie:
        trie = HexaryTrie(db={})
        for key, value in slots.items():
            trie[keccak(key)] = rlp.encode(value.lstrip(b"\x00"))
        return trie

    return _build


@pytest.fixture
def trie_proof() -> Callable[[HexaryTrie, bytes, bytes], StorageProof]:
    """Storage proof for key from a trie, claiming value."""

    def _proof(trie: HexaryTrie, key: bytes, value: bytes) -> StorageProof:
        nodes = [rlp.encode(node) for node in trie.get_proof(keccak(key))]
        return StorageProof(key=key, value=value, proof=nodes)

    return _proof


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )
