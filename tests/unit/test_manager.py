"""
Unit tests for the MinimeProofs facade (Result-returning API).
"""

from unittest.mock import MagicMock

import pytest

from minime_toolkit.proofs.checkpoint import encode_minime_value
from minime_toolkit.proofs.manager import MinimeProofs
from minime_toolkit.proofs.types import MinimeCheckpoint, StorageProof
from minime_toolkit.shared.exceptions import (
    BalanceMismatchError,
    CryptographicInvalidityError,
    MalformedInputError,
)
from minime_toolkit.shared.results import ErrorSeverity


def _hex(raw: bytes) -> str:
    return "0x" + raw.hex()


@pytest.fixture
def proofs_service(map_index_slot, accepting_verifier):
    return MinimeProofs(map_index_slot, verify_proof=accepting_verifier)


class TestVerify:
    def test_success_returns_checkpoint(
        self, proofs_service, sample_holder, sample_root, make_proofs
    ):
        result = proofs_service.verify(
            sample_holder, sample_root, make_proofs((1000, 100), (5, 200)), 1000, 150
        )
        assert result.success is True
        assert result.data == MinimeCheckpoint(balance=1000, block=100)
        assert result.errors == []

    def test_rejection_is_a_failed_result(
        self, proofs_service, sample_holder, sample_root, make_proofs
    ):
        result = proofs_service.verify(
            sample_holder, sample_root, make_proofs((1000, 100)), 999, 150
        )
        assert result.success is False
        assert result.data is None

        error = result.errors[0]
        assert error.source == "minime_proof"
        assert error.severity == ErrorSeverity.ERROR
        assert error.context["kind"] == "balance_mismatch"
        assert error.context["holder"] == sample_holder
        assert error.context["target_balance"] == 999
        assert isinstance(error.exception, BalanceMismatchError)

    def test_cryptographic_failure_records_proof_index(
        self, map_index_slot, sample_holder, sample_root, make_proofs
    ):
        service = MinimeProofs(
            map_index_slot, verify_proof=MagicMock(side_effect=[True, False])
        )
        result = service.verify(
            sample_holder, sample_root, make_proofs((1000, 100)), 1000, 150
        )
        assert result.errors[0].context["kind"] == "cryptographic_invalidity"
        assert result.errors[0].context["proof_index"] == 1

    def test_malformed_proofs_keep_original_error(
        self, proofs_service, sample_holder, sample_root
    ):
        result = proofs_service.verify(sample_holder, sample_root, [], 1000, 150)
        assert result.success is False
        assert isinstance(result.errors[0].exception, MalformedInputError)

    @pytest.mark.parametrize("root", [12345, None, object()])
    def test_unsized_storage_root_is_a_failed_result(
        self, proofs_service, sample_holder, make_proofs, root
    ):
        result = proofs_service.verify(
            sample_holder, root, make_proofs((1000, 100)), 1000, 150
        )
        assert result.success is False
        assert result.errors[0].context["kind"] == "malformed_input"

    def test_latest_checkpoint_adds_warning(
        self, proofs_service, sample_holder, sample_root, make_proofs
    ):
        result = proofs_service.verify(
            sample_holder, sample_root, make_proofs((1000, 100)), 1000, 150
        )
        assert result.success is True
        assert result.has_warnings() is True
        assert result.errors[0].severity == ErrorSeverity.WARNING
        assert "latest" in result.errors[0].message

    def test_checkpoint_pair_has_no_warning(
        self, proofs_service, sample_holder, sample_root, make_proofs
    ):
        result = proofs_service.verify(
            sample_holder,
            sample_root,
            make_proofs((1000, 100), (400, 200)),
            1000,
            150,
        )
        assert result.success is True
        assert result.errors == []

    def test_bytes_holder_formatted_in_context(
        self, proofs_service, sample_root, make_proofs
    ):
        holder = b"\x11" * 20
        result = proofs_service.verify(
            holder, sample_root, make_proofs((1000, 100)), 1000, 150
        )
        assert result.errors[0].context["holder"] == "0x" + "11" * 20

    def test_negative_map_index_slot_rejected(self):
        with pytest.raises(ValueError):
            MinimeProofs(-1)


class TestVerifyRpcProof:
    @pytest.fixture
    def rpc_proof(self, checkpoint_key, storage_trie, trie_proof):
        """eth_getProof-shaped result backed by a real storage trie."""
        key0, key1 = checkpoint_key(2), checkpoint_key(3)
        value0 = encode_minime_value(1000, 100)
        trie = storage_trie({key0: value0})
        p0 = trie_proof(trie, key0, value0)
        p1 = trie_proof(trie, key1, b"")
        return {
            "storageHash": _hex(trie.root_hash),
            "storageProof": [
                {
                    "key": _hex(key0.lstrip(b"\x00")),
                    "value": _hex(value0.lstrip(b"\x00")),
                    "proof": [_hex(node) for node in p0.proof],
                },
                {
                    "key": _hex(key1),
                    "value": "0x0",
                    "proof": [_hex(node) for node in p1.proof],
                },
            ],
        }

    def test_valid_rpc_proof(self, map_index_slot, sample_holder, rpc_proof):
        result = MinimeProofs(map_index_slot).verify_rpc_proof(
            sample_holder, rpc_proof, 1000, 12345
        )
        assert result.success is True
        assert result.data.block == 100

    def test_storage_root_override(self, map_index_slot, sample_holder, rpc_proof):
        result = MinimeProofs(map_index_slot).verify_rpc_proof(
            sample_holder, rpc_proof, 1000, 150, storage_root=b"\x01" * 32
        )
        assert result.success is False
        assert isinstance(result.errors[0].exception, CryptographicInvalidityError)
        assert result.errors[0].context["proof_index"] == 0

    def test_missing_fields(self, map_index_slot, sample_holder):
        result = MinimeProofs(map_index_slot).verify_rpc_proof(
            sample_holder, {"storageProof": []}, 1000, 150
        )
        assert result.success is False
        assert result.errors[0].context["kind"] == "malformed_input"


class TestStorageProofFromRpc:
    def test_zero_value_becomes_non_existence(self):
        proof = StorageProof.from_rpc({"key": "0x1", "value": "0x0", "proof": []})
        assert proof.key == b"\x00" * 31 + b"\x01"
        assert proof.value == b""
        assert proof.is_non_existence

    def test_oversized_key_rejected(self):
        with pytest.raises(MalformedInputError, match="key length"):
            StorageProof.from_rpc(
                {"key": "0x" + "01" * 33, "value": "0x1", "proof": []}
            )

    def test_missing_proof_field_rejected(self):
        with pytest.raises(MalformedInputError):
            StorageProof.from_rpc({"key": "0x1", "value": "0x1"})
