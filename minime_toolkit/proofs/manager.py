from typing import Any, Dict, Optional, Sequence

from hexbytes import HexBytes

from minime_toolkit.proofs.slots import Address
from minime_toolkit.proofs.trie import verify_storage_proof
from minime_toolkit.proofs.types import (
    MinimeCheckpoint,
    StorageProof,
    StorageTrieVerifier,
)
from minime_toolkit.proofs.verifier import verify_minime_proof
from minime_toolkit.shared.exceptions import (
    CryptographicInvalidityError,
    MalformedInputError,
    VerificationError,
)
from minime_toolkit.shared.logging import get_logger
from minime_toolkit.shared.results import (
    ErrorSeverity,
    ProcessingError,
    Result,
)

_logger = get_logger(__name__)


def _format_holder(holder: Address) -> str:
    if isinstance(holder, (bytes, bytearray)):
        return "0x" + bytes(holder).hex()
    return str(holder)


class MinimeProofs:
    """Verifies MiniMe token balances for one token layout"""

    def __init__(
        self,
        map_index_slot: int,
        verify_proof: StorageTrieVerifier = verify_storage_proof,
    ):
        if map_index_slot < 0:
            raise ValueError(
                f"map_index_slot must be >= 0, got {map_index_slot}"
            )
        self.map_index_slot = map_index_slot
        self.verify_proof = verify_proof

    def verify(
        self,
        holder: Address,
        storage_root: bytes,
        proofs: Sequence[StorageProof],
        target_balance: int,
        target_block: int,
    ) -> Result[MinimeCheckpoint]:
        """
        Verify a holder balance at a block against two checkpoint proofs.

        Args:
            holder: The token holder address
            storage_root: Storage root of the token contract
            proofs: [checkpoint at or before target_block, next checkpoint]
            target_balance: Claimed balance in full units
            target_block: The block number

        Returns:
            Result[MinimeCheckpoint]: Success with the backing checkpoint,
            or failure describing why the proof was rejected
        """
        context = {
            "holder": _format_holder(holder),
            "map_index_slot": self.map_index_slot,
            "target_balance": target_balance,
            "target_block": target_block,
        }

        try:
            checkpoint = verify_minime_proof(
                holder,
                storage_root,
                proofs,
                self.map_index_slot,
                target_balance,
                target_block,
                verify_proof=self.verify_proof,
            )
            result = Result.ok(checkpoint)
            if not proofs[1].value:
                result.add_warning(
                    source="minime_proof",
                    message=f"checkpoint at block {checkpoint.block} is the latest",
                    context=context,
                )
            return result
        except VerificationError as e:
            context["kind"] = e.kind
            if isinstance(e, CryptographicInvalidityError):
                context["proof_index"] = e.proof_index
            _logger.warning(f"MiniMe proof rejected: {e.message}")
            return Result.fail(
                ProcessingError(
                    source="minime_proof",
                    message=e.message,
                    severity=ErrorSeverity.ERROR,
                    context=context,
                    exception=e,
                )
            )

    def verify_rpc_proof(
        self,
        holder: Address,
        rpc_proof: Dict[str, Any],
        target_balance: int,
        target_block: int,
        storage_root: Optional[bytes] = None,
    ) -> Result[MinimeCheckpoint]:
        """
        Verify from a raw eth_getProof result.

        The storageHash of the result is used as root unless storage_root
        is given.
        """
        try:
            if storage_root is None:
                storage_root = HexBytes(rpc_proof["storageHash"])
            proofs = [
                StorageProof.from_rpc(entry)
                for entry in rpc_proof["storageProof"]
            ]
        except MalformedInputError as e:
            return self._malformed(e, holder)
        except (KeyError, TypeError, ValueError) as e:
            return self._malformed(
                MalformedInputError(f"Invalid eth_getProof result: {e}"),
                holder,
            )

        return self.verify(
            holder, storage_root, proofs, target_balance, target_block
        )

    def _malformed(
        self, error: MalformedInputError, holder: Address
    ) -> Result[MinimeCheckpoint]:
        return Result.fail_with_message(
            source="minime_proof",
            message=error.message,
            context={"holder": _format_holder(holder), "kind": error.kind},
            exception=error,
        )
