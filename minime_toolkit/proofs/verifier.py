"""MiniMe balance proof verifier"""

from typing import Optional, Sequence

from minime_toolkit.proofs.checkpoint import decode_checkpoint
from minime_toolkit.proofs.keys import check_minime_keys
from minime_toolkit.proofs.slots import Address, to_holder_bytes
from minime_toolkit.proofs.trie import verify_storage_proof
from minime_toolkit.proofs.types import (
    MinimeCheckpoint,
    StorageProof,
    StorageTrieVerifier,
)
from minime_toolkit.shared.constants import MinimeConstants
from minime_toolkit.shared.exceptions import (
    BalanceMismatchError,
    BlockRangeError,
    CryptographicInvalidityError,
    KeyMismatchError,
    MalformedInputError,
)
from minime_toolkit.shared.logging import get_logger

_logger = get_logger(__name__)


def _check_inputs(
    holder: Address,
    storage_root: bytes,
    proofs: Sequence[StorageProof],
    map_index_slot: int,
    target_balance: Optional[int],
    target_block: Optional[int],
) -> None:
    to_holder_bytes(holder)

    if not isinstance(map_index_slot, int) or map_index_slot < 0:
        raise MalformedInputError(
            f"map index slot must be a non-negative integer, got {map_index_slot!r}"
        )

    if (
        not isinstance(storage_root, (bytes, bytearray))
        or len(storage_root) != MinimeConstants.ROOT_SIZE
    ):
        raise MalformedInputError(
            f"storage root must be {MinimeConstants.ROOT_SIZE} bytes, got {storage_root!r}"
        )

    if (
        not isinstance(proofs, (list, tuple))
        or len(proofs) != MinimeConstants.PROOF_COUNT
    ):
        raise MalformedInputError("wrong length of storage proofs")

    for i, p in enumerate(proofs):
        if not isinstance(p, StorageProof):
            raise MalformedInputError(f"proof {i} is not a StorageProof")
        # proofs[1].value can be empty when it's a non-existence proof
        if i == 0 and not p.value:
            raise MalformedInputError("proof 0 value is empty")
        if p.value is not None and len(p.value) > MinimeConstants.VALUE_SIZE:
            raise MalformedInputError(
                f"value length is wrong. Expected <= {MinimeConstants.VALUE_SIZE}, got {len(p.value)}"
            )
        if p.key is None or len(p.key) != MinimeConstants.KEY_SIZE:
            got = None if p.key is None else len(p.key)
            raise MalformedInputError(
                f"key length is wrong. Expected {MinimeConstants.KEY_SIZE}, got {got}"
            )

    for name, param in (
        ("target balance", target_balance),
        ("target block", target_block),
    ):
        if param is None:
            raise MalformedInputError(f"{name} is nil")
        if not isinstance(param, int) or isinstance(param, bool) or param < 0:
            raise MalformedInputError(
                f"{name} must be a non-negative integer, got {param!r}"
            )


def verify_minime_proof(
    holder: Address,
    storage_root: bytes,
    proofs: Sequence[StorageProof],
    map_index_slot: int,
    target_balance: int,
    target_block: int,
    verify_proof: StorageTrieVerifier = verify_storage_proof,
) -> MinimeCheckpoint:
    """
    Verify a MiniMe balance for holder at target_block.

    proofs[0] must be the checkpoint at or before target_block and
    proofs[1] the next checkpoint, or a non-existence proof when proofs[0]
    is the latest one. The checkpoints are checked to fulfill
    `proof0Block <= targetBlock < proof1Block`.

    Args:
        holder: Token holder address
        storage_root: Storage trie root of the token contract
        proofs: The two storage proofs, ordered
        map_index_slot: Slot of the balances mapping in the contract
        target_balance: Claimed balance in full units (no decimals)
        target_block: Block the balance is claimed for
        verify_proof: Storage trie verifier used to authenticate each proof

    Returns:
        MinimeCheckpoint: The checkpoint backing the claimed balance

    Raises:
        MalformedInputError: Bad proof count, sizes or query parameters
        KeyMismatchError: Proof keys are not the holder's checkpoint slots
        BalanceMismatchError: Checkpoint balance differs from target_balance
        BlockRangeError: target_block outside the checkpoint interval
        CryptographicInvalidityError: A proof fails against storage_root
    """
    _check_inputs(
        holder, storage_root, proofs, map_index_slot, target_balance, target_block
    )
    proof0, proof1 = proofs

    try:
        index = check_minime_keys(proof0.key, proof1.key, holder, map_index_slot)
    except KeyMismatchError as e:
        raise type(e)(f"proof key and holder do not match: ({e.message})") from e

    checkpoint0 = decode_checkpoint(proof0.value)
    if checkpoint0.balance != target_balance:
        raise BalanceMismatchError(
            f"proof balance and provided balance mismatch ({checkpoint0.balance} != {target_balance})",
            proof_balance=checkpoint0.balance,
            target_balance=target_balance,
        )

    if not checkpoint0.block <= target_block:
        raise BlockRangeError(
            f"proof 0 block {checkpoint0.block} is greater than target block {target_block}"
        )

    # An empty proof 1 value means proof 0 is the latest checkpoint
    if proof1.value:
        checkpoint1 = decode_checkpoint(proof1.value)
        if not checkpoint0.block < checkpoint1.block:
            raise BlockRangeError("proof 0 block is not behind proof 1 block")
        if not target_block < checkpoint1.block:
            raise BlockRangeError(
                f"target block {target_block} is not smaller than proof 1 block {checkpoint1.block}"
            )
    else:
        _logger.debug("Proof 1 is a non-existence proof, no upper block bound")

    for i, p in enumerate(proofs):
        try:
            valid = verify_proof(
                bytes(storage_root), bytes(p.key), bytes(p.value or b""), p.proof
            )
        except CryptographicInvalidityError as e:
            raise CryptographicInvalidityError(
                f"proof {i} is not valid: {e.message}", proof_index=i
            ) from e
        except Exception as e:
            raise CryptographicInvalidityError(
                f"proof {i} could not be verified: {e}", proof_index=i
            ) from e
        if not valid:
            raise CryptographicInvalidityError(
                f"proof {i} is not valid", proof_index=i
            )

    _logger.info(
        f"Verified balance {target_balance} at block {target_block} "
        f"(checkpoint {index}, block {checkpoint0.block})"
    )
    return checkpoint0
