#!/usr/bin/env python3
"""
Unified CLI for the MiniMe Proof Toolkit.

Examples:
  - Verify a balance from an eth_getProof response holding two checkpoints
    minime verify --proof-file proof.json --holder 0x... --map-index-slot 8 --balance 1000 --block 18500000

  - Decode a raw checkpoint storage value
    minime decode --value 0x... [--decimals 18]

  - Storage key of a holder checkpoint (to request proofs)
    minime slot --holder 0x... --map-index-slot 8 [--index 0]
"""

import argparse
import json
from typing import List, Optional

from minime_toolkit.commands.helpers import handle_command_error
from minime_toolkit.commands.validation import (
    validate_eth_address,
    validate_hex_bytes,
    validate_non_negative,
)
from minime_toolkit.proofs import MinimeProofs
from minime_toolkit.proofs.checkpoint import parse_minime_value
from minime_toolkit.proofs.slots import get_checkpoint_key, get_minime_base_slot
from minime_toolkit.proofs.types import MinimeCheckpoint
from minime_toolkit.shared.constants import MinimeConstants
from minime_toolkit.shared.exceptions import VerificationError
from minime_toolkit.shared.results import ErrorSeverity
from minime_toolkit.utils.formatters import (
    console,
    create_checkpoint_table,
    format_address,
    format_balance,
    load_json,
)


def _decimals(args: argparse.Namespace) -> int:
    if args.decimals is None:
        return MinimeConstants.get_default_decimals()
    return validate_non_negative(args.decimals, "decimals")


def cmd_verify(args: argparse.Namespace) -> None:
    holder = validate_eth_address(args.holder, "holder")
    map_index_slot = validate_non_negative(args.map_index_slot, "map_index_slot")
    balance = validate_non_negative(args.balance, "balance")
    block = validate_non_negative(args.block, "block")
    storage_root = (
        validate_hex_bytes(args.storage_root, "storage_root", exact=True)
        if args.storage_root
        else None
    )

    rpc_proof = load_json(args.proof_file)
    # Accept a full JSON-RPC response as well as its result
    if "result" in rpc_proof and "storageProof" not in rpc_proof:
        rpc_proof = rpc_proof["result"]

    vm = MinimeProofs(map_index_slot)
    result = vm.verify_rpc_proof(
        holder, rpc_proof, balance, block, storage_root=storage_root
    )

    if args.json:
        out = {
            "holder": holder,
            "balance": str(balance),
            "block": block,
            "valid": result.success,
            "errors": [
                e.to_dict()
                for e in result.errors
                if e.severity == ErrorSeverity.ERROR
            ],
            "warnings": [
                e.message
                for e in result.errors
                if e.severity == ErrorSeverity.WARNING
            ],
        }
        console.print_json(json.dumps(out))
    elif result.success:
        console.print(
            f"[green]Valid:[/green] {format_address(holder)} held {balance} at block {block}"
        )
        console.print(
            create_checkpoint_table(result.data, _decimals(args), "Backing checkpoint")
        )
        if result.has_warnings():
            for warning in result.errors:
                console.print(f"[yellow]Note:[/yellow] {warning.message}")

    if not result.success:
        raise result.errors[0].exception or VerificationError(
            result.errors[0].message
        )


def cmd_decode(args: argparse.Namespace) -> None:
    value = validate_hex_bytes(args.value, "value", MinimeConstants.VALUE_SIZE)
    decimals = _decimals(args)
    scaled, balance, block = parse_minime_value(value, decimals)

    if args.json:
        out = {
            "balance": str(balance),
            "scaled_balance": format_balance(scaled),
            "block": block,
        }
        console.print_json(json.dumps(out))
        return

    checkpoint = MinimeCheckpoint(balance=balance, block=block)
    console.print(create_checkpoint_table(checkpoint, decimals))


def cmd_slot(args: argparse.Namespace) -> None:
    holder = validate_eth_address(args.holder, "holder")
    map_index_slot = validate_non_negative(args.map_index_slot, "map_index_slot")

    base = get_minime_base_slot(holder, map_index_slot)
    index = validate_non_negative(args.index, "index")
    key = get_checkpoint_key(holder, map_index_slot, index)
    next_key = get_checkpoint_key(holder, map_index_slot, index + 1)

    out = {
        "holder": holder,
        "map_index_slot": map_index_slot,
        "base_slot": hex(base),
        "index": args.index,
        "key": "0x" + key.hex(),
        "next_key": "0x" + next_key.hex(),
    }
    if args.json:
        console.print_json(json.dumps(out))
        return

    console.print(f"[cyan]Base slot:[/cyan] {out['base_slot']}")
    console.print(f"[cyan]Checkpoint {args.index} key:[/cyan] {out['key']}")
    console.print(f"[cyan]Checkpoint {args.index + 1} key:[/cyan] {out['next_key']}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minime", description="MiniMe Proof Toolkit CLI"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # verify
    p_v = sub.add_parser(
        "verify", help="Verify a holder balance at a block from storage proofs"
    )
    p_v.add_argument(
        "--proof-file",
        type=str,
        required=True,
        help="eth_getProof JSON output with two checkpoint storage proofs",
    )
    p_v.add_argument("--holder", type=str, required=True)
    p_v.add_argument("--map-index-slot", type=int, required=True)
    p_v.add_argument(
        "--balance", type=int, required=True, help="Balance in full units"
    )
    p_v.add_argument("--block", type=int, required=True)
    p_v.add_argument(
        "--storage-root",
        type=str,
        help="Override the storageHash of the proof file",
    )
    p_v.add_argument("--decimals", type=int, help="Decimals for display")
    p_v.add_argument("--json", action="store_true", help="Output JSON")
    p_v.set_defaults(func=cmd_verify)

    # decode
    p_d = sub.add_parser("decode", help="Decode a checkpoint storage value")
    p_d.add_argument("--value", type=str, required=True)
    p_d.add_argument("--decimals", type=int, help="Token decimals")
    p_d.add_argument("--json", action="store_true", help="Output JSON")
    p_d.set_defaults(func=cmd_decode)

    # slot
    p_s = sub.add_parser(
        "slot", help="Compute checkpoint storage keys for a holder"
    )
    p_s.add_argument("--holder", type=str, required=True)
    p_s.add_argument("--map-index-slot", type=int, required=True)
    p_s.add_argument(
        "--index",
        type=int,
        default=0,
        help="Checkpoint index (default: 0)",
    )
    p_s.add_argument("--json", action="store_true", help="Output JSON")
    p_s.set_defaults(func=cmd_slot)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except Exception as e:
        handle_command_error(e)


if __name__ == "__main__":
    main()
