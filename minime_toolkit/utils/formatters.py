"""Shared formatting and file utilities for commands."""

import json
from fractions import Fraction
from pathlib import Path
from typing import Any, Dict

from rich.console import Console
from rich.table import Table

from minime_toolkit.proofs.types import MinimeCheckpoint
from minime_toolkit.shared.exceptions import ConfigurationException

# Shared console instance
console = Console()


def load_json(file_path: str) -> Dict[str, Any]:
    """
    Load and parse a JSON file.

    Raises:
        ConfigurationException: If the file is missing or not valid JSON
    """
    path = Path(file_path)
    if not path.is_file():
        raise ConfigurationException(f"File not found: {file_path}")
    try:
        with open(path, "r") as file:
            return json.load(file)
    except json.JSONDecodeError as e:
        raise ConfigurationException(
            f"Invalid JSON in {file_path}: {e}"
        ) from e


def format_address(address: str, length: int = 10) -> str:
    """
    Format an Ethereum address to show first and last characters.

    Args:
        address: Ethereum address
        length: Total visible characters (default: 10)

    Returns:
        Formatted address like "0x1234...5678"
    """
    if not address:
        return "N/A"
    if len(address) <= length:
        return address
    return f"{address[:6]}...{address[-4:]}"


def format_balance(balance: Fraction, precision: int = 6) -> str:
    """Render a scaled balance, exact when it is a whole number"""
    if balance.denominator == 1:
        return str(balance.numerator)
    return f"{float(balance):.{precision}f}".rstrip("0").rstrip(".")


def create_checkpoint_table(
    checkpoint: MinimeCheckpoint, decimals: int, title: str = "Checkpoint"
) -> Table:
    """Create a two-column table describing a checkpoint"""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Balance (raw)", str(checkpoint.balance))
    if decimals:
        table.add_row(
            f"Balance (/1e{decimals})",
            format_balance(checkpoint.scaled_balance(decimals)),
        )
    table.add_row("Block", str(checkpoint.block))
    return table
