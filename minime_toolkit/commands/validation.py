from eth_utils import is_address, is_hex, to_checksum_address
from hexbytes import HexBytes


def validate_eth_address(address: str, param_name: str = "address") -> str:
    """Validate and return checksum ethereum address"""
    if not address or not isinstance(address, str):
        raise ValueError(
            f"Invalid {param_name}: address must be a non-empty string"
        )
    if not is_address(address):
        raise ValueError(
            f"Invalid {param_name}: {address} is not a valid Ethereum address"
        )
    return to_checksum_address(address)


def validate_hex_bytes(
    value: str, param_name: str, max_size: int = 32, exact: bool = False
) -> bytes:
    """Validate a 0x-prefixed hex string and return its bytes"""
    if not value or not isinstance(value, str) or not is_hex(value):
        raise ValueError(f"Invalid {param_name}: {value!r} is not hex")
    raw = bytes(HexBytes(value))
    if exact and len(raw) != max_size:
        raise ValueError(
            f"Invalid {param_name}: expected {max_size} bytes, got {len(raw)}"
        )
    if len(raw) > max_size:
        raise ValueError(
            f"Invalid {param_name}: expected at most {max_size} bytes, got {len(raw)}"
        )
    return raw


def validate_non_negative(value: int, param_name: str) -> int:
    """Validate a non-negative integer parameter"""
    if value < 0:
        raise ValueError(f"Invalid {param_name}: must be >= 0, got {value}")
    return value
