"""All constants for the project"""

import os

from dotenv import load_dotenv

from minime_toolkit.shared.exceptions import ConfigurationException

load_dotenv()


class MinimeConstants:
    """Global class constants for MiniMe storage layout and proof checks"""

    # Maximum number of checkpoints tolerated per holder. A proof key whose
    # offset from the holder's array base reaches this bound is rejected.
    MAX_CHECKPOINTS = 2**16

    # Exactly two proofs: checkpoint at-or-before target, next checkpoint
    PROOF_COUNT = 2

    ADDRESS_SIZE = 20
    KEY_SIZE = 32
    VALUE_SIZE = 32
    ROOT_SIZE = 32

    # Packed checkpoint: [balance:16][block:16]
    FIELD_SIZE = 16
    FIELD_MAX = 2 ** (FIELD_SIZE * 8)

    @staticmethod
    def get_default_decimals() -> int:
        """Decimals used to scale displayed balances (MINIME_DECIMALS)"""
        raw = os.getenv("MINIME_DECIMALS", "0")
        if not raw.strip().isdigit():
            raise ConfigurationException(
                f"MINIME_DECIMALS must be a non-negative integer, got {raw!r}"
            )
        return int(raw)
