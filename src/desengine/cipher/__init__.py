"""
DES and Triple-DES engines plus the block-iteration driver.
"""

__all__ = [
    "BlockCipherEngine",
    "BlockProcessor",
    "DES3Engine",
    "DESEngine",
    "new_engine",
]

from ._engine_base import BlockCipherEngine
from ._processor import BlockProcessor
from .DES import DESEngine
from .DES3 import DES3Engine

_ENGINES: dict[str, type[BlockCipherEngine]] = {
    "des": DESEngine,
    "des3": DES3Engine,
    "3des": DES3Engine,
    "tripledes": DES3Engine,
}


def new_engine(name: str) -> BlockCipherEngine:
    """Create a fresh, uninitialised engine by algorithm name.

    Args:
        name: ``"des"``, or one of ``"3des"``, ``"des3"``, ``"tripledes"``.
            Matching is case-insensitive.

    Raises:
        ValueError: If the name is unknown.
    """
    try:
        cls = _ENGINES[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown cipher algorithm: {name!r}") from None
    return cls()
