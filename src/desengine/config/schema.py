"""
Defines structured configuration models using dataclasses.
"""

from dataclasses import dataclass


@dataclass
class CodecConfig:
    """Configuration for building a :class:`~desengine.codec.Codec`.

    Attributes:
        algorithm: Engine name, ``"des"`` or ``"3des"``.
        key: Key text; its UTF-8 bytes are the cipher key.
        strict_padding: Whether to validate every PKCS#7 padding byte.
    """

    algorithm: str = "des"
    key: str = ""
    strict_padding: bool = True
