from __future__ import annotations

import logging

from desengine.bitbuffer import BitBuffer
from desengine.errors import DataLengthError, UninitializedEngineError
from desengine.padding import pad, unpad

from ._engine_base import BlockCipherEngine

logger = logging.getLogger(__name__)


class BlockProcessor:
    """Drive an engine over arbitrary-length data, one block at a time.

    Blocks are processed independently (ECB), so this provides no semantic
    security and exists for interoperability with legacy data. When padding
    is enabled, PKCS#7 padding is added before encryption and removed after
    decryption.
    """

    def __init__(
        self,
        engine: BlockCipherEngine,
        *,
        padding: bool = True,
        strict_padding: bool = True,
    ) -> None:
        """
        Args:
            engine: The block cipher engine. Its direction is read from
                :attr:`BlockCipherEngine.for_encryption` on every call.
            padding: Whether to apply and strip PKCS#7 padding.
            strict_padding: Whether to validate every padding byte when
                stripping. See :func:`desengine.padding.unpad`.
        """
        self.engine = engine
        self.padding = padding
        self.strict_padding = strict_padding

    @property
    def block_size_bytes(self) -> int:
        return self.engine.block_size * 4

    def process(self, data: BitBuffer) -> BitBuffer:
        """Encrypt or decrypt ``data`` according to the engine's direction.

        Args:
            data: Input buffer. It is not modified.

        Returns:
            A new buffer holding the result.

        Raises:
            UninitializedEngineError: If the engine has not been initialised.
            DataLengthError: If the input cannot be split into whole blocks.
            PaddingError: If padding removal fails after decryption.
        """
        engine = self.engine
        if not engine.is_initialized:
            raise UninitializedEngineError(
                f"{engine.algorithm_name} engine used before init()"
            )

        bs = self.block_size_bytes
        buffer = data.copy()
        encrypting = engine.for_encryption

        if encrypting and self.padding:
            pad(buffer, bs)
        if len(buffer) % bs != 0:
            raise DataLengthError("Data length not a multiple of block size")

        words = buffer.clamp().words
        for offset in range(0, len(words), engine.block_size):
            engine.process_block(words, offset)

        if not encrypting and self.padding:
            unpad(buffer, bs, strict=self.strict_padding)

        logger.debug(
            "%s %s %d bytes -> %d bytes",
            engine.algorithm_name,
            "encrypted" if encrypting else "decrypted",
            len(data),
            len(buffer),
        )
        return buffer
