from __future__ import annotations

import logging
import threading

from .b64 import encode_base64, parse_base64
from .bitbuffer import BitBuffer
from .cipher import BlockCipherEngine, BlockProcessor, new_engine
from .config.schema import CodecConfig
from .errors import MalformedCiphertextError

logger = logging.getLogger(__name__)


class Codec:
    """Text-level front end binding one engine to one key.

    The raw-text forms (:meth:`encode` / :meth:`decode`) carry ciphertext as
    one character per byte (Latin-1), since ciphertext is rarely valid UTF-8.
    The Base64 forms are what should travel between systems.

    Every call initialises the engine, processes the data and resets the
    engine again while holding the codec's lock, so a codec may be shared
    between threads. The engine itself must not be used elsewhere meanwhile.
    """

    def __init__(
        self,
        engine: BlockCipherEngine,
        key: str,
        *,
        strict_padding: bool = True,
    ) -> None:
        """
        Args:
            engine: Block cipher engine, e.g. :class:`DESEngine`.
            key: Key text. Its UTF-8 bytes are used directly as the key and
                must match the engine's key size.
            strict_padding: Whether to validate every padding byte on decode.
        """
        self.engine = engine
        self.key = key
        self._processor = BlockProcessor(engine, strict_padding=strict_padding)
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: CodecConfig) -> Codec:
        """Build a codec from a :class:`CodecConfig`."""
        return cls(
            new_engine(config.algorithm),
            config.key,
            strict_padding=config.strict_padding,
        )

    def encode(self, text: str) -> str:
        """Encrypt ``text`` and return the ciphertext bytes as Latin-1 text."""
        result = self._run(True, BitBuffer.from_bytes(text.encode("utf-8")))
        return result.to_bytes().decode("latin-1")

    def decode(self, text: str) -> str:
        """Decrypt Latin-1 ciphertext text produced by :meth:`encode`.

        Raises:
            MalformedCiphertextError: If ``text`` holds a character above
                U+00FF, which no ciphertext byte maps to.
            PaddingError: If the decrypted padding is invalid.
        """
        try:
            raw = text.encode("latin-1")
        except UnicodeEncodeError as e:
            raise MalformedCiphertextError(
                f"Character {text[e.start]!r} at position {e.start} "
                "is not a ciphertext byte"
            ) from None
        result = self._run(False, BitBuffer.from_bytes(raw))
        return result.to_bytes().decode("utf-8")

    def encode_base64(self, text: str) -> str:
        """Encrypt ``text`` and return the ciphertext as Base64."""
        return encode_base64(self.encode(text).encode("latin-1"))

    def decode_base64(self, text: str) -> str:
        """Decrypt Base64 ciphertext.

        Raises:
            MalformedBase64Error: If ``text`` is not valid Base64.
            PaddingError: If the decrypted padding is invalid, which usually
                means a wrong key or corrupted ciphertext.
        """
        result = self._run(False, parse_base64(text))
        return result.to_bytes().decode("utf-8")

    def _run(self, for_encryption: bool, data: BitBuffer) -> BitBuffer:
        logger.debug(
            "Codec %s with %s, %d input bytes",
            "encoding" if for_encryption else "decoding",
            self.engine.algorithm_name,
            len(data),
        )
        with self._lock:
            self.engine.init(for_encryption, self.key.encode("utf-8"))
            try:
                return self._processor.process(data)
            finally:
                self.engine.reset()
