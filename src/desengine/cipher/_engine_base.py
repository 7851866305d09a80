from __future__ import annotations

import abc
import logging
from typing import Self

from desengine.errors import KeyLengthError, UninitializedEngineError

logger = logging.getLogger(__name__)


class BlockCipherEngine(abc.ABC):
    """Base class for word-oriented block cipher engines.

    An engine is a mutable, single-user object: :meth:`init` derives the key
    schedule for one direction, :meth:`process_block` transforms blocks in
    place, and :meth:`reset` discards everything derived from the key so the
    instance can be reused with another key or direction.
    """

    #: Short algorithm identifier.
    algorithm_name: str = ""
    #: Block size in 32-bit words.
    block_size: int = 2
    #: Accepted key length in bytes.
    key_size: int = 8

    def __init__(self) -> None:
        self.for_encryption = False
        self.key: bytes | None = None

    @property
    def is_initialized(self) -> bool:
        return self.key is not None

    def init(self, for_encryption: bool, key: bytes | bytearray) -> Self:
        """Bind a key and direction to the engine.

        Args:
            for_encryption: ``True`` to encrypt, ``False`` to decrypt.
            key: Raw key bytes of length :attr:`key_size`.

        Returns:
            The engine itself, ready for :meth:`process_block`.

        Raises:
            KeyLengthError: If the key has the wrong length.
        """
        if len(key) != self.key_size:
            raise KeyLengthError(
                f"{self.algorithm_name} requires a {self.key_size}-byte key, "
                f"got {len(key)} bytes"
            )
        self.key = bytes(key)
        self.for_encryption = for_encryption
        self._setup(self.key)
        logger.debug(
            "%s engine initialised for %s",
            self.algorithm_name,
            "encryption" if for_encryption else "decryption",
        )
        return self

    def process_block(self, words: list[int], offset: int) -> int:
        """Transform the block starting at ``words[offset]`` in place.

        Args:
            words: Packed 32-bit words.
            offset: Index of the first word of the block.

        Returns:
            The number of words consumed.

        Raises:
            UninitializedEngineError: If :meth:`init` has not been called.
        """
        if not self.is_initialized:
            raise UninitializedEngineError(
                f"{self.algorithm_name} engine used before init()"
            )
        self._crypt_block(words, offset)
        return self.block_size

    def reset(self) -> None:
        """Forget the key, the direction and all derived state."""
        was_initialized = self.is_initialized
        self.for_encryption = False
        self.key = None
        self._teardown()
        if was_initialized:
            logger.debug("%s engine reset", self.algorithm_name)

    @abc.abstractmethod
    def _setup(self, key: bytes) -> None:
        """Derive the key-dependent state for the current direction."""
        ...

    @abc.abstractmethod
    def _crypt_block(self, words: list[int], offset: int) -> None:
        """Transform one block in place."""
        ...

    @abc.abstractmethod
    def _teardown(self) -> None:
        """Drop the key-dependent state."""
        ...
