from __future__ import annotations

from .words import MASK32, shl32


class BitBuffer:
    """A byte sequence packed big-endian into 32-bit words.

    The logical length (``sig_bytes``) may stop partway through the last word;
    the bytes beyond it are not significant and are zeroed by :meth:`clamp`.

    Attributes:
        words: Packed words, each an unsigned 32-bit int.
        sig_bytes: Number of significant bytes.
    """

    __slots__ = ("words", "sig_bytes")

    def __init__(
        self,
        words: list[int] | None = None,
        sig_bytes: int | None = None,
    ) -> None:
        """
        Args:
            words: Initial words. The list is taken over, not copied.
            sig_bytes: Logical byte length. Defaults to ``4 * len(words)``.

        Raises:
            ValueError: If ``sig_bytes`` is negative or exceeds the capacity
                of ``words``.
        """
        self.words: list[int] = words if words is not None else []
        if sig_bytes is None:
            sig_bytes = len(self.words) * 4
        if sig_bytes < 0 or sig_bytes > len(self.words) * 4:
            raise ValueError("sig_bytes out of range for the given words")
        self.sig_bytes = sig_bytes

    @classmethod
    def from_bytes(cls, data: bytes | bytearray) -> BitBuffer:
        """Pack raw bytes into a new buffer."""
        words = [0] * ((len(data) + 3) // 4)
        for i, b in enumerate(data):
            words[i >> 2] |= b << (24 - (i % 4) * 8)
        return cls(words, len(data))

    def to_bytes(self) -> bytes:
        """Unpack the significant bytes."""
        return bytes(self.byte_at(i) for i in range(self.sig_bytes))

    def byte_at(self, index: int) -> int:
        """Return the byte at ``index`` (negative indexes count from the end).

        Raises:
            IndexError: If ``index`` is outside the logical length.
        """
        if index < 0:
            index += self.sig_bytes
        if not 0 <= index < self.sig_bytes:
            raise IndexError("BitBuffer index out of range")
        return (self.words[index >> 2] >> (24 - (index % 4) * 8)) & 0xFF

    def clamp(self) -> BitBuffer:
        """Zero the bits past the logical length and drop unused words."""
        n_words = (self.sig_bytes + 3) // 4
        del self.words[n_words:]
        rem = self.sig_bytes % 4
        if rem:
            self.words[-1] &= shl32(MASK32, 32 - rem * 8)
        return self

    def concat(self, other: BitBuffer) -> BitBuffer:
        """Append ``other`` in place and return ``self``."""
        self.clamp()
        if self.sig_bytes % 4:
            # Unaligned: copy one byte at a time.
            for i in range(other.sig_bytes):
                pos = self.sig_bytes + i
                idx = pos >> 2
                if idx >= len(self.words):
                    self.words.append(0)
                self.words[idx] |= other.byte_at(i) << (24 - (pos % 4) * 8)
        else:
            n_words = (other.sig_bytes + 3) // 4
            self.words.extend(other.words[:n_words])
        self.sig_bytes += other.sig_bytes
        return self.clamp()

    def truncate(self, n_bytes: int) -> BitBuffer:
        """Shorten the logical length to ``n_bytes``.

        Raises:
            ValueError: If ``n_bytes`` is negative or longer than the buffer.
        """
        if not 0 <= n_bytes <= self.sig_bytes:
            raise ValueError("Cannot truncate to a longer or negative length")
        self.sig_bytes = n_bytes
        return self.clamp()

    def copy(self) -> BitBuffer:
        return BitBuffer(list(self.words), self.sig_bytes)

    def __len__(self) -> int:
        return self.sig_bytes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitBuffer):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __repr__(self) -> str:
        words = ", ".join(f"0x{w:08x}" for w in self.words)
        return f"BitBuffer([{words}], sig_bytes={self.sig_bytes})"
