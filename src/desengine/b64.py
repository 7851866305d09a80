"""
Base64 transport encoding for ciphertext.

Encoding goes through the standard library. Decoding is done by hand so the
result lands directly in a packed :class:`BitBuffer` ready for the cipher.
"""

from __future__ import annotations

import base64

from .bitbuffer import BitBuffer
from .errors import MalformedBase64Error

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
PAD_CHAR = "="

_REVERSE_MAP = {ch: idx for idx, ch in enumerate(ALPHABET)}


def encode_base64(data: bytes) -> str:
    """Encode bytes with the RFC 4648 alphabet and ``=`` padding."""
    return base64.b64encode(data).decode("ascii")


def _effective_length(text: str) -> int:
    """Return the number of data characters, excluding trailing padding."""
    pad_idx = text.find(PAD_CHAR)
    if pad_idx == -1:
        return len(text)

    tail = text[pad_idx:]
    if tail.strip(PAD_CHAR):
        raise MalformedBase64Error("Data found after Base64 padding")
    if len(tail) > 2:
        raise MalformedBase64Error("Too many Base64 padding characters")
    return pad_idx


def parse_base64(text: str) -> BitBuffer:
    """Decode a Base64 string into a packed word buffer.

    Each output byte is assembled from the tail of one 6-bit group and the
    head of the next, so every four characters yield three bytes; trailing
    ``=`` characters are excluded before assembly.

    Args:
        text: Base64 text using the standard alphabet.

    Returns:
        The decoded bytes as a :class:`BitBuffer`.

    Raises:
        MalformedBase64Error: If ``text`` contains characters outside the
            alphabet, misplaced padding, or a dangling single character.
    """
    length = _effective_length(text)
    if length % 4 == 1:
        raise MalformedBase64Error("Truncated Base64 input")

    values = []
    for pos in range(length):
        try:
            values.append(_REVERSE_MAP[text[pos]])
        except KeyError:
            raise MalformedBase64Error(
                f"Invalid Base64 character {text[pos]!r} at position {pos}"
            ) from None

    words: list[int] = [0] * ((length * 3 // 4 + 3) // 4)
    n_bytes = 0
    for i in range(1, length):
        shift = (i % 4) * 2
        if shift == 0:
            continue
        bits1 = (values[i - 1] << shift) & 0xFF
        bits2 = values[i] >> (6 - shift)
        words[n_bytes >> 2] |= (bits1 | bits2) << (24 - (n_bytes % 4) * 8)
        n_bytes += 1

    return BitBuffer(words, n_bytes)
