from __future__ import annotations

from .bitbuffer import BitBuffer
from .errors import PaddingError, PaddingUnderflowError


def pad(buffer: BitBuffer, block_size: int) -> BitBuffer:
    """Apply PKCS#7 padding in place so ``buffer`` aligns to ``block_size``.

    Every padding byte equals the number of bytes added. Data that is already
    aligned still receives a full block of padding.

    Args:
        buffer: Data to pad. Modified in place.
        block_size: Block size in bytes. Must be in the range [1, 255].

    Returns:
        The padded buffer (the same object).

    Raises:
        ValueError: If ``block_size`` is out of range.
    """
    if not (1 <= block_size <= 255):
        raise ValueError("block_size must be between 1 and 255")

    padding_len = block_size - (len(buffer) % block_size)
    padding_word = padding_len * 0x01010101
    words = [padding_word] * ((padding_len + 3) // 4)
    return buffer.concat(BitBuffer(words, padding_len))


def unpad(buffer: BitBuffer, block_size: int, strict: bool = True) -> BitBuffer:
    """Remove PKCS#7 padding in place.

    The last byte declares the pad length. In strict mode the pad length must
    lie in ``1..block_size`` and every pad byte must carry it; lenient mode
    only truncates, matching legacy decoders.

    Args:
        buffer: Decrypted data. Modified in place.
        block_size: Block size in bytes. Must be in the range [1, 255].
        strict: Whether to validate the padding bytes.

    Returns:
        The unpadded buffer (the same object).

    Raises:
        ValueError: If ``block_size`` is out of range.
        PaddingUnderflowError: If the buffer is empty or shorter than the
            declared pad length.
        PaddingError: If strict validation fails.
    """
    if not (1 <= block_size <= 255):
        raise ValueError("block_size must be between 1 and 255")

    size = len(buffer)
    if size == 0:
        raise PaddingUnderflowError("Zero-length input cannot be unpadded")

    padding_len = buffer.byte_at(-1)
    if padding_len > size:
        raise PaddingUnderflowError(
            f"Declared padding of {padding_len} bytes exceeds {size} bytes of data"
        )

    if strict:
        if padding_len < 1 or padding_len > block_size:
            raise PaddingError("Padding is incorrect")
        for i in range(size - padding_len, size):
            if buffer.byte_at(i) != padding_len:
                raise PaddingError("Padding is incorrect")

    return buffer.truncate(size - padding_len)
