from __future__ import annotations

from typing import NamedTuple

from desengine.bitbuffer import BitBuffer
from desengine.errors import UninitializedEngineError
from desengine.words import shl32, shr32, u32

from ._engine_base import BlockCipherEngine
from ._tables import PC1, PC2, SBOX_MASK, SBOX_P, SHIFTS, SUBKEY_BIT_POSITIONS

#: Block and key sizes in bytes.
BLOCK_SIZE_BYTES = 8
KEY_SIZE_BYTES = 8

SubKey = tuple[int, ...]


class Block(NamedTuple):
    """The two 32-bit halves of one cipher block."""

    left: int
    right: int


def _exchange_lr(block: Block, offset: int, mask: int) -> Block:
    """Swap the ``mask`` bits of ``right`` with the bits ``offset`` higher in ``left``."""
    left, right = block
    t = (shr32(left, offset) ^ right) & mask
    return Block(left ^ shl32(t, offset), right ^ t)


def _exchange_rl(block: Block, offset: int, mask: int) -> Block:
    """Swap the ``mask`` bits of ``left`` with the bits ``offset`` higher in ``right``."""
    left, right = block
    t = (shr32(right, offset) ^ left) & mask
    return Block(left ^ t, right ^ shl32(t, offset))


def _initial_permutation(block: Block) -> Block:
    block = _exchange_lr(block, 4, 0x0F0F0F0F)
    block = _exchange_lr(block, 16, 0x0000FFFF)
    block = _exchange_rl(block, 2, 0x33333333)
    block = _exchange_rl(block, 8, 0x00FF00FF)
    return _exchange_lr(block, 1, 0x55555555)


def _final_permutation(block: Block) -> Block:
    block = _exchange_lr(block, 1, 0x55555555)
    block = _exchange_rl(block, 8, 0x00FF00FF)
    block = _exchange_rl(block, 2, 0x33333333)
    block = _exchange_lr(block, 16, 0x0000FFFF)
    return _exchange_lr(block, 4, 0x0F0F0F0F)


def _feistel(right: int, subkey: SubKey) -> int:
    """DES round function f(R, K) using the pre-aligned S-box tables."""
    f = 0
    for i in range(8):
        f |= SBOX_P[i][(right ^ subkey[i]) & SBOX_MASK[i]]
    return f


def _make_subkeys(key_words: list[int]) -> list[SubKey]:
    """Generate the 16 round keys from a 64-bit key given as two words.

    Each round key is returned as eight words; word ``i`` holds the six bits
    of S-box group ``i`` at the positions ``SBOX_MASK[i]`` selects, so it can
    be XORed against the raw right half. Parity bits are ignored.
    """
    # PC-1: 64 -> 56
    key_bits = []
    for pos in PC1:
        bit = pos - 1
        key_bits.append((key_words[bit >> 5] >> (31 - bit % 32)) & 1)

    subkeys: list[SubKey] = []
    shift = 0
    for step in SHIFTS:
        shift += step

        # PC-2 over the rotated halves: 56 -> 48
        k48 = []
        for i in range(24):
            k48.append(key_bits[(PC2[i] - 1 + shift) % 28])
        for i in range(24, 48):
            k48.append(key_bits[28 + (PC2[i] - 29 + shift) % 28])

        subkey = []
        for group, positions in enumerate(SUBKEY_BIT_POSITIONS):
            word = 0
            for j, pos in enumerate(positions):
                word |= k48[6 * group + j] << pos
            subkey.append(word)
        subkeys.append(tuple(subkey))
    return subkeys


class DESEngine(BlockCipherEngine):
    """Single DES: a 16-round Feistel network over 64-bit blocks."""

    algorithm_name = "DES"
    block_size = BLOCK_SIZE_BYTES // 4
    key_size = KEY_SIZE_BYTES

    def __init__(self) -> None:
        super().__init__()
        self._subkeys: list[SubKey] | None = None

    def _setup(self, key: bytes) -> None:
        subkeys = _make_subkeys(BitBuffer.from_bytes(key).words)
        if not self.for_encryption:
            subkeys.reverse()
        self._subkeys = subkeys

    def _teardown(self) -> None:
        self._subkeys = None

    def _crypt_block(self, words: list[int], offset: int) -> None:
        if self._subkeys is None:
            raise UninitializedEngineError("DES engine used before init()")
        block = Block(u32(words[offset]), u32(words[offset + 1]))
        block = _initial_permutation(block)

        left, right = block
        for subkey in self._subkeys:
            left, right = right, left ^ _feistel(right, subkey)

        # Undo the swap of the last round
        block = _final_permutation(Block(right, left))
        words[offset] = block.left
        words[offset + 1] = block.right
