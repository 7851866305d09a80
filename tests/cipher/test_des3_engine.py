from __future__ import annotations

import random

import pytest
from Crypto.Cipher import DES3 as RefDES3

from desengine.bitbuffer import BitBuffer
from desengine.cipher import BlockCipherEngine, BlockProcessor, DES3Engine, DESEngine
from desengine.errors import KeyLengthError, UninitializedEngineError

_rng = random.Random(20261018)


def randbytes(n: int) -> bytes:
    return bytes(_rng.randrange(0, 256) for _ in range(n))


def make_ref_compatible_key() -> bytes:
    """Generate a three-key DES3 key pycryptodome accepts."""
    for _ in range(1000):
        key = RefDES3.adjust_key_parity(randbytes(24))
        try:
            RefDES3.new(key, RefDES3.MODE_ECB)
            return key
        except ValueError:
            continue
    raise RuntimeError("Failed to generate a valid DES3 key with correct parity")


def ecb(engine: BlockCipherEngine, data: bytes) -> bytes:
    processor = BlockProcessor(engine, padding=False)
    return processor.process(BitBuffer.from_bytes(data)).to_bytes()


# ===========================================================
# Cross-check against pycryptodome
# ===========================================================


@pytest.mark.parametrize("nblocks", [1, 2, 4, 8])
def test_des3_encrypt_matches_pycryptodome(nblocks):
    key = make_ref_compatible_key()
    pt = randbytes(8 * nblocks)

    ref = RefDES3.new(key, RefDES3.MODE_ECB)
    assert ecb(DES3Engine().init(True, key), pt) == ref.encrypt(pt)


@pytest.mark.parametrize("nblocks", [1, 3, 5])
def test_des3_decrypt_matches_pycryptodome(nblocks):
    key = make_ref_compatible_key()
    pt = randbytes(8 * nblocks)
    ct = RefDES3.new(key, RefDES3.MODE_ECB).encrypt(pt)

    assert ecb(DES3Engine().init(False, key), ct) == pt


def test_des3_round_trip():
    key = randbytes(24)
    pt = randbytes(8 * 6)
    ct = ecb(DES3Engine().init(True, key), pt)

    assert ct != pt
    assert ecb(DES3Engine().init(False, key), ct) == pt


def test_des3_ede_composition():
    key = randbytes(24)
    pt = randbytes(8 * 2)

    x = ecb(DESEngine().init(True, key[:8]), pt)
    x = ecb(DESEngine().init(False, key[8:16]), x)
    x = ecb(DESEngine().init(True, key[16:]), x)

    assert ecb(DES3Engine().init(True, key), pt) == x


# ===========================================================
# Degeneration to single DES
# ===========================================================


def test_identical_subkeys_degenerate_to_single_des():
    k = randbytes(8)
    pt = randbytes(8 * 4)

    assert ecb(DES3Engine().init(True, k * 3), pt) == ecb(
        DESEngine().init(True, k), pt
    )


def test_equal_first_two_subkeys_degenerate_to_des_with_third():
    k1, k3 = randbytes(8), randbytes(8)
    pt = randbytes(8 * 4)

    assert ecb(DES3Engine().init(True, k1 + k1 + k3), pt) == ecb(
        DESEngine().init(True, k3), pt
    )


def test_equal_last_two_subkeys_degenerate_to_des_with_first():
    k1, k2 = randbytes(8), randbytes(8)
    pt = randbytes(8 * 4)
    ct = ecb(DES3Engine().init(True, k1 + k2 + k2), pt)

    assert ct == ecb(DESEngine().init(True, k1), pt)
    assert ecb(DES3Engine().init(False, k1 + k2 + k2), ct) == pt


# ===========================================================
# Lifecycle and validation
# ===========================================================


def test_reset_then_init_matches_fresh_engine():
    k1, k2 = randbytes(24), randbytes(24)
    pt = randbytes(8 * 3)

    engine = DES3Engine().init(True, k1)
    ecb(engine, pt)
    engine.reset()
    engine.init(True, k2)

    assert ecb(engine, pt) == ecb(DES3Engine().init(True, k2), pt)


def test_process_before_init_raises():
    with pytest.raises(UninitializedEngineError):
        DES3Engine().process_block([0, 0], 0)


@pytest.mark.parametrize("length", [0, 8, 16, 23, 25, 32])
def test_des3_rejects_bad_key_size(length):
    with pytest.raises(KeyLengthError):
        DES3Engine().init(True, b"\x00" * length)


def test_crypt_block_without_stages_raises():
    with pytest.raises(UninitializedEngineError):
        DES3Engine()._crypt_block([0, 0], 0)


def test_size_constants_agree_with_engine():
    from desengine.cipher import DES, DES3

    assert DES3.BLOCK_SIZE_BYTES == DES.BLOCK_SIZE_BYTES == 8
    assert DES3.KEY_SIZE_BYTES == 24
    assert DES3Engine.block_size * 4 == DES3.BLOCK_SIZE_BYTES
    assert DES3Engine.key_size == DES3.KEY_SIZE_BYTES
