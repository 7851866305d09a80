from __future__ import annotations

from desengine.errors import UninitializedEngineError

from . import DES
from ._engine_base import BlockCipherEngine
from .DES import DESEngine

#: Block and key sizes in bytes.
BLOCK_SIZE_BYTES = DES.BLOCK_SIZE_BYTES
KEY_SIZE_BYTES = 3 * DES.KEY_SIZE_BYTES


class DES3Engine(BlockCipherEngine):
    """Triple-DES (3DES/TDES) using the EDE construction.

    The 24-byte key is split into K1, K2 and K3. Encryption runs
    E(K1) -> D(K2) -> E(K3); decryption runs D(K3) -> E(K2) -> D(K1).
    """

    algorithm_name = "DES3"
    block_size = BLOCK_SIZE_BYTES // 4
    key_size = KEY_SIZE_BYTES

    def __init__(self) -> None:
        super().__init__()
        self._stages: list[DESEngine] | None = None

    def _setup(self, key: bytes) -> None:
        enc = self.for_encryption
        n = DES.KEY_SIZE_BYTES
        k1 = DESEngine().init(enc, key[:n])
        k2 = DESEngine().init(not enc, key[n : 2 * n])
        k3 = DESEngine().init(enc, key[2 * n :])
        self._stages = [k1, k2, k3] if enc else [k3, k2, k1]

    def _teardown(self) -> None:
        if self._stages is not None:
            for stage in self._stages:
                stage.reset()
        self._stages = None

    def _crypt_block(self, words: list[int], offset: int) -> None:
        if self._stages is None:
            raise UninitializedEngineError("DES3 engine used before init()")
        for stage in self._stages:
            stage.process_block(words, offset)
