class CipherError(ValueError):
    """Base class for every error raised by the cipher pipeline."""


class KeyLengthError(CipherError):
    """The key does not have the length the engine requires."""


class UninitializedEngineError(CipherError, RuntimeError):
    """A block was processed before :meth:`init` was called."""


class MalformedBase64Error(CipherError):
    """The Base64 input contains characters outside the standard alphabet."""


class DataLengthError(CipherError):
    """The input is not a whole number of cipher blocks."""


class PaddingError(CipherError):
    """The trailing PKCS#7 padding is inconsistent."""


class PaddingUnderflowError(PaddingError):
    """The declared pad length exceeds the available bytes."""


class MalformedCiphertextError(CipherError):
    """Raw ciphertext text holds a character that is not a single byte."""
