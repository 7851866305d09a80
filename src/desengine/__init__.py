from .version import __version__ as __version__

__title__ = "desengine"
__description__ = "DES and Triple-DES block ciphers with a text/Base64 codec."
__license__ = "Apache-2.0"

__all__ = [
    "BitBuffer",
    "Codec",
    "DES3Engine",
    "DESEngine",
    "new_engine",
]

from .bitbuffer import BitBuffer
from .cipher import DES3Engine, DESEngine, new_engine
from .codec import Codec
