"""
Unified interface for loading and adapting configuration files.
"""

__all__ = [
    "find_config_file",
    "load_codec_config",
    "load_config",
    "save_codec_config",
    "CodecConfig",
    "ConfigAdapter",
]

from .adapter import ConfigAdapter
from .file_io import (
    find_config_file,
    load_codec_config,
    load_config,
    save_codec_config,
)
from .schema import CodecConfig
