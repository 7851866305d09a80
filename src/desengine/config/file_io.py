"""
Reading and writing codec settings files.

A settings file is a TOML or JSON document whose ``codec`` table describes
one :class:`~desengine.codec.Codec`::

    [codec]
    algorithm = "3des"
    key = "0123456789abcdefghijklmn"
    strict_padding = true

Other top-level tables are preserved but ignored.
"""

from __future__ import annotations

import json
import logging
import tomllib
from dataclasses import asdict
from pathlib import Path
from typing import Any

from desengine.paths import LOCAL_CONFIG_FILENAMES, SETTING_PATH

from .adapter import ConfigAdapter
from .schema import CodecConfig

logger = logging.getLogger(__name__)


def _parse_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _parse_toml(path: Path) -> Any:
    with path.open("rb") as f:
        return tomllib.load(f)


_PARSERS = {
    ".json": ("JSON", _parse_json),
    ".toml": ("TOML", _parse_toml),
}


def find_config_file(config_path: str | Path | None = None) -> Path | None:
    """Locate the settings file to use.

    Candidates, first match wins:
        1. ``config_path``, when given and present
        2. ``settings.toml`` then ``settings.json`` in the working directory
        3. ``SETTING_PATH`` in the per-user config directory

    Returns:
        The resolved path, or ``None`` when no candidate exists.
    """
    candidates: list[Path] = []
    if config_path:
        explicit = Path(config_path).expanduser().resolve()
        if explicit.is_file():
            return explicit
        logger.warning("Specified file not found: %s", explicit)

    candidates.extend(Path.cwd() / name for name in LOCAL_CONFIG_FILENAMES)
    candidates.append(SETTING_PATH)

    for candidate in candidates:
        if candidate.is_file():
            logger.debug("Using settings file: %s", candidate)
            return candidate.resolve()
    return None


def read_settings(path: Path) -> dict[str, Any]:
    """Parse one settings file into a mapping.

    Raises:
        ValueError: If the extension is unsupported, the content does not
            parse, or the document root is not a table.
    """
    try:
        kind, parser = _PARSERS[path.suffix.lower()]
    except KeyError:
        raise ValueError(
            f"Unsupported config file extension: {path.suffix.lower()}"
        ) from None

    try:
        data = parser(path)
    except (OSError, ValueError) as e:
        raise ValueError(f"Invalid {kind} in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a dict, got {type(data)} in {path}")
    return data


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Load the raw settings mapping.

    Raises:
        FileNotFoundError: If no settings file is found.
        ValueError: If the file cannot be parsed.
    """
    path = find_config_file(config_path)
    if path is None:
        raise FileNotFoundError("No valid config file found.")
    return read_settings(path)


def load_codec_config(config_path: str | Path | None = None) -> CodecConfig:
    """Load and validate the ``codec`` table of a settings file.

    Args:
        config_path: Optional explicit settings file.

    Returns:
        The validated codec configuration.

    Raises:
        FileNotFoundError: If no settings file is found.
        ValueError: If the file cannot be parsed or a ``codec`` field is
            invalid; the message names the offending field.
    """
    codec_cfg = ConfigAdapter(load_config(config_path)).get_codec_config()
    logger.debug(
        "Loaded codec settings: algorithm=%s strict_padding=%s",
        codec_cfg.algorithm,
        codec_cfg.strict_padding,
    )
    return codec_cfg


def save_codec_config(
    config: CodecConfig,
    output_path: str | Path = SETTING_PATH,
) -> Path:
    """Write ``config`` as the ``codec`` table of a JSON settings file.

    Other tables already present in the target file are kept.

    Returns:
        The path written.

    Raises:
        ValueError: If the existing target file cannot be parsed.
        OSError: If writing fails.
    """
    output = Path(output_path).expanduser().resolve()
    settings = read_settings(output) if output.is_file() else {}
    settings["codec"] = asdict(config)

    output.parent.mkdir(parents=True, exist_ok=True)
    try:
        output.write_text(
            json.dumps(settings, indent=2, ensure_ascii=False), encoding="utf-8"
        )
    except OSError as e:
        logger.error("Failed to write settings '%s': %s", output, e)
        raise

    logger.info("Codec settings saved to: %s", output)
    return output
