from __future__ import annotations

from typing import Any

from desengine.cipher import new_engine

from .schema import CodecConfig


class ConfigAdapter:
    """Accessor turning a raw configuration mapping into typed configs.

    Args:
        config (dict[str, Any]): Loaded configuration mapping, optionally
            holding a ``codec`` table.
    """

    def __init__(self, config: dict[str, Any]) -> None:
        self._config: dict[str, Any] = dict(config)

    def get_config(self) -> dict[str, Any]:
        """Return the full raw configuration mapping."""
        return self._config

    def get_codec_config(self) -> CodecConfig:
        """Build a CodecConfig from the ``codec`` table.

        Missing fields fall back to :class:`CodecConfig` defaults.

        Returns:
            CodecConfig: Validated codec configuration.

        Raises:
            ValueError: If the table or one of its fields has the wrong type,
                or ``algorithm`` names no known engine. The message starts
                with the offending field.
        """
        defaults = CodecConfig()
        cfg = self._config.get("codec")
        if cfg is None:
            return defaults
        if not isinstance(cfg, dict):
            raise ValueError(f"codec: expected a table, got {type(cfg).__name__}")

        algorithm = cfg.get("algorithm", defaults.algorithm)
        if not isinstance(algorithm, str):
            raise ValueError(
                f"codec.algorithm: expected a string, got {type(algorithm).__name__}"
            )
        try:
            new_engine(algorithm)
        except ValueError as e:
            raise ValueError(f"codec.algorithm: {e}") from None

        key = cfg.get("key", defaults.key)
        if not isinstance(key, str):
            raise ValueError(f"codec.key: expected a string, got {type(key).__name__}")

        strict_padding = cfg.get("strict_padding", defaults.strict_padding)
        if not isinstance(strict_padding, bool):
            raise ValueError(
                "codec.strict_padding: expected a boolean, "
                f"got {type(strict_padding).__name__}"
            )

        return CodecConfig(
            algorithm=algorithm,
            key=key,
            strict_padding=strict_padding,
        )
