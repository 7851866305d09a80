import json
import logging

import pytest

from desengine.config import CodecConfig
from desengine.config.file_io import (
    find_config_file,
    load_codec_config,
    load_config,
    read_settings,
    save_codec_config,
)


@pytest.fixture(autouse=True)
def isolated_fallback(tmp_path, monkeypatch):
    """Point the per-user fallback at a file that does not exist."""
    monkeypatch.setattr(
        "desengine.config.file_io.SETTING_PATH",
        tmp_path / "user" / "settings.json",
    )
    monkeypatch.chdir(tmp_path)


# ================================================================
# find_config_file() / load_config() resolution order
# ================================================================


def test_load_config_user_path_exists(tmp_path):
    """User passed config_path and the file exists -> load it directly."""
    cfgfile = tmp_path / "custom.toml"
    cfgfile.write_text("[codec]\nalgorithm = '3des'\n", encoding="utf-8")

    assert load_config(config_path=cfgfile) == {"codec": {"algorithm": "3des"}}


def test_load_config_user_path_missing_warns(tmp_path, caplog):
    """Missing user path with nothing else available -> warning, then error."""
    with caplog.at_level(logging.WARNING, logger="desengine.config.file_io"):
        with pytest.raises(FileNotFoundError):
            load_config(config_path=tmp_path / "not_exists.toml")
    assert "Specified file not found" in caplog.text


def test_missing_user_path_falls_back_to_local_file(tmp_path):
    local = tmp_path / "settings.json"
    local.write_text('{"codec": {}}', encoding="utf-8")

    assert find_config_file(tmp_path / "absent.toml") == local.resolve()


def test_local_toml_wins_over_json(tmp_path):
    (tmp_path / "settings.toml").write_text("source = 'toml'", encoding="utf-8")
    (tmp_path / "settings.json").write_text('{"source": "json"}', encoding="utf-8")
    assert load_config() == {"source": "toml"}


def test_load_config_local_settings_json(tmp_path):
    (tmp_path / "settings.json").write_text(json.dumps({"a": 1}), encoding="utf-8")
    assert load_config() == {"a": 1}


def test_load_config_fallback_setting_file(tmp_path, monkeypatch):
    fallback = tmp_path / "fallback.json"
    fallback.write_text(json.dumps({"codec": {"key": "fallback"}}), encoding="utf-8")
    monkeypatch.setattr("desengine.config.file_io.SETTING_PATH", fallback)

    assert load_config() == {"codec": {"key": "fallback"}}


def test_load_config_none_found():
    assert find_config_file() is None
    with pytest.raises(FileNotFoundError):
        load_config()


# ================================================================
# read_settings()
# ================================================================


@pytest.mark.parametrize(
    "name, content, message",
    [
        ("bad.json", "{not json", "Invalid JSON"),
        ("bad.toml", "a = = 1", "Invalid TOML"),
        ("list.json", "[1, 2]", "Config root must be a dict"),
        ("settings.yaml", "a: 1", "Unsupported config file extension"),
    ],
)
def test_read_settings_rejects_bad_files(tmp_path, name, content, message):
    p = tmp_path / name
    p.write_text(content, encoding="utf-8")
    with pytest.raises(ValueError, match=message):
        read_settings(p)


# ================================================================
# load_codec_config()
# ================================================================


def test_load_codec_config_from_toml(tmp_path):
    (tmp_path / "settings.toml").write_text(
        "[codec]\n"
        "algorithm = '3des'\n"
        "key = '0123456789abcdefghijklmn'\n"
        "strict_padding = false\n",
        encoding="utf-8",
    )
    assert load_codec_config() == CodecConfig(
        algorithm="3des",
        key="0123456789abcdefghijklmn",
        strict_padding=False,
    )


def test_load_codec_config_defaults_without_codec_table(tmp_path):
    (tmp_path / "settings.toml").write_text("[other]\nx = 1\n", encoding="utf-8")
    assert load_codec_config() == CodecConfig()


@pytest.mark.parametrize(
    "codec, field",
    [
        ('"des"', "codec"),
        ('{"algorithm": "aes"}', "codec.algorithm"),
        ('{"algorithm": 3}', "codec.algorithm"),
        ('{"key": 12345678}', "codec.key"),
        ('{"strict_padding": "yes"}', "codec.strict_padding"),
    ],
)
def test_load_codec_config_names_bad_field(tmp_path, codec, field):
    p = tmp_path / "bad.json"
    p.write_text(f'{{"codec": {codec}}}', encoding="utf-8")

    with pytest.raises(ValueError, match=rf"^{field}:"):
        load_codec_config(p)


def test_load_codec_config_does_not_log_key(tmp_path, caplog):
    p = tmp_path / "settings.json"
    p.write_text('{"codec": {"key": "topsecr!"}}', encoding="utf-8")

    with caplog.at_level(logging.DEBUG, logger="desengine.config.file_io"):
        load_codec_config(p)
    assert "topsecr!" not in caplog.text


# ================================================================
# save_codec_config()
# ================================================================


def test_save_codec_config_round_trip(tmp_path):
    out = tmp_path / "nested" / "out.json"
    cfg = CodecConfig(algorithm="des", key="clé 8by", strict_padding=False)

    assert save_codec_config(cfg, out) == out.resolve()
    assert json.loads(out.read_text(encoding="utf-8")) == {
        "codec": {"algorithm": "des", "key": "clé 8by", "strict_padding": False}
    }
    assert load_codec_config(out) == cfg


def test_save_codec_config_keeps_other_tables(tmp_path):
    out = tmp_path / "settings.json"
    out.write_text('{"other": {"x": 1}, "codec": {"key": "old"}}', encoding="utf-8")

    save_codec_config(CodecConfig(key="new key!"), out)

    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["other"] == {"x": 1}
    assert data["codec"]["key"] == "new key!"
