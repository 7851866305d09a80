from platformdirs import user_config_path

PACKAGE_NAME = "desengine"  # Python package name

# -----------------------------------------------------------------------------
# User-writable directories & files
# -----------------------------------------------------------------------------

# Base config directory (e.g. ~/.config/desengine/)
USER_CONFIG_DIR = user_config_path(PACKAGE_NAME, appauthor=False)

SETTING_PATH = USER_CONFIG_DIR / "settings.json"

# Filenames looked up in the working directory, in order
LOCAL_CONFIG_FILENAMES = ["settings.toml", "settings.json"]
