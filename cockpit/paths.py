from __future__ import annotations

import os
from pathlib import Path

APP_ENV_SETTINGS = "COCKPIT_SETTINGS"


def package_root() -> Path:
    """Directory of the cockpit package (holds defaults.yaml)."""
    return Path(__file__).parent.resolve()


def default_settings_path() -> Path:
    return package_root() / "defaults.yaml"


def settings_path() -> Path:
    """
    Settings file to load.

    Resolution order:
    1. COCKPIT_SETTINGS env var (explicit override)
    2. defaults.yaml shipped with the package
    """
    if os.environ.get(APP_ENV_SETTINGS):
        return Path(os.environ[APP_ENV_SETTINGS]).expanduser().resolve()
    return default_settings_path()
