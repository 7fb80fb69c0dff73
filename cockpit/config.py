"""
Settings loader — reads cockpit settings from YAML.

The packaged defaults.yaml carries the firm's seed tables. Point the
COCKPIT_SETTINGS env var at another file to override them wholesale.
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from cockpit import paths
from cockpit.contracts.settings import CockpitSettings, WorkloadSettings

logger = logging.getLogger(__name__)


class SettingsError(Exception):
    """Raised when a settings file cannot be read or does not validate."""

    pass


def load_settings(path: Path | str | None = None) -> CockpitSettings:
    """
    Load and validate cockpit settings.

    An empty document yields the model defaults. A missing file, malformed
    YAML or a validation failure raises SettingsError.
    """
    settings_file = Path(path) if path else paths.settings_path()
    try:
        with open(settings_file) as f:
            raw = yaml.safe_load(f) or {}
    except OSError as e:
        raise SettingsError(f"Cannot read settings file {settings_file}: {e}") from e
    except yaml.YAMLError as e:
        raise SettingsError(f"Malformed settings file {settings_file}: {e}") from e

    if not isinstance(raw, dict):
        raise SettingsError(f"Settings file {settings_file} must contain a mapping")

    try:
        settings = CockpitSettings.model_validate(raw)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {settings_file}: {e}") from e

    logger.debug(
        "Loaded settings from %s (%d grades, %d roles, %d stages)",
        settings_file,
        len(settings.workload.grade_capacities),
        len(settings.workload.role_weights),
        len(settings.workload.stage_multipliers),
    )
    return settings


def load_workload_settings(path: Path | str | None = None) -> WorkloadSettings:
    """Convenience wrapper returning only the workload tables."""
    return load_settings(path).workload
