"""Settings loading and validation for repr-verifier."""

from repr_verifier.config.loader import (
    SettingsLoadError,
    collect_env_overrides,
    find_pyproject,
    load_settings,
    load_settings_file,
)
from repr_verifier.config.schema import (
    SETTINGS_KEYS,
    SettingsIssue,
    SettingsValidationError,
    SettingsValidationResult,
    VerifierSettings,
    assert_valid_settings,
    default_settings,
    validate_settings,
)

__all__ = [
    "SETTINGS_KEYS",
    "SettingsIssue",
    "SettingsLoadError",
    "SettingsValidationError",
    "SettingsValidationResult",
    "VerifierSettings",
    "assert_valid_settings",
    "collect_env_overrides",
    "default_settings",
    "find_pyproject",
    "load_settings",
    "load_settings_file",
    "validate_settings",
]
