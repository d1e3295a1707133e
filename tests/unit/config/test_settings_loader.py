"""
repr-verifier — unit tests for the settings loader

File: tests/unit/config/test_settings_loader.py
Last updated: 2026-10-18

Purpose
- Validate settings loading from pyproject.toml, standalone TOML/YAML files and
  environment overrides.

What this test file should cover
- Precedence: env > file > defaults.
- Discovery of the nearest pyproject.toml.
- Errors for missing files, malformed content and uncoercible env values.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from repr_verifier.config import (
    SettingsLoadError,
    SettingsValidationError,
    collect_env_overrides,
    find_pyproject,
    load_settings,
    load_settings_file,
)
from repr_verifier.rendering import NameStyle, RenderMethod


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_without_any_source(tmp_path: Path) -> None:
    settings = load_settings(environ={}, search_from=tmp_path)

    assert settings.class_name is NameStyle.NONE
    assert settings.hash_code is False


def test_pyproject_tool_table_is_read(tmp_path: Path) -> None:
    _write(
        tmp_path / "pyproject.toml",
        '[project]\nname = "demo"\n\n[tool.repr_verifier]\nclass_name = "name"\nhash_code = true\n',
    )

    settings = load_settings(environ={}, search_from=tmp_path)

    assert settings.class_name is NameStyle.NAME
    assert settings.hash_code is True


def test_pyproject_is_found_in_parent_directory(tmp_path: Path) -> None:
    pyproject = _write(tmp_path / "pyproject.toml", "[tool.repr_verifier]\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert find_pyproject(nested) == pyproject.resolve()


def test_pyproject_without_table_yields_defaults(tmp_path: Path) -> None:
    path = _write(tmp_path / "pyproject.toml", '[project]\nname = "demo"\n')

    assert load_settings_file(path) == {}


def test_standalone_yaml_file(tmp_path: Path) -> None:
    path = _write(tmp_path / "verifier.yaml", "render_method: str\nnull_value: 'null'\n")

    settings = load_settings(path, environ={})

    assert settings.render_method is RenderMethod.STR
    assert settings.null_value == "null"


def test_empty_yaml_file_yields_defaults(tmp_path: Path) -> None:
    path = _write(tmp_path / "verifier.yml", "")

    assert load_settings_file(path) == {}


def test_env_overrides_file(tmp_path: Path) -> None:
    path = _write(tmp_path / "verifier.toml", 'hash_code = true\nclass_name = "name"\n')

    settings = load_settings(
        path,
        environ={"REPR_VERIFIER_HASH_CODE": "off", "REPR_VERIFIER_CLASS_NAME": "simple_name"},
    )

    assert settings.hash_code is False
    assert settings.class_name is NameStyle.SIMPLE_NAME


def test_collect_env_overrides_ignores_unrelated_variables() -> None:
    overrides = collect_env_overrides(
        {"REPR_VERIFIER_INHERITED_FIELDS": "no", "PATH": "/bin", "REPR_VERIFIER_NULL_VALUE": "-"}
    )

    assert overrides == {"inherited_fields": False, "null_value": "-"}


def test_uncoercible_env_boolean_is_rejected() -> None:
    with pytest.raises(SettingsLoadError, match="REPR_VERIFIER_HASH_CODE"):
        collect_env_overrides({"REPR_VERIFIER_HASH_CODE": "maybe"})


def test_missing_explicit_file_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(SettingsLoadError, match="not found"):
        load_settings(tmp_path / "absent.toml", environ={})


def test_invalid_toml_is_rejected(tmp_path: Path) -> None:
    path = _write(tmp_path / "broken.toml", "hash_code = \n")

    with pytest.raises(SettingsLoadError, match="invalid TOML"):
        load_settings(path, environ={})


def test_yaml_top_level_must_be_mapping(tmp_path: Path) -> None:
    path = _write(tmp_path / "list.yaml", "- a\n- b\n")

    with pytest.raises(SettingsLoadError, match="mapping"):
        load_settings(path, environ={})


def test_unknown_key_in_pyproject_reports_table_path(tmp_path: Path) -> None:
    _write(tmp_path / "pyproject.toml", "[tool.repr_verifier]\ncolour = 1\n")

    with pytest.raises(SettingsValidationError) as info:
        load_settings(environ={}, search_from=tmp_path)

    assert info.value.issues[0].path == "tool.repr_verifier.colour"
