"""
repr-verifier — fluent configuration surface.

File: src/repr_verifier/verifier.py
Last updated: 2026-10-18

Purpose
- Entry points ``ReprVerifier.for_class``/``for_classes``/``for_module`` and
  the chained ``with_*`` options ending in ``verify()``.

Functional requirements
- Every ``with_*`` call validates eagerly and raises ``ConfigurationError`` at the
  offending call; nothing invalid is deferred to ``verify()``.
- Only one of only/ignored/matching field selection may be active.
- Each call returns a new verifier; a verifier is never mutated, so one can be
  shared and reused across verifications.

Non-functional requirements
- ``verify()`` is silent on success and raises exactly one
  ``VerificationFailure`` carrying every discrepancy otherwise.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType, ModuleType
from typing import Any

from repr_verifier.catalog import FieldSelection, SelectionMode
from repr_verifier.config.schema import VerifierSettings
from repr_verifier.constants import DEFAULT_FIELD_VALUE_PATTERN
from repr_verifier.discovery import ClassPredicate, discover_classes
from repr_verifier.engine import resolve_specs, run_verification
from repr_verifier.exceptions import ConfigurationError, VerificationFailure
from repr_verifier.expectations import Formatter
from repr_verifier.extraction import FieldPattern
from repr_verifier.rendering import NameStyle, RenderMethod
from repr_verifier.report import VerificationReport, render_report
from repr_verifier.values import DeterministicValuePolicy, ValuePolicy


def _frozen_mapping() -> Mapping[Any, Any]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Configuration:
    """Immutable snapshot of every verifier option."""

    class_name: NameStyle = NameStyle.NONE
    hash_code: bool = False
    field_value_pattern: str = DEFAULT_FIELD_VALUE_PATTERN
    prefab_values: Mapping[Any, object] = field(default_factory=_frozen_mapping)
    formatters: Mapping[Any, Formatter] = field(default_factory=_frozen_mapping)
    null_value: str | None = None
    selection: FieldSelection = field(default_factory=FieldSelection)
    inherited_fields: bool = True
    render_method: RenderMethod = RenderMethod.REPR
    fail_on_excluded_fields: bool = False
    value_policy: ValuePolicy = field(default_factory=DeterministicValuePolicy)

    @classmethod
    def from_settings(cls, settings: VerifierSettings) -> Configuration:
        return cls().apply_settings(settings)

    def apply_settings(self, settings: VerifierSettings) -> Configuration:
        return dataclasses.replace(
            self,
            class_name=settings.class_name,
            hash_code=settings.hash_code,
            field_value_pattern=FieldPattern.compile(settings.field_value_pattern).template,
            null_value=settings.null_value,
            inherited_fields=settings.inherited_fields,
            render_method=settings.render_method,
            fail_on_excluded_fields=settings.fail_on_excluded_fields,
        )


class ReprVerifier:
    """Fluent verifier for the string representation of one or more classes."""

    __slots__ = ("_configuration", "_logger", "_targets")

    def __init__(
        self,
        targets: Iterable[type],
        configuration: Configuration | None = None,
        *,
        logger: Any | None = None,
    ) -> None:
        self._targets = _as_targets(targets)
        self._configuration = configuration if configuration is not None else Configuration()
        self._logger = logger
        # Field names depend on targets, selection and the inherited flag together.
        resolve_specs(self._targets, self._configuration)

    @classmethod
    def for_class(cls, target: type) -> ReprVerifier:
        return cls((target,))

    @classmethod
    def for_classes(cls, *targets: type) -> ReprVerifier:
        if len(targets) == 1 and not isinstance(targets[0], type) and _is_iterable(targets[0]):
            return cls(targets[0])
        return cls(targets)

    @classmethod
    def for_module(
        cls,
        module: ModuleType | str,
        *,
        recursive: bool = False,
        predicate: ClassPredicate | None = None,
    ) -> ReprVerifier:
        classes = discover_classes(module, recursive=recursive, predicate=predicate)
        if not classes:
            raise ConfigurationError(f"no verifiable classes found in {module!r}")
        return cls(classes)

    @property
    def targets(self) -> tuple[type, ...]:
        return self._targets

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    def with_class_name(self, style: NameStyle | str) -> ReprVerifier:
        try:
            resolved = NameStyle(style)
        except ValueError as exc:
            raise ConfigurationError(f"unknown class name style {style!r}") from exc
        return self._with(class_name=resolved)

    def with_hash_code(self, enabled: bool = True) -> ReprVerifier:
        return self._with(hash_code=_as_bool(enabled, "hash code flag"))

    def with_field_value_pattern(self, pattern: str) -> ReprVerifier:
        return self._with(field_value_pattern=FieldPattern.compile(pattern).template)

    def with_prefab_value(self, field_type: Any, value: object) -> ReprVerifier:
        key = _as_type_key(field_type, "prefab value type")
        prefabs = dict(self._configuration.prefab_values)
        prefabs[key] = value
        return self._with(prefab_values=MappingProxyType(prefabs))

    def with_formatter(self, field_type: Any, formatter: Callable[[Any], str]) -> ReprVerifier:
        key = _as_type_key(field_type, "formatter type")
        if not callable(formatter):
            raise ConfigurationError(f"formatter for {field_type!r} must be callable")
        formatters = dict(self._configuration.formatters)
        formatters[key] = formatter
        return self._with(formatters=MappingProxyType(formatters))

    def with_null_value(self, null_value: str | None) -> ReprVerifier:
        if null_value is not None and not isinstance(null_value, str):
            raise ConfigurationError("null value must be a string or None")
        return self._with(null_value=null_value)

    def with_only_these_fields(self, *names: str | Iterable[str]) -> ReprVerifier:
        return self._with_selection(FieldSelection.only(_flatten_names(names, "only these fields")))

    def with_ignored_fields(self, *names: str | Iterable[str]) -> ReprVerifier:
        return self._with_selection(FieldSelection.ignore(_flatten_names(names, "ignored fields")))

    def with_matching_fields(self, pattern: str) -> ReprVerifier:
        if pattern is None:
            raise ConfigurationError("field matching pattern must not be None")
        return self._with_selection(FieldSelection.matching(pattern))

    def with_inherited_fields(self, enabled: bool = True) -> ReprVerifier:
        return self._with(inherited_fields=_as_bool(enabled, "inherited fields flag"))

    def with_render_method(self, method: RenderMethod | str) -> ReprVerifier:
        try:
            resolved = RenderMethod(method)
        except ValueError as exc:
            raise ConfigurationError(f"unknown render method {method!r}") from exc
        return self._with(render_method=resolved)

    def with_fail_on_excluded_fields(self, enabled: bool = True) -> ReprVerifier:
        return self._with(
            fail_on_excluded_fields=_as_bool(enabled, "fail on excluded fields flag")
        )

    def with_value_policy(self, policy: ValuePolicy) -> ReprVerifier:
        if not isinstance(policy, ValuePolicy):
            raise ConfigurationError("value policy must define default_for(field)")
        return self._with(value_policy=policy)

    def with_settings(self, settings: VerifierSettings) -> ReprVerifier:
        if not isinstance(settings, VerifierSettings):
            raise ConfigurationError("settings must be a VerifierSettings instance")
        return ReprVerifier(
            self._targets,
            self._configuration.apply_settings(settings),
            logger=self._logger,
        )

    def with_logger(self, logger: Any) -> ReprVerifier:
        return ReprVerifier(self._targets, self._configuration, logger=logger)

    def report(self) -> VerificationReport:
        """Run every check and return the report without raising on discrepancies."""

        return run_verification(self._targets, self._configuration, logger=self._logger)

    def verify(self) -> None:
        """Raise ``VerificationFailure`` when any registered class has errors."""

        report = self.report()
        if report.passed:
            return
        raise VerificationFailure("\n\n" + render_report(report), report)

    def _with(self, **changes: Any) -> ReprVerifier:
        return ReprVerifier(
            self._targets,
            dataclasses.replace(self._configuration, **changes),
            logger=self._logger,
        )

    def _with_selection(self, selection: FieldSelection) -> ReprVerifier:
        current = self._configuration.selection
        if current.mode is not SelectionMode.ALL and current.mode is not selection.mode:
            raise ConfigurationError(
                f"cannot combine {selection.mode.value} fields with {current.mode.value} fields"
            )
        return self._with(selection=selection)


def _as_targets(targets: Iterable[type]) -> tuple[type, ...]:
    if targets is None:
        raise ConfigurationError("classes to verify must not be None")
    collected = tuple(targets)
    if not collected:
        raise ConfigurationError("at least one class is required")
    for item in collected:
        if item is None:
            raise ConfigurationError("class to verify must not be None")
        if not isinstance(item, type):
            raise ConfigurationError(f"expected a class, got {item!r}")
    return collected


def _flatten_names(names: tuple[str | Iterable[str], ...], label: str) -> tuple[str, ...]:
    flattened: list[str] = []
    for item in names:
        if item is None:
            raise ConfigurationError(f"{label} must not be None")
        if isinstance(item, str):
            flattened.append(item)
        elif _is_iterable(item):
            flattened.extend(item)
        else:
            raise ConfigurationError(f"{label} must be strings, got {item!r}")
    return tuple(flattened)


def _as_type_key(field_type: Any, label: str) -> Any:
    if field_type is None:
        raise ConfigurationError(f"{label} must not be None")
    try:
        hash(field_type)
    except TypeError as exc:
        raise ConfigurationError(f"{label} {field_type!r} is not hashable") from exc
    return field_type


def _as_bool(value: object, label: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{label} must be a boolean")
    return value


def _is_iterable(value: object) -> bool:
    try:
        iter(value)  # type: ignore[call-overload]
    except TypeError:
        return False
    return True


__all__ = ["Configuration", "ReprVerifier"]
