"""
repr-verifier — verification engine.

File: src/repr_verifier/engine.py
Last updated: 2026-10-18

Purpose
- Orchestrate catalog, value provider, builder, renderer, extractor and
  expectation resolver for every registered class and collect the report.

Functional requirements
- Validate selection against every registered class before any instance is
  built. Under the default selection a class without any verifiable field is
  a configuration error.
- Per class: build one instance with all selected fields set, render it once,
  then check class name, hash code and every selected field. Field mismatches
  aggregate into a single ``FIELD_VALUE`` error in declaration order.
- A class that cannot be constructed gets a ``CONSTRUCTION`` error; the other
  classes are still verified. Exceptions raised by the rendering method
  propagate unchanged.

Non-functional requirements
- Synchronous, no state kept between runs.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import structlog

from repr_verifier.builder import build_instance
from repr_verifier.catalog import ClassSpec, SelectionMode, names_declared, resolve_fields
from repr_verifier.exceptions import ConfigurationError, InstanceConstructionError
from repr_verifier.expectations import ExpectationResolver
from repr_verifier.extraction import FieldPattern
from repr_verifier.rendering import (
    accepted_class_names,
    class_name_segment,
    contains_class_name,
    contains_hash,
    identity_hash,
    render,
)
from repr_verifier.report import (
    ClassResult,
    FieldValue,
    VerificationError,
    VerificationReport,
    qualified_name,
)
from repr_verifier.values import ValueProvider

if TYPE_CHECKING:
    from repr_verifier.verifier import Configuration


def run_verification(
    targets: Sequence[type],
    configuration: Configuration,
    *,
    logger: Any | None = None,
) -> VerificationReport:
    """Verify every class in ``targets`` and return the registration-ordered report."""

    log = logger if logger is not None else structlog.get_logger(__name__)
    pattern = FieldPattern.compile(configuration.field_value_pattern)
    specs = resolve_specs(targets, configuration)

    provider = ValueProvider(
        prefab_values=configuration.prefab_values,
        policy=configuration.value_policy,
    )
    resolver = ExpectationResolver(
        formatters=configuration.formatters,
        null_value=configuration.null_value,
    )

    results = tuple(
        verify_class(
            spec,
            configuration,
            pattern=pattern,
            provider=provider,
            resolver=resolver,
            logger=log,
        )
        for spec in specs
    )
    report = VerificationReport(results=results)
    log.info(
        "repr_verifier_run_completed",
        classes=len(results),
        failed=[item.class_label for item in report.failures],
    )
    return report


def resolve_specs(targets: Sequence[type], configuration: Configuration) -> list[ClassSpec]:
    """Validate the selection against all targets, then resolve each class spec."""

    selection = configuration.selection
    if selection.mode is SelectionMode.IGNORE:
        known = names_declared(targets, inherited=configuration.inherited_fields)
        unknown = [name for name in selection.names if name not in known]
        if unknown:
            raise ConfigurationError(
                f"ignored field(s) {', '.join(unknown)} not declared by any of "
                f"{', '.join(qualified_name(item) for item in targets)}"
            )
    specs = [
        resolve_fields(
            target,
            inherited=configuration.inherited_fields,
            selection=selection,
        )
        for target in targets
    ]
    if selection.is_default:
        empty = [qualified_name(spec.target) for spec in specs if not spec.fields]
        if empty:
            raise ConfigurationError(f"no verifiable fields declared by {', '.join(empty)}")
    return specs


def verify_class(
    spec: ClassSpec,
    configuration: Configuration,
    *,
    pattern: FieldPattern,
    provider: ValueProvider,
    resolver: ExpectationResolver,
    logger: Any,
) -> ClassResult:
    values = provider.values_for(spec.fields)
    try:
        instance = build_instance(spec.target, values, unset=spec.unset)
    except InstanceConstructionError as exc:
        logger.warning(
            "repr_verifier_construction_failed",
            target=qualified_name(spec.target),
            reason=exc.reason,
        )
        return ClassResult(
            target=spec.target,
            rendered=None,
            errors=(VerificationError.construction(str(exc)),),
        )

    rendered = render(instance, configuration.render_method)
    errors: list[VerificationError] = []

    segment = class_name_segment(spec.target, configuration.class_name)
    accepted = accepted_class_names(spec.target, configuration.class_name)
    if segment is not None and not contains_class_name(rendered, *accepted):
        errors.append(VerificationError.class_name(segment))

    if configuration.hash_code:
        expected_hash = identity_hash(instance)
        if not contains_hash(rendered, expected_hash):
            errors.append(VerificationError.hash_code(expected_hash))

    mismatches: list[FieldValue] = []
    for field in spec.fields:
        expected = resolver.expect(field, values[field.name])
        if pattern.matches(rendered, field.name, expected):
            continue
        extraction = pattern.extract(rendered, field.name)
        mismatches.append(FieldValue(field.name, expected, extraction.text))
    if mismatches:
        errors.append(VerificationError.field_value(mismatches))

    if configuration.fail_on_excluded_fields:
        leaked: list[FieldValue] = []
        for field in spec.excluded:
            extraction = pattern.extract(rendered, field.name)
            if extraction.found:
                leaked.append(FieldValue(field.name, None, extraction.text))
        if leaked:
            errors.append(VerificationError.excluded_field(leaked))

    logger.debug(
        "repr_verifier_class_verified",
        target=qualified_name(spec.target),
        fields=list(spec.field_names),
        errors=[item.kind.value for item in errors],
    )
    return ClassResult(target=spec.target, rendered=rendered, errors=tuple(errors))


__all__ = ["resolve_specs", "run_verification", "verify_class"]
