"""
repr-verifier — verify that a class's string representation renders its fields.

File: src/repr_verifier/__init__.py
Last updated: 2026-10-18

Purpose
- Package root. Exposes the fluent ``ReprVerifier`` entry point plus the types
  callers need to configure it and to inspect failures.

Functional requirements
- Must not have side effects at import time (no settings loading, no logging
  configuration).

Example
    ReprVerifier.for_class(Person).with_class_name(NameStyle.SIMPLE_NAME).verify()
"""

from repr_verifier.catalog import ClassSpec, Field, FieldSelection, SelectionMode
from repr_verifier.config import VerifierSettings, load_settings
from repr_verifier.exceptions import (
    ConfigurationError,
    InstanceConstructionError,
    ReprVerifierError,
    VerificationFailure,
)
from repr_verifier.rendering import NameStyle, RenderMethod
from repr_verifier.report import (
    ClassResult,
    ErrorKind,
    FieldValue,
    VerificationError,
    VerificationReport,
    generate_error_message,
    render_report,
)
from repr_verifier.values import DeterministicValuePolicy, ValuePolicy, ValueProvider
from repr_verifier.verifier import Configuration, ReprVerifier

__version__ = "0.1.0"

__all__ = [
    "ClassResult",
    "ClassSpec",
    "Configuration",
    "ConfigurationError",
    "DeterministicValuePolicy",
    "ErrorKind",
    "Field",
    "FieldSelection",
    "FieldValue",
    "InstanceConstructionError",
    "NameStyle",
    "RenderMethod",
    "ReprVerifier",
    "ReprVerifierError",
    "SelectionMode",
    "ValuePolicy",
    "ValueProvider",
    "VerificationError",
    "VerificationFailure",
    "VerificationReport",
    "VerifierSettings",
    "__version__",
    "generate_error_message",
    "load_settings",
    "render_report",
]
