"""
repr-verifier — exception taxonomy.

File: src/repr_verifier/exceptions.py
Last updated: 2026-10-18

Purpose
- Separate configuration mistakes (caller must fix the setup) from construction
  failures (one class cannot be instantiated) and from the single assertion
  failure raised at the end of ``verify()``.

Functional requirements
- ``ConfigurationError`` is raised at the offending configuration call.
- ``VerificationFailure`` is an ``AssertionError`` so host test runners report
  it as a test failure rather than an error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from repr_verifier.report import VerificationReport


class ReprVerifierError(Exception):
    """Base class for verifier errors that are not assertion failures."""


class ConfigurationError(ReprVerifierError, ValueError):
    """Raised for invalid or conflicting verifier options."""


class InstanceConstructionError(ReprVerifierError, TypeError):
    """Raised when an instance of the target class cannot be created."""

    def __init__(self, target: type, reason: str) -> None:
        self.target = target
        self.reason = reason
        super().__init__(f"cannot construct {target.__qualname__}: {reason}")


class VerificationFailure(AssertionError):
    """Single failure raised by ``verify()`` when any class has errors."""

    def __init__(self, message: str, report: VerificationReport) -> None:
        super().__init__(message)
        self.report = report


__all__ = [
    "ConfigurationError",
    "InstanceConstructionError",
    "ReprVerifierError",
    "VerificationFailure",
]
