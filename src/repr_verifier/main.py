"""Executable CLI entrypoint for ``repr_verifier``."""

from __future__ import annotations

import sys
import traceback
from enum import IntEnum
from typing import TYPE_CHECKING

from repr_verifier.exceptions import ConfigurationError, VerificationFailure

if TYPE_CHECKING:
    from collections.abc import Sequence


class ExitCode(IntEnum):
    """Deterministic process exit-code contract."""

    SUCCESS = 0
    VERIFICATION_FAILED = 1
    CONFIG_ERROR = 2
    INTERNAL_ERROR = 4


def cli_entrypoint(argv: Sequence[str] | None = None) -> int:
    """Entrypoint used by ``python -m repr_verifier`` and the console script."""

    from repr_verifier.cli import run_cli

    try:
        return run_cli(argv)
    except SystemExit as exc:
        # argparse exits with 0 for --help and 2 for usage errors.
        if exc.code is None:
            return int(ExitCode.SUCCESS)
        return exc.code if isinstance(exc.code, int) else int(ExitCode.INTERNAL_ERROR)
    except VerificationFailure as exc:
        sys.stderr.write(f"{str(exc).strip()}\n")
        return int(ExitCode.VERIFICATION_FAILED)
    except ConfigurationError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return int(ExitCode.CONFIG_ERROR)
    except Exception:  # noqa: BLE001 - CLI boundary.
        traceback.print_exc(file=sys.stderr)
        return int(ExitCode.INTERNAL_ERROR)


__all__ = ["ExitCode", "cli_entrypoint"]
