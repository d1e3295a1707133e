"""Command-line interface router for repr-verifier."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Final

import structlog

from repr_verifier.config import load_settings
from repr_verifier.discovery import resolve_target
from repr_verifier.rendering import NameStyle, RenderMethod
from repr_verifier.report import render_report
from repr_verifier.verifier import ReprVerifier

_LOG_LEVELS: Final[dict[str, int]] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass(frozen=True, slots=True)
class CLIError(RuntimeError):
    """Typed CLI failure with an explicit process exit code."""

    message: str
    exit_code: int = 2

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for ``python -m repr_verifier``."""

    parser = argparse.ArgumentParser(
        prog="repr-verifier",
        description="Verify that classes render every field in their string representation.",
    )
    parser.add_argument(
        "targets",
        nargs="+",
        metavar="TARGET",
        help="package.module:ClassName, or package.module for every class it defines",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Settings file (pyproject.toml, .toml, .yaml); defaults to the nearest pyproject.toml",
    )
    parser.add_argument(
        "--class-name",
        choices=[item.value for item in NameStyle],
        default=None,
        help="Require the qualified or simple class name in the rendered text",
    )
    parser.add_argument(
        "--hash-code",
        action="store_true",
        default=None,
        help="Require the identity hash in the rendered text",
    )
    parser.add_argument("--null-value", default=None, help="Text expected for None values")
    parser.add_argument(
        "--str",
        dest="render_method",
        action="store_const",
        const=RenderMethod.STR.value,
        default=None,
        help="Verify __str__ instead of __repr__",
    )
    selection = parser.add_mutually_exclusive_group()
    selection.add_argument("--only", nargs="+", default=None, help="Verify only these fields")
    selection.add_argument("--ignore", nargs="+", default=None, help="Skip these fields")
    selection.add_argument("--match", default=None, help="Verify fields whose name matches")
    parser.add_argument(
        "--no-inherited",
        action="store_true",
        help="Do not verify fields declared by base classes",
    )
    parser.add_argument("--json", action="store_true", help="Emit deterministic JSON output")
    parser.add_argument(
        "--log-level",
        choices=sorted(_LOG_LEVELS),
        default="warning",
        help="Minimum level of structured log events written to stderr",
    )
    parser.set_defaults(handler=_cmd_verify)
    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse argv, route to the command handler, and return process exit code."""

    parser = build_parser()
    namespace = parser.parse_args(list(argv) if argv is not None else None)
    try:
        return int(namespace.handler(namespace))
    except CLIError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_verify(args: argparse.Namespace) -> int:
    targets: list[type] = []
    for reference in args.targets:
        targets.extend(resolve_target(reference))
    if not targets:
        raise CLIError("no classes found for the given targets")

    verifier = ReprVerifier(targets, logger=_stderr_logger(args.log_level)).with_settings(
        load_settings(args.config)
    )
    if args.class_name is not None:
        verifier = verifier.with_class_name(args.class_name)
    if args.hash_code:
        verifier = verifier.with_hash_code(True)
    if args.null_value is not None:
        verifier = verifier.with_null_value(args.null_value)
    if args.render_method is not None:
        verifier = verifier.with_render_method(args.render_method)
    if args.no_inherited:
        verifier = verifier.with_inherited_fields(False)
    if args.only is not None:
        verifier = verifier.with_only_these_fields(args.only)
    elif args.ignore is not None:
        verifier = verifier.with_ignored_fields(args.ignore)
    elif args.match is not None:
        verifier = verifier.with_matching_fields(args.match)

    report = verifier.report()
    if args.json:
        print(report.to_json())
    elif report.passed:
        print(f"ok: {len(report.results)} class(es) verified")
    else:
        print(render_report(report))
    return 0 if report.passed else 1


def _stderr_logger(level_name: str) -> Any:
    # stdout carries the report, so log events go to stderr.
    return structlog.wrap_logger(
        structlog.PrintLogger(sys.stderr),
        wrapper_class=structlog.make_filtering_bound_logger(_LOG_LEVELS[level_name]),
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
    )


__all__ = ["CLIError", "build_parser", "run_cli"]
