"""Collect the classes defined in a module or package."""

from __future__ import annotations

import enum
import importlib
import inspect
import pkgutil
from collections.abc import Callable
from types import ModuleType

from repr_verifier.exceptions import ConfigurationError

ClassPredicate = Callable[[type], bool]


def discover_classes(
    module: ModuleType | str,
    *,
    recursive: bool = False,
    predicate: ClassPredicate | None = None,
) -> tuple[type, ...]:
    """Classes defined (not merely imported) in ``module``, in source order.

    With ``recursive`` set, submodules of a package are walked in name order.
    Abstract classes and enums are skipped since they cannot be instantiated.
    """

    root = _import(module)
    modules = [root]
    if recursive and hasattr(root, "__path__"):
        walked = pkgutil.walk_packages(root.__path__, f"{root.__name__}.")
        for info in sorted(walked, key=lambda item: item.name):
            modules.append(_import(info.name))

    found: list[type] = []
    for candidate_module in modules:
        for cls in _defined_classes(candidate_module):
            if predicate is not None and not predicate(cls):
                continue
            found.append(cls)
    return tuple(found)


def resolve_target(reference: str) -> tuple[type, ...]:
    """Resolve ``package.module:ClassName`` (or a bare module) to classes."""

    module_name, _, attribute = reference.partition(":")
    if not module_name:
        raise ConfigurationError(f"invalid target reference {reference!r}")
    module = _import(module_name)
    if not attribute:
        return discover_classes(module)

    target: object = module
    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ConfigurationError(f"{module_name} has no attribute {attribute!r}") from exc
    if not isinstance(target, type):
        raise ConfigurationError(f"{reference!r} does not name a class")
    return (target,)


def _import(module: ModuleType | str) -> ModuleType:
    if isinstance(module, ModuleType):
        return module
    if not isinstance(module, str) or not module:
        raise ConfigurationError(f"expected a module or module name, got {module!r}")
    try:
        return importlib.import_module(module)
    except ImportError as exc:
        raise ConfigurationError(f"cannot import module {module!r}: {exc}") from exc


def _defined_classes(module: ModuleType) -> list[type]:
    classes = [
        cls
        for _, cls in inspect.getmembers(module, inspect.isclass)
        if cls.__module__ == module.__name__ and not inspect.isabstract(cls)
    ]
    classes = [cls for cls in classes if not issubclass(cls, enum.Enum)]
    return sorted(classes, key=_source_line)


def _source_line(cls: type) -> tuple[int, str]:
    try:
        return (inspect.getsourcelines(cls)[1], cls.__qualname__)
    except (OSError, TypeError):
        return (0, cls.__qualname__)


__all__ = ["ClassPredicate", "discover_classes", "resolve_target"]
