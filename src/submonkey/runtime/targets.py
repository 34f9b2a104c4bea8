"""submonkey.runtime.targets -- Type identifiers and on-demand class loading."""

from __future__ import annotations

import importlib
import sys
from typing import Union

from submonkey.errors import ClassNotSpecified, TargetNotLoaded

TypeIdentifier = Union[type, str]


def qualified_name(target: TypeIdentifier) -> str:
    """Return the ``module.QualName`` identifier for a class or dotted path.

    ``"pkg.mod:Sample"`` and ``"pkg.mod.Sample"`` both become
    ``"pkg.mod.Sample"``.

    Raises:
        ClassNotSpecified: If *target* is empty or ``None``.
        TypeError: If *target* is neither a class nor a string.
    """
    if target is None or target == "":
        raise ClassNotSpecified("No class was specified")
    if isinstance(target, type):
        return f"{target.__module__}.{target.__qualname__}"
    if isinstance(target, str):
        module_path, sep, attr_path = target.strip().partition(":")
        if sep:
            return f"{module_path}.{attr_path}"
        return module_path
    raise TypeError(f"Expected a class or a dotted path, not {type(target).__name__}")


def _import(module_path: str):
    if module_path in sys.modules:
        return sys.modules[module_path]
    try:
        return importlib.import_module(module_path)
    except ImportError:
        raise
    except Exception as e:
        # the module exists but failed while executing
        raise TargetNotLoaded(f"Importing {module_path} failed: {e!r}") from e


def _walk(obj, attr_path: str, target: str):
    for attr_name in attr_path.split("."):
        try:
            obj = getattr(obj, attr_name)
        except AttributeError as e:
            raise TargetNotLoaded(f"Cannot resolve {target}: {e}") from e
    return obj


def load_target(target: TypeIdentifier) -> type:
    """Resolve a type identifier to a loaded class, importing on demand.

    Classes are returned unchanged. ``"pkg.mod:Sample"`` imports ``pkg.mod``
    and walks ``Sample``; ``"pkg.mod.Sample"`` tries the longest importable
    module prefix first and walks the remaining attributes.

    Raises:
        TargetNotLoaded: If nothing importable matches, or the resolved
            object is not a class.
    """
    if isinstance(target, type):
        return target
    name = qualified_name(target)
    module_path, sep, attr_path = target.strip().partition(":")

    if sep:
        try:
            obj = _walk(_import(module_path), attr_path, name)
        except TargetNotLoaded:
            raise
        except ImportError as e:
            raise TargetNotLoaded(f"Cannot import {module_path}: {e}") from e
    else:
        parts = name.split(".")
        obj = None
        errors = []
        for i in range(len(parts) - 1, 0, -1):
            prefix = ".".join(parts[:i])
            try:
                module = _import(prefix)
            except TargetNotLoaded:
                raise
            except ImportError as e:
                errors.append(f"{prefix}: {e}")
                continue
            obj = _walk(module, ".".join(parts[i:]), name)
            break
        if obj is None:
            detail = "; ".join(errors) or "no module path given"
            raise TargetNotLoaded(f"Cannot load {name} ({detail})")

    if not isinstance(obj, type):
        raise TargetNotLoaded(f"{name} is not a class")
    return obj
