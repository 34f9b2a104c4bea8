"""submonkey.builtins.monkey -- Modifier verbs implementation."""

import functools
import logging

import submonkey
from submonkey.errors import MethodAlreadyExists, MethodNotFound
from submonkey.monkey import Monkey
from submonkey.registry import UNDEFINED
from submonkey.runtime.targets import load_target, qualified_name

logger = logging.getLogger(__name__)

_DESCRIPTOR_KINDS = (staticmethod, classmethod)


def _as_names(names) -> list:
    """Normalize one name or a sequence of names, dropping duplicates."""
    if isinstance(names, str):
        names = [names]
    names = list(dict.fromkeys(names))
    if not names or not all(isinstance(n, str) and n for n in names):
        raise MethodNotFound("No method name was specified")
    return names


def _unwrap(implementation):
    """Split a slot value into (descriptor kind or None, underlying callable)."""
    if isinstance(implementation, _DESCRIPTOR_KINDS):
        return type(implementation), implementation.__func__
    return None, implementation


def _rewrap(kind, func):
    return kind(func) if kind is not None else func


def _tag(func, verb: str):
    func.__submonkey_verb__ = verb
    return func


def _compose_before(original, code):
    @functools.wraps(original)
    def composed(*args, **kwargs):
        code(*args, **kwargs)
        return original(*args, **kwargs)
    return composed


def _compose_after(original, code):
    @functools.wraps(original)
    def composed(*args, **kwargs):
        result = original(*args, **kwargs)
        extra = code(*args, **kwargs)
        return result if extra is None else extra
    return composed


def _compose_around(original, code):
    @functools.wraps(original)
    def composed(*args, **kwargs):
        return code(original, *args, **kwargs)
    return composed


_COMPOSERS = {
    "before": _compose_before,
    "after": _compose_after,
    "around": _compose_around,
}


def _target_class(self: Monkey, target) -> type:
    """Shared pre-amble: a class must be given and authorized."""
    return self.gate.lookup(target)


def _plan(self: Monkey, verb: str, cls: type, name: str):
    """Validate one name for *verb*. Returns (owner, current implementation)."""
    found = self.dispatch.resolve(cls, name)
    path = f"{qualified_name(cls)}.{name}"

    if verb == "method":
        if found is not None:
            raise MethodAlreadyExists(
                f"The method '{name}' already exists in {qualified_name(cls)}. "
                f"Did you want to 'override' it instead?"
            )
        return None, UNDEFINED

    if found is None:
        if verb == "override":
            raise MethodNotFound(
                f"Method {name} does not exist in {qualified_name(cls)}. "
                f"Perhaps you meant 'method' instead of 'override'?"
            )
        raise MethodNotFound(f"Could not find {name} in the hierarchy for {qualified_name(cls)}")

    owner, current = found
    if verb in _COMPOSERS and not callable(_unwrap(current)[1]):
        raise MethodNotFound(f"{path} is not a method and cannot be wrapped with '{verb}'")
    return owner, current


def _build(verb: str, current, code):
    """Return the slot value to install for *verb* over *current*."""
    kind, original = _unwrap(current)
    if verb == "method":
        return code
    if verb == "override":
        if kind is not None and not isinstance(code, _DESCRIPTOR_KINDS):
            return kind(code)
        return code
    return _rewrap(kind, _tag(_COMPOSERS[verb](original, code), verb))


def _apply(self: Monkey, verb: str, names, code, target) -> None:
    cls = _target_class(self, target)
    if not callable(code) and not isinstance(code, _DESCRIPTOR_KINDS):
        raise TypeError(f"'{verb}' needs a callable, not {type(code).__name__}")
    names = _as_names(names)

    with self.registry.lock:
        # Validate every name before the first slot is touched.
        plans = [(name, *_plan(self, verb, cls, name)) for name in names]
        for name, owner, current in plans:
            implementation = _build(verb, current, code)
            self.registry.capture_if_absent(
                (cls, name), current, owned=owner is cls, verb=verb
            )
            self.dispatch.install(cls, name, implementation)
            entry = self.registry.record(cls, name, verb)
            logger.debug("Applied %s to %s (v%d)", verb, entry.method_path, entry.version)


@submonkey.impl(Monkey.method)
def method(self: Monkey, names, code, target) -> None:
    _apply(self, "method", names, code, target)


@submonkey.impl(Monkey.override)
def override(self: Monkey, names, code, target) -> None:
    _apply(self, "override", names, code, target)


@submonkey.impl(Monkey.before)
def before(self: Monkey, names, code, target) -> None:
    _apply(self, "before", names, code, target)


@submonkey.impl(Monkey.after)
def after(self: Monkey, names, code, target) -> None:
    _apply(self, "after", names, code, target)


@submonkey.impl(Monkey.around)
def around(self: Monkey, names, code, target) -> None:
    _apply(self, "around", names, code, target)


@submonkey.impl(Monkey.unpatch)
def unpatch(self: Monkey, names, target) -> bool:
    cls = _target_class(self, target)
    restored = True

    with self.registry.lock:
        for name in _as_names(names):
            snapshot = self.registry.restore((cls, name))
            if snapshot is None:
                restored = False
                continue
            if snapshot.implementation is UNDEFINED or not snapshot.owned:
                # Created by `method`, or inherited: drop the class's own slot.
                self.dispatch.remove(cls, name)
            else:
                self.dispatch.install(cls, name, snapshot.implementation)
            entry = self.registry.record(cls, name, "unpatch")
            logger.debug("Restored %s (v%d)", entry.method_path, entry.version)

    return restored


@submonkey.impl(Monkey.can)
def can(self: Monkey, name: str, target):
    found = self.dispatch.resolve(load_target(target), name)
    return found[1] if found is not None else None


@submonkey.impl(Monkey.has_snapshot)
def has_snapshot(self: Monkey, name: str, target) -> bool:
    return self.registry.get_snapshot((load_target(target), name)) is not None


@submonkey.impl(Monkey.history)
def history(self: Monkey, target=None, name=None) -> list:
    if target is not None:
        target = qualified_name(target)
    return self.registry.get_history(target=target, name=name)


@submonkey.impl(Monkey.summary)
def summary(self: Monkey) -> str:
    keys = self.registry.keys()
    if not keys:
        message = "[submonkey] No patches applied."
        logger.info(message)
        return message

    lines = ["================ submonkey patch summary ================"]
    for index, (cls, name) in enumerate(keys, start=1):
        snapshot = self.registry.get_snapshot((cls, name))
        target = qualified_name(cls)
        if snapshot.implementation is UNDEFINED:
            origin = "<created>"
        elif snapshot.owned:
            origin = "own"
        else:
            origin = "inherited"
        lines.append(f"{index}. Method  : {target}.{name}")
        lines.append(f"   Original: {origin}")
        lines.append("   Changes :")
        for entry in self.registry.get_history(target=target, name=name):
            lines.append(f"     - v{entry.version:<3} {entry.verb}")
    lines.append("=========================================================")

    message = "\n".join(lines)
    logger.info(message)
    return message
