"""submonkey.builtins.gate -- PermissionGate implementation."""

import submonkey
from submonkey.errors import PermissionDenied
from submonkey.gate import PermissionGate
from submonkey.runtime.targets import load_target, qualified_name


@submonkey.impl(PermissionGate.authorize)
def authorize(self: PermissionGate, target) -> str:
    name = qualified_name(target)
    if name not in self.allowed:
        self.allowed.append(name)
    if isinstance(target, type):
        self.classes[name] = target
    return name


@submonkey.impl(PermissionGate.check)
def check(self: PermissionGate, target) -> str:
    name = qualified_name(target)
    if name not in self.allowed:
        raise PermissionDenied(f"Not allowed to patch {name}")
    return name


@submonkey.impl(PermissionGate.is_allowed)
def is_allowed(self: PermissionGate, target) -> bool:
    if not target:
        return False
    return qualified_name(target) in self.allowed


@submonkey.impl(PermissionGate.lookup)
def lookup(self: PermissionGate, target) -> type:
    name = self.check(target)
    if isinstance(target, type):
        return target
    cls = self.classes.get(name)
    if cls is None:
        # raises TargetNotLoaded for paths that do not import
        cls = load_target(target)
        self.classes[name] = cls
    return cls
