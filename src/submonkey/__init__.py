"""submonkey - Reversible runtime patching of methods on authorized classes."""

__version__ = "0.1.0"

from submonkey.base import Object
from forwardpy import impl

from submonkey.errors import (
    ClassNotSpecified,
    HierarchyWarning,
    MethodAlreadyExists,
    MethodNotFound,
    MonkeyError,
    MonkeyWarning,
    NoSuchPatch,
    NoSuchPatchError,
    PermissionDenied,
    TargetLoadWarning,
    TargetNotLoaded,
)
from submonkey.main import (
    authorize_and_extend,
    create_monkey,
    load_builtins,
    load_config,
    reset_default_state,
)

__all__ = [
    "Object",
    "impl",
    "authorize_and_extend",
    "create_monkey",
    "load_builtins",
    "load_config",
    "reset_default_state",
    "MonkeyError",
    "PermissionDenied",
    "MethodNotFound",
    "MethodAlreadyExists",
    "ClassNotSpecified",
    "TargetNotLoaded",
    "HierarchyWarning",
    "NoSuchPatchError",
    "MonkeyWarning",
    "NoSuchPatch",
    "TargetLoadWarning",
]
