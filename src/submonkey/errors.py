"""submonkey.errors -- Exception and warning taxonomy."""


class MonkeyError(Exception):
    """Base class for every fatal submonkey error."""


class PermissionDenied(MonkeyError):
    """The target class was never authorized for patching."""


class MethodNotFound(MonkeyError, AttributeError):
    """A modifier needs an existing method but the class does not resolve it."""


class MethodAlreadyExists(MonkeyError):
    """``method`` was asked to create a name the class already resolves."""


class ClassNotSpecified(PermissionDenied, MethodNotFound):
    """No target class was given to a modifier."""


class TargetNotLoaded(MonkeyError, ImportError):
    """A dotted path could not be imported or does not name a class."""


class NoSuchPatchError(MonkeyError, LookupError):
    """Raised instead of the ``NoSuchPatch`` warning in strict mode."""


class MonkeyWarning(UserWarning):
    """Base class for soft, non-fatal submonkey failures."""


class NoSuchPatch(MonkeyWarning):
    """``unpatch`` found nothing recorded for the method."""


class TargetLoadWarning(MonkeyWarning):
    """A target class could not be loaded during hierarchy extension."""


class HierarchyWarning(MonkeyWarning):
    """Python rejected a caller's new base classes; its bases are unchanged."""
