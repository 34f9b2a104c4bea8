"""submonkey.dispatch -- DispatchTable declaration."""

from __future__ import annotations

from typing import Any

import submonkey


class DispatchTable(submonkey.Object):
    """Read and write method slots on a class.

    A class's own ``__dict__`` is its table; lookups fall back along
    ``__mro__``. Values are returned raw, so ``staticmethod`` and
    ``classmethod`` wrappers are visible to callers.
    """

    def resolve(self, cls: type, name: str) -> tuple[type, Any] | None:
        """Find *name* on *cls* or one of its bases.

        Returns:
            ``(owner, implementation)`` where ``owner`` is the class whose
            ``__dict__`` holds the slot, or None if nothing resolves.
        """
        ...

    def owns(self, cls: type, name: str) -> bool:
        """Whether *cls* itself (not a base) defines *name*."""
        ...

    def install(self, cls: type, name: str, implementation: Any) -> None:
        """Make *implementation* the slot for *name* in *cls*'s own table."""
        ...

    def remove(self, cls: type, name: str) -> bool:
        """Drop *cls*'s own slot for *name*. Returns False if it had none."""
        ...
