"""submonkey.gate -- PermissionGate declaration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import submonkey

if TYPE_CHECKING:
    from submonkey.runtime.targets import TypeIdentifier


class PermissionGate(submonkey.Object):
    """Allow-list of the classes submonkey may mutate.

    The list only ever grows: classes are authorized at setup time and stay
    authorized for the lifetime of the gate. Every modifier and ``unpatch``
    consults it before touching a class.

    Attributes:
        allowed: Qualified names of authorized classes, in authorization order.
        classes: Qualified name -> loaded class, for the classes seen so far.
    """

    allowed: list
    classes: dict

    def authorize(self, target: TypeIdentifier) -> str:
        """Authorize a class (or dotted path) for patching. Idempotent.

        Returns:
            The qualified name that was authorized.
        """
        ...

    def check(self, target: TypeIdentifier) -> str:
        """Fail unless *target* is authorized.

        Returns:
            The qualified name of *target*.

        Raises:
            ClassNotSpecified: If *target* is empty.
            PermissionDenied: If *target* was never authorized.
        """
        ...

    def is_allowed(self, target: TypeIdentifier) -> bool:
        """Non-raising variant of ``check``."""
        ...

    def lookup(self, target: TypeIdentifier) -> type:
        """Check *target* and return the class it names, loading it on demand.

        Raises:
            PermissionDenied: If *target* was never authorized.
            TargetNotLoaded: If a dotted path cannot be imported.
        """
        ...
