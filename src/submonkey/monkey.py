"""submonkey.monkey -- Monkey handle declaration (the modifier verbs)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Sequence, Union

import submonkey

if TYPE_CHECKING:
    from submonkey.dispatch import DispatchTable
    from submonkey.gate import PermissionGate
    from submonkey.registry import PatchRecord, PatchRegistry
    from submonkey.runtime.targets import TypeIdentifier

MethodNames = Union[str, Sequence[str]]


class Monkey(submonkey.Object):
    """Handle exposing the modifier verbs, bound to one gate and one registry.

    Every verb takes a method name (or a list of names), a callable and the
    target class (a class object or a dotted path). Targets must have been
    authorized on ``gate`` first. Each verb either installs on every name
    or raises before touching any slot.

    Wrappers always compose against whatever is live at the time they are
    applied; only the registry's snapshot stays pristine::

        monkey = submonkey.authorize_and_extend(None, [Sample])
        monkey.before("greet", log_call, Sample)
        monkey.after("greet", add_exclaim, Sample)
        monkey.unpatch("greet", Sample)   # back to the original greet

    Attributes:
        gate: PermissionGate consulted before every mutation.
        registry: PatchRegistry holding snapshots and history.
        dispatch: DispatchTable used to read and write slots.
    """

    gate: PermissionGate
    registry: PatchRegistry
    dispatch: DispatchTable

    def method(
        self, names: MethodNames, code: Callable, target: TypeIdentifier
    ) -> None:
        """Create a brand new method on *target*.

        ``unpatch`` afterwards removes the method again.

        Raises:
            MethodAlreadyExists: If *target* already resolves a name,
                directly or through a base class. Use ``override``.
        """
        ...

    def override(
        self, names: MethodNames, code: Callable, target: TypeIdentifier
    ) -> None:
        """Replace an existing method.

        Raises:
            MethodNotFound: If *target* does not resolve a name. Use ``method``.
        """
        ...

    def before(
        self, names: MethodNames, code: Callable, target: TypeIdentifier
    ) -> None:
        """Run *code* with the call's arguments before the current method.

        The return value of *code* is discarded; the call returns what the
        current method returns.
        """
        ...

    def after(
        self, names: MethodNames, code: Callable, target: TypeIdentifier
    ) -> None:
        """Run *code* with the call's arguments after the current method.

        The call returns *code*'s result, or the method's own result when
        *code* returns None.
        """
        ...

    def around(
        self, names: MethodNames, code: Callable, target: TypeIdentifier
    ) -> None:
        """Hand full control of the method to *code*.

        *code* is called as ``code(orig, *args, **kwargs)`` where ``orig``
        is the current implementation; it may call ``orig`` any number of
        times, alter the arguments or the result, or skip it.
        """
        ...

    def unpatch(self, names: MethodNames, target: TypeIdentifier) -> bool:
        """Restore methods to their state before the first patch.

        Returns:
            True if every name was restored. A name that was never patched
            emits a ``NoSuchPatch`` warning and makes the result False.

        Raises:
            PermissionDenied: If *target* was never authorized.
        """
        ...

    def can(self, name: str, target: TypeIdentifier) -> Any:
        """The implementation *target* resolves for *name*, or None."""
        ...

    def has_snapshot(self, name: str, target: TypeIdentifier) -> bool:
        """Whether a snapshot exists for ``target.name``."""
        ...

    def history(
        self, target: TypeIdentifier | None = None, name: str | None = None
    ) -> list[PatchRecord]:
        """Audit records of applied modifiers, optionally filtered."""
        ...

    def summary(self) -> str:
        """Human-readable report of every patched method. Also logged at INFO."""
        ...
