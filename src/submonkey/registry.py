"""submonkey.registry -- PatchRegistry declaration and its records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple

import submonkey

MethodKey = Tuple[type, str]


class _Undefined:
    """Snapshot value for a slot that did not exist before it was patched."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


@dataclass(frozen=True)
class Snapshot:
    """The implementation a method had before it was first patched."""

    implementation: Any
    owned: bool
    verb: str


@dataclass(frozen=True)
class PatchRecord:
    """Record of a single modifier application or unpatch."""

    target: str
    name: str
    verb: str
    version: int

    @property
    def method_path(self) -> str:
        return f"{self.target}.{self.name}"


class PatchRegistry(submonkey.Object):
    """Remembers the pristine implementation of every patched method.

    Keys are ``(class, method name)``. The first patch of a key stores a
    ``Snapshot``; later patches of the same key leave it untouched, so
    ``unpatch`` always returns to the never-patched behavior. Every
    modifier application is also appended to an audit history.

    Attributes:
        snapshots: ``(class, name)`` -> Snapshot.
        records: Append-only list of PatchRecord.
        versions: ``(class, name)`` -> number of records for that key.
        lock: Re-entrant lock serializing capture and slot installation.
        strict: Raise ``NoSuchPatchError`` instead of warning on a miss.
    """

    snapshots: dict
    records: list
    versions: dict
    lock: Any
    strict: bool

    def capture_if_absent(
        self, key: MethodKey, implementation: Any, owned: bool, verb: str
    ) -> bool:
        """Store *implementation* as the snapshot for *key* unless one exists.

        Returns:
            True if a new snapshot was stored.
        """
        ...

    def restore(self, key: MethodKey) -> Snapshot | None:
        """Return the snapshot for *key*, leaving it in place.

        Emits a ``NoSuchPatch`` warning and returns None when the key was
        never patched (raises ``NoSuchPatchError`` when ``strict``).
        """
        ...

    def record(self, cls: type, name: str, verb: str) -> PatchRecord:
        """Append an audit record for *verb* applied to ``cls.name``."""
        ...

    def get_snapshot(self, key: MethodKey) -> Snapshot | None:
        """Return the snapshot for *key*, or None. Never warns."""
        ...

    def get_history(
        self, target: str | None = None, name: str | None = None
    ) -> list[PatchRecord]:
        """Return audit records, optionally filtered by qualified class name and method."""
        ...

    def get_version(self, key: MethodKey) -> int:
        """Number of recorded applications for *key* (0 if never patched)."""
        ...

    def keys(self) -> list[MethodKey]:
        """Every key that has a snapshot, in first-patch order."""
        ...

    def clear(self) -> None:
        """Forget all snapshots and history. Intended for test teardown."""
        ...
