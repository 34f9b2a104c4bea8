"""submonkey.hierarchy -- HierarchyExtender declaration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import submonkey

if TYPE_CHECKING:
    from submonkey.runtime.targets import TypeIdentifier


class HierarchyExtender(submonkey.Object):
    """Loads target classes and makes them the bases of a caller class.

    Extension is additive and cannot be undone; it is independent of the
    patching path.

    Attributes:
        known: Qualified name -> class, for every target loaded so far.
        records: Caller qualified name -> list of base classes it was given.
    """

    known: dict
    records: dict

    def extend(
        self, caller: type | None, targets: list[TypeIdentifier]
    ) -> list[type]:
        """Load *targets* and set them as *caller*'s bases.

        Targets that fail to load produce a ``TargetLoadWarning`` and are
        skipped. A previously recorded base list for *caller* is replaced.

        Args:
            caller: Class whose ``__bases__`` are rewritten, or None to only
                load the targets.
            targets: Classes or dotted paths.

        Returns:
            The loaded target classes, in order.

        When Python rejects the new bases (for instance a caller whose only
        base is ``object``), a ``HierarchyWarning`` is emitted and *caller*
        keeps its bases and its previous record.
        """
        ...

    def get_record(self, caller: TypeIdentifier) -> list[type]:
        """Return the base classes *caller* was extended with (empty if none)."""
        ...
