"""submonkey.builtins.registry -- PatchRegistry implementation."""

import logging
import warnings

import submonkey
from submonkey.errors import NoSuchPatch, NoSuchPatchError
from submonkey.registry import PatchRecord, PatchRegistry, Snapshot
from submonkey.runtime.targets import qualified_name

logger = logging.getLogger(__name__)


@submonkey.impl(PatchRegistry.capture_if_absent)
def capture_if_absent(
    self: PatchRegistry, key, implementation, owned: bool, verb: str
) -> bool:
    with self.lock:
        if key in self.snapshots:
            return False
        self.snapshots[key] = Snapshot(implementation=implementation, owned=owned, verb=verb)
    logger.debug("Captured original %s.%s (%s)", qualified_name(key[0]), key[1], verb)
    return True


@submonkey.impl(PatchRegistry.restore)
def restore(self: PatchRegistry, key):
    snapshot = self.snapshots.get(key)
    if snapshot is not None:
        return snapshot

    cls, name = key
    message = (
        f"Could not restore {name} in {qualified_name(cls)} "
        f"because no patch was ever applied to it"
    )
    if self.strict:
        raise NoSuchPatchError(message)
    logger.warning(message)
    warnings.warn(message, NoSuchPatch, stacklevel=3)
    return None


@submonkey.impl(PatchRegistry.record)
def record(self: PatchRegistry, cls: type, name: str, verb: str) -> PatchRecord:
    key = (cls, name)
    with self.lock:
        version = self.versions.get(key, 0) + 1
        self.versions[key] = version
        entry = PatchRecord(
            target=qualified_name(cls),
            name=name,
            verb=verb,
            version=version,
        )
        self.records.append(entry)
    return entry


@submonkey.impl(PatchRegistry.get_snapshot)
def get_snapshot(self: PatchRegistry, key):
    return self.snapshots.get(key)


@submonkey.impl(PatchRegistry.get_history)
def get_history(self: PatchRegistry, target=None, name=None) -> list:
    return [
        entry for entry in self.records
        if (target is None or entry.target == target)
        and (name is None or entry.name == name)
    ]


@submonkey.impl(PatchRegistry.get_version)
def get_version(self: PatchRegistry, key) -> int:
    return self.versions.get(key, 0)


@submonkey.impl(PatchRegistry.keys)
def keys(self: PatchRegistry) -> list:
    return list(self.snapshots)


@submonkey.impl(PatchRegistry.clear)
def clear(self: PatchRegistry) -> None:
    with self.lock:
        self.snapshots.clear()
        self.records.clear()
        self.versions.clear()
