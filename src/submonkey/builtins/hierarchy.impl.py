"""submonkey.builtins.hierarchy -- HierarchyExtender implementation."""

import logging
import warnings

import submonkey
from submonkey.errors import HierarchyWarning, TargetLoadWarning, TargetNotLoaded
from submonkey.hierarchy import HierarchyExtender
from submonkey.runtime.targets import load_target, qualified_name

logger = logging.getLogger(__name__)


def _load(self: HierarchyExtender, target):
    name = qualified_name(target)
    cls = self.known.get(name)
    if cls is not None and (not isinstance(target, type) or cls is target):
        return cls
    try:
        cls = load_target(target)
    except TargetNotLoaded as e:
        logger.warning("Could not load %s: %s", name, e)
        warnings.warn(f"Could not load {name}: {e}", TargetLoadWarning, stacklevel=4)
        return None
    self.known[name] = cls
    return cls


@submonkey.impl(HierarchyExtender.extend)
def extend(self: HierarchyExtender, caller, targets) -> list:
    loaded = []
    for target in targets:
        cls = _load(self, target)
        if cls is not None and cls not in loaded:
            loaded.append(cls)

    if caller is None:
        return loaded

    bases = tuple(cls for cls in loaded if cls is not caller)
    if bases:
        try:
            caller.__bases__ = bases
        except TypeError as e:
            # layout or MRO conflict; patching does not depend on extension
            names = ", ".join(qualified_name(b) for b in bases)
            message = f"Cannot extend {qualified_name(caller)} with ({names}): {e}"
            logger.warning(message)
            warnings.warn(message, HierarchyWarning, stacklevel=3)
            return loaded
    self.records[qualified_name(caller)] = list(bases)
    logger.debug("Extended %s with %d base(s)", qualified_name(caller), len(bases))
    return loaded


@submonkey.impl(HierarchyExtender.get_record)
def get_record(self: HierarchyExtender, caller) -> list:
    return list(self.records.get(qualified_name(caller), []))
