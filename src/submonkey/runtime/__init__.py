"""submonkey.runtime - Infrastructure layer (ImplLoader, target resolution)."""

from submonkey.runtime.impl_loader import ImplLoader
from submonkey.runtime.targets import load_target, qualified_name

__all__ = ["ImplLoader", "load_target", "qualified_name"]
