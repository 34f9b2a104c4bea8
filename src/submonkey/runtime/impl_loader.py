"""submonkey.runtime.impl_loader -- Discover and load .impl.py files."""

from __future__ import annotations

import importlib.util
import sys
import types
from pathlib import Path


class ImplLoader:
    """Discovers and loads ``.impl.py`` implementation files.

    Implementation files contain ``@impl`` registrations that provide
    concrete implementations for the stub methods declared by the
    component classes (``PermissionGate``, ``PatchRegistry``, ...).

    A file is executed at most once per module name: forwardpy refuses a
    second registration for the same stub, so loading the same file again
    returns the module already in ``sys.modules``.
    """

    def discover(self, package_path: str | Path) -> list[Path]:
        """Scan a directory tree for ``.impl.py`` files.

        Args:
            package_path: Root directory to scan.

        Returns:
            Sorted list of paths to ``.impl.py`` files found.
        """
        root = Path(package_path)
        if not root.is_dir():
            return []
        return sorted(root.rglob("*.impl.py"))

    def load_file(
        self,
        impl_path: str | Path,
        package_root: str | Path,
        base_package: str,
    ) -> types.ModuleType:
        """Load a single ``.impl.py`` file, executing its ``@impl`` registrations.

        Args:
            impl_path: Path to the ``.impl.py`` file.
            package_root: Root directory of the package (used to compute
                the dotted module name).
            base_package: Base package name prefix (e.g. ``"submonkey.builtins"``).

        Returns:
            The loaded module object.
        """
        impl_path = Path(impl_path)
        module_name = self._compute_module_name(impl_path, Path(package_root), base_package)

        existing = sys.modules.get(module_name)
        if existing is not None and getattr(existing, "__file__", None) == str(impl_path):
            return existing

        spec = importlib.util.spec_from_file_location(module_name, str(impl_path))
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load implementation file {impl_path}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            sys.modules.pop(module_name, None)
            raise
        return module

    def load_all(
        self,
        package_path: str | Path,
        base_package: str,
    ) -> list[types.ModuleType]:
        """Discover and load all ``.impl.py`` files under a package directory."""
        package_path = Path(package_path)
        return [
            self.load_file(impl_path, package_path, base_package)
            for impl_path in self.discover(package_path)
        ]

    def _compute_module_name(
        self,
        impl_path: Path,
        package_root: Path,
        base_package: str,
    ) -> str:
        """Convert a file path to a dotted module name.

        Example: ``package_root/sub/foo.impl.py`` with ``base_package="pkg"``
        becomes ``"pkg.sub.foo"``.
        """
        rel = impl_path.relative_to(package_root)
        parts = list(rel.parent.parts)
        stem = rel.stem  # "foo.impl"
        if stem.endswith(".impl"):
            stem = stem[: -len(".impl")]
        parts.append(stem)

        if base_package:
            return base_package + "." + ".".join(parts)
        return ".".join(parts)
