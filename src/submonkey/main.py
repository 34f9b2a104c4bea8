"""submonkey.main -- Assembling gates, registries and Monkey handles."""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Iterable

from submonkey.dispatch import DispatchTable
from submonkey.gate import PermissionGate
from submonkey.hierarchy import HierarchyExtender
from submonkey.monkey import Monkey
from submonkey.registry import PatchRegistry
from submonkey.runtime.impl_loader import ImplLoader
from submonkey.runtime.targets import TypeIdentifier

logger = logging.getLogger(__name__)

_builtins_loaded = False

_DEFAULT_CONFIG_FILE = "submonkey.json"
_DEFAULT_LOG_LEVEL = "WARNING"
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})

# Process-wide state used when no explicit gate/registry is passed.
# Created lazily, lives until the process exits or reset_default_state().
_default_state: dict[str, Any] = {}


def load_builtins() -> None:
    """Load all builtin .impl.py files. Safe to call multiple times."""
    global _builtins_loaded
    if _builtins_loaded:
        return
    builtins_dir = Path(__file__).parent / "builtins"
    loader = ImplLoader()
    loader.load_all(builtins_dir, "submonkey.builtins")
    _builtins_loaded = True


def load_config(path: str | Path = _DEFAULT_CONFIG_FILE) -> dict[str, Any]:
    """Load configuration from submonkey.json (fallback) then environment variables (override).

    submonkey.json format:
        { "env": { "SUBMONKEY_STRICT": "1", "SUBMONKEY_LOG_LEVEL": "DEBUG" } }

    Returns:
        Dict with keys: strict (bool), log_level (str).
    """
    file_env: dict[str, str] = {}
    config_path = Path(path)
    if config_path.exists():
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
            file_env = data.get("env", {})
        except (json.JSONDecodeError, AttributeError):
            pass
        if not isinstance(file_env, dict):
            file_env = {}

    def _get(var_name: str, default: str = "") -> str:
        """Env var > submonkey.json > default."""
        return os.environ.get(var_name) or str(file_env.get(var_name, "")) or default

    return {
        "strict": _get("SUBMONKEY_STRICT").strip().lower() in _TRUE_VALUES,
        "log_level": _get("SUBMONKEY_LOG_LEVEL", _DEFAULT_LOG_LEVEL).strip().upper(),
    }


def create_gate() -> PermissionGate:
    """Create an empty PermissionGate."""
    load_builtins()
    return PermissionGate(allowed=[], classes={})


def create_registry(strict: bool = False) -> PatchRegistry:
    """Create an empty PatchRegistry with its own lock."""
    load_builtins()
    return PatchRegistry(
        snapshots={},
        records=[],
        versions={},
        lock=threading.RLock(),
        strict=strict,
    )


def create_extender() -> HierarchyExtender:
    """Create an empty HierarchyExtender."""
    load_builtins()
    return HierarchyExtender(known={}, records={})


def get_default_state(config: dict[str, Any] | None = None) -> dict[str, Any]:
    """Return the process-wide gate, registry and extender, creating them once."""
    if not _default_state:
        if config is None:
            config = load_config()
        _default_state.update(
            gate=create_gate(),
            registry=create_registry(strict=config["strict"]),
            extender=create_extender(),
        )
    return _default_state


def reset_default_state() -> None:
    """Forget the process-wide state. Handles created earlier keep theirs.

    Intended for test teardown; patches already installed stay installed.
    """
    _default_state.clear()


def create_monkey(
    gate: PermissionGate | None = None,
    registry: PatchRegistry | None = None,
    config: dict[str, Any] | None = None,
) -> Monkey:
    """Create a Monkey handle.

    Missing components fall back to the process-wide default state, so
    handles created without arguments share permissions and snapshots.

    Args:
        gate: PermissionGate to consult.
        registry: PatchRegistry to record snapshots in. An explicit registry
            keeps its own ``strict`` flag; use ``create_registry(strict=...)``.
        config: Result of ``load_config()``; loaded when omitted. Its
            ``strict`` value only takes effect when the process-wide
            registry is first created.

    Returns:
        A ready-to-use Monkey.
    """
    load_builtins()
    if config is None:
        config = load_config()
    logging.getLogger("submonkey").setLevel(config["log_level"])

    if gate is None or registry is None:
        state = get_default_state(config)
        gate = gate if gate is not None else state["gate"]
        registry = registry if registry is not None else state["registry"]

    return Monkey(gate=gate, registry=registry, dispatch=DispatchTable())


def authorize_and_extend(
    caller: type | None,
    targets: Iterable[TypeIdentifier],
    *,
    gate: PermissionGate | None = None,
    registry: PatchRegistry | None = None,
    extender: HierarchyExtender | None = None,
    config: dict[str, Any] | None = None,
) -> Monkey:
    """Authorize *targets* for patching and make them *caller*'s bases.

    Every target is authorized even when it fails to load; loading failures
    only produce a ``TargetLoadWarning``.

    Args:
        caller: Class to extend with the targets, or None.
        targets: Classes or dotted paths to authorize.
        gate: PermissionGate to authorize on (default: process-wide).
        registry: PatchRegistry for the returned handle (default: process-wide).
        extender: HierarchyExtender to use (default: process-wide).
        config: Result of ``load_config()``.

    Returns:
        A Monkey bound to the gate and registry used.
    """
    monkey = create_monkey(gate=gate, registry=registry, config=config)
    if extender is None:
        extender = get_default_state(config)["extender"]

    targets = list(targets)
    for target in targets:
        monkey.gate.authorize(target)
    for cls in extender.extend(caller, targets):
        monkey.gate.authorize(cls)

    logger.debug("Authorized %d target(s) for patching", len(targets))
    return monkey
