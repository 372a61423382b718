"""layoutiq: heuristic spatial layout intelligence for on-screen elements."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from layoutiq.core.executor import LayoutExecutor as LayoutExecutor
    from layoutiq.sdk.scene import SceneRunner as SceneRunner

# Resolved on first attribute access so ``import layoutiq`` stays cheap for the CLI.
_LAZY_EXPORTS = {
    "LayoutExecutor": "layoutiq.core.executor",
    "SceneRunner": "layoutiq.sdk.scene",
}


def __getattr__(name: str) -> object:
    try:
        module_path = _LAZY_EXPORTS[name]
    except KeyError:
        raise AttributeError(f"module 'layoutiq' has no attribute {name!r}") from None
    return getattr(importlib.import_module(module_path), name)
