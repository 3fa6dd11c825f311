"""Workspace root and path helpers for PathForge.

All data lives under ``<root>/planner/``. The root comes from the
``PATHFORGE_ROOT`` environment variable and defaults to ``~/pathforge``.
"""

from __future__ import annotations

import os
from pathlib import Path


def workspace_root() -> Path:
    """Get the workspace root directory (contains planner/)."""
    return Path(
        os.environ.get("PATHFORGE_ROOT", str(Path.home() / "pathforge"))
    ).expanduser().resolve()


# ── Path helpers ──────────────────────────────────────────────

def progress_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "planner" / "progress.json"


def roadmap_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "planner" / "roadmap.json"


def settings_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "planner" / "settings.yaml"


def hooks_config_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "planner" / "hooks.yaml"
