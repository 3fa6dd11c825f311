"""Progress store: the only component that touches progress.json.

Reads and writes are whole-record. A missing or unreadable payload is
replaced by a fresh default record; the caller always gets a valid state.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from core.fileio import read_json, write_json_atomic
from core.models import ProgressState
from core.workspace import progress_path

logger = logging.getLogger(__name__)


def default_state(now: datetime | None = None) -> ProgressState:
    """Initial record: streak 1, empty history and journal, no reminder."""
    if now is None:
        now = datetime.now()
    return ProgressState(roadmap_start_date=now.isoformat(timespec="seconds"))


class ProgressStore:
    """Handle on one workspace's persisted progress record."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @classmethod
    def for_workspace(cls, root: Path | None = None) -> ProgressStore:
        return cls(progress_path(root))

    @property
    def root(self) -> Path:
        """Workspace root owning this record (<root>/planner/progress.json)."""
        return self.path.parent.parent

    def load(self, now: datetime | None = None) -> ProgressState:
        try:
            data = read_json(self.path)
        except (OSError, ValueError) as e:
            logger.warning("Unreadable progress record at %s, starting fresh: %s", self.path, e)
            return default_state(now)
        if not data:
            return default_state(now)
        state = ProgressState.from_dict(data)
        if not state.roadmap_start_date:
            state.roadmap_start_date = default_state(now).roadmap_start_date
        return state

    def save(self, state: ProgressState) -> None:
        write_json_atomic(self.path, state.to_dict())

    def __repr__(self) -> str:
        return f"ProgressStore({str(self.path)!r})"
