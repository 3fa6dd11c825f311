"""Imported roadmap storage and today's-plan lookup.

The roadmap is produced by an external AI service and is treated as
untrusted: bad shapes degrade to defaults and every day lookup is clamped.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from core.fileio import read_json, remove_file, write_json_atomic
from core.hooks import fire_hooks
from core.models import DailyPlan, Roadmap
from core.store import ProgressStore
from core.workspace import roadmap_path, workspace_root

logger = logging.getLogger(__name__)


def load_roadmap(root: Path | None = None) -> Roadmap | None:
    """Load planner/roadmap.json. A corrupt file is discarded."""
    path = roadmap_path(root)
    try:
        data = read_json(path)
    except (OSError, ValueError) as e:
        logger.warning("Discarding unreadable roadmap at %s: %s", path, e)
        remove_file(path)
        return None
    if not data:
        return None
    return Roadmap.from_dict(data)


def save_roadmap(
    roadmap: Roadmap | dict[str, Any],
    root: Path | None = None,
    now: datetime | None = None,
) -> Roadmap:
    """Persist an imported roadmap (normalized through the model).

    The first import (no roadmap on disk) starts the journey: the progress
    record's roadmapStartDate is set to now. Re-imports keep the start date.
    """
    if root is None:
        root = workspace_root()
    if isinstance(roadmap, dict):
        roadmap = Roadmap.from_dict(roadmap)
    first_import = load_roadmap(root) is None
    write_json_atomic(roadmap_path(root), roadmap.to_dict())
    if first_import:
        _start_journey(root, now)
    logger.info("Saved roadmap %r with %d daily plans", roadmap.title, len(roadmap.daily_plans))
    fire_hooks("on_roadmap_saved", {
        "title": roadmap.title,
        "dailyPlans": len(roadmap.daily_plans),
    }, root)
    return roadmap


def _start_journey(root: Path, now: datetime | None) -> None:
    if now is None:
        now = datetime.now()
    store = ProgressStore.for_workspace(root)
    state = store.load(now)
    state.roadmap_start_date = now.isoformat(timespec="seconds")
    store.save(state)
    logger.info("Journey started %s", state.roadmap_start_date)


def clear_roadmap(root: Path | None = None) -> bool:
    """Discard the roadmap. Progress (streaks, history, journal) is kept."""
    return remove_file(roadmap_path(root))


def todays_plan(roadmap: Roadmap | None, journey_day: int) -> DailyPlan | None:
    """Plan for the journey day, clamped to the last plan day.

    Falls back to the first plan when no plan carries the clamped day
    number. None only when there are no daily plans at all.
    """
    if roadmap is None or not roadmap.daily_plans:
        return None
    effective = min(journey_day, len(roadmap.daily_plans))
    for plan in roadmap.daily_plans:
        if plan.day == effective:
            return plan
    return roadmap.daily_plans[0]


def plan_task_ids(plan: DailyPlan | None, journey_day: int) -> list[str]:
    """Stable ids for the plan's tasks; blank ids become daily-<day>-<index>."""
    if plan is None:
        return []
    return [task.id or f"daily-{journey_day}-{idx}" for idx, task in enumerate(plan.tasks)]
