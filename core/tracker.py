"""Task-completion tracker: today's completed task ids, percentage, minutes.

upsert_today runs on every checkbox toggle and time edit, so it does one
load and one save and nothing else.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable

from core.dates import today_key
from core.models import DailyProgress, ProgressState
from core.store import ProgressStore

logger = logging.getLogger(__name__)


def completion_percentage(done: int, total: int) -> int:
    """round(100 * done / total), 0 when the day has no tasks."""
    if total <= 0:
        return 0
    return int(round(100 * done / total))


def _non_negative(value: Any) -> int:
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


def upsert_today(
    store: ProgressStore,
    task_ids: Iterable[str],
    percentage: int,
    minutes: int,
    now: datetime | None = None,
) -> ProgressState:
    """Replace (or insert) today's history record with the given values."""
    state = store.load(now)
    today = today_key(now)

    entry = DailyProgress(
        date=today,
        completed_task_ids=list(dict.fromkeys(str(t) for t in task_ids)),
        completion_percentage=min(100, _non_negative(percentage)),
        time_spent_minutes=_non_negative(minutes),
    )
    state.history = [h for h in state.history if h.date != today]
    state.history.append(entry)
    store.save(state)

    logger.debug("Progress %s: %d tasks, %d%%, %d min", today,
                 len(entry.completed_task_ids), entry.completion_percentage, entry.time_spent_minutes)
    return state


def today_progress(state: ProgressState, now: datetime | None = None) -> DailyProgress:
    """Today's record, or an empty one (no record means zero progress)."""
    today = today_key(now)
    entry = state.progress_for(today)
    if entry is None:
        return DailyProgress(date=today)
    return entry


# ── Checklist interactions ────────────────────────────────────


def toggle_task(
    store: ProgressStore,
    task_id: str,
    total_tasks: int,
    now: datetime | None = None,
) -> ProgressState:
    """Flip one task id in today's completed set."""
    current = today_progress(store.load(now), now)
    ids = list(current.completed_task_ids)
    if task_id in ids:
        ids.remove(task_id)
    else:
        ids.append(task_id)
    pct = completion_percentage(len(ids), total_tasks)
    return upsert_today(store, ids, pct, current.time_spent_minutes, now)


def set_time_spent(
    store: ProgressStore,
    minutes: Any,
    total_tasks: int,
    now: datetime | None = None,
) -> ProgressState:
    """Replace today's minutes, keeping the completed set."""
    current = today_progress(store.load(now), now)
    ids = current.completed_task_ids
    pct = completion_percentage(len(ids), total_tasks)
    return upsert_today(store, ids, pct, _non_negative(minutes), now)


def reset_today(store: ProgressStore, now: datetime | None = None) -> ProgressState:
    """Clear today's checklist and time."""
    return upsert_today(store, [], 0, 0, now)
