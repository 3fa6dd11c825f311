"""Daily reconciliation: day rollover detection and streak bookkeeping.

Called once per session start by the hosting UI. Idempotent within a
calendar day: the second call on the same day reads but never writes.

Streak rule on a new day:
- last visit was yesterday -> streak + 1
- anything else (gap of 2+ days, or no visit recorded yet) -> streak = 1
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from core.dates import today_key, yesterday_key
from core.hooks import fire_hooks
from core.models import DailyProgress, ProgressState
from core.store import ProgressStore

logger = logging.getLogger(__name__)

MILESTONE_STREAKS = frozenset({3, 7, 14, 30, 60, 90, 100})


@dataclass
class ReconcileResult:
    state: ProgressState
    is_new_day: bool
    yesterday_stats: DailyProgress | None = None

    def to_dict(self) -> dict:
        return {
            "state": self.state.to_dict(),
            "isNewDay": self.is_new_day,
            "yesterdayStats": self.yesterday_stats.to_dict() if self.yesterday_stats else None,
        }


def reconcile(store: ProgressStore, now: datetime | None = None) -> ReconcileResult:
    """Compare the last visit to today and update the streak if the day rolled over."""
    state = store.load(now)
    today = today_key(now)

    if state.last_visit_date == today:
        return ReconcileResult(state=state, is_new_day=False)
    if state.last_visit_date is not None and state.last_visit_date > today:
        # Clock moved backwards; lastVisitDate never goes back in time.
        logger.warning("Last visit %s is after today %s; leaving state untouched",
                       state.last_visit_date, today)
        return ReconcileResult(state=state, is_new_day=False)

    yesterday = yesterday_key(now)
    previous_visit = state.last_visit_date

    if previous_visit == yesterday:
        state.current_streak += 1
    else:
        state.current_streak = 1
    state.max_streak = max(state.max_streak, state.current_streak)
    state.last_visit_date = today
    store.save(state)

    logger.info(
        "New day %s (last visit %s): streak %d, best %d",
        today, previous_visit or "never", state.current_streak, state.max_streak,
    )

    yesterday_stats = state.progress_for(yesterday)
    fire_hooks("post_reconcile", {
        "day": today,
        "streak": state.current_streak,
        "maxStreak": state.max_streak,
        "yesterdayPercentage": yesterday_stats.completion_percentage if yesterday_stats else None,
    }, store.root)

    return ReconcileResult(state=state, is_new_day=True, yesterday_stats=yesterday_stats)


def new_day_message(result: ReconcileResult) -> str | None:
    """Greeting shown once when the day rolls over."""
    if not result.is_new_day:
        return None
    if result.yesterday_stats is not None:
        pct = result.yesterday_stats.completion_percentage
        return f"New day, new progress! You completed {pct}% of yesterday's tasks."
    return "New day, new progress! Let's keep the momentum going."


def is_milestone(streak: int) -> bool:
    return streak in MILESTONE_STREAKS
