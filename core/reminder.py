"""Daily reminder time and the wall-clock check the hosting UI polls.

The stored value is an "HH:MM" string kept verbatim; a malformed value is
never rejected, it just never matches.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from core.hooks import fire_hooks
from core.models import ProgressState
from core.store import ProgressStore

FIRE_WINDOW_SECONDS = 2


def set_reminder(store: ProgressStore, time: str | None) -> ProgressState:
    """Store or clear (None / empty string) the single reminder time."""
    state = store.load()
    state.reminder_time = time or None
    store.save(state)
    fire_hooks("on_reminder_set", {"reminderTime": state.reminder_time}, store.root)
    return state


def get_reminder(store: ProgressStore) -> str | None:
    return store.load().reminder_time


def reminder_due(reminder_time: str | None, now: datetime) -> bool:
    """True during the first seconds of the reminder's minute."""
    if not reminder_time:
        return False
    return now.strftime("%H:%M") == reminder_time and now.second < FIRE_WINDOW_SECONDS


class ReminderWatcher:
    """Polled once a second by the host; fires at most once per minute."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = root
        self._last_fired: str | None = None

    def check(self, reminder_time: str | None, now: datetime | None = None) -> bool:
        if now is None:
            now = datetime.now()
        if not reminder_due(reminder_time, now):
            return False
        minute = now.strftime("%Y-%m-%d %H:%M")
        if minute == self._last_fired:
            return False
        self._last_fired = minute
        fire_hooks("on_reminder_due", {
            "reminderTime": reminder_time,
            "firedAt": now.isoformat(timespec="seconds"),
        }, self.root)
        return True
