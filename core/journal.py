"""Journal log: newest-first free-text reflections keyed by date."""

from __future__ import annotations

from datetime import datetime

from core.dates import today_key
from core.hooks import fire_hooks
from core.models import JournalEntry, ProgressState
from core.store import ProgressStore


def append_entry(store: ProgressStore, content: str, now: datetime | None = None) -> ProgressState:
    """Prepend a journal entry for today. No de-duplication."""
    state = store.load(now)
    state.journal.insert(0, JournalEntry(date=today_key(now), content=content))
    store.save(state)
    return state


def submit_reflection(
    store: ProgressStore,
    content: str,
    now: datetime | None = None,
) -> ProgressState | None:
    """Caller-side entry point: blank reflections are ignored (returns None)."""
    if not (content or "").strip():
        return None
    state = append_entry(store, content, now)
    fire_hooks("on_journal_entry", state.journal[0].to_dict(), store.root)
    return state
