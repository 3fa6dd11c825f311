"""Tests for core/store.py — load/save and recovery from bad payloads."""

import json
import logging
from datetime import datetime

from core.store import ProgressStore, default_state


NOW = datetime(2026, 2, 11, 8, 0, 0)


def test_load_existing(store):
    state = store.load()
    assert state.current_streak == 3
    assert state.last_visit_date == "2026-02-10"
    assert len(state.history) == 2


def test_load_missing_returns_default(fresh_store):
    state = fresh_store.load(NOW)
    assert state.current_streak == 1
    assert state.max_streak == 1
    assert state.roadmap_start_date == "2026-02-11T08:00:00"
    assert state.last_visit_date is None
    assert not fresh_store.path.exists()


def test_load_corrupt_returns_default(store, caplog):
    store.path.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="core.store"):
        state = store.load(NOW)
    assert state.current_streak == 1
    assert state.history == []
    assert "Unreadable progress record" in caplog.text


def test_load_non_object_returns_default(store):
    store.path.write_text("[1, 2, 3]", encoding="utf-8")
    assert store.load(NOW).journal == []


def test_load_blank_file_returns_default(store):
    store.path.write_text("   \n", encoding="utf-8")
    assert store.load(NOW).current_streak == 1


def test_save_overwrites_whole_record(store):
    state = store.load()
    state.journal = []
    state.reminder_time = "07:15"
    store.save(state)

    raw = json.loads(store.path.read_text(encoding="utf-8"))
    assert raw["journal"] == []
    assert raw["reminderTime"] == "07:15"
    assert raw["currentStreak"] == 3


def test_save_creates_parent_dirs(fresh_store):
    fresh_store.save(default_state(NOW))
    assert fresh_store.path.exists()
    assert fresh_store.load().roadmap_start_date == "2026-02-11T08:00:00"


def test_store_root(workspace, store):
    assert store.root == workspace
