"""Tests for core/hooks.py — hook system."""

import json
from datetime import datetime

import yaml

from core.hooks import fire_hooks, load_hooks_config, run_hooks
from core.journal import submit_reflection
from core.reconcile import reconcile


def _write_hooks(workspace, config):
    config_path = workspace / "planner" / "hooks.yaml"
    config_path.write_text(yaml.dump(config), encoding="utf-8")


def test_run_hooks_no_config(workspace):
    """No hooks.yaml -> no hooks run."""
    results = run_hooks("post_reconcile", {"day": "2026-02-11"}, workspace)
    assert results == []


def test_run_hooks_with_echo(workspace):
    """Test hook that echoes context via stdin."""
    _write_hooks(workspace, {"post_reconcile": ["cat"]})

    results = run_hooks("post_reconcile", {"day": "2026-02-11"}, workspace)
    assert len(results) == 1
    assert results[0]["exit_code"] == 0
    output = json.loads(results[0]["stdout"])
    assert output["day"] == "2026-02-11"


def test_run_hooks_invalid_hook_point(workspace):
    results = run_hooks("invalid_point", {}, workspace)
    assert results == []


def test_run_hooks_timeout(workspace):
    """Test hook timeout protection."""
    _write_hooks(workspace, {"on_reminder_due": [{"command": "sleep 10", "timeout": 1}]})

    results = run_hooks("on_reminder_due", {"reminderTime": "19:30"}, workspace)
    assert len(results) == 1
    assert results[0]["exit_code"] == -1
    assert "timed out" in results[0].get("error", "").lower()


def test_run_hooks_nonzero_exit(workspace):
    _write_hooks(workspace, {"on_roadmap_saved": ["exit 3"]})
    results = run_hooks("on_roadmap_saved", {}, workspace)
    assert results[0]["exit_code"] == 3


def test_load_hooks_config_broken_yaml(workspace):
    (workspace / "planner" / "hooks.yaml").write_text("post_reconcile: [unclosed", encoding="utf-8")
    assert load_hooks_config(workspace) == {}


def test_fire_hooks_never_raises(workspace):
    _write_hooks(workspace, {"post_reconcile": "not a list"})
    fire_hooks("post_reconcile", {}, workspace)


def test_reconcile_fires_post_reconcile(workspace, store):
    out = workspace / "visit.json"
    _write_hooks(workspace, {"post_reconcile": [f"cat > {out}"]})

    reconcile(store, datetime(2026, 2, 11, 8, 0))
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["day"] == "2026-02-11"
    assert payload["streak"] == 4
    assert payload["yesterdayPercentage"] == 50


def test_same_day_reconcile_fires_nothing(workspace, store):
    out = workspace / "visit.json"
    _write_hooks(workspace, {"post_reconcile": [f"cat > {out}"]})

    reconcile(store, datetime(2026, 2, 10, 20, 0))
    assert not out.exists()


def test_journal_entry_hook_receives_entry(workspace, store):
    out = workspace / "entry.json"
    _write_hooks(workspace, {"on_journal_entry": [f"cat > {out}"]})

    submit_reflection(store, "Learned about keys", datetime(2026, 2, 11, 21, 0))
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload == {"date": "2026-02-11", "content": "Learned about keys"}


def test_load_hooks_config_undecodable(workspace):
    (workspace / "planner" / "hooks.yaml").write_bytes(b"post_reconcile: [\xff\xfe]\n")
    assert load_hooks_config(workspace) == {}
