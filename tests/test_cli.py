"""Tests for cli/pathforge.py — headless import and worker-thread writes."""

import asyncio
import json
import logging
import time
from datetime import datetime

import pytest
import yaml

from cli.pathforge import PathForgeApp, main
from core.roadmap import load_roadmap


@pytest.fixture(autouse=True)
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers, level = list(root_logger.handlers), root_logger.level
    yield
    root_logger.handlers = handlers
    root_logger.setLevel(level)


def test_import_roadmap_headless(workspace, tmp_path, capsys):
    src = tmp_path / "generated.json"
    src.write_text(json.dumps({"title": "SQL", "dailyPlans": [{"day": 1, "title": "SELECT"}]}), encoding="utf-8")

    main(["--roadmap", str(src), "--no-ui"])

    out = capsys.readouterr().out
    assert "Imported 'SQL' (1 daily plans)" in out
    assert "streak 1 (best 5)" in out
    assert load_roadmap(workspace).title == "SQL"


def test_import_rejects_non_object(workspace, tmp_path):
    src = tmp_path / "bad.json"
    src.write_text("[]", encoding="utf-8")
    with pytest.raises(SystemExit):
        main(["--roadmap", str(src), "--no-ui"])
    assert load_roadmap(workspace).title == "Zero to React"


def _today_key():
    return datetime.now().date().isoformat()


def test_slow_reconcile_hook_does_not_block_startup(workspace):
    (workspace / "planner" / "hooks.yaml").write_text(
        yaml.dump({"post_reconcile": ["sleep 3"]}), encoding="utf-8"
    )

    async def scenario():
        app = PathForgeApp(workspace)
        started = time.monotonic()
        async with app.run_test() as pilot:
            mounted_after = time.monotonic() - started
            await app.workers.wait_for_complete()
            await pilot.pause()
        return app, mounted_after

    app, mounted_after = asyncio.run(scenario())
    assert mounted_after < 2.5
    assert app.store.load().last_visit_date == _today_key()


def test_concurrent_writes_are_not_lost(workspace):
    async def scenario():
        app = PathForgeApp(workspace)
        async with app.run_test() as pilot:
            await app.workers.wait_for_complete()
            app._toggle("d3-t1", True, 2)
            app._save_reminder("19:30")
            app._save_minutes("25", 2)
            await app.workers.wait_for_complete()
            await pilot.pause()
        return app

    state = asyncio.run(scenario()).store.load()
    today = state.progress_for(_today_key())
    assert today.completed_task_ids == ["d3-t1"]
    assert today.completion_percentage == 50
    assert today.time_spent_minutes == 25
    assert state.reminder_time == "19:30"
