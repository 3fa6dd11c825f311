"""Shared test fixtures for PathForge tests."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
import yaml

from core.store import ProgressStore


ROADMAP = {
    "title": "Zero to React",
    "overview": "Build production React apps in eight weeks.",
    "currentLevelEstimate": "Beginner",
    "timelineEstimate": "8 weeks",
    "phases": [
        {"name": "Foundations", "duration": "2 weeks", "description": "JS + JSX basics"},
    ],
    "dailyPlans": [
        {
            "day": 1,
            "title": "Modern JavaScript",
            "focus": "ES modules and arrow functions",
            "tasks": [
                {"id": "d1-t1", "description": "Read the MDN modules guide", "completed": False},
                {"id": "d1-t2", "description": "Rewrite 3 functions as arrows", "completed": False},
                {"id": "d1-t3", "description": "Quiz yourself on let/const", "completed": False},
                {"id": "d1-t4", "description": "Push notes to GitHub", "completed": False, "duration": "10m"},
            ],
            "resources": [
                {"title": "MDN Modules", "url": "https://developer.mozilla.org/", "type": "article"},
            ],
        },
        {
            "day": 2,
            "title": "JSX",
            "focus": "Rendering lists",
            "tasks": [
                {"id": "d2-t1", "description": "Render a list with keys", "completed": False},
                {"id": "", "description": "Explain reconciliation in your own words", "completed": False},
            ],
            "resources": [],
        },
        {
            "day": 3,
            "title": "State",
            "focus": "useState",
            "tasks": [
                {"id": "d3-t1", "description": "Build a counter", "completed": False},
                {"id": "d3-t2", "description": "Lift state up", "completed": False},
            ],
            "resources": [],
        },
    ],
    "weeklySummaries": [
        {"week": 1, "theme": "Foundations", "objectives": ["JSX", "State"], "checkpoint": "Build a todo app"},
    ],
    "predictedChallenges": [
        {"problem": "Hooks rules", "solution": "Use the eslint plugin"},
    ],
}


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with standard structure."""
    root = tmp_path / "workspace"
    (root / "planner").mkdir(parents=True)

    # Progress: last visit 2026-02-10 with a 3-day streak
    progress = {
        "roadmapStartDate": "2026-02-08T09:00:00",
        "lastVisitDate": "2026-02-10",
        "currentStreak": 3,
        "maxStreak": 5,
        "reminderTime": None,
        "journal": [
            {"date": "2026-02-09", "content": "Arrow functions finally clicked."},
        ],
        "history": [
            {"date": "2026-02-09", "completedTaskIds": ["d1-t1"], "completionPercentage": 25, "timeSpentMinutes": 30},
            {"date": "2026-02-10", "completedTaskIds": ["d2-t1"], "completionPercentage": 50, "timeSpentMinutes": 45},
        ],
    }
    (root / "planner" / "progress.json").write_text(
        json.dumps(progress, indent=2), encoding="utf-8"
    )

    (root / "planner" / "roadmap.json").write_text(
        json.dumps(ROADMAP, indent=2), encoding="utf-8"
    )

    settings = {"log_level": "DEBUG", "reminder_message": "Study time!"}
    (root / "planner" / "settings.yaml").write_text(
        yaml.dump(settings, default_flow_style=False), encoding="utf-8"
    )

    os.environ["PATHFORGE_ROOT"] = str(root)
    yield root
    if "PATHFORGE_ROOT" in os.environ:
        del os.environ["PATHFORGE_ROOT"]


@pytest.fixture
def store(workspace: Path) -> ProgressStore:
    return ProgressStore.for_workspace(workspace)


@pytest.fixture
def fresh_store(tmp_path: Path) -> ProgressStore:
    """A store with no progress.json yet."""
    return ProgressStore(tmp_path / "fresh" / "planner" / "progress.json")
