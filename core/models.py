"""Typed dataclasses for the PathForge data model.

All models use from_dict/to_dict for JSON serialization.
camelCase in JSON is mapped to snake_case in Python.
Unknown keys are ignored; missing or mistyped keys use defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _dicts(value: Any) -> list[dict[str, Any]]:
    return [v for v in _list(value) if isinstance(v, dict)]


# ── Progress ──────────────────────────────────────────────────


@dataclass
class JournalEntry:
    date: str = ""
    content: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> JournalEntry:
        return cls(date=str(d.get("date", "")), content=str(d.get("content", "")))

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date, "content": self.content}


@dataclass
class DailyProgress:
    """One day's snapshot: which tasks were done, percentage, minutes."""

    date: str = ""
    completed_task_ids: list[str] = field(default_factory=list)
    completion_percentage: int = 0
    time_spent_minutes: int = 0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> DailyProgress:
        return cls(
            date=str(d.get("date", "")),
            completed_task_ids=[str(t) for t in _list(d.get("completedTaskIds"))],
            completion_percentage=_int(d.get("completionPercentage")),
            time_spent_minutes=_int(d.get("timeSpentMinutes")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "completedTaskIds": list(self.completed_task_ids),
            "completionPercentage": self.completion_percentage,
            "timeSpentMinutes": self.time_spent_minutes,
        }


@dataclass
class ProgressState:
    """The single persisted progress record for a workspace."""

    roadmap_start_date: str = ""
    last_visit_date: str | None = None
    current_streak: int = 1
    max_streak: int = 1
    reminder_time: str | None = None
    journal: list[JournalEntry] = field(default_factory=list)
    history: list[DailyProgress] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ProgressState:
        if not d or not isinstance(d, dict):
            return cls()
        last_visit = d.get("lastVisitDate")
        reminder = d.get("reminderTime")
        current = max(0, _int(d.get("currentStreak"), 1))
        return cls(
            roadmap_start_date=str(d.get("roadmapStartDate") or ""),
            last_visit_date=str(last_visit) if last_visit else None,
            current_streak=current,
            max_streak=max(current, _int(d.get("maxStreak"), current)),
            reminder_time=str(reminder) if reminder else None,
            journal=[JournalEntry.from_dict(e) for e in _dicts(d.get("journal"))],
            history=[DailyProgress.from_dict(h) for h in _dicts(d.get("history"))],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "roadmapStartDate": self.roadmap_start_date,
            "lastVisitDate": self.last_visit_date,
            "currentStreak": self.current_streak,
            "maxStreak": self.max_streak,
            "reminderTime": self.reminder_time,
            "journal": [e.to_dict() for e in self.journal],
            "history": [h.to_dict() for h in self.history],
        }

    def progress_for(self, day: str) -> DailyProgress | None:
        for entry in self.history:
            if entry.date == day:
                return entry
        return None


# ── Roadmap (AI-generated, read-only) ─────────────────────────


@dataclass
class Task:
    id: str = ""
    description: str = ""
    completed: bool = False  # ignored; completion is tracked per day
    duration: str | None = None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Task:
        duration = d.get("duration")
        return cls(
            id=str(d.get("id") or ""),
            description=str(d.get("description", "")),
            completed=bool(d.get("completed", False)),
            duration=str(duration) if duration else None,
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "description": self.description,
            "completed": self.completed,
        }
        if self.duration:
            d["duration"] = self.duration
        return d


@dataclass
class Resource:
    title: str = ""
    url: str = ""
    type: str = ""  # article, video, course, tool

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Resource:
        return cls(
            title=str(d.get("title", "")),
            url=str(d.get("url", "")),
            type=str(d.get("type", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "url": self.url, "type": self.type}


@dataclass
class DailyPlan:
    day: int = 0
    title: str = ""
    focus: str = ""
    tasks: list[Task] = field(default_factory=list)
    resources: list[Resource] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> DailyPlan:
        return cls(
            day=_int(d.get("day")),
            title=str(d.get("title", "")),
            focus=str(d.get("focus", "")),
            tasks=[Task.from_dict(t) for t in _dicts(d.get("tasks"))],
            resources=[Resource.from_dict(r) for r in _dicts(d.get("resources"))],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "title": self.title,
            "focus": self.focus,
            "tasks": [t.to_dict() for t in self.tasks],
            "resources": [r.to_dict() for r in self.resources],
        }


@dataclass
class WeeklySummary:
    week: int = 0
    theme: str = ""
    objectives: list[str] = field(default_factory=list)
    checkpoint: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> WeeklySummary:
        return cls(
            week=_int(d.get("week")),
            theme=str(d.get("theme", "")),
            objectives=[str(o) for o in _list(d.get("objectives"))],
            checkpoint=str(d.get("checkpoint", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "week": self.week,
            "theme": self.theme,
            "objectives": list(self.objectives),
            "checkpoint": self.checkpoint,
        }


@dataclass
class Phase:
    name: str = ""
    duration: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Phase:
        return cls(
            name=str(d.get("name", "")),
            duration=str(d.get("duration", "")),
            description=str(d.get("description", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "duration": self.duration, "description": self.description}


@dataclass
class Challenge:
    problem: str = ""
    solution: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Challenge:
        return cls(problem=str(d.get("problem", "")), solution=str(d.get("solution", "")))

    def to_dict(self) -> dict[str, Any]:
        return {"problem": self.problem, "solution": self.solution}


@dataclass
class Roadmap:
    title: str = ""
    overview: str = ""
    current_level_estimate: str = ""
    timeline_estimate: str = ""
    phases: list[Phase] = field(default_factory=list)
    daily_plans: list[DailyPlan] = field(default_factory=list)
    weekly_summaries: list[WeeklySummary] = field(default_factory=list)
    predicted_challenges: list[Challenge] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Roadmap:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            title=str(d.get("title", "")),
            overview=str(d.get("overview", "")),
            current_level_estimate=str(d.get("currentLevelEstimate", "")),
            timeline_estimate=str(d.get("timelineEstimate", "")),
            phases=[Phase.from_dict(p) for p in _dicts(d.get("phases"))],
            daily_plans=[DailyPlan.from_dict(p) for p in _dicts(d.get("dailyPlans"))],
            weekly_summaries=[WeeklySummary.from_dict(w) for w in _dicts(d.get("weeklySummaries"))],
            predicted_challenges=[Challenge.from_dict(c) for c in _dicts(d.get("predictedChallenges"))],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "overview": self.overview,
            "currentLevelEstimate": self.current_level_estimate,
            "timelineEstimate": self.timeline_estimate,
            "phases": [p.to_dict() for p in self.phases],
            "dailyPlans": [p.to_dict() for p in self.daily_plans],
            "weeklySummaries": [w.to_dict() for w in self.weekly_summaries],
            "predictedChallenges": [c.to_dict() for c in self.predicted_challenges],
        }
