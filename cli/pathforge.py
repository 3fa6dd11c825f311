#!/usr/bin/env python3
"""PathForge TUI — daily progress hub for a learning roadmap, powered by Textual."""

from __future__ import annotations

import argparse
import json
import sys
import threading
from datetime import datetime
from pathlib import Path

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.logging import TextualHandler
from textual.widgets import (
    Checkbox,
    DataTable,
    Footer,
    Header,
    Input,
    Label,
    Static,
    TextArea,
)

from core import (
    workspace_root,
    ProgressStore,
    ProgressState,
    DailyPlan,
    load_settings,
    configure_logging,
    reconcile,
    new_day_message,
    is_milestone,
    day_of_journey,
    today_progress,
    toggle_task,
    set_time_spent,
    reset_today,
    submit_reflection,
    set_reminder,
    reminder_due,
    ReminderWatcher,
    load_roadmap,
    save_roadmap,
    todays_plan,
    plan_task_ids,
)


# ── Stylesheet ─────────────────────────────────────────────────

CSS = """
Screen {
    background: $surface;
}

#main-layout {
    height: 1fr;
}

#left-pane {
    width: 2fr;
    min-width: 40;
    border-right: tall $primary-background-darken-2;
    padding: 0 1;
}

#right-pane {
    width: 1fr;
    min-width: 30;
    padding: 0 1;
}

.section-title {
    text-style: bold;
    color: $text;
    margin: 1 0 0 0;
    padding: 0 1;
}

#feedback {
    color: $accent;
    padding: 0 1;
}

.todo-done {
    opacity: 50%;
}

.todo-done Checkbox {
    text-style: strike;
}

#minutes-input, #reminder-input {
    width: 16;
}

#journal-area {
    height: 6;
    min-height: 4;
}

#journal-table {
    height: 1fr;
}
"""


class TaskItem(Horizontal):
    """One checklist row."""

    DEFAULT_CSS = "TaskItem { height: auto; }"

    def __init__(self, task_id: str, label: str, done: bool, **kwargs) -> None:
        super().__init__(**kwargs)
        self.task_id = task_id
        self.item_label = label
        self.item_done = done

    def compose(self) -> ComposeResult:
        yield Checkbox(self.item_label, value=self.item_done)

    def on_mount(self) -> None:
        if self.item_done:
            self.add_class("todo-done")


# ── Main app ───────────────────────────────────────────────────


class PathForgeApp(App):
    """PathForge — daily progress hub."""

    TITLE = "PathForge"
    CSS = CSS
    AUTO_FOCUS = None

    BINDINGS = [
        Binding("j", "focus_journal", "Journal"),
        Binding("ctrl+s", "save_journal", "Save Entry"),
        Binding("x", "reset_today", "Reset Day"),
        Binding("escape", "blur_focus", "Back"),
        Binding("q", "quit_app", "Quit"),
    ]

    def __init__(self, root: Path | None = None) -> None:
        super().__init__()
        self.root = root or workspace_root()
        self.store = ProgressStore.for_workspace(self.root)
        self.settings = load_settings(self.root)
        self.watcher = ReminderWatcher(self.root)
        self._plan: DailyPlan | None = None
        self._task_ids: list[str] = []
        self._day = 1
        self._reminder_time: str | None = None
        self._store_lock = threading.Lock()
        self._reminder_lock = threading.Lock()

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id="feedback")
        yield Horizontal(
            VerticalScroll(
                Label("Today's Checklist", classes="section-title"),
                Static(id="plan-focus"),
                Vertical(id="checklist"),
                Horizontal(
                    Label("Minutes spent "),
                    Input(placeholder="0", type="integer", id="minutes-input"),
                ),
                id="left-pane",
                can_focus=False,
            ),
            Vertical(
                Label("Reflection", classes="section-title"),
                TextArea(id="journal-area"),
                Label("Daily reminder (HH:MM)", classes="section-title"),
                Input(placeholder="19:00", id="reminder-input"),
                Label("Journal", classes="section-title"),
                DataTable(id="journal-table"),
                id="right-pane",
            ),
            id="main-layout",
        )
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#journal-table", DataTable)
        table.add_columns("Date", "Entry")

        self._load_data()
        self._reconcile()
        self.set_interval(self.settings.reminder_poll_seconds, self._check_reminder)

    @work(thread=True)
    def _reconcile(self) -> None:
        """Day rollover in a worker; post_reconcile hooks may be slow."""
        with self._store_lock:
            result = reconcile(self.store)
        self.call_from_thread(self._show_feedback, new_day_message(result) or "")
        self.call_from_thread(self._load_data)

    def _show_feedback(self, message: str) -> None:
        self.query_one("#feedback", Static).update(message)

    def _load_data(self) -> None:
        """Resolve today's plan and populate widgets from the store."""
        state = self.store.load()
        self._day = day_of_journey(state.roadmap_start_date)
        self._plan = todays_plan(load_roadmap(self.root), self._day)
        self._task_ids = plan_task_ids(self._plan, self._day)
        progress = today_progress(state)

        focus = self.query_one("#plan-focus", Static)
        checklist = self.query_one("#checklist", Vertical)
        checklist.remove_children()
        if self._plan is None:
            focus.update("No roadmap yet. Run with --roadmap FILE to import one.")
        else:
            focus.update(f"{self._plan.title}\n{self._plan.focus}")
            done = set(progress.completed_task_ids)
            for task, tid in zip(self._plan.tasks, self._task_ids):
                label = task.description + (f"  ({task.duration})" if task.duration else "")
                checklist.mount(TaskItem(tid, label, tid in done))

        self.query_one("#minutes-input", Input).value = str(progress.time_spent_minutes or "")
        self.query_one("#reminder-input", Input).value = state.reminder_time or ""
        self._reminder_time = state.reminder_time

        table = self.query_one("#journal-table", DataTable)
        table.clear()
        for entry in state.journal:
            table.add_row(entry.date, entry.content)

        self._update_header(state.current_streak, progress.completion_percentage)

    def _update_header(self, streak: int, pct: int) -> None:
        parts = [f"Day {self._day}", f"🔥 {streak}"]
        if is_milestone(streak):
            parts.append("✨")
        parts.append(f"{pct}% done")
        self.sub_title = "  ".join(parts)

    def _refresh_header(self, state: ProgressState) -> None:
        self._update_header(state.current_streak, today_progress(state).completion_percentage)

    # ── Auto-save on every change ──────────────────────────────
    # Store writes run in worker threads and hold _store_lock, so every
    # load-modify-save is serialized and hooks never block the event loop.

    @on(Checkbox.Changed)
    def _on_checkbox_toggle(self, event: Checkbox.Changed) -> None:
        row = event.checkbox.parent
        if not isinstance(row, TaskItem):
            return
        if event.value:
            row.add_class("todo-done")
        else:
            row.remove_class("todo-done")
        self._toggle(row.task_id, event.value, len(self._task_ids))

    @work(thread=True)
    def _toggle(self, task_id: str, checked: bool, total: int) -> None:
        with self._store_lock:
            current = today_progress(self.store.load()).completed_task_ids
            if (task_id in current) == checked:
                return
            state = toggle_task(self.store, task_id, total)
        self.call_from_thread(self._refresh_header, state)

    @on(Input.Submitted, "#minutes-input")
    def _on_minutes(self, event: Input.Submitted) -> None:
        self._save_minutes(event.value or 0, len(self._task_ids))

    @work(thread=True)
    def _save_minutes(self, minutes: str | int, total: int) -> None:
        with self._store_lock:
            state = set_time_spent(self.store, minutes, total)
        self.call_from_thread(self._refresh_header, state)

    @on(Input.Submitted, "#reminder-input")
    def _on_reminder(self, event: Input.Submitted) -> None:
        value = event.value.strip()
        if not value:
            return
        self._reminder_time = value
        self._save_reminder(value)
        self.notify(f"Daily reminder set for {value}", title="Reminder")

    @work(thread=True)
    def _save_reminder(self, value: str) -> None:
        with self._store_lock:
            set_reminder(self.store, value)

    def _check_reminder(self) -> None:
        now = datetime.now()
        if reminder_due(self._reminder_time, now):
            self._fire_reminder(self._reminder_time, now)

    @work(thread=True)
    def _fire_reminder(self, reminder_time: str, now: datetime) -> None:
        with self._reminder_lock:
            fired = self.watcher.check(reminder_time, now)
        if fired:
            self.call_from_thread(self.notify, self.settings.reminder_message,
                                  title="PathForge", timeout=10)
            self.call_from_thread(self.bell)

    # ── Actions ────────────────────────────────────────────────

    def action_focus_journal(self) -> None:
        self.query_one("#journal-area", TextArea).focus()

    def action_save_journal(self) -> None:
        area = self.query_one("#journal-area", TextArea)
        text = area.text
        if not text.strip():
            return
        area.load_text("")
        self._save_reflection(text)

    @work(thread=True)
    def _save_reflection(self, text: str) -> None:
        with self._store_lock:
            state = submit_reflection(self.store, text)
        if state is not None:
            self.call_from_thread(self.notify, "Reflection saved to your journal!", title="Journal")
            self.call_from_thread(self._load_data)

    def action_reset_today(self) -> None:
        self._reset_today()

    @work(thread=True)
    def _reset_today(self) -> None:
        with self._store_lock:
            reset_today(self.store)
        self.call_from_thread(self._load_data)

    def action_blur_focus(self) -> None:
        self.set_focus(None)

    def action_quit_app(self) -> None:
        self.exit()


# ── Entry point ────────────────────────────────────────────────


def _import_roadmap(path: Path, root: Path) -> None:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        print(f"Cannot read roadmap {path}: {e}")
        sys.exit(1)
    if not isinstance(data, dict):
        print(f"Roadmap {path} must contain a JSON object")
        sys.exit(1)
    roadmap = save_roadmap(data, root)
    print(f"Imported '{roadmap.title}' ({len(roadmap.daily_plans)} daily plans)")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="pathforge", description="Daily progress hub for a learning roadmap.")
    parser.add_argument("--roadmap", type=Path, help="import a generated roadmap JSON before starting")
    parser.add_argument("--no-ui", action="store_true", help="import/reconcile only, do not start the TUI")
    args = parser.parse_args(argv)

    root = workspace_root()
    settings = load_settings(root)
    configure_logging(settings, None if args.no_ui else TextualHandler())

    if args.roadmap:
        _import_roadmap(args.roadmap, root)

    if args.no_ui:
        store = ProgressStore.for_workspace(root)
        result = reconcile(store)
        state = result.state
        print(f"Day {day_of_journey(state.roadmap_start_date)} · streak {state.current_streak} (best {state.max_streak})")
        message = new_day_message(result)
        if message:
            print(message)
        return

    PathForgeApp(root).run()


if __name__ == "__main__":
    main()
