from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any
from urllib.parse import urlsplit

from fastapi import Body, Depends, FastAPI, Form, HTTPException
from fastapi.responses import HTMLResponse, RedirectResponse

from core import (
    workspace_root as _workspace_root,
    ProgressStore,
    Roadmap,
    DailyPlan,
    load_settings,
    configure_logging,
    reconcile,
    new_day_message,
    is_milestone,
    day_of_journey,
    upsert_today,
    today_progress,
    completion_percentage,
    toggle_task,
    set_time_spent,
    reset_today,
    submit_reflection,
    set_reminder,
    load_roadmap,
    save_roadmap,
    clear_roadmap,
    todays_plan,
    plan_task_ids,
)

ASSET_V = "20261018-01"


@asynccontextmanager
async def lifespan(_app: FastAPI):
    configure_logging(load_settings())
    yield


app = FastAPI(title="PathForge Progress Hub", version="0.1.0", lifespan=lifespan)


def get_store() -> ProgressStore:
    return ProgressStore.for_workspace(_workspace_root())


# ── HTML helpers ──────────────────────────────────────────────

def _escape(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


CSS = """
body { font-family: system-ui, sans-serif; background: #0f172a; color: #e2e8f0; margin: 0; }
.container { max-width: 960px; margin: 0 auto; padding: 24px; }
.card { background: #1e293b; border: 1px solid #334155; border-radius: 12px; padding: 16px; margin-bottom: 16px; }
.muted { color: #94a3b8; } .small { font-size: 13px; }
.top { display: flex; justify-content: space-between; align-items: center; }
.pill { border: 1px solid #475569; border-radius: 999px; padding: 4px 10px; }
.milestone { border-color: #f97316; box-shadow: 0 0 12px rgba(249,115,22,0.3); }
.todo { display: flex; gap: 10px; align-items: center; padding: 8px 0; border-bottom: 1px solid #334155; }
.todo.done .todo-title { text-decoration: line-through; color: #94a3b8; }
.feedback { background: rgba(56,189,248,0.1); border: 1px solid #38bdf8; padding: 10px; border-radius: 8px; text-align: center; }
.bar { height: 8px; background: #334155; border-radius: 4px; overflow: hidden; }
.bar > div { height: 100%; background: #38bdf8; }
"""


def _plan_context(store: ProgressStore, now: datetime | None = None) -> dict[str, Any]:
    """Reconcile, then resolve today's plan and today's progress."""
    result = reconcile(store, now)
    state = result.state
    day = day_of_journey(state.roadmap_start_date, now)
    roadmap = load_roadmap(store.root)
    plan = todays_plan(roadmap, day)
    return {
        "result": result,
        "state": state,
        "day": day,
        "roadmap": roadmap,
        "plan": plan,
        "task_ids": plan_task_ids(plan, day),
        "progress": today_progress(state, now),
    }


def _require_plan(store: ProgressStore) -> tuple[DailyPlan, list[str]]:
    state = store.load()
    day = day_of_journey(state.roadmap_start_date)
    plan = todays_plan(load_roadmap(store.root), day)
    if plan is None:
        raise HTTPException(status_code=404, detail="No roadmap imported")
    return plan, plan_task_ids(plan, day)


def _require_task(store: ProgressStore, task_id: str) -> list[str]:
    _plan, task_ids = _require_plan(store)
    if task_id not in task_ids:
        raise HTTPException(status_code=404, detail=f"Task {task_id!r} is not in today's plan")
    return task_ids


def _render_checklist(plan: DailyPlan, task_ids: list[str], done_ids: set[str]) -> str:
    rows = []
    for task, tid in zip(plan.tasks, task_ids):
        done = tid in done_ids
        dur = f'<div class="muted small">{_escape(task.duration)}</div>' if task.duration else ""
        rows.append(
            f"""
            <form class="todo{' done' if done else ''}" method="post" action="/toggle">
              <input type="hidden" name="task_id" value="{_escape(tid)}" />
              <button type="submit">{'&#10003;' if done else '&#9675;'}</button>
              <div><div class="todo-title">{_escape(task.description)}</div>{dur}</div>
            </form>
            """
        )
    return "".join(rows) or '<div class="muted small">No tasks planned for today.</div>'


def _resource_link(url: str, title: str) -> str:
    # Roadmap URLs are untrusted; only web links become clickable.
    if urlsplit(url.strip()).scheme.lower() in ("http", "https"):
        return f'<a href="{_escape(url.strip())}">{_escape(title)}</a>'
    return f'{_escape(title)} <span class="muted small">{_escape(url)}</span>'


def _render_resources(plan: DailyPlan) -> str:
    if not plan.resources:
        return ""
    items = "".join(
        f'<li>{_resource_link(r.url, r.title)} <span class="muted small">{_escape(r.type)}</span></li>'
        for r in plan.resources
    )
    return f'<section class="card"><h2>Resources</h2><ul>{items}</ul></section>'


# ── Pages ─────────────────────────────────────────────────────

@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


@app.get("/", response_class=HTMLResponse)
def index(store: ProgressStore = Depends(get_store)) -> HTMLResponse:
    ctx = _plan_context(store)
    state = ctx["state"]
    plan: DailyPlan | None = ctx["plan"]
    roadmap: Roadmap | None = ctx["roadmap"]
    progress = ctx["progress"]

    feedback = new_day_message(ctx["result"])
    feedback_html = f'<div class="feedback">{_escape(feedback)}</div>' if feedback else ""

    streak = state.current_streak
    milestone_cls = " milestone" if is_milestone(streak) else ""

    if plan is None:
        pct = 0
        checklist_html = (
            '<div class="muted">No roadmap yet. Import one with '
            '<code>PUT /api/roadmap</code> or <code>pathforge --roadmap FILE</code>.</div>'
        )
        resources_html = ""
        subtitle = f"Day {ctx['day']} of your journey"
    else:
        done_ids = set(progress.completed_task_ids)
        done_count = sum(1 for t in ctx["task_ids"] if t in done_ids)
        pct = completion_percentage(done_count, len(ctx["task_ids"]))
        checklist_html = _render_checklist(plan, ctx["task_ids"], done_ids)
        resources_html = _render_resources(plan)
        subtitle = f"Day {ctx['day']} of your journey • {_escape(plan.title)}"

    journal_rows = "".join(
        f'<div class="small"><span class="muted">{_escape(e.date)}</span> {_escape(e.content)}</div>'
        for e in state.journal
    ) or '<div class="muted small">No reflections yet.</div>'

    title = _escape(roadmap.title) if roadmap and roadmap.title else "PathForge"

    html = f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>{title} · Daily Progress Hub</title>
  <style>{CSS}</style>
</head>
<body>
  <div class="container">
    <header class="top">
      <div>
        <h1>Daily Progress Hub</h1>
        <div class="muted small">{subtitle}</div>
      </div>
      <div>
        <span class="pill{milestone_cls}">\U0001f525 {streak} Day Streak</span>
        <span class="pill">\U0001f3c6 {pct}% Done</span>
        <span class="pill muted small">best {state.max_streak}</span>
      </div>
    </header>

    {feedback_html}

    <section class="card">
      <div class="top">
        <h2>Today's Checklist</h2>
        <form method="post" action="/reset"><button type="submit">Reset</button></form>
      </div>
      <div class="bar"><div style="width:{pct}%"></div></div>
      {checklist_html}
      <form method="post" action="/time" style="margin-top:12px">
        <label class="muted small">Time spent (minutes)</label>
        <input type="number" name="minutes" min="0" value="{progress.time_spent_minutes}" />
        <button type="submit">Save</button>
      </form>
    </section>

    {resources_html}

    <section class="card">
      <h2>Reflection</h2>
      <form method="post" action="/journal">
        <textarea name="content" rows="3" style="width:100%"></textarea>
        <button type="submit">Save to journal</button>
      </form>
      <div style="margin-top:10px">{journal_rows}</div>
    </section>

    <section class="card">
      <h2>Daily reminder</h2>
      <form method="post" action="/reminder">
        <input type="time" name="reminder_time" value="{_escape(state.reminder_time or '')}" />
        <button type="submit">Set reminder</button>
      </form>
    </section>

    <footer class="muted small">v{ASSET_V} · Progress is stored in <code>{_escape(str(store.path))}</code>.</footer>
  </div>
</body>
</html>"""
    return HTMLResponse(html)


@app.post("/toggle")
def form_toggle(task_id: str = Form(...), store: ProgressStore = Depends(get_store)) -> RedirectResponse:
    task_ids = _require_task(store, task_id)
    toggle_task(store, task_id, len(task_ids))
    return RedirectResponse(url="/", status_code=303)


@app.post("/time")
def form_time(minutes: str = Form("0"), store: ProgressStore = Depends(get_store)) -> RedirectResponse:
    _plan, task_ids = _require_plan(store)
    set_time_spent(store, minutes, len(task_ids))
    return RedirectResponse(url="/", status_code=303)


@app.post("/reset")
def form_reset(store: ProgressStore = Depends(get_store)) -> RedirectResponse:
    reset_today(store)
    return RedirectResponse(url="/", status_code=303)


@app.post("/journal")
def form_journal(content: str = Form(""), store: ProgressStore = Depends(get_store)) -> RedirectResponse:
    submit_reflection(store, content)
    return RedirectResponse(url="/", status_code=303)


@app.post("/reminder")
def form_reminder(reminder_time: str = Form(""), store: ProgressStore = Depends(get_store)) -> RedirectResponse:
    if reminder_time:
        set_reminder(store, reminder_time)
    return RedirectResponse(url="/", status_code=303)


# ── JSON API ──────────────────────────────────────────────────

@app.get("/api/state")
def api_get_state(store: ProgressStore = Depends(get_store)) -> dict[str, Any]:
    """Full progress record."""
    return store.load().to_dict()


@app.post("/api/reconcile")
def api_reconcile(store: ProgressStore = Depends(get_store)) -> dict[str, Any]:
    """Run the once-per-session day rollover check."""
    result = reconcile(store)
    out = result.to_dict()
    out["dayOfJourney"] = day_of_journey(result.state.roadmap_start_date)
    out["message"] = new_day_message(result)
    out["milestone"] = is_milestone(result.state.current_streak)
    return out


@app.get("/api/today")
def api_today(store: ProgressStore = Depends(get_store)) -> dict[str, Any]:
    """Today's plan and progress (no reconciliation)."""
    state = store.load()
    day = day_of_journey(state.roadmap_start_date)
    plan = todays_plan(load_roadmap(store.root), day)
    return {
        "dayOfJourney": day,
        "plan": plan.to_dict() if plan else None,
        "taskIds": plan_task_ids(plan, day),
        "progress": today_progress(state).to_dict(),
    }


@app.post("/api/progress")
def api_upsert_progress(payload: dict[str, Any] = Body(...), store: ProgressStore = Depends(get_store)) -> dict[str, Any]:
    """Direct upsert of today's record with caller-computed percentage."""
    task_ids = payload.get("completedTaskIds", []) or []
    if not isinstance(task_ids, list):
        raise HTTPException(status_code=400, detail="completedTaskIds must be a list")
    state = upsert_today(
        store,
        task_ids,
        payload.get("completionPercentage", 0),
        payload.get("timeSpentMinutes", 0),
    )
    return {"ok": True, "progress": today_progress(state).to_dict()}


@app.post("/api/tasks/{task_id}/toggle")
def api_toggle_task(task_id: str, store: ProgressStore = Depends(get_store)) -> dict[str, Any]:
    task_ids = _require_task(store, task_id)
    state = toggle_task(store, task_id, len(task_ids))
    return {"ok": True, "progress": today_progress(state).to_dict()}


@app.get("/api/journal")
def api_get_journal(store: ProgressStore = Depends(get_store)) -> dict[str, Any]:
    journal = store.load().journal
    return {"count": len(journal), "entries": [e.to_dict() for e in journal]}


@app.post("/api/journal")
def api_add_journal(payload: dict[str, Any] = Body(...), store: ProgressStore = Depends(get_store)) -> dict[str, Any]:
    state = submit_reflection(store, str(payload.get("content", "") or ""))
    if state is None:
        return {"ok": False, "reason": "empty-reflection"}
    return {"ok": True, "entry": state.journal[0].to_dict()}


@app.get("/api/reminder")
def api_get_reminder(store: ProgressStore = Depends(get_store)) -> dict[str, Any]:
    return {"reminderTime": store.load().reminder_time}


@app.put("/api/reminder")
def api_set_reminder(payload: dict[str, Any] = Body(...), store: ProgressStore = Depends(get_store)) -> dict[str, Any]:
    value = payload.get("reminderTime")
    state = set_reminder(store, str(value) if value else None)
    return {"ok": True, "reminderTime": state.reminder_time}


@app.delete("/api/reminder")
def api_clear_reminder(store: ProgressStore = Depends(get_store)) -> dict[str, Any]:
    set_reminder(store, None)
    return {"ok": True, "reminderTime": None}


@app.get("/api/roadmap")
def api_get_roadmap(store: ProgressStore = Depends(get_store)) -> dict[str, Any]:
    roadmap = load_roadmap(store.root)
    if roadmap is None:
        raise HTTPException(status_code=404, detail="No roadmap imported")
    return roadmap.to_dict()


@app.put("/api/roadmap")
def api_put_roadmap(payload: Any = Body(...), store: ProgressStore = Depends(get_store)) -> dict[str, Any]:
    """Import a roadmap produced by the generator."""
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Roadmap must be a JSON object")
    roadmap = save_roadmap(payload, store.root)
    return {"ok": True, "title": roadmap.title, "dailyPlans": len(roadmap.daily_plans)}


@app.delete("/api/roadmap")
def api_delete_roadmap(store: ProgressStore = Depends(get_store)) -> dict[str, Any]:
    """Start over: drop the roadmap, keep progress."""
    return {"ok": True, "removed": clear_roadmap(store.root)}
