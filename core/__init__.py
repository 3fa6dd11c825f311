"""PathForge core library — progress store and tracking engines.

Public API re-exports for convenient imports:
    from core import ProgressStore, reconcile, upsert_today, ...
"""

# Workspace & paths
from core.workspace import (
    workspace_root,
    progress_path,
    roadmap_path,
    settings_path,
    hooks_config_path,
)

# File I/O
from core.fileio import (
    read_text,
    read_json,
    read_yaml,
    write_json_atomic,
    remove_file,
)

# Dates
from core.dates import (
    today_key,
    yesterday_key,
    parse_timestamp,
    day_of_journey,
)

# Settings & logging
from core.settings import (
    Settings,
    load_settings,
    configure_logging,
)

# Store
from core.store import ProgressStore, default_state

# Reconciliation
from core.reconcile import (
    ReconcileResult,
    reconcile,
    new_day_message,
    is_milestone,
)

# Tracker
from core.tracker import (
    completion_percentage,
    upsert_today,
    today_progress,
    toggle_task,
    set_time_spent,
    reset_today,
)

# Journal
from core.journal import append_entry, submit_reflection

# Reminder
from core.reminder import (
    set_reminder,
    get_reminder,
    reminder_due,
    ReminderWatcher,
)

# Roadmap
from core.roadmap import (
    load_roadmap,
    save_roadmap,
    clear_roadmap,
    todays_plan,
    plan_task_ids,
)

# Hooks
from core.hooks import run_hooks, fire_hooks, load_hooks_config

# Models
from core.models import (
    JournalEntry,
    DailyProgress,
    ProgressState,
    Task,
    Resource,
    DailyPlan,
    WeeklySummary,
    Phase,
    Challenge,
    Roadmap,
)
