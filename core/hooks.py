"""Plugin/hook system for PathForge.

Lifecycle hooks run shell commands at key points in the tracker.
Configured via planner/hooks.yaml, e.g.::

    on_reminder_due:
      - notify-send "PathForge" "Time to learn"
    post_reconcile:
      - command: ./scripts/log_visit.sh
        timeout: 5

Hook points:
- post_reconcile
- on_journal_entry
- on_reminder_set, on_reminder_due
- on_roadmap_saved
"""

from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any

import yaml

from core.fileio import read_yaml
from core.workspace import hooks_config_path, workspace_root

logger = logging.getLogger(__name__)

VALID_HOOK_POINTS = {
    "post_reconcile",
    "on_journal_entry",
    "on_reminder_set",
    "on_reminder_due",
    "on_roadmap_saved",
}

DEFAULT_TIMEOUT = 30
OUTPUT_CAP = 4096


def load_hooks_config(root: Path | None = None) -> dict[str, Any]:
    """Load hooks configuration from planner/hooks.yaml."""
    path = hooks_config_path(root)
    if not path.exists():
        return {}
    try:
        return read_yaml(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable hooks.yaml: %s", e)
        return {}


def run_hooks(
    hook_point: str,
    context: dict[str, Any],
    root: Path | None = None,
) -> list[dict[str, Any]]:
    """Run all hooks registered for a given hook point.

    Context is passed as JSON via stdin to each hook subprocess.
    Returns list of results with stdout/stderr and exit codes.
    """
    if hook_point not in VALID_HOOK_POINTS:
        return []

    if root is None:
        root = workspace_root()

    config = load_hooks_config(root)
    hooks = config.get(hook_point, [])

    if not hooks or not isinstance(hooks, list):
        return []

    results = []
    context_json = json.dumps(context, ensure_ascii=False)

    for hook in hooks:
        if isinstance(hook, str):
            command = hook
            timeout = DEFAULT_TIMEOUT
        elif isinstance(hook, dict):
            command = hook.get("command", "")
            timeout = hook.get("timeout", DEFAULT_TIMEOUT)
        else:
            continue

        if not command:
            continue

        result: dict[str, Any] = {"command": command, "hook_point": hook_point}
        try:
            proc = subprocess.run(
                command,
                shell=True,
                input=context_json,
                capture_output=True,
                text=True,
                timeout=timeout,
                cwd=str(root),
            )
            result["exit_code"] = proc.returncode
            result["stdout"] = proc.stdout[:OUTPUT_CAP]
            result["stderr"] = proc.stderr[:OUTPUT_CAP]
            if proc.returncode != 0:
                logger.warning("Hook %s (%s) exited with %d", hook_point, command, proc.returncode)
        except subprocess.TimeoutExpired:
            result["exit_code"] = -1
            result["error"] = f"Hook timed out after {timeout}s"
            logger.warning("Hook %s (%s) timed out after %ss", hook_point, command, timeout)
        except Exception as e:
            result["exit_code"] = -1
            result["error"] = str(e)
            logger.warning("Hook %s (%s) failed: %s", hook_point, command, e)

        results.append(result)

    return results


def fire_hooks(hook_point: str, context: dict[str, Any], root: Path | None = None) -> None:
    """Best-effort run_hooks for engine call sites: never raises."""
    try:
        run_hooks(hook_point, context, root)
    except Exception:
        logger.exception("Hook point %s could not be run", hook_point)
