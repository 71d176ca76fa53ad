"""Task name rules shared by tmux session names and git branch names."""

from __future__ import annotations

import re

from metatask.errors import ValidationError

# tmux rewrites ':' and '.' in session names; git refuses the rest.
_FORBIDDEN_CHARS = re.compile(r"[\s:.~^?*\[\\\x00-\x1f\x7f]")


def task_name_problem(name: str) -> str | None:
    """Return why `name` cannot be a task name, or None when it is usable."""
    if not name:
        return "task name must not be empty"
    match = _FORBIDDEN_CHARS.search(name)
    if match:
        return f"task name contains forbidden character {match.group(0)!r}"
    if name.startswith("-"):
        return "task name must not start with '-'"
    if name.startswith("/") or name.endswith("/") or "//" in name:
        return "task name must not start or end with '/' or contain '//'"
    if "@{" in name or name == "@":
        return "task name must not be '@' or contain '@{'"
    return None


def validate_task_name(name: str) -> str:
    problem = task_name_problem(name)
    if problem:
        raise ValidationError(f"Invalid task name '{name}': {problem}")
    return name
