"""Command-level task operations: preconditions, transition, registry update."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from metatask.controller import TaskLifecycleController, TransitionResult
from metatask.errors import ExternalToolError, ValidationError
from metatask.gateway import ExternalToolGateway
from metatask.naming import validate_task_name
from metatask.registry import TaskRegistry

logger = logging.getLogger(__name__)


def require_task(name: str, *, registry: TaskRegistry) -> None:
    """Refuse unknown tasks before any external call or prompt."""
    if not registry.contains(name):
        raise ValidationError(f"Task '{name}' not found")


def new_task(
    name: str,
    *,
    registry: TaskRegistry,
    controller: TaskLifecycleController,
    inside_session: bool,
) -> TransitionResult:
    """Create the task's session and branch, then record it."""
    if registry.contains(name):
        raise ValidationError(f"Task '{name}' already exists")
    validate_task_name(name)
    result = controller.create(name, inside_session=inside_session)
    registry.add(name)
    logger.info("registered task %s (client %s)", name, result.client_mode)
    return result


def focus_task(
    name: str,
    *,
    registry: TaskRegistry,
    controller: TaskLifecycleController,
    inside_session: bool,
) -> TransitionResult:
    require_task(name, registry=registry)
    result = controller.focus(name, inside_session=inside_session)
    logger.info("focused task %s (client %s)", name, result.client_mode)
    return result


def finish_task(
    name: str,
    *,
    registry: TaskRegistry,
    controller: TaskLifecycleController,
) -> TransitionResult:
    """Kill the task's session and forget it. The branch is kept."""
    require_task(name, registry=registry)
    result = controller.retire(name)
    registry.remove(name)
    logger.info("unregistered task %s", name)
    return result


@dataclass(frozen=True)
class TaskListing:
    sessions: str
    tasks: tuple[str, ...]

    def lines(self) -> list[str]:
        rendered = [self.sessions] if self.sessions else []
        rendered.extend(f"Task: {name}" for name in self.tasks)
        return rendered


def list_tasks(*, registry: TaskRegistry, gateway: ExternalToolGateway) -> TaskListing:
    """Best-effort listing: a tmux failure becomes a note, never an error."""
    try:
        sessions = gateway.list_sessions()
    except ExternalToolError as exc:
        logger.debug("list-sessions failed: %s", exc)
        sessions = f"(no tmux sessions: {exc.message})"
    return TaskListing(sessions=sessions, tasks=registry.names)
