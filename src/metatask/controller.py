"""Task lifecycle: which tmux/git calls each transition issues, and in what order."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from metatask.gateway import ExternalToolGateway

ClientMode = Literal["attach", "switch"]


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of a successful transition."""

    name: str
    client_mode: ClientMode | None = None


class TaskLifecycleController:
    """Drive a task between Absent and Active.

    Whether the terminal attaches or switches is decided only by the caller's
    `inside_session` flag, never by asking tmux which clients exist. Failures
    propagate as ExternalToolError and leave earlier side effects in place.
    """

    def __init__(self, gateway: ExternalToolGateway):
        self.gateway = gateway

    def _enter_session(self, name: str, *, inside_session: bool) -> ClientMode:
        if inside_session:
            self.gateway.switch_client(name)
            return "switch"
        # Outside tmux there is no client to switch, so attach instead.
        self.gateway.attach_session(name)
        return "attach"

    def create(self, name: str, *, inside_session: bool) -> TransitionResult:
        """Open a detached session, enter it, then branch in the working directory."""
        self.gateway.new_detached_session(name)
        mode = self._enter_session(name, inside_session=inside_session)
        self.gateway.create_branch(name)
        return TransitionResult(name=name, client_mode=mode)

    def focus(self, name: str, *, inside_session: bool) -> TransitionResult:
        """Enter the task's session. The branch is assumed to be checked out already."""
        mode = self._enter_session(name, inside_session=inside_session)
        return TransitionResult(name=name, client_mode=mode)

    def retire(self, name: str) -> TransitionResult:
        """Kill the task's session.

        The branch is left in place: no checkout of a default branch, no
        dirty-tree check, no branch deletion.
        """
        self.gateway.kill_session(name)
        return TransitionResult(name=name)
