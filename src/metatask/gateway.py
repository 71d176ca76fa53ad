"""Thin wrappers around the tmux and git invocations a task needs."""

from __future__ import annotations

from pathlib import Path

from metatask.errors import ExternalToolError, ToolSource
from metatask.exec import ExecResult, run_command


def _tmux_error(result: ExecResult, subcommand: str) -> ExternalToolError:
    message = result.stderr.strip() or f"tmux {subcommand} failed"
    return ExternalToolError(source=ToolSource.MULTIPLEXER, status=result.returncode, message=message)


class ExternalToolGateway:
    """Stateless pass-through to tmux and git.

    Every method blocks until the child process exits and raises
    ExternalToolError on failure. Side effects of earlier calls are never
    undone here.
    """

    def __init__(self, *, tmux: str = "tmux", git: str = "git", cwd: Path | None = None):
        self.tmux = tmux
        self.git = git
        self.cwd = cwd

    def _tmux(self, subcommand: str, *args: str, interactive: bool = False) -> ExecResult:
        result = run_command(
            [self.tmux, subcommand, *args],
            cwd=self.cwd,
            check=False,
            interactive=interactive,
        )
        if not result.ok:
            raise _tmux_error(result, subcommand)
        return result

    def new_detached_session(self, name: str) -> None:
        self._tmux("new-session", "-d", "-s", name)

    def attach_session(self, name: str) -> None:
        """Attach the controlling terminal; returns once the client detaches."""
        self._tmux("attach-session", "-t", name, interactive=True)

    def switch_client(self, name: str) -> None:
        self._tmux("switch-client", "-t", name)

    def kill_session(self, name: str) -> None:
        self._tmux("kill-session", "-t", name)

    def list_sessions(self) -> str:
        return self._tmux("list-sessions").stdout.rstrip()

    def create_branch(self, name: str) -> None:
        """Create and check out branch `name` in the working directory's repository."""
        result = run_command([self.git, "checkout", "-b", name], cwd=self.cwd, check=False)
        if not result.ok:
            raise ExternalToolError(
                source=ToolSource.VERSION_CONTROL,
                status=result.returncode,
                message=f"git failed to create branch ({result.stderr.strip()})",
            )
