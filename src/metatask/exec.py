"""Command runner shared by the tmux and git wrappers."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from metatask.errors import NOT_INVOKED_STATUS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecResult:
    """Result envelope for subprocess execution."""

    argv: tuple[str, ...]
    cwd: Path
    returncode: int
    stdout: str
    stderr: str
    launched: bool = True

    @property
    def ok(self) -> bool:
        return self.launched and self.returncode == 0


class ExecError(RuntimeError):
    """Raised when a command returns non-zero in check mode."""

    def __init__(self, result: ExecResult):
        rendered = " ".join(result.argv)
        detail = (result.stderr or result.stdout).strip()
        super().__init__(f"command failed ({result.returncode}): {rendered}\n{detail}")
        self.result = result


def run_command(
    argv: list[str],
    *,
    cwd: Path | None = None,
    check: bool = True,
    interactive: bool = False,
) -> ExecResult:
    """Run command and return structured result.

    Interactive commands keep the caller's stdin/stdout so the child can take
    over the terminal; only stderr is captured.
    """
    workdir = cwd or Path(".")
    try:
        workdir = (cwd or Path.cwd()).resolve()
        logger.debug("exec %s (cwd=%s, interactive=%s)", " ".join(argv), workdir, interactive)
        if interactive:
            completed = subprocess.run(
                argv,
                cwd=workdir,
                stderr=subprocess.PIPE,
                text=True,
                check=False,
            )
        else:
            completed = subprocess.run(argv, cwd=workdir, capture_output=True, text=True, check=False)
    except OSError as exc:
        logger.debug("exec %s could not start: %s", argv[0], exc)
        result = ExecResult(
            argv=tuple(argv),
            cwd=workdir,
            returncode=NOT_INVOKED_STATUS,
            stdout="",
            stderr=f"failed to run {argv[0]}: {exc.strerror or exc}",
            launched=False,
        )
    else:
        result = ExecResult(
            argv=tuple(argv),
            cwd=workdir,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
        logger.debug("exec %s -> %d", argv[0], result.returncode)
    if check and not result.ok:
        raise ExecError(result)
    return result
