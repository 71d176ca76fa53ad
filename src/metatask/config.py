"""Environment-driven settings."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from metatask.probe import SESSION_ENV_VAR

APP_DIR_NAME = "meta-task"
REGISTRY_FILENAME = "tasks.yaml"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def default_data_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Per-user data directory: META_TASK_DATA_DIR, then XDG_DATA_HOME, then ~/.local/share."""
    env = os.environ if environ is None else environ
    override = env.get("META_TASK_DATA_DIR", "").strip()
    if override:
        return Path(override).expanduser()
    xdg = env.get("XDG_DATA_HOME", "").strip()
    base = Path(xdg).expanduser() if xdg else Path.home() / ".local" / "share"
    return base / APP_DIR_NAME


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    session_env_var: str = SESSION_ENV_VAR
    tmux_bin: str = "tmux"
    git_bin: str = "git"
    log_level: str = "WARNING"

    @property
    def registry_path(self) -> Path:
        return self.data_dir / REGISTRY_FILENAME

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        level = env.get("META_TASK_LOG_LEVEL", "WARNING").strip().upper()
        return cls(
            data_dir=default_data_dir(env),
            tmux_bin=env.get("META_TASK_TMUX", "").strip() or "tmux",
            git_bin=env.get("META_TASK_GIT", "").strip() or "git",
            log_level=level if level in LOG_LEVELS else "WARNING",
        )
