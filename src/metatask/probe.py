"""Detect whether this process already runs inside a tmux session."""

from __future__ import annotations

import os
from collections.abc import Mapping

from metatask.errors import EnvironmentCorruptError

SESSION_ENV_VAR = "TMUX"


def is_inside_session(environ: Mapping[str, str] | None = None, *, variable: str = SESSION_ENV_VAR) -> bool:
    """Return True when the session indicator variable is set and non-empty.

    Undecodable bytes in the variable surface as surrogate escapes in
    os.environ; that is treated as a corrupt environment.
    """
    env = os.environ if environ is None else environ
    value = env.get(variable)
    if not value:
        return False
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EnvironmentCorruptError(variable) from exc
    return True
