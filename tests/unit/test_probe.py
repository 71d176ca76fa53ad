"""Unit tests for the inside-tmux probe."""

from __future__ import annotations

import pytest

from metatask.errors import EnvironmentCorruptError
from metatask.probe import is_inside_session


def test_absent_variable_means_outside() -> None:
    assert is_inside_session({}) is False


def test_empty_variable_means_outside() -> None:
    assert is_inside_session({"TMUX": ""}) is False


def test_non_empty_variable_means_inside() -> None:
    assert is_inside_session({"TMUX": "/tmp/tmux-1000/default,1234,0"}) is True


def test_undecodable_value_is_fatal() -> None:
    with pytest.raises(EnvironmentCorruptError, match="TMUX env var contains non-Unicode"):
        is_inside_session({"TMUX": "/tmp/tmux-\udcff/default"})


def test_reads_process_environment_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TMUX", "/tmp/tmux-1000/default,1,0")
    assert is_inside_session() is True

    monkeypatch.delenv("TMUX")
    assert is_inside_session() is False


def test_custom_variable_name() -> None:
    assert is_inside_session({"ZELLIJ": "0"}, variable="ZELLIJ") is True
    assert is_inside_session({"TMUX": "x"}, variable="ZELLIJ") is False
