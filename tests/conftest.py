"""Pytest configuration and fixtures for meta-task tests."""
from __future__ import annotations

from pathlib import Path

import pytest

from tests.unit.fakes import FakeGateway


def pytest_sessionfinish(session, exitstatus):
    """Fail when --cov was requested but no coverage data was collected.

    Usually means tests imported from 'src/metatask' instead of the installed 'metatask'.
    """
    cov_enabled = any("--cov" in str(arg) for arg in session.config.args)
    if not cov_enabled:
        return

    if not list(Path.cwd().glob(".coverage*")):
        pytest.exit(
            "Coverage was enabled but no data was collected. "
            "Check that tests import from 'metatask' (the package) not 'src/metatask'.",
            returncode=1,
        )


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()
