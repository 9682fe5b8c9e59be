# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Pytest configuration for wsldocker integration tests.

These tests talk to a real WSL installation and are skipped unless
WSLDOCKER_TEST_INTEGRATION=1 is set on a Windows host.
"""

from __future__ import annotations

import os
import subprocess
import sys

import pytest

from wsldocker.config import WrapperConfig, load_config

# ---------------------------------------------------------------------------
# Host configuration
# ---------------------------------------------------------------------------

ENABLED = os.environ.get("WSLDOCKER_TEST_INTEGRATION", "") == "1"
TEST_DISTRO = os.environ.get("WSLDOCKER_TEST_DISTRO", "wsldocker-test")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if ENABLED and sys.platform == "win32":
        return
    skip = pytest.mark.skip(reason="set WSLDOCKER_TEST_INTEGRATION=1 on a Windows host")
    for item in items:
        if "integration" in item.nodeid:
            item.add_marker(skip)


@pytest.fixture(scope="session")
def wsl_config() -> WrapperConfig:
    """Configuration pointing at a throwaway test distribution."""
    env = {**os.environ, "WSLDOCKER_DISTRO_NAME": TEST_DISTRO}
    return load_config(env=env)


def run_cli(*args: str, **env_overrides: str) -> subprocess.CompletedProcess[str]:
    """Run the wrapper in a subprocess against the test distribution."""
    env = {**os.environ, "WSLDOCKER_DISTRO_NAME": TEST_DISTRO, **env_overrides}
    return subprocess.run(
        [sys.executable, "-m", "wsldocker", *args],
        capture_output=True,
        text=True,
        env=env,
    )
