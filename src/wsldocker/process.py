# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Process execution primitives.

Every external program this tool touches (``wsl``, the native docker
client, tools inside the guest) goes through an :class:`Executor`.  The
real one spawns subprocesses; tests substitute a fake that records the
calls and returns canned outcomes.
"""

from __future__ import annotations

import enum
import logging
import os
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)

# File descriptor of our own stderr, independent of any sys.stderr rebinding
_STDERR_FD = 2


class ProcessError(Exception):
    """A program could not be spawned at all."""

    def __init__(self, message: str, argv: Sequence[str] = ()):
        super().__init__(message)
        self.argv = list(argv)


class IOMode(enum.Enum):
    """How the standard streams of a child process are wired."""

    SILENT = "silent"    # stdout/stderr discarded
    INHERIT = "inherit"  # stdio shared with this process
    CAPTURE = "capture"  # stdout captured as text, stderr discarded
    STDERR = "stderr"    # stdout sent to our stderr, stderr shared


@dataclass(frozen=True)
class Outcome:
    """Result of running one external command."""

    returncode: int
    stdout: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class Executor(Protocol):
    """Anything that can run an argument vector to completion."""

    def execute(
        self,
        argv: Sequence[str],
        mode: IOMode,
        env: Mapping[str, str] | None = None,
    ) -> Outcome: ...


class SubprocessExecutor:
    """Executor backed by :func:`subprocess.run`."""

    def execute(
        self,
        argv: Sequence[str],
        mode: IOMode,
        env: Mapping[str, str] | None = None,
    ) -> Outcome:
        logger.debug("exec (%s): %s", mode.value, list(argv))

        child_env = None
        if env:
            child_env = {**os.environ, **env}

        if mode is IOMode.INHERIT:
            streams: dict[str, int | None] = {"stdin": None, "stdout": None, "stderr": None}
        elif mode is IOMode.SILENT:
            # Probes must not read stdin meant for the forwarded command.
            streams = {
                "stdin": subprocess.DEVNULL,
                "stdout": subprocess.DEVNULL,
                "stderr": subprocess.DEVNULL,
            }
        elif mode is IOMode.STDERR:
            # Only the forwarded docker command may write to our stdout.
            streams = {"stdin": subprocess.DEVNULL, "stdout": _STDERR_FD, "stderr": None}
        else:
            streams = {
                "stdin": subprocess.DEVNULL,
                "stdout": subprocess.PIPE,
                "stderr": subprocess.DEVNULL,
            }

        try:
            result = subprocess.run(
                list(argv),
                env=child_env,
                text=mode is IOMode.CAPTURE,
                encoding="utf-8" if mode is IOMode.CAPTURE else None,
                errors="replace" if mode is IOMode.CAPTURE else None,
                **streams,
            )
        except OSError as e:
            raise ProcessError(f"Failed to run {argv[0]}: {e}", argv) from e

        logger.debug("exit %d: %s", result.returncode, argv[0])
        return Outcome(result.returncode, result.stdout or "")


class ProcessRunner:
    """Convenience layer over an :class:`Executor`.

    Mirrors the two shapes callers need: "did it succeed" and "what did
    it print".
    """

    def __init__(self, executor: Executor):
        self.executor = executor

    def call(
        self,
        argv: Sequence[str],
        *,
        silent: bool = False,
        to_stderr: bool = False,
        env: Mapping[str, str] | None = None,
    ) -> int:
        """Run *argv* and return its exit status.

        *silent* discards all output; *to_stderr* keeps it visible but
        off our stdout.
        """
        if silent:
            mode = IOMode.SILENT
        elif to_stderr:
            mode = IOMode.STDERR
        else:
            mode = IOMode.INHERIT
        return self.executor.execute(argv, mode, env).returncode

    def run(
        self,
        argv: Sequence[str],
        *,
        silent: bool = False,
        to_stderr: bool = False,
        env: Mapping[str, str] | None = None,
    ) -> bool:
        """Run *argv* and return whether it exited with status zero."""
        return self.call(argv, silent=silent, to_stderr=to_stderr, env=env) == 0

    def output(
        self,
        argv: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
    ) -> Outcome:
        """Run *argv* capturing its standard output."""
        return self.executor.execute(argv, IOMode.CAPTURE, env)
