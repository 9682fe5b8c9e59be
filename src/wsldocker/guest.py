# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Guest bridge: run commands inside the WSL distribution.

Wraps a :class:`~wsldocker.process.ProcessRunner` and prefixes every
command with ``wsl -d <distro> -e`` so it executes inside this tool's
guest.  Lifecycle operations on the WSL subsystem itself (import,
shutdown, unregister) live here as well.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from .config import WrapperConfig
from .operations import TranslationError
from .process import Outcome, ProcessRunner


class GuestBridge:
    """Execute commands in the guest identified by ``config.distro_name``."""

    def __init__(self, config: WrapperConfig, runner: ProcessRunner):
        self.config = config
        self.runner = runner

    def _in_guest(self, argv: Sequence[str]) -> list[str]:
        return [*self.config.guest_prefix, *argv]

    # -------------------------------------------------------------------------
    # Command execution
    # -------------------------------------------------------------------------

    def run(self, argv: Sequence[str], *, silent: bool = False, to_stderr: bool = False) -> bool:
        """Run *argv* in the guest; return whether it succeeded."""
        return self.runner.run(self._in_guest(argv), silent=silent, to_stderr=to_stderr)

    def call(self, argv: Sequence[str]) -> int:
        """Run *argv* in the guest with inherited stdio; return its exit status."""
        return self.runner.call(self._in_guest(argv))

    def output(self, argv: Sequence[str]) -> Outcome:
        """Run *argv* in the guest capturing stdout."""
        return self.runner.output(self._in_guest(argv))

    def shell(self, script: str, *, silent: bool = False, to_stderr: bool = False) -> bool:
        """Run a ``sh -c`` script in the guest."""
        return self.run(["sh", "-c", script], silent=silent, to_stderr=to_stderr)

    # -------------------------------------------------------------------------
    # Path conversion
    # -------------------------------------------------------------------------

    def convert_path(self, path: str) -> str:
        """Convert a Windows path to its guest equivalent with ``wslpath -u``.

        Raises:
            TranslationError: If ``wslpath`` fails or prints nothing.
        """
        result = self.output(["wslpath", "-u", path])
        converted = result.stdout.strip()
        if not result.ok or not converted:
            raise TranslationError(path)
        return converted

    # -------------------------------------------------------------------------
    # Subsystem lifecycle
    # -------------------------------------------------------------------------

    def exists(self) -> bool:
        """Whether the guest is registered and can run a trivial command."""
        return self.run(["true"], silent=True)

    def import_distro(self, root: Path, archive: Path) -> bool:
        """Register the guest from a root filesystem archive."""
        return self.runner.run(
            [self.config.wsl_exe, "--import", self.config.distro_name, str(root), str(archive)],
            to_stderr=True,
        )

    def unregister(self) -> bool:
        """Destroy this tool's guest and its virtual disk."""
        return self.runner.run(
            [self.config.wsl_exe, "--unregister", self.config.distro_name], silent=True
        )

    def shutdown_all(self) -> bool:
        """Terminate every running WSL distribution and the utility VM."""
        return self.runner.run([self.config.wsl_exe, "--shutdown"], silent=True)
