# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Operation errors and progress reporting.

:class:`OperationError` and its subclasses are the fatal, human-readable
failures of this tool.  The CLI turns them into an error line and exit
status 1; nothing else catches them.
"""

from __future__ import annotations

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TextColumn,
    TransferSpeedColumn,
)


class OperationError(Exception):
    """A step failed and the invocation cannot continue."""


class DiscoveryError(OperationError):
    """A required host binary is not where it is expected."""


class BootstrapError(OperationError):
    """A bootstrap stage failed, or a reset could not remove the old guest."""

    def __init__(self, stage: str, message: str):
        super().__init__(message)
        self.stage = stage


class TranslationError(OperationError):
    """A host path could not be converted to guest syntax."""

    def __init__(self, path: str, message: str | None = None):
        super().__init__(message or f"Failed to translate path for the guest: {path}")
        self.path = path


class OperationReporter:
    """Progress messages for long-running work, written to stderr."""

    def __init__(self, console: Console):
        self.console = console

    def info(self, msg: str) -> None:
        self.console.print(msg, highlight=False)

    def dim(self, msg: str) -> None:
        self.console.print(f"[dim]{msg}[/dim]", highlight=False)

    def warning(self, msg: str) -> None:
        self.console.print(f"[yellow]Warning:[/yellow] {msg}", highlight=False)

    def transfer(self) -> Progress:
        """Progress bar for a byte transfer of known or unknown size."""
        return Progress(
            TextColumn("{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            console=self.console,
            transient=True,
        )
