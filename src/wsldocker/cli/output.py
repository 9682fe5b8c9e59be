# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Terminal output helpers.

Everything this tool prints goes to stderr so that docker's stdout can
be piped untouched.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

from ..operations import OperationReporter


class Output(OperationReporter):
    """Progress messages plus the CLI's error and hint lines."""

    def __init__(self, console: Console | None = None):
        super().__init__(console or Console(stderr=True))

    def error(self, msg: str) -> None:
        self.console.print(f"[bold red]Error:[/bold red] {msg}", highlight=False)

    def hint(self, msg: str) -> None:
        self.console.print(f"[dim]Hint:[/dim] {msg}", highlight=False)


out = Output()


def setup_logging(level: str) -> None:
    """Route ``logging`` records through rich on stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=out.console, show_path=False)],
        force=True,
    )
