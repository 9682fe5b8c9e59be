#!/usr/bin/env python3
# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""
wsl-docker CLI - Main entry point.

Usage:
    wsl-docker [DOCKER ARGS]...
    wsl-docker stop-daemon | reset-registration | daemon-status

Takes the same arguments as the docker client.  The engine runs inside a
dedicated WSL distribution that is created on first use.
"""

import os
import sys

import typer
from rich.console import Console

from ..config import load_config
from ..dispatch import Dispatcher
from ..process import ProcessRunner, SubprocessExecutor
from .decorators import report_errors
from .output import out, setup_logging


app = typer.Typer(
    name="wsl-docker",
    help="Docker engine in a WSL distribution, used like the docker client",
    add_completion=False,
)


@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "help_option_names": [],
    }
)
@report_errors
def main(ctx: typer.Context) -> None:
    """Forward the arguments to docker, or run a reserved maintenance command."""
    config = load_config()
    setup_logging(config.log_level)

    dispatcher = Dispatcher(
        config,
        ProcessRunner(SubprocessExecutor()),
        progress=out,
        console=Console(),
    )
    raise typer.Exit(dispatcher.dispatch(list(ctx.args)))


def cli() -> None:
    """CLI entry point for setuptools."""
    prog_name = os.environ.get("WSLDOCKER_PROG_NAME", "wsl-docker")
    # Everything after the separator reaches docker verbatim, options included.
    app(args=["--", *sys.argv[1:]], prog_name=prog_name)


if __name__ == "__main__":
    cli()
