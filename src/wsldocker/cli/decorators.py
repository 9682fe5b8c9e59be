# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Decorators for CLI commands."""

from functools import wraps
from typing import Callable, TypeVar

import typer

from ..config import ConfigError
from ..operations import BootstrapError, DiscoveryError, OperationError
from ..process import ProcessError
from .output import out

R = TypeVar("R")


def report_errors(func: Callable[..., R]) -> Callable[..., R]:
    """Decorator that turns internal failures into an error message and exit 1."""
    @wraps(func)
    def wrapper(*args: object, **kwargs: object) -> R:
        try:
            return func(*args, **kwargs)
        except ConfigError as e:
            out.error(str(e))
            out.hint("Check ~/.config/wsldocker/wsldocker.conf and WSLDOCKER_* variables")
            raise typer.Exit(1)
        except DiscoveryError as e:
            out.error(str(e))
            out.hint("Install the docker cli on the host or set [bold]native_cli[/bold]")
            raise typer.Exit(1)
        except BootstrapError as e:
            out.error(str(e))
            out.hint(
                f"Fix the {e.stage} problem and run the command again; "
                "completed stages are skipped"
            )
            raise typer.Exit(1)
        except (OperationError, ProcessError) as e:
            out.error(str(e))
            raise typer.Exit(1)
    return wrapper
