# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Command dispatch.

A few reserved first arguments are handled by this tool itself:

``stop-daemon``
    Shut down the whole WSL subsystem (every distribution), best effort.
``reset-registration``
    Shut down WSL, unregister this tool's distribution, and bootstrap it
    again from scratch.
``daemon-status``
    Show the probed engine state without changing anything.

Anything else is forwarded to docker after the readiness check and path
rewriting, and docker's exit status becomes ours.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from rich.console import Console
from rich.table import Table

from . import __version__
from .config import Topology, WrapperConfig
from .guest import GuestBridge
from .native import context_env, ensure_native_client
from .operations import BootstrapError, OperationReporter
from .process import ProcessError, ProcessRunner
from .readiness import ReadinessState, ensure_ready, probe
from .readiness.contexts import Fetcher
from .rewrite import rewrite_args

logger = logging.getLogger(__name__)

_Handler = Callable[["Dispatcher", list[str]], int]

RESERVED_COMMANDS: dict[str, _Handler] = {}


def reserved(name: str) -> Callable[[_Handler], _Handler]:
    """Register a handler for a reserved subcommand."""
    def _register(fn: _Handler) -> _Handler:
        RESERVED_COMMANDS[name] = fn
        return fn
    return _register


class Dispatcher:
    """Routes one invocation to a reserved handler or to docker."""

    def __init__(
        self,
        config: WrapperConfig,
        runner: ProcessRunner,
        progress: OperationReporter | None = None,
        console: Console | None = None,
        fetch: Fetcher | None = None,
    ):
        self.config = config
        self.runner = runner
        self.progress = progress
        self.console = console or Console()
        self.fetch = fetch
        self.guest = GuestBridge(config, runner)

    def dispatch(self, argv: Sequence[str]) -> int:
        """Handle *argv* and return the exit status for this process."""
        args = list(argv)
        if args and args[0] in RESERVED_COMMANDS:
            logger.debug("reserved command: %s", args[0])
            return RESERVED_COMMANDS[args[0]](self, args[1:])
        return self.forward(args)

    def ensure_ready(self) -> None:
        ensure_ready(self.guest, self.progress, self.fetch)

    def forward(self, args: list[str]) -> int:
        """Run *args* through docker and return docker's exit status."""
        native_cli: Path | None = None
        if self.config.topology is Topology.NATIVE:
            native_cli = ensure_native_client(self.config, self.runner)

        self.ensure_ready()

        rewrite_args(
            args,
            self.guest.convert_path,
            mount_subcommands=self.config.mount_subcommands,
            bare_paths=self.config.bare_path_rewriting,
        )

        if native_cli is not None:
            return self.runner.call([str(native_cli), *args], env=context_env(self.config))
        return self.guest.call([self.config.guest_engine, *args])


@reserved("stop-daemon")
def stop_daemon(dispatcher: Dispatcher, args: list[str]) -> int:
    """Shut down every WSL distribution, ignoring failures."""
    if not dispatcher.guest.shutdown_all():
        logger.debug("wsl --shutdown failed")
    return 0


@reserved("reset-registration")
def reset_registration(dispatcher: Dispatcher, args: list[str]) -> int:
    """Destroy this tool's distribution and bootstrap it again."""
    name = dispatcher.config.distro_name
    if dispatcher.progress:
        dispatcher.progress.info(f"Resetting distribution '{name}'...")

    dispatcher.guest.shutdown_all()
    if not dispatcher.guest.unregister():
        # Fine if it was never registered, fatal if it is still there
        if dispatcher.guest.exists():
            raise BootstrapError("reset", f"Failed to unregister distribution '{name}'")
        logger.debug("unregister of %s failed, nothing was registered", name)

    dispatcher.ensure_ready()
    return 0


@reserved("daemon-status")
def daemon_status(dispatcher: Dispatcher, args: list[str]) -> int:
    """Print the engine state without bootstrapping anything."""
    config = dispatcher.config
    try:
        state = probe(dispatcher.guest)
    except ProcessError as e:
        logger.debug("probe failed: %s", e)
        state = ReadinessState.UNKNOWN

    table = Table(show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("wsldocker", __version__)
    table.add_row("distribution", config.distro_name)
    table.add_row("topology", config.topology.value)
    table.add_row("engine", state.value)
    if config.topology is Topology.NATIVE:
        table.add_row("endpoint", config.engine_endpoint)
        table.add_row("context", config.context_name)
    table.add_row("rootfs staged", "yes" if config.rootfs_archive.exists() else "no")
    dispatcher.console.print(table)
    return 0
