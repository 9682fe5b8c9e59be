# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Readiness of the docker engine inside the guest.

Readiness is recomputed on every invocation:

1. Probe whether docker is installed (``which docker``) and, if so,
   whether the service is running (``service docker status``).
2. If it is not installed, run the bootstrap pipeline (download, import,
   install, configure).  Every step is fatal on failure.
3. If the service is not running, start it.  Failure is fatal: there is
   no point forwarding a command to a stopped daemon.

Calling :func:`ensure_ready` on a guest that is already running performs
only the probes.
"""

from __future__ import annotations

import enum
import logging

from ..guest import GuestBridge
from ..operations import BootstrapError, OperationReporter
from .bootstrap import bootstrap_pipeline
from .contexts import BootstrapContext, Fetcher

logger = logging.getLogger(__name__)

SERVICE_BIN = "/sbin/service"


class ReadinessState(enum.Enum):
    """What the last probe found."""

    UNKNOWN = "unknown"
    NOT_INSTALLED = "not-installed"
    INSTALLED_NOT_RUNNING = "installed-not-running"
    RUNNING = "running"


def probe(guest: GuestBridge) -> ReadinessState:
    """Determine the engine state without changing anything.

    Probe output is discarded; only exit statuses count.
    """
    if not guest.run(["which", "docker"], silent=True):
        state = ReadinessState.NOT_INSTALLED
    elif guest.run([SERVICE_BIN, "docker", "status"], silent=True):
        state = ReadinessState.RUNNING
    else:
        state = ReadinessState.INSTALLED_NOT_RUNNING
    logger.debug("engine in %s: %s", guest.config.distro_name, state.value)
    return state


def start_engine(guest: GuestBridge) -> None:
    """Start the docker service inside the guest.

    Raises:
        BootstrapError: If the service fails to start.
    """
    if not guest.run([SERVICE_BIN, "docker", "start"], silent=True):
        raise BootstrapError("start", "Failed to start docker engine")


def ensure_ready(
    guest: GuestBridge,
    progress: OperationReporter | None = None,
    fetch: Fetcher | None = None,
) -> ReadinessState:
    """Make sure docker is installed and running in the guest.

    Args:
        guest: Bridge to the guest distribution.
        progress: Where to report bootstrap progress, if anywhere.
        fetch: Downloader override for the rootfs archive.

    Returns:
        ``ReadinessState.RUNNING``.

    Raises:
        BootstrapError: Naming the stage that failed.
    """
    state = probe(guest)

    if state is ReadinessState.NOT_INSTALLED:
        ctx = BootstrapContext(config=guest.config, guest=guest, progress=progress)
        if fetch is not None:
            ctx.fetch = fetch
        if progress:
            progress.info(f"Setting up '{guest.config.distro_name}' from '{guest.config.rootfs_url}'...")
        bootstrap_pipeline.run(ctx)
        state = ReadinessState.INSTALLED_NOT_RUNNING

    if state is not ReadinessState.RUNNING:
        start_engine(guest)

    return ReadinessState.RUNNING
