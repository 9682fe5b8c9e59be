# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Native docker client on the host (native topology).

The host client reaches the guest daemon over TCP through a named docker
context; :func:`ensure_native_client` makes sure the binary exists and the
context is defined.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .config import WrapperConfig
from .operations import DiscoveryError, OperationError
from .process import ProcessRunner

logger = logging.getLogger(__name__)

CONTEXT_ENV = "DOCKER_CONTEXT"


def context_env(config: WrapperConfig) -> dict[str, str]:
    """Environment that points the native client at the guest daemon."""
    return {CONTEXT_ENV: config.context_name}


def find_native_cli(config: WrapperConfig) -> Path:
    """Return the native client path.

    Raises:
        DiscoveryError: If the binary is missing.
    """
    path = config.native_cli
    if not path.exists():
        raise DiscoveryError(f"Failed to find native docker cli at {path}")
    return path


def ensure_native_client(config: WrapperConfig, runner: ProcessRunner) -> Path:
    """Find the native client and create the guest context if needed.

    Returns:
        Path to the native client binary.

    Raises:
        DiscoveryError: If the binary is missing.
        OperationError: If the context cannot be created.
    """
    cli = find_native_cli(config)

    listing = runner.output([str(cli), "context", "ls", "--format", "{{.Name}}"])
    names = {line.strip() for line in listing.stdout.splitlines()}
    if config.context_name in names:
        return cli

    logger.debug("creating docker context %s", config.context_name)
    created = runner.run(
        [
            str(cli),
            "context",
            "create",
            config.context_name,
            "--docker",
            f"host=tcp://{config.engine_endpoint}",
        ],
        silent=True,
    )
    if not created:
        raise OperationError("Failed to create docker context")
    return cli
