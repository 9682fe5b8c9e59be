# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Bootstrap step: write docker client and daemon configuration in the guest.

Both files are overwritten, not merged.
"""

from __future__ import annotations

import json
import shlex
from typing import Any

from ...config import Topology, WrapperConfig
from ...operations import BootstrapError
from ..contexts import BootstrapContext
from . import bootstrap_pipeline

CLIENT_CONFIG_DIR = "~/.docker"
DAEMON_CONFIG_DIR = "/etc/docker"


def client_config(config: WrapperConfig) -> dict[str, Any]:
    return {"detachKeys": config.detach_keys}


def daemon_config(config: WrapperConfig) -> dict[str, Any]:
    """daemon.json contents.

    In the native topology the daemon also listens on TCP so the host
    client can reach it; the unix socket stays for in-guest use.
    """
    data: dict[str, Any] = {"features": {"buildkit": True}}
    if config.topology is Topology.NATIVE:
        data["hosts"] = [
            "unix:///var/run/docker.sock",
            f"tcp://{config.engine_endpoint}",
        ]
    return data


def _write_json_script(directory: str, filename: str, data: dict[str, Any]) -> str:
    # ``~`` must stay unquoted for the shell to expand it.
    target = f"{directory}/{filename}"
    payload = shlex.quote(json.dumps(data, separators=(",", ":")))
    return f"mkdir -p {directory} && printf '%s\\n' {payload} > {target}"


@bootstrap_pipeline.step(order=400)
def write_config(ctx: BootstrapContext) -> None:
    """Set the detach key sequence and enable buildkit."""
    ctx.dim("Writing docker configuration")

    script = _write_json_script(CLIENT_CONFIG_DIR, "config.json", client_config(ctx.config))
    if not ctx.guest.shell(script, silent=True):
        raise BootstrapError("configure", "Failed to set up detach keys")

    script = _write_json_script(DAEMON_CONFIG_DIR, "daemon.json", daemon_config(ctx.config))
    if not ctx.guest.shell(script, silent=True):
        raise BootstrapError("configure", "Failed to set up buildkit")
