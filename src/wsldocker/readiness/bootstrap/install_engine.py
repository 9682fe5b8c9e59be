# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Bootstrap step: install docker engine inside the guest."""

import shlex

from ...operations import BootstrapError
from ..contexts import BootstrapContext
from . import bootstrap_pipeline


@bootstrap_pipeline.step(order=300)
def install_engine(ctx: BootstrapContext) -> None:
    """Run the upstream convenience install script."""
    ctx.info("Setting up docker engine...")
    script = f"curl -fsSL {shlex.quote(ctx.config.installer_url)} | sh"
    if not ctx.guest.shell(script, to_stderr=True):
        raise BootstrapError("install", "Failed to install docker engine")
