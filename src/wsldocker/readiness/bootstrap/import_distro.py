# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Bootstrap step: register the guest with WSL from the staged archive."""

from __future__ import annotations

from ...operations import BootstrapError
from ..contexts import BootstrapContext
from . import bootstrap_pipeline


@bootstrap_pipeline.step(order=200)
def import_distro(ctx: BootstrapContext) -> None:
    """Import the distribution under ``<distro_dir>/root``.

    Skipped when the guest already answers, which happens when an earlier
    run failed after the import.
    """
    if ctx.guest.exists():
        ctx.dim(f"Distribution '{ctx.config.distro_name}' already registered")
        return

    root = ctx.config.distro_root
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise BootstrapError("import", f"Failed to create {root}: {e}")

    ctx.info(f"Importing distribution '{ctx.config.distro_name}'...")
    if not ctx.guest.import_distro(root, ctx.config.rootfs_archive):
        raise BootstrapError("import", "Failed to import distro")
