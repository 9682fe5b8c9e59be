# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Bootstrap step: stage the guest root filesystem archive."""

from __future__ import annotations

import httpx

from ...operations import BootstrapError
from ..contexts import BootstrapContext
from . import bootstrap_pipeline


@bootstrap_pipeline.step(order=100)
def download_rootfs(ctx: BootstrapContext) -> None:
    """Download the rootfs archive unless it is already staged.

    Existence of the archive is the only check; a corrupt archive has to
    be deleted by hand.
    """
    archive = ctx.config.rootfs_archive
    if archive.exists():
        ctx.dim(f"Using staged rootfs: {archive}")
        return

    ctx.info(f"Downloading rootfs from '{ctx.config.rootfs_url}'...")
    try:
        ctx.fetch(ctx.config.rootfs_url, archive, ctx.progress)
    except (httpx.HTTPError, OSError) as e:
        raise BootstrapError("download", f"Failed to download rootfs: {e}")
