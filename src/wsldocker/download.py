# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Streaming HTTP download of bootstrap artifacts."""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from . import __version__
from .operations import OperationReporter

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 256 * 1024


def http_download(url: str, dest: Path, progress: OperationReporter | None = None) -> None:
    """Download *url* to *dest*.

    Data is streamed into ``<dest>.part`` and renamed on completion, so
    *dest* only ever exists once the transfer finished.

    Raises:
        httpx.HTTPError: On connection or HTTP status errors.
        OSError: If the file cannot be written.
    """
    partial = dest.with_name(dest.name + ".part")
    dest.parent.mkdir(parents=True, exist_ok=True)
    logger.debug("downloading %s -> %s", url, dest)

    headers = {"User-Agent": f"wsldocker/{__version__}"}
    with httpx.stream("GET", url, headers=headers, follow_redirects=True, timeout=60.0) as resp:
        resp.raise_for_status()
        total = int(resp.headers.get("Content-Length", 0)) or None

        with partial.open("wb") as fh:
            if progress is None:
                for chunk in resp.iter_bytes(_CHUNK_SIZE):
                    fh.write(chunk)
            else:
                with progress.transfer() as bar:
                    task = bar.add_task(dest.name, total=total)
                    for chunk in resp.iter_bytes(_CHUNK_SIZE):
                        fh.write(chunk)
                        bar.advance(task, len(chunk))

    partial.replace(dest)
    logger.debug("downloaded %d bytes", dest.stat().st_size)
