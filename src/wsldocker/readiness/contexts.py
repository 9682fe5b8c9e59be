# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Context dataclass passed through bootstrap pipeline steps."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..config import WrapperConfig
from ..download import http_download
from ..guest import GuestBridge
from ..operations import OperationReporter

Fetcher = Callable[[str, Path, OperationReporter | None], None]


@dataclass
class BootstrapContext:
    """Context passed through the guest bootstrap pipeline.

    Steps guard their own preconditions (e.g. the download step checks
    whether the archive is already staged) so the pipeline can be rerun
    after a partial failure.
    """

    config: WrapperConfig
    guest: GuestBridge
    progress: OperationReporter | None
    fetch: Fetcher = http_download

    def info(self, msg: str) -> None:
        if self.progress:
            self.progress.info(msg)

    def dim(self, msg: str) -> None:
        if self.progress:
            self.progress.dim(msg)

    def warning(self, msg: str) -> None:
        if self.progress:
            self.progress.warning(msg)
