# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Ordered pipeline of step functions.

A :class:`Pipeline` lives at module level; step modules import it and
register their functions with :meth:`Pipeline.step`, so adding a stage
is a matter of adding a file.
"""

from __future__ import annotations

import bisect
import logging
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

_Ctx = TypeVar("_Ctx")

_StepFn = Callable[[_Ctx], None]


class Pipeline(Generic[_Ctx]):
    """Steps run in ascending *order*, ties in registration order.

    Orders are spaced by 100 so a stage can be slotted in between two
    existing ones.  A step aborts the run by raising.

    Example::

        bootstrap = Pipeline[BootstrapContext]("bootstrap")

        @bootstrap.step(order=100)
        def download_rootfs(ctx: BootstrapContext) -> None: ...
    """

    def __init__(self, name: str) -> None:
        self.name = name
        # (order, registration index, fn), kept sorted
        self._entries: list[tuple[int, int, _StepFn[_Ctx]]] = []

    def step(self, *, order: int) -> Callable[[_StepFn[_Ctx]], _StepFn[_Ctx]]:
        """Decorator registering a step at *order*."""
        def _register(fn: _StepFn[_Ctx]) -> _StepFn[_Ctx]:
            bisect.insort(self._entries, (order, len(self._entries), fn))
            return fn
        return _register

    def steps(self) -> list[_StepFn[_Ctx]]:
        """Registered steps in execution order."""
        return [fn for _order, _seq, fn in self._entries]

    def run(self, ctx: _Ctx) -> None:
        for order, _seq, fn in self._entries:
            logger.debug("%s: %s (order %d)", self.name, fn.__name__, order)
            fn(ctx)
