# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Engine readiness package: public API re-exports."""

from .engine import ReadinessState, ensure_ready, probe, start_engine

__all__ = ["ReadinessState", "ensure_ready", "probe", "start_engine"]
