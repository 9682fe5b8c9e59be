# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""wsldocker - run the docker engine inside a dedicated WSL distribution.

The ``wsl-docker`` command takes exactly the arguments the docker client
would, makes sure the engine inside the guest is installed and running,
rewrites Windows paths in bind mounts, and forwards the command.
"""

__version__ = "0.1.0"
