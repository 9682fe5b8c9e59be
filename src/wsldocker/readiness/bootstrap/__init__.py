# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Guest bootstrap pipeline: stage the rootfs, import it, install and configure docker.

Importing this package registers all steps with the pipeline.
"""

from ...pipeline import Pipeline
from ..contexts import BootstrapContext

bootstrap_pipeline = Pipeline[BootstrapContext]("bootstrap")

# Import step modules so their decorators register with the pipeline.
from . import download_rootfs as _  # noqa: F401, E402
from . import import_distro as _  # noqa: F401, E402
from . import install_engine as _  # noqa: F401, E402
from . import write_config as _  # noqa: F401, E402
