# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Rewrite Windows paths in docker arguments into guest paths.

Two passes, chosen by the subcommand (the first argument):

``--mount`` sources
    For mount-creating subcommands (``create`` by default), the value
    following ``--mount`` (or joined as ``--mount=...``) is a comma
    separated list of ``key=value`` options.  Only the ``source``/``src``
    option (keys compare case-insensitively, as docker does)
    is translated; every other option is kept byte for byte and
    in order.  A failed translation is fatal, since a bind mount of an
    untranslated path would silently mount the wrong thing.

Bare paths
    When enabled, every argument containing a backslash is translated on
    its own, for every subcommand except ``exec``.  This is a heuristic,
    so a failed translation leaves the argument untouched.

Arguments are never added, removed, or reordered.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection

from .operations import TranslationError

logger = logging.getLogger(__name__)

MOUNT_FLAG = "--mount"
SOURCE_KEYS = ("source", "src")
HOST_SEPARATOR = "\\"
BARE_PATH_EXCLUDED = frozenset({"exec"})

Translator = Callable[[str], str]


def rewrite_mount_spec(spec: str, translate: Translator) -> str:
    """Translate the source option of a single ``--mount`` value.

    >>> rewrite_mount_spec("type=bind,source=C:\\\\x,target=/x", lambda p: "/mnt/c/x")
    'type=bind,source=/mnt/c/x,target=/x'
    """
    opts = spec.split(",")
    for i, opt in enumerate(opts):
        key, sep, value = opt.partition("=")
        if sep and key.strip().lower() in SOURCE_KEYS:
            opts[i] = f"{key}={translate(value)}"
    return ",".join(opts)


def rewrite_mounts(args: list[str], translate: Translator) -> set[int]:
    """Rewrite every ``--mount`` value in *args* in place.

    Returns:
        Indices of the arguments that hold mount specifications.

    Raises:
        TranslationError: If a source path cannot be translated.
    """
    touched: set[int] = set()
    joined = MOUNT_FLAG + "="
    expect_spec = False

    for i, arg in enumerate(args):
        if expect_spec:
            expect_spec = False
            args[i] = rewrite_mount_spec(arg, translate)
            touched.add(i)
            continue

        stripped = arg.strip()
        if stripped == MOUNT_FLAG:
            expect_spec = True
        elif stripped.startswith(joined):
            args[i] = joined + rewrite_mount_spec(stripped[len(joined):], translate)
            touched.add(i)

    return touched


def rewrite_bare_paths(
    args: list[str],
    translate: Translator,
    skip: Collection[int] = (),
) -> None:
    """Translate every argument that looks like a Windows path, in place.

    Failures keep the original argument.
    """
    for i, arg in enumerate(args):
        if i == 0 or i in skip or HOST_SEPARATOR not in arg:
            continue
        try:
            args[i] = translate(arg)
        except TranslationError as e:
            logger.debug("keeping %r: %s", arg, e)


def rewrite_args(
    args: list[str],
    translate: Translator,
    *,
    mount_subcommands: Collection[str] = ("create",),
    bare_paths: bool = False,
) -> list[str]:
    """Apply both rewrite passes to *args* in place and return it.

    Args:
        args: The argument vector as given to docker (subcommand first).
        translate: Converts one Windows path to a guest path, raising
            :class:`TranslationError` on failure.
        mount_subcommands: Subcommands whose ``--mount`` values are rewritten.
        bare_paths: Whether to run the backslash heuristic.
    """
    if not args:
        return args

    subcommand = args[0]
    touched: set[int] = set()
    if subcommand in mount_subcommands:
        touched = rewrite_mounts(args, translate)

    if bare_paths and subcommand not in BARE_PATH_EXCLUDED:
        rewrite_bare_paths(args, translate, skip=touched)

    return args
