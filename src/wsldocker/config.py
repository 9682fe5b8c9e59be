# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Configuration loading.

Configuration is read from (lowest to highest priority):
  1. Built-in defaults
  2. ~/.config/wsldocker/wsldocker.conf
  3. %APPDATA%\\wsldocker\\wsldocker.conf  (Windows)
  4. The file named by $WSLDOCKER_CONFIG
  5. WSLDOCKER_<KEY> environment variables

Files are INI with a single ``[wsldocker]`` section::

    [wsldocker]
    topology = native
    distro_name = my-docker-host
    engine_port = 2375

The result is a frozen :class:`WrapperConfig`, built once at startup and
passed to every component.
"""

from __future__ import annotations

import configparser
import enum
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_SECTION = "wsldocker"
ENV_PREFIX = "WSLDOCKER_"

DEFAULT_ROOTFS_URL = (
    "https://cloud-images.ubuntu.com/wsl/jammy/current/"
    "ubuntu-jammy-wsl-amd64-wsl.rootfs.tar.gz"
)
DEFAULT_INSTALLER_URL = "https://get.docker.com/"


class ConfigError(Exception):
    """Invalid configuration value."""


class Topology(enum.Enum):
    """Where the forwarded docker command runs."""

    # docker client inside the guest, reached through ``wsl -e``
    GUEST = "guest"
    # docker client on the host, pointed at the guest daemon over TCP
    NATIVE = "native"


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class WrapperConfig:
    """Settings shared by every component."""

    topology: Topology = Topology.GUEST
    distro_name: str = "custom-docker-host"
    context_name: str = "custom-linux-docker-host"
    rootfs_url: str = DEFAULT_ROOTFS_URL
    installer_url: str = DEFAULT_INSTALLER_URL
    engine_host: str = "localhost"
    engine_port: int = 22432
    detach_keys: str = "ctrl-^"
    data_dir: Path = field(default_factory=lambda: Path.home() / "wsl-distros")
    native_cli: Path = field(
        default_factory=lambda: Path.home() / "scoop" / "shims" / "docker.exe"
    )
    wsl_exe: str = "wsl"
    guest_engine: str = "docker"
    mount_subcommands: tuple[str, ...] = ("create",)
    # None means "decided by topology"
    translate_bare_paths: bool | None = None
    log_level: str = "WARNING"

    @property
    def distro_dir(self) -> Path:
        """Directory holding everything staged for this guest."""
        return self.data_dir / self.distro_name

    @property
    def rootfs_archive(self) -> Path:
        return self.distro_dir / "rootfs.tar.gz"

    @property
    def distro_root(self) -> Path:
        return self.distro_dir / "root"

    @property
    def engine_endpoint(self) -> str:
        return f"{self.engine_host}:{self.engine_port}"

    @property
    def guest_prefix(self) -> list[str]:
        """Arguments that select this guest for ``wsl -e`` execution."""
        return [self.wsl_exe, "-d", self.distro_name, "-e"]

    @property
    def bare_path_rewriting(self) -> bool:
        if self.translate_bare_paths is not None:
            return self.translate_bare_paths
        return self.topology is Topology.GUEST


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"Invalid boolean for {key}: {raw!r}")


def _coerce(key: str, raw: str) -> object:
    """Convert a raw string from a file or the environment to the field type."""
    raw = raw.strip()
    if key == "topology":
        try:
            return Topology(raw.lower())
        except ValueError:
            valid = ", ".join(t.value for t in Topology)
            raise ConfigError(f"Invalid topology {raw!r} (expected one of: {valid})")
    if key == "engine_port":
        try:
            port = int(raw)
        except ValueError:
            raise ConfigError(f"Invalid engine_port: {raw!r}")
        if not 0 < port < 65536:
            raise ConfigError(f"engine_port out of range: {port}")
        return port
    if key in ("data_dir", "native_cli"):
        return Path(raw).expanduser()
    if key == "mount_subcommands":
        return tuple(s.strip() for s in raw.split(",") if s.strip())
    if key == "translate_bare_paths":
        if raw.lower() in ("", "auto"):
            return None
        return _parse_bool(key, raw)
    if key == "log_level":
        level = raw.upper()
        if level not in _LOG_LEVELS:
            raise ConfigError(f"Invalid log_level: {raw!r}")
        return level
    return raw


def _config_files(env: Mapping[str, str]) -> list[Path]:
    """Candidate config files, lowest priority first."""
    paths = [Path.home() / ".config" / "wsldocker" / "wsldocker.conf"]
    appdata = env.get("APPDATA")
    if appdata:
        paths.append(Path(appdata) / "wsldocker" / "wsldocker.conf")
    explicit = env.get(ENV_PREFIX + "CONFIG")
    if explicit:
        paths.append(Path(explicit).expanduser())
    return paths


def load_config(
    env: Mapping[str, str] | None = None,
    files: list[Path] | None = None,
) -> WrapperConfig:
    """Build the configuration from files and environment.

    Args:
        env: Environment to read overrides from (default: ``os.environ``).
        files: Config files to read, lowest priority first (default:
            the standard search path).

    Raises:
        ConfigError: If a file is malformed or a value is invalid.
    """
    if env is None:
        env = os.environ
    if files is None:
        files = _config_files(env)

    known = {f.name for f in fields(WrapperConfig)}
    overrides: dict[str, object] = {}

    for path in files:
        if not path.is_file():
            continue
        parser = configparser.ConfigParser(interpolation=None)
        try:
            parser.read(path, encoding="utf-8")
        except configparser.Error as e:
            raise ConfigError(f"Failed to parse {path}: {e}")
        if not parser.has_section(CONFIG_SECTION):
            logger.debug("no [%s] section in %s", CONFIG_SECTION, path)
            continue
        for key, raw in parser.items(CONFIG_SECTION):
            if key not in known:
                raise ConfigError(f"Unknown config key in {path}: {key}")
            overrides[key] = _coerce(key, raw)
        logger.debug("loaded config from %s", path)

    for key in known:
        raw = env.get(ENV_PREFIX + key.upper())
        if raw is not None:
            overrides[key] = _coerce(key, raw)

    return replace(WrapperConfig(), **overrides)
