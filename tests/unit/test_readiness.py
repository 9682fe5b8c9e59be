# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Tests for the engine readiness state machine and bootstrap pipeline."""

from __future__ import annotations

import json
import shlex
from dataclasses import replace
from pathlib import Path

import httpx
import pytest

from wsldocker.config import Topology, WrapperConfig
from wsldocker.guest import GuestBridge
from wsldocker.operations import BootstrapError
from wsldocker.process import IOMode
from wsldocker.readiness import ReadinessState, ensure_ready, probe
from wsldocker.readiness.bootstrap import bootstrap_pipeline
from wsldocker.readiness.bootstrap.write_config import client_config, daemon_config

from ..conftest import FakeExecutor, FakeFetch


def _fresh_guest(executor: FakeExecutor) -> None:
    """Script a machine where the distribution does not exist yet."""
    executor.on("which", "docker", rc=1)
    executor.on("-e", "true", rc=1)
    executor.on("docker", "status", rc=1)


def _stage(argv: list[str]) -> str | None:
    """Name the readiness stage a recorded command belongs to."""
    joined = " ".join(argv)
    if "which docker" in joined:
        return "probe"
    if argv[-1:] == ["true"]:
        return "exists"
    if "--import" in argv:
        return "import"
    if "get.docker.com" in joined:
        return "install"
    if "config.json" in joined:
        return "client-config"
    if "daemon.json" in joined:
        return "daemon-config"
    if "docker status" in joined:
        return "status"
    if "docker start" in joined:
        return "start"
    return None


def test_pipeline_order() -> None:
    names = [s.__name__ for s in bootstrap_pipeline.steps()]
    assert names == ["download_rootfs", "import_distro", "install_engine", "write_config"]


class TestProbe:
    def test_not_installed(self, guest: GuestBridge, executor: FakeExecutor) -> None:
        executor.on("which", "docker", rc=1)
        assert probe(guest) is ReadinessState.NOT_INSTALLED
        assert not executor.ran("docker", "status")

    def test_installed_not_running(self, guest: GuestBridge, executor: FakeExecutor) -> None:
        executor.on("docker", "status", rc=3)
        assert probe(guest) is ReadinessState.INSTALLED_NOT_RUNNING

    def test_running(self, guest: GuestBridge, executor: FakeExecutor) -> None:
        assert probe(guest) is ReadinessState.RUNNING

    def test_probes_run_inside_guest_silently(
        self, guest: GuestBridge, executor: FakeExecutor, config: WrapperConfig
    ) -> None:
        probe(guest)
        for call in executor.calls:
            assert call.argv[:4] == ["wsl", "-d", config.distro_name, "-e"]
            assert call.mode.value == "silent"


class TestEnsureReady:
    def test_running_engine_has_no_side_effects(
        self, guest: GuestBridge, executor: FakeExecutor, fetch: FakeFetch
    ) -> None:
        assert ensure_ready(guest, fetch=fetch) is ReadinessState.RUNNING
        assert ensure_ready(guest, fetch=fetch) is ReadinessState.RUNNING

        assert fetch.calls == []
        assert [_stage(a) for a in executor.argvs()] == ["probe", "status"] * 2

    def test_stopped_engine_is_started(self, guest: GuestBridge, executor: FakeExecutor, fetch: FakeFetch) -> None:
        executor.on("docker", "status", rc=3)

        ensure_ready(guest, fetch=fetch)

        assert [_stage(a) for a in executor.argvs()] == ["probe", "status", "start"]
        assert fetch.calls == []

    def test_full_bootstrap_order(
        self, guest: GuestBridge, executor: FakeExecutor, fetch: FakeFetch, config: WrapperConfig
    ) -> None:
        _fresh_guest(executor)

        assert ensure_ready(guest, fetch=fetch) is ReadinessState.RUNNING

        assert [_stage(a) for a in executor.argvs()] == [
            "probe", "exists", "import", "install", "client-config", "daemon-config", "start",
        ]
        assert fetch.calls == [(config.rootfs_url, config.rootfs_archive)]
        assert config.distro_root.is_dir()
        import_call = executor.calls[executor.index("--import")]
        assert import_call.argv == [
            "wsl", "--import", config.distro_name,
            str(config.distro_root), str(config.rootfs_archive),
        ]

    def test_bootstrap_output_stays_off_stdout(
        self, guest: GuestBridge, executor: FakeExecutor, fetch: FakeFetch
    ) -> None:
        _fresh_guest(executor)

        ensure_ready(guest, fetch=fetch)

        modes = {_stage(c.argv): c.mode for c in executor.calls}
        assert modes["import"] is IOMode.STDERR
        assert modes["install"] is IOMode.STDERR
        assert all(c.mode is not IOMode.INHERIT for c in executor.calls)

    def test_staged_archive_skips_download(
        self, guest: GuestBridge, executor: FakeExecutor, fetch: FakeFetch, config: WrapperConfig
    ) -> None:
        _fresh_guest(executor)
        config.rootfs_archive.parent.mkdir(parents=True)
        config.rootfs_archive.write_bytes(b"old")

        ensure_ready(guest, fetch=fetch)

        assert fetch.calls == []
        assert executor.ran("--import")
        assert config.rootfs_archive.read_bytes() == b"old"

    def test_registered_guest_skips_import(
        self, guest: GuestBridge, executor: FakeExecutor, fetch: FakeFetch
    ) -> None:
        # Earlier run imported the distro but failed to install docker
        executor.on("which", "docker", rc=1)
        executor.on("docker", "status", rc=1)

        ensure_ready(guest, fetch=fetch)

        assert not executor.ran("--import")
        assert [_stage(a) for a in executor.argvs()] == [
            "probe", "exists", "install", "client-config", "daemon-config", "start",
        ]

    @pytest.mark.parametrize(
        ("tokens", "stage"),
        [
            (("--import",), "import"),
            (("sh", "-c", "curl -fsSL https://get.docker.com/ | sh"), "install"),
            (("docker", "start"), "start"),
        ],
    )
    def test_stage_failure_is_fatal(
        self,
        guest: GuestBridge,
        executor: FakeExecutor,
        fetch: FakeFetch,
        tokens: tuple[str, ...],
        stage: str,
    ) -> None:
        _fresh_guest(executor)
        executor.on(*tokens, rc=1)

        with pytest.raises(BootstrapError) as exc_info:
            ensure_ready(guest, fetch=fetch)

        assert exc_info.value.stage == stage
        # Nothing runs after the failing stage
        assert _stage(executor.calls[-1].argv) == stage

    @pytest.mark.parametrize(
        ("codes", "message"),
        [
            ([0, 1], "Failed to set up detach keys"),
            ([0, 0, 1], "Failed to set up buildkit"),
        ],
    )
    def test_config_write_failure_is_fatal(
        self,
        guest: GuestBridge,
        executor: FakeExecutor,
        fetch: FakeFetch,
        codes: list[int],
        message: str,
    ) -> None:
        _fresh_guest(executor)
        # Shell scripts run in order: installer, client config, daemon config
        executor.on("sh", "-c", rc=codes)

        with pytest.raises(BootstrapError) as exc_info:
            ensure_ready(guest, fetch=fetch)

        assert exc_info.value.stage == "configure"
        assert str(exc_info.value) == message
        assert not executor.ran("docker", "start")

    def test_download_failure_is_fatal(
        self, guest: GuestBridge, executor: FakeExecutor, config: WrapperConfig
    ) -> None:
        _fresh_guest(executor)

        def broken_fetch(url: str, dest: Path, progress: object = None) -> None:
            raise httpx.ConnectError("connection refused")

        with pytest.raises(BootstrapError) as exc_info:
            ensure_ready(guest, fetch=broken_fetch)

        assert exc_info.value.stage == "download"
        assert "Failed to download rootfs" in str(exc_info.value)
        assert not executor.ran("--import")
        assert not config.rootfs_archive.exists()


class TestEngineConfig:
    def test_guest_topology_daemon_config(self, config: WrapperConfig) -> None:
        assert daemon_config(config) == {"features": {"buildkit": True}}

    def test_native_topology_binds_tcp(self, config: WrapperConfig) -> None:
        native = replace(config, topology=Topology.NATIVE, engine_port=2375)
        assert daemon_config(native)["hosts"] == [
            "unix:///var/run/docker.sock",
            "tcp://localhost:2375",
        ]

    def test_client_config_sets_detach_keys(self, config: WrapperConfig) -> None:
        assert client_config(config) == {"detachKeys": "ctrl-^"}

    def test_written_json_is_shell_quoted(
        self, guest: GuestBridge, executor: FakeExecutor, fetch: FakeFetch
    ) -> None:
        _fresh_guest(executor)
        ensure_ready(guest, fetch=fetch)

        script = executor.calls[executor.index("sh", "-c") + 2].argv[-1]
        assert script.startswith("mkdir -p /etc/docker && ")
        payload = shlex.split(script.split("&&", 1)[1])[2]
        assert json.loads(payload) == {"features": {"buildkit": True}}
