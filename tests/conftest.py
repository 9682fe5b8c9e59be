# SPDX-FileCopyrightText: 2026 Lasath Fernando <devel@lasath.org>
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Shared fixtures: a recording executor and a config rooted in tmp_path."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from wsldocker.config import WrapperConfig
from wsldocker.guest import GuestBridge
from wsldocker.process import IOMode, Outcome, ProcessRunner


@dataclass
class Call:
    argv: list[str]
    mode: IOMode
    env: dict[str, str] | None


@dataclass
class _Rule:
    tokens: tuple[str, ...]
    results: list[Outcome]

    def matches(self, argv: list[str]) -> bool:
        n = len(self.tokens)
        return any(tuple(argv[i:i + n]) == self.tokens for i in range(len(argv) - n + 1))

    def next(self) -> Outcome:
        # The last result repeats forever.
        if len(self.results) > 1:
            return self.results.pop(0)
        return self.results[0]


@dataclass
class FakeExecutor:
    """Records every command and answers from scripted rules.

    A rule matches when its tokens appear contiguously in the argv.  The
    most recently added matching rule wins; unmatched commands succeed
    with empty output.
    """

    calls: list[Call] = field(default_factory=list)
    _rules: list[_Rule] = field(default_factory=list)

    def on(self, *tokens: str, rc: int | list[int] = 0, stdout: str = "") -> None:
        codes = rc if isinstance(rc, list) else [rc]
        self._rules.append(_Rule(tokens, [Outcome(c, stdout) for c in codes]))

    def execute(
        self,
        argv: Sequence[str],
        mode: IOMode,
        env: Mapping[str, str] | None = None,
    ) -> Outcome:
        argv = list(argv)
        self.calls.append(Call(argv, mode, dict(env) if env else None))
        for rule in reversed(self._rules):
            if rule.matches(argv):
                return rule.next()
        return Outcome(0)

    def argvs(self) -> list[list[str]]:
        return [c.argv for c in self.calls]

    def ran(self, *tokens: str) -> bool:
        probe = _Rule(tokens, [Outcome(0)])
        return any(probe.matches(c.argv) for c in self.calls)

    def index(self, *tokens: str) -> int:
        """Position of the first call containing *tokens*."""
        probe = _Rule(tokens, [Outcome(0)])
        for i, c in enumerate(self.calls):
            if probe.matches(c.argv):
                return i
        raise AssertionError(f"no call contained {tokens}")


class FakeFetch:
    """Stands in for the HTTP downloader; writes a placeholder archive."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Path]] = []

    def __call__(self, url: str, dest: Path, progress: object = None) -> None:
        self.calls.append((url, dest))
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(b"rootfs")


@pytest.fixture
def config(tmp_path: Path) -> WrapperConfig:
    return WrapperConfig(
        data_dir=tmp_path / "wsl-distros",
        native_cli=tmp_path / "shims" / "docker.exe",
    )


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def runner(executor: FakeExecutor) -> ProcessRunner:
    return ProcessRunner(executor)


@pytest.fixture
def guest(config: WrapperConfig, runner: ProcessRunner) -> GuestBridge:
    return GuestBridge(config, runner)


@pytest.fixture
def fetch() -> FakeFetch:
    return FakeFetch()
