from __future__ import annotations

import asyncio
import json
import time
from typing import List, Optional, Tuple

import pytest

from src.application.dtos.status_dto import StatusSnapshotDTO
from src.domain.entities.status import (
    HealthSeverity,
    OverallHealth,
    StatusSnapshot,
    SubsystemKind,
)
from src.main import cli
from src.main.config import AppSettings


def _snapshot_dto(healthy_systems, severity: HealthSeverity) -> StatusSnapshotDTO:
    snapshot = StatusSnapshot(
        overall=OverallHealth(severity=severity, summary="3 recording"),
        systems=healthy_systems,
    )
    return StatusSnapshotDTO.from_domain(snapshot)


def test_parser_defaults_come_from_settings() -> None:
    parser = cli.build_parser(AppSettings())

    status_args = parser.parse_args(["status"])
    serve_args = parser.parse_args(["serve", "--port", "8080"])

    assert status_args.deadline is None
    assert status_args.pretty is False
    assert serve_args.host == "0.0.0.0"
    assert serve_args.port == 8080


def test_parser_requires_a_command() -> None:
    with pytest.raises(SystemExit):
        cli.build_parser(AppSettings()).parse_args([])


@pytest.mark.parametrize(
    "severity, code",
    [
        (HealthSeverity.HEALTHY, 0),
        (HealthSeverity.WARNING, 1),
        (HealthSeverity.ERROR, 2),
    ],
)
def test_status_command_prints_snapshot(
    monkeypatch, capsys, healthy_systems, severity, code
) -> None:
    received = {}

    async def fake_collect(settings, deadline: Optional[float]):
        received["deadline"] = deadline
        return _snapshot_dto(healthy_systems, severity)

    monkeypatch.setattr("src.main.cli.collect_status", fake_collect)

    exit_code = cli.main(["status", "--deadline", "3"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == code
    assert received["deadline"] == 3.0
    assert payload["overall"]["severity"] == severity.value
    assert list(payload["systems"]) == [kind.value for kind in SubsystemKind]
    assert "collectedAt" in payload["systems"]["network"]


def test_serve_command_runs_uvicorn(monkeypatch) -> None:
    calls = {}

    def fake_run(app, **kwargs):
        calls["app"] = app
        calls.update(kwargs)

    monkeypatch.setattr("src.main.cli.uvicorn.run", fake_run)

    assert cli.main(["serve", "--host", "127.0.0.1", "--port", "9000"]) == 0
    assert calls == {"app": "src.main.app:app", "host": "127.0.0.1", "port": 9000, "reload": False}


@pytest.mark.asyncio
async def test_collect_status_uses_container(monkeypatch, healthy_systems) -> None:
    class _StubAggregator:
        closed = False

        async def get_unified_status(self, deadline=None):
            return StatusSnapshot(
                overall=OverallHealth(HealthSeverity.HEALTHY), systems=healthy_systems
            )

        async def aclose(self) -> None:
            self.closed = True

    stub = _StubAggregator()

    class _StubContainer:
        def status_aggregator(self):
            return stub

    monkeypatch.setattr("src.main.cli.init_container", lambda settings: _StubContainer())

    dto = await cli.collect_status(AppSettings(), deadline=1.0)

    assert dto.overall.severity is HealthSeverity.HEALTHY
    assert stub.closed is True


class _FakeProcess:
    """Subprocess double: ``find``/``df`` never finish, everything else exits 1."""

    def __init__(self, program: str) -> None:
        self.program = program
        self.returncode: Optional[int] = None
        self.killed = False

    @property
    def hangs(self) -> bool:
        return self.program in ("find", "df")

    async def communicate(self) -> Tuple[bytes, bytes]:
        if self.hangs:
            await asyncio.sleep(3600)
        self.returncode = 1
        stderr = b"no crontab for recorder" if self.program == "crontab" else b""
        return b"", stderr

    def kill(self) -> None:
        self.killed = True
        self.returncode = -9

    async def wait(self) -> int:
        return self.returncode if self.returncode is not None else 0


def test_status_command_returns_at_deadline_with_stuck_filesystem(
    monkeypatch, capsys, tmp_path
) -> None:
    spawned: List[_FakeProcess] = []

    async def fake_exec(*argv, **_kwargs):
        process = _FakeProcess(argv[0])
        spawned.append(process)
        return process

    monkeypatch.setattr(
        "src.infrastructure.probes.command.asyncio.create_subprocess_exec", fake_exec
    )
    monkeypatch.setenv("MONITOR_BASE_DIR", str(tmp_path))
    monkeypatch.setenv("TIMEOUT_FILE_COUNT", "30")
    monkeypatch.setenv("TIMEOUT_DISK", "30")
    monkeypatch.setenv("TIMEOUT_COLLECTOR_BUDGET", "40")
    monkeypatch.setenv("TIMEOUT_GLOBAL_DEADLINE", "60")
    started = time.perf_counter()

    exit_code = cli.run_status(AppSettings(), deadline=0.3, pretty=False)

    assert time.perf_counter() - started < 1.5
    assert exit_code == 2
    payload = json.loads(capsys.readouterr().out)
    assert payload["systems"]["storage"]["message"] == "timed out"
    assert payload["systems"]["recording"]["message"] == "timed out"
    assert payload["overall"]["issues"][-1].startswith("Status check timeout:")
    stuck = [process for process in spawned if process.hangs]
    assert stuck
    assert all(process.killed for process in stuck)
