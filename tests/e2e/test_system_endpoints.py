from __future__ import annotations

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from src.domain.entities.probe import DiskUsage, Fact, Failed, ProcessInfo, TextTail
from src.infrastructure.services import StatusAggregator
from src.main.app import create_app
from src.main.container import get_container


@pytest.fixture()
def client(probes):
    app = create_app()
    container = get_container()

    aggregator = StatusAggregator(
        probes.collectors(),
        thresholds=probes.config.thresholds,
        global_deadline=probes.config.timeouts.global_deadline,
    )
    container.status_aggregator.override(providers.Object(aggregator))
    container.recording_catalog.override(providers.Object(probes.catalog()))

    with TestClient(app) as test_client:
        yield test_client

    container.status_aggregator.reset_override()
    container.recording_catalog.reset_override()


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "service": "fleet-status-monitor",
        "modules": ["/api/monitoring"],
    }


def test_info_endpoint(client):
    response = client.get("/info")
    assert response.status_code == 200
    payload = response.json()
    assert payload["name"] == "Fleet Status Monitor"
    assert payload["severity"] == "healthy"
    assert payload["summary"] == "2 recording"
    assert payload["uptime_seconds"] >= 0


def test_unified_status_endpoint(client):
    response = client.get("/api/monitoring/unified-status")
    assert response.status_code == 200
    payload = response.json()
    assert payload["overall"] == {"severity": "healthy", "issues": [], "summary": "2 recording"}
    assert list(payload["systems"]) == [
        "recording",
        "transferService",
        "sampleExtractor",
        "storage",
        "network",
    ]
    recording = payload["systems"]["recording"]
    assert recording["state"] == "running"
    assert recording["metrics"]["cameras"] == "CAM_01,CAM_02B"
    assert recording["message"] is None


def test_unified_status_reports_warnings(client, probes):
    probes.process.responses[probes.config.recording_pattern] = Fact(ProcessInfo(count=0))
    probes.disk.response = Fact(DiskUsage(used_percent=80.0, available_bytes=1, total_bytes=5))

    payload = client.get("/api/monitoring/unified-status").json()

    assert payload["overall"]["severity"] == "warning"
    assert payload["overall"]["issues"] == ["No active recordings", "Local disk warning"]
    assert payload["overall"]["summary"] == "System idle"


def test_unified_status_deadline_is_honoured(client, probes, hang):
    probes.reachability.response = hang

    payload = client.get("/api/monitoring/unified-status", params={"deadline": 0.1}).json()

    assert payload["systems"]["network"]["state"] == "unknown"
    assert payload["systems"]["network"]["message"] == "timed out"
    assert payload["overall"]["severity"] == "error"
    assert payload["overall"]["issues"][-1] == (
        "Status check timeout: network did not finish within 0.1s"
    )


def test_unified_status_rejects_invalid_deadline(client):
    response = client.get("/api/monitoring/unified-status", params={"deadline": -1})
    assert response.status_code == 422


def test_legacy_status_endpoint(client):
    response = client.get("/api/monitoring/status")
    assert response.status_code == 200
    payload = response.json()
    assert payload["isRunning"] is True
    assert payload["pid"] == 11
    assert payload["cronConfigured"] is True
    assert payload["recordingCount"] == 10
    assert payload["sampleCount"] == 4
    assert payload["unified"]["overall"]["severity"] == "healthy"


def test_subsystem_endpoint(client):
    response = client.get("/api/monitoring/systems/transferService")
    assert response.status_code == 200
    payload = response.json()
    assert payload["kind"] == "transferService"
    assert payload["metrics"]["mountedCount"] == 2


def test_subsystem_endpoint_unknown_kind(client):
    response = client.get("/api/monitoring/systems/database")
    assert response.status_code == 404
    assert response.json()["detail"] == "Unknown subsystem 'database'"


def test_module_health_endpoint(client):
    response = client.get("/api/monitoring/health")
    assert response.status_code == 200
    assert response.json() == {
        "module": "monitoring",
        "status": "ok",
        "service": "StatusAggregator",
    }


def test_recent_samples_endpoint(client):
    response = client.get("/api/monitoring/recent-samples")
    assert response.status_code == 200
    payload = response.json()
    assert payload["count"] == 1
    assert payload["samples"][0]["cameraId"] == "CAM_01"
    assert payload["samples"][0]["size"] == "1.5 KB"


def test_cameras_endpoint(client):
    payload = client.get("/api/monitoring/cameras").json()

    assert [camera["cameraId"] for camera in payload["cameras"]] == ["CAM_01", "CAM_07"]
    assert payload["cameras"][0]["isRecording"] is True
    assert len(payload["cameras"][0]["lastRecordings"]) == 2
    assert payload["cameras"][1]["recordingsPath"] is None


def test_cameras_endpoint_search(client):
    payload = client.get("/api/monitoring/cameras", params={"search": "cam_07"}).json()
    assert payload["count"] == 1


def test_cameras_endpoint_unavailable(client, probes):
    probes.directories.responses[probes.config.data_dir] = Failed("find exited with 2: boom")

    response = client.get("/api/monitoring/cameras")

    assert response.status_code == 503
    assert response.json()["detail"] == "Unable to read cameras: find exited with 2: boom"


def test_camera_recordings_endpoint(client):
    response = client.get(
        "/api/monitoring/camera/CAM_01/recordings", params={"date": "2025-03-01"}
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["date"] == "20250301"
    assert payload["count"] == 2
    assert payload["totalSizeBytes"] == 180 * 1024 * 1024
    assert [r["quality"] for r in payload["recordings"]] == ["High", "Medium"]


def test_camera_recordings_endpoint_rejects_bad_date(client):
    response = client.get(
        "/api/monitoring/camera/CAM_01/recordings", params={"date": "2025-02-30"}
    )
    assert response.status_code == 400
    assert response.json()["detail"].startswith("Invalid date '2025-02-30'")


def test_logs_endpoint(client, probes):
    payload = client.get("/api/monitoring/logs", params={"lines": 2}).json()
    assert [entry["type"] for entry in payload["logs"]] == ["success", "warning"]

    probes.logs.response = Fact(TextTail(found=False))
    payload = client.get("/api/monitoring/logs").json()
    assert payload["logs"][0]["message"] == "No log file found"


def test_logs_endpoint_rejects_zero_lines(client):
    assert client.get("/api/monitoring/logs", params={"lines": 0}).status_code == 422


def test_nas_details_endpoint(client):
    payload = client.get("/api/monitoring/nas-details").json()

    assert [mount["name"] for mount in payload["mounts"]] == ["Primary", "Overflow"]
    assert payload["mounts"][0]["accessible"] is True
    assert payload["mounts"][0]["fileCount"] == 10
    assert payload["totalFiles"] == 20
    assert payload["service"] == {"running": True, "cron": True}
