"""Tests for the FastAPI surface."""

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from api.routes import get_leave_bucket_ledger, get_payroll_ledger
from payroll_tool.config import AppSettings
from payroll_tool.ledger import MemoryLedger


@pytest.fixture
def ledger():
    return MemoryLedger()


@pytest.fixture
def client(ledger):
    app = create_app(AppSettings())
    app.dependency_overrides[get_payroll_ledger] = lambda: ledger
    app.dependency_overrides[get_leave_bucket_ledger] = lambda: ledger
    return TestClient(app)


def test_health(client):
    resp = client.get("/api/v1/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_root(client):
    assert client.get("/").json()["health"] == "/api/v1/health"


class TestPayrollRun:
    def test_success(self, client, ledger):
        payload = {"timeSheetData": [
            {"Staff": "A", "Date": "8/4/2025", "Hours": 8, "HourlyRate": 20, "Month": "2025-Aug"},
        ]}
        resp = client.post("/api/v1/payroll/run", json=payload)

        assert resp.status_code == 200
        body = resp.json()
        assert body["ok"] is True
        assert (body["adds"], body["edits"]) == (2, 0)
        assert body["results"][0]["type"] == "Add"
        assert "error" not in body
        assert {r["Record ID"] for r in ledger.rows} == {"A-8/4/2025", "Total-A-2025-Aug"}

    def test_bad_payload_is_ok_false(self, client, ledger):
        resp = client.post("/api/v1/payroll/run", json={"lunchSheetData": {"Staff": "A"}})
        assert resp.status_code == 200
        body = resp.json()
        assert body["ok"] is False
        assert "'lunchSheetData' must be an array" in body["error"]
        assert ledger.rows == []


class TestLeaveBucketRun:
    def test_success(self, client, ledger):
        payload = {
            "timeSheetData": [{"Staff": "A", "Hours": 80}],
            "leaveType": "Vacation",
            "bonusPerHours": 40,
            "bonusHours": 1,
        }
        body = client.post("/api/v1/leave-bucket/run", json=payload).json()
        assert body["ok"] is True
        assert body["added"] == 1
        assert ledger.rows[0]["Hours"] == 2.0

    def test_missing_leave_type(self, client):
        body = client.post("/api/v1/leave-bucket/run", json={"bonusPerHours": 1, "bonusHours": 1}).json()
        assert body["ok"] is False
        assert "leaveType is required" in body["error"]
