"""Tests for the HTTP API, driven through FastAPI's TestClient."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from meshforge.api.app import create_app, get_session
from meshforge.backend import MockBackend
from meshforge.session.model import MachineSession


@pytest.fixture
def client():
    session = MachineSession(MockBackend())
    app = create_app(enable_ui=False, session=session, poll=False)
    with TestClient(app) as test_client:
        yield test_client


class TestPorts:
    def test_startup_selects_first_port(self, client):
        data = client.get("/api/ports").json()
        assert [p["name"] for p in data["ports"]] == ["COM3", "/dev/ttyUSB0"]
        assert data["selected"]["name"] == "COM3"
        assert data["selected_display"] == "Mock CNC (COM3)"
        assert data["error"] is None

    def test_select(self, client):
        resp = client.post("/api/ports/select", json={"name": "/dev/ttyUSB0"})
        assert resp.status_code == 200
        assert resp.json()["selected"]["name"] == "/dev/ttyUSB0"

    def test_select_unknown(self, client):
        resp = client.post("/api/ports/select", json={"name": "COM9"})
        assert resp.status_code == 404

    def test_refresh_keeps_selection(self, client):
        client.post("/api/ports/select", json={"name": "/dev/ttyUSB0"})
        data = client.post("/api/ports/refresh").json()
        assert data["selected"]["name"] == "/dev/ttyUSB0"
        assert data["loading"] is False


class TestStatus:
    def test_initial_status(self, client):
        data = client.get("/api/status").json()
        assert data["category"] == "idle"
        assert data["label"] == "Idle"
        assert data["mock"] is True
        assert data["polling"] is False

    def test_refresh_advances_mock_cycle(self, client):
        data = client.post("/api/status/refresh").json()
        assert data["category"] == "run"
        assert data["status"]["work_pos"]["x"] == 1.5


class TestCoordinates:
    def test_zero_axis(self, client):
        data = client.post("/api/coordinates/zero/z").json()
        assert data["work"]["z"] == 0.0

    def test_zero_all(self, client):
        client.post("/api/status/refresh")
        data = client.post("/api/coordinates/zero").json()
        assert (data["work"]["x"], data["work"]["y"], data["work"]["z"]) == (0.0, 0.0, 0.0)
        assert data["machine"]["x"] != 0.0

    def test_invalid_axis(self, client):
        assert client.post("/api/coordinates/zero/q").status_code == 422

    def test_go_to(self, client):
        resp = client.post("/api/coordinates/goto/xy")
        assert resp.json() == {"target": "xy", "accepted": True}

    def test_invalid_go_to(self, client):
        assert client.post("/api/coordinates/goto/xz").status_code == 422


class TestJob:
    def test_open_and_clear(self, client, gcode_file):
        data = client.post("/api/job/open", json={"path": gcode_file}).json()
        assert data["state"] == "loaded"
        assert data["name"] == "pocket.gcode"
        assert data["size_description"] == "1 KB (3 lines)"
        assert data["history"] == [{"name": "pocket.gcode", "path": gcode_file}]

        data = client.post("/api/job/clear").json()
        assert data["state"] == "empty"
        assert data["name"] == ""
        assert len(data["history"]) == 1

    def test_previous(self, client, gcode_file):
        client.post("/api/job/open", json={"path": gcode_file})
        client.post("/api/job/clear")
        data = client.post("/api/job/previous", json={"path": gcode_file}).json()
        assert data["state"] == "loaded"
        assert data["selected_path"] == gcode_file

    def test_open_missing_file(self, client, tmp_path):
        data = client.post("/api/job/open", json={"path": str(tmp_path / "gone.nc")}).json()
        assert data["state"] == "empty"
        assert data["error"]

    def test_empty_path_rejected(self, client):
        assert client.post("/api/job/open", json={"path": ""}).status_code == 422

    def test_reload_empty(self, client):
        data = client.post("/api/job/reload").json()
        assert data["state"] == "empty"

    def test_view(self, client):
        data = client.post("/api/job/view", json={"mode": "info"}).json()
        assert data["view_mode"] == "info"


class TestAppFactory:
    def test_session_registered(self):
        session = MachineSession(MockBackend())
        create_app(enable_ui=False, session=session, poll=False)
        assert get_session() is session
