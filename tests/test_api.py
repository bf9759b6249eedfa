import pytest
from fastapi.testclient import TestClient

from main import app
from utils.exporter import XLSX_MIME


@pytest.fixture()
def client(monkeypatch):
    monkeypatch.delenv("API_KEY", raising=False)
    return TestClient(app)


@pytest.fixture()
def workspace_file(monkeypatch, tmp_path):
    import api.workspace as workspace_api
    from utils import storage

    path = tmp_path / "workspace.json"
    monkeypatch.setattr(workspace_api, "save_workspace", lambda ws: storage.save_workspace(ws, path))
    monkeypatch.setattr(workspace_api, "load_workspace", lambda: storage.load_workspace(path))
    return path


def _payload(**config):
    staff = [{"id": f"n{i}", "name": f"Nurse {i}", "tier": 2, "unit": "ICU", "quota": 10} for i in range(5)]
    staff.append({"id": "j1", "name": "Junior", "tier": 3, "unit": "ER", "room": "7"})
    staff.append({"id": "j2", "name": "Junior Two", "tier": 3, "unit": "ER", "room": "7", "isActive": False})
    return {
        "staff": staff,
        "services": [{"id": "icu", "name": "ICU", "minDailyCount": 1, "maxDailyCount": 2, "allowedUnits": ["ICU"]}],
        "constraints": [],
        "config": {"year": 2026, "month": 6, "maxRetries": 2, "seed": 5, **config},
    }


def test_healthcheck(client):
    response = client.get("/api/health/check")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["defaults"]["maxRetries"] == 50
    assert body["defaults"]["tiers"]["3"] == {"quota": 5, "weekendLimit": 2}


def test_generate_returns_roster(client):
    response = client.post("/api/schedule/generate", json=_payload(dailyTotalTarget=2))
    assert response.status_code == 200

    body = response.json()
    assert (body["year"], body["month"], body["attempts"]) == (2026, 6, 2)
    assert len(body["schedule"]) == 30
    assert {row["id"] for row in body["staffSummary"]} == {"n0", "n1", "n2", "n3", "n4", "j1"}
    assert body["unfilledSlots"] == sum(
        1 for day in body["schedule"] for a in day["assignments"] if a["staffId"] == "EMPTY"
    )
    for day in body["schedule"]:
        assert len(day["assignments"]) <= 2


def test_export_streams_workbook(client):
    response = client.post("/api/schedule/export", json=_payload())
    assert response.status_code == 200
    assert response.headers["content-type"] == XLSX_MIME
    assert 'filename="duty_roster_2026_06.xlsx"' in response.headers["content-disposition"]
    assert response.content[:2] == b"PK"


def test_zero_retries_maps_to_422(client):
    response = client.post("/api/schedule/generate", json=_payload(maxRetries=0))
    assert response.status_code == 422
    assert "max_retries=0" in response.json()["detail"]


def test_duplicate_staff_ids_map_to_400(client):
    payload = _payload()
    payload["staff"].append(dict(payload["staff"][0]))
    response = client.post("/api/schedule/generate", json=payload)
    assert response.status_code == 400


def test_invalid_service_is_a_validation_error(client):
    payload = _payload()
    payload["services"][0]["minDailyCount"] = 3
    response = client.post("/api/schedule/generate", json=payload)
    assert response.status_code == 422


def test_workspace_round_trip(client, workspace_file):
    assert client.get("/api/workspace").json()["staff"] == []

    payload = _payload()
    body = {"staff": payload["staff"], "services": payload["services"], "config": payload["config"]}
    assert client.put("/api/workspace", json=body).status_code == 200

    stored = client.get("/api/workspace").json()
    assert [s["id"] for s in stored["staff"]] == [s["id"] for s in payload["staff"]]
    assert stored["config"]["maxRetries"] == 2


def test_preset_lifecycle(client, workspace_file):
    payload = _payload()
    client.put("/api/workspace", json={"config": payload["config"]})
    preset = {"name": "june", "staff": payload["staff"][:2], "services": payload["services"], "dailyTotalTarget": 3}

    assert client.post("/api/workspace/presets", json=preset).status_code == 201
    assert [p["name"] for p in client.get("/api/workspace/presets").json()] == ["june"]
    assert client.get("/api/workspace/presets/june").json()["dailyTotalTarget"] == 3

    loaded = client.post("/api/workspace/presets/june/load").json()
    assert [s["id"] for s in loaded["staff"]] == ["n0", "n1"]
    assert loaded["config"]["dailyTotalTarget"] == 3

    assert client.delete("/api/workspace/presets/june").status_code == 204
    assert client.get("/api/workspace/presets/june").status_code == 404
    assert client.delete("/api/workspace/presets/june").status_code == 404


def test_api_key_guards_engine_and_workspace_routes(client, workspace_file, monkeypatch):
    monkeypatch.setenv("API_KEY", "s3cret")

    assert client.post("/api/schedule/generate", json=_payload()).status_code == 401
    assert client.get("/api/workspace").status_code == 401
    assert client.get("/api/workspace", headers={"x-api-key": "wrong"}).status_code == 401
    assert client.get("/api/health/check").status_code == 200

    assert client.get("/api/workspace", headers={"x-api-key": "s3cret"}).status_code == 200
    response = client.post("/api/schedule/generate", json=_payload(), headers={"x-api-key": "s3cret"})
    assert response.status_code == 200
