from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from mycad_core.appwrite import AppwriteClient

from appwrite_mock import MockAppwrite
from reporter.main import app, get_client


@pytest.fixture
def api(client: AppwriteClient) -> Iterator[TestClient]:
    async def override() -> AppwriteClient:
        return client

    app.dependency_overrides[get_client] = override
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()


def test_generate(api: TestClient, mock_appwrite: MockAppwrite) -> None:
    resp = api.post("/", json={"reportType": "service", "reportId": "sh1"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "PDF generated successfully"
    assert body["fileName"].startswith("service_sh1_")
    assert mock_appwrite.documents["service_histories"]["sh1"]["reportFileId"] == body["fileId"]

    resp = api.post("/", json={"reportType": "service", "reportId": "sh1"})
    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "message": "PDF already exists",
        "fileId": body["fileId"],
        "fileName": None,
    }


@pytest.mark.parametrize(
    "payload,error",
    [
        ({"reportId": "sh1"}, "reportType"),
        ({"reportType": "invoice", "reportId": "sh1"}, "reportType"),
        ({"reportType": "service"}, "reportId is required"),
        ({"reportType": "service", "reportId": "  "}, "reportId is required"),
    ],
)
def test_generate_invalid_request(api: TestClient, payload: dict, error: str) -> None:
    resp = api.post("/", json=payload)
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert error in body["error"]


def test_generate_invalid_json(api: TestClient) -> None:
    resp = api.post(
        "/", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Invalid JSON payload"}


def test_generate_not_found(api: TestClient) -> None:
    resp = api.post("/", json={"reportType": "service", "reportId": "nope"})
    assert resp.status_code == 500
    assert resp.json() == {
        "success": False,
        "error": "Document with the requested ID could not be found.",
    }


def test_generate_missing_vehicle(api: TestClient, mock_appwrite: MockAppwrite) -> None:
    del mock_appwrite.documents["vehicles"]["v1"]
    resp = api.post("/", json={"reportType": "service", "reportId": "sh1"})
    assert resp.status_code == 500
    assert resp.json()["success"] is False
    assert not mock_appwrite.requests_for("POST", r"/files$")


def test_generate_upstream_error(api: TestClient, mock_appwrite: MockAppwrite) -> None:
    mock_appwrite.fail("POST", r"/files$")
    resp = api.post("/", json={"reportType": "service", "reportId": "sh1"})
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Server Error"}


def test_status(api: TestClient, mock_appwrite: MockAppwrite) -> None:
    resp = api.get("/status")
    assert resp.status_code == 200
    assert resp.json()["status"] == "OK"

    mock_appwrite.buckets.clear()
    resp = api.get("/status")
    assert resp.json()["status"] == "ERROR"
