from fastapi.testclient import TestClient

from studymate.api.auth import create_access_token


def test_health(client: TestClient):
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "AI StudyMate API is running"


def test_missing_token_rejected(client: TestClient):
    r = client.get("/api/exams")
    assert r.status_code == 401


def test_bad_token_rejected(client: TestClient):
    r = client.get("/api/exams", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json() == {"success": False, "message": "Invalid token"}


def test_token_signed_with_other_secret_rejected(client: TestClient):
    from jose import jwt
    forged = jwt.encode({"sub": "uid-test"}, "other-secret", algorithm="HS256")
    r = client.get("/api/exams", headers={"Authorization": f"Bearer {forged}"})
    assert r.status_code == 401


def test_first_request_creates_user(client: TestClient):
    headers = {"Authorization": f"Bearer {create_access_token('uid-new', email='new@studymate.local')}"}
    r = client.get("/api/study-plan", headers=headers)
    assert r.status_code == 200
    assert r.json() == {"success": True, "data": []}


def test_auth_errors_use_response_envelope(client: TestClient):
    r = client.get("/api/exams")
    assert r.status_code == 401
    assert r.json() == {"success": False, "message": "Not authenticated"}


def test_unknown_route_uses_response_envelope(client: TestClient):
    r = client.get("/api/nowhere")
    assert r.status_code == 404
    assert r.json()["success"] is False


def test_request_validation_errors_use_response_envelope(client: TestClient, auth_headers):
    r = client.post("/api/exams", json={"name": "No subject"}, headers=auth_headers)
    assert r.status_code == 422
    body = r.json()
    assert body["success"] is False
    assert body["message"]
    assert body["errors"]
