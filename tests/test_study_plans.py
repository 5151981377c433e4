from datetime import date

from fastapi.testclient import TestClient


def generate_body(in_days, **overrides):
    body = {
        "subjects": [
            {"name": "Math", "difficulty": "hard", "examDate": in_days(5)},
            {"name": "Art", "difficulty": "easy", "examDate": in_days(20)},
        ],
        "availableHoursPerDay": 6,
        "preferredStudyTime": "morning",
    }
    body.update(overrides)
    return body


def test_generate_plan(client: TestClient, auth_headers, in_days):
    r = client.post("/api/study-plan/generate", json=generate_body(in_days), headers=auth_headers)
    assert r.status_code == 201
    data = r.json()["data"]
    assert isinstance(data["id"], int)
    assert len(data["schedule"]) == 5
    assert data["schedule"][0]["date"] == in_days(0)
    assert data["schedule"][0]["tasks"] == [
        {"subject": "Math", "topic": "Review session 1", "duration": 5, "startTime": "08:00"},
        {"subject": "Art", "topic": "Review session 1", "duration": 1, "startTime": "08:00"},
    ]
    assert data["recommendations"][0] == "Focus more on Math due to higher difficulty"
    assert len(data["recommendations"]) == 3


def test_generated_plan_is_stored(client: TestClient, auth_headers, in_days):
    r = client.post("/api/study-plan/generate", json=generate_body(in_days), headers=auth_headers)
    plan_id = r.json()["data"]["id"]

    r = client.get(f"/api/study-plan/{plan_id}", headers=auth_headers)
    assert r.status_code == 200
    stored = r.json()["data"]
    assert stored["title"].startswith("Study Plan - ")
    assert stored["start_date"] == date.today().isoformat()
    assert stored["end_date"] == in_days(20)
    assert stored["is_active"] is True
    assert len(stored["schedule"]) == 5


def test_generate_deactivates_previous_plans(client: TestClient, auth_headers, in_days):
    first = client.post("/api/study-plan/generate", json=generate_body(in_days), headers=auth_headers)
    second = client.post("/api/study-plan/generate", json=generate_body(in_days), headers=auth_headers)

    plans = client.get("/api/study-plan", headers=auth_headers).json()["data"]
    assert [p["id"] for p in plans] == [second.json()["data"]["id"], first.json()["data"]["id"]]
    assert [p["is_active"] for p in plans] == [True, False]


def test_generate_rejects_missing_exam_date(client: TestClient, auth_headers, in_days):
    body = generate_body(in_days, subjects=[{"name": "Math", "difficulty": "hard"}])
    r = client.post("/api/study-plan/generate", json=body, headers=auth_headers)
    assert r.status_code == 422
    assert r.json() == {
        "success": False,
        "message": "Please select exam dates for all subjects",
        "field": "subjects[0].examDate",
    }
    assert client.get("/api/study-plan", headers=auth_headers).json()["data"] == []


def test_generate_rejects_empty_subjects(client: TestClient, auth_headers, in_days):
    r = client.post("/api/study-plan/generate", json=generate_body(in_days, subjects=[]), headers=auth_headers)
    assert r.status_code == 422
    assert r.json()["field"] == "subjects"


def test_generate_rejects_hours_out_of_range(client: TestClient, auth_headers, in_days):
    for hours in (0, 13):
        body = generate_body(in_days, availableHoursPerDay=hours)
        r = client.post("/api/study-plan/generate", json=body, headers=auth_headers)
        assert r.status_code == 422
        assert r.json()["field"] == "hoursPerDay"


def test_generate_rejects_unknown_study_time(client: TestClient, auth_headers, in_days):
    body = generate_body(in_days, preferredStudyTime="dawn")
    r = client.post("/api/study-plan/generate", json=body, headers=auth_headers)
    assert r.status_code == 422


def test_exam_today_gives_single_day(client: TestClient, auth_headers, in_days):
    body = generate_body(in_days, subjects=[{"name": "Math", "difficulty": "medium", "examDate": in_days(0)}])
    r = client.post("/api/study-plan/generate", json=body, headers=auth_headers)
    assert r.status_code == 201
    assert len(r.json()["data"]["schedule"]) == 1


def test_update_plan_activation_is_exclusive(client: TestClient, auth_headers, in_days):
    first = client.post("/api/study-plan/generate", json=generate_body(in_days), headers=auth_headers)
    client.post("/api/study-plan/generate", json=generate_body(in_days), headers=auth_headers)
    first_id = first.json()["data"]["id"]

    r = client.put(
        f"/api/study-plan/{first_id}",
        json={"title": "Finals", "is_active": True},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json()["data"]["title"] == "Finals"

    plans = client.get("/api/study-plan", headers=auth_headers).json()["data"]
    active = [p["id"] for p in plans if p["is_active"]]
    assert active == [first_id]


def test_delete_plan(client: TestClient, auth_headers, in_days):
    r = client.post("/api/study-plan/generate", json=generate_body(in_days), headers=auth_headers)
    plan_id = r.json()["data"]["id"]

    r = client.delete(f"/api/study-plan/{plan_id}", headers=auth_headers)
    assert r.status_code == 200
    assert client.get(f"/api/study-plan/{plan_id}", headers=auth_headers).status_code == 404


def test_plans_are_private(client: TestClient, auth_headers, other_headers, in_days):
    r = client.post("/api/study-plan/generate", json=generate_body(in_days), headers=auth_headers)
    plan_id = r.json()["data"]["id"]
    assert client.get(f"/api/study-plan/{plan_id}", headers=other_headers).status_code == 404
    assert client.delete(f"/api/study-plan/{plan_id}", headers=other_headers).status_code == 404


def test_missing_plan_uses_response_envelope(client: TestClient, auth_headers):
    r = client.get("/api/study-plan/999", headers=auth_headers)
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Study plan not found"}


def test_plan_timestamps_are_returned(client: TestClient, auth_headers, in_days):
    from datetime import datetime, timedelta, timezone

    r = client.post("/api/study-plan/generate", json=generate_body(in_days), headers=auth_headers)
    stored = client.get(f"/api/study-plan/{r.json()['data']['id']}", headers=auth_headers).json()["data"]
    created = datetime.fromisoformat(stored["created_at"])
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    assert abs(datetime.now(timezone.utc) - created) < timedelta(minutes=5)
