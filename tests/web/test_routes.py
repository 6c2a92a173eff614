from __future__ import annotations

import pytest


def test_login_stores_the_signed_in_user(client, http):
    http.route(
        "POST",
        "/auth/login",
        data={
            "user": {"_id": "u7", "name": "Maya", "email": "maya@example.com", "role": "Program Manager"},
            "accessToken": "jwt-7",
        },
    )

    resp = client.post("/login", json={"email": "maya@example.com", "password": "secret"})

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["success"] is True
    assert body["roleName"] == "Program Manager"
    assert "manage_programs" in body["permissions"]
    with client.session_transaction() as sess:
        assert sess["user_id"] == "u7"
        assert sess["role"] == "Program Manager"
        assert sess["access_token"] == "jwt-7"


def test_login_failure_shows_server_message(client, http):
    http.route("POST", "/auth/login", status=401, body={"message": "Invalid email or password"})

    resp = client.post("/login", json={"email": "maya@example.com", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Invalid email or password"}


def test_anonymous_requests_get_401(client, http):
    resp = client.get("/facilitator/sessions")

    assert resp.status_code == 401
    assert http.calls == []


@pytest.mark.parametrize(
    "role, path",
    [
        ("Trainee", "/facilitator/sessions"),
        ("Facilitator", "/trainee/attendance/history"),
        ("Facilitator", "/programs/archived"),
        ("Trainee", "/certificates/eligible"),
    ],
)
def test_wrong_role_gets_403_without_calling_the_backend(sign_in, http, role, path):
    client = sign_in(role)

    resp = client.get(path)

    assert resp.status_code == 403
    assert resp.get_json()["success"] is False
    assert http.calls == []


def test_create_session_with_empty_title_is_400_and_sends_nothing(sign_in, http):
    client = sign_in("Facilitator")

    resp = client.post("/facilitator/sessions", json={"type": "online", "programId": "p1", "title": ""})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Session title is required"
    assert http.calls == []


def test_facilitator_sessions_carry_actions_and_stats(sign_in, http):
    http.route(
        "GET",
        "/attendance/facilitator/sessions",
        data=[
            {"_id": "s1", "sessionId": "S-1", "type": "online", "status": "active"},
            {"_id": "s2", "sessionId": "S-2", "type": "physical", "status": "scheduled"},
        ],
    )
    client = sign_in("Facilitator")

    body = client.get("/facilitator/sessions?status=active").get_json()

    assert [s["session_id"] for s in body["sessions"]] == ["S-1"]
    assert body["sessions"][0]["actions"] == ["open_qr", "end"]
    assert body["stats"]["total"] == 1
    assert http.calls[0]["headers"]["Authorization"] == "Bearer tok-123"


def test_start_physical_session_route(sign_in, http):
    http.route(
        "POST",
        "/attendance/sessions/S-2/start-physical",
        data={"session": {"_id": "s2", "sessionId": "S-2", "type": "physical", "status": "active"}},
    )
    client = sign_in("Facilitator")

    resp = client.post(
        "/facilitator/sessions/S-2/start",
        json={"type": "physical", "status": "scheduled", "latitude": 6.5, "longitude": 3.4},
    )

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["session"]["status"] == "active"
    assert body["session"]["actions"] == ["end"]
    assert http.calls_to("POST", "/attendance/sessions/S-2/start-physical")[0]["json"] == {
        "latitude": 6.5,
        "longitude": 3.4,
    }


def test_expired_token_clears_the_session(sign_in, http):
    http.route("GET", "/attendance/trainee/sessions", status=401, body={"message": "jwt expired"})
    client = sign_in("Trainee")

    resp = client.get("/trainee/sessions")

    assert resp.status_code == 401
    with client.session_transaction() as sess:
        assert "user_id" not in sess


def test_server_error_keeps_its_status_and_message(sign_in, http):
    http.route("POST", "/attendance/qr-attendance", status=409, body={"message": "Attendance already marked"})
    client = sign_in("Trainee")

    resp = client.post("/trainee/attendance", json={"method": "qr_code", "qrData": "S-1|x"})

    assert resp.status_code == 409
    assert resp.get_json()["message"] == "Attendance already marked"
    assert len(http.calls) == 1


def test_unknown_route_is_json_404(client):
    resp = client.get("/nowhere")

    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_sidebar_counts_for_trainee_are_zero(sign_in, http):
    body = sign_in("Trainee").get("/counts").get_json()

    assert body["counts"] == {"programs": 0, "archived": 0, "facilitators": 0, "trainees": 0, "certificates": 0}
    assert http.calls == []


def test_sidebar_counts_with_expired_token_signs_the_user_out(sign_in, http):
    http.route("GET", "/programs", status=401, body={"message": "jwt expired"})
    client = sign_in("Program Manager")

    resp = client.get("/counts")

    assert resp.status_code == 401
    with client.session_transaction() as sess:
        assert "user_id" not in sess


def test_history_status_filter_fetches_once(sign_in, http):
    http.route(
        "GET",
        "/attendance/my-history",
        data=[
            {"_id": "r1", "status": "Present", "timestamp": "2025-03-03T09:00:00Z"},
            {"_id": "r2", "status": "Late", "timestamp": "2025-03-02T09:00:00Z"},
            {"_id": "r3", "status": "Absent", "timestamp": "2025-03-01T09:00:00Z"},
        ],
    )
    client = sign_in("Trainee")

    body = client.get("/trainee/attendance/history?status=Late").get_json()

    assert [r["record_id"] for r in body["records"]] == ["r2"]
    assert body["stats"]["total"] == 3
    assert len(http.calls_to("GET", "/attendance/my-history")) == 1


def test_manual_mark_on_a_completed_session_sends_no_post(sign_in, http):
    http.route(
        "GET",
        "/attendance/facilitator/sessions",
        data=[{"_id": "s1", "sessionId": "S-1", "type": "physical", "status": "completed"}],
    )
    client = sign_in("Facilitator")

    resp = client.post("/facilitator/attendance/mark", json={"sessionId": "S-1", "userId": "t1", "status": "Present"})

    assert resp.status_code == 400
    assert http.calls_to("POST", "/attendance/mark") == []
