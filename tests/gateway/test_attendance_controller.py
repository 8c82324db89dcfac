from __future__ import annotations

from types import SimpleNamespace

import pytest
from flask import Flask

from src.school_attendance.school_attendance.gateway.controller import register


@pytest.fixture
def client(gateway):
    app = Flask(__name__)
    app.secret_key = "test"
    app.config["TESTING"] = True
    register(app, SimpleNamespace(ledger_gateway=gateway))
    return app.test_client()


def _login(client, user_id, role):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role


def test_requires_session(client):
    resp = client.get("/api/attendance?classId=c1&date=2026-02-02")
    assert resp.status_code == 401


def test_save_and_read_round_trip(client):
    _login(client, "t1", "teacher")

    resp = client.post(
        "/api/attendance",
        json={"classId": "c1", "date": "2026-02-02", "records": {"s1": "present", "s2": "late"}, "markedBy": "someone-else"},
    )
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["markedById"] == "t1"
    assert body["savedCount"] == 2

    resp = client.get("/api/attendance?classId=c1&date=2026-02-02")
    assert resp.status_code == 200
    assert resp.get_json() == {"s1": "present", "s2": "late"}


def test_clear_flag(client):
    _login(client, "t1", "teacher")
    client.post("/api/attendance", json={"classId": "c1", "date": "2026-02-02", "records": {"s1": "present"}})

    resp = client.post("/api/attendance", json={"classId": "c1", "date": "2026-02-02", "records": {}, "clear": True})

    assert resp.status_code == 200
    assert client.get("/api/attendance?classId=c1&date=2026-02-02").get_json() == {}


def test_empty_records_need_clear_true(client):
    _login(client, "t1", "teacher")
    client.post("/api/attendance", json={"classId": "c1", "date": "2026-02-02", "records": {"s1": "present"}})

    for clear in ("false", "true", 1, None):
        resp = client.post("/api/attendance", json={"classId": "c1", "date": "2026-02-02", "records": {}, "clear": clear})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "invalid_request"

    missing = client.post("/api/attendance", json={"classId": "c1", "date": "2026-02-02", "records": {}})
    assert missing.status_code == 400

    both = client.post("/api/attendance", json={"classId": "c1", "date": "2026-02-02", "records": {"s1": "late"}, "clear": True})
    assert both.status_code == 400

    assert client.get("/api/attendance?classId=c1&date=2026-02-02").get_json() == {"s1": "present"}


def test_error_status_codes(client):
    _login(client, "t1", "teacher")

    denied = client.post("/api/attendance", json={"classId": "c2", "date": "2026-02-02", "records": {"s4": "present"}})
    assert denied.status_code == 403
    assert denied.get_json()["error"] == "authorization_denied"

    unknown = client.post("/api/attendance", json={"classId": "c1", "date": "2026-02-02", "records": {"s4": "present"}})
    assert unknown.status_code == 422

    bad_date = client.get("/api/attendance?classId=c1&date=2026-02-30")
    assert bad_date.status_code == 400
    assert bad_date.get_json()["error"] == "invalid_date"

    bad_body = client.post("/api/attendance", json={"classId": "c1", "date": "2026-02-02", "records": ["s1"]})
    assert bad_body.status_code == 400

    for body in ([{"classId": "c1"}], "c1", 7):
        not_an_object = client.post("/api/attendance", json=body)
        assert not_an_object.status_code == 400
        assert not_an_object.get_json()["error"] == "invalid_request"


def test_student_history_and_summary(client):
    _login(client, "admin-1", "superadmin")
    client.post("/api/attendance", json={"classId": "c1", "date": "2026-02-02", "records": {"s1": "present"}})

    _login(client, "s1", "student")
    history = client.get("/api/attendance/student/s1")
    assert history.status_code == 200
    assert history.get_json()[0]["classId"] == "c1"

    summary = client.get("/api/attendance/student/s1/summary")
    assert summary.get_json()["attendanceRate"] == 100

    assert client.get("/api/attendance/student/s2").status_code == 403


def test_dashboard_and_class_summary(client):
    _login(client, "t1", "teacher")
    client.post("/api/attendance", json={"classId": "c1", "date": "2026-02-02", "records": {"s1": "present"}})

    dash = client.get("/api/attendance/dashboard?date=2026-02-02").get_json()
    assert dash["presentCount"] == 1

    summary = client.get("/api/attendance/summary?classId=c1&date=2026-02-02").get_json()
    assert summary["rosterSize"] == 3
    assert summary["unrecorded"] == 2


def test_report_csv(client):
    _login(client, "t1", "teacher")
    client.post("/api/attendance", json={"classId": "c1", "date": "2026-02-02", "records": {"s1": "present", "s2": "absent"}})

    resp = client.get("/api/attendance/report.csv?classId=c1&start=2026-02-01&end=2026-02-28")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "attendance_c1_20260201_20260228.csv" in resp.headers["Content-Disposition"]
    text = resp.data.decode("utf-8-sig")
    assert text.splitlines()[0].startswith("student_id,student_name,total_days")
    assert "Ada Lovelace" in text


def test_report_csv_rejects_bad_dates(client):
    _login(client, "t1", "teacher")
    resp = client.get("/api/attendance/report.csv?classId=c1&start=bogus&end=2026-02-28")
    assert resp.status_code == 400


def test_report_csv_filename_is_sanitized(client):
    _login(client, "admin-1", "superadmin")

    resp = client.get("/api/attendance/report.csv", query_string={"classId": 'x"\r\ny', "start": "2026-02-01", "end": "2026-02-28"})

    assert resp.status_code == 200
    disposition = resp.headers["Content-Disposition"]
    assert "\r" not in disposition and "\n" not in disposition and '"' not in disposition
    assert disposition.endswith("_20260201_20260228.csv")
