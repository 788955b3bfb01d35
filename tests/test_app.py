from __future__ import annotations

import io

import pytest
from openpyxl import Workbook

from src.school_attendance.school_attendance.main import create_app


@pytest.fixture
def client(monkeypatch, container, school):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()


def _login(client, role):
    resp = client.post("/login", json={"role": role})
    assert resp.status_code == 200
    return resp.get_json()["user"]


def test_api_requires_login(client):
    resp = client.get("/api/students")

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_teacher_session_capabilities(client, school):
    user = _login(client, "TEACHER")

    assert user["id"] == school["t1"]
    assert set(user["capabilities"]) == {"VIEW_DASHBOARD", "MARK_ATTENDANCE"}
    assert client.get("/api/teachers").status_code == 403
    assert client.post("/api/students", json={"first_name": "A"}).status_code == 403


def test_teacher_marks_attendance_and_dashboard_reflects_it(client, school):
    _login(client, "TEACHER")

    resp = client.post(
        "/api/attendance",
        json={"student_id": school["s1"], "date": "2024-01-07", "session_id": 2, "status": "ABSENT"},
    )
    assert resp.status_code == 200
    assert resp.get_json()["record"]["marked_by"] == school["t1"]

    roster = client.get(f"/api/attendance?class_id={school['c1']}&date=2024-01-07&session_id=2").get_json()["roster"]
    assert {r["student"]["id"]: r["status"] for r in roster} == {school["s1"]: "ABSENT", school["s2"]: "PRESENT"}

    dash = client.get("/api/dashboard").get_json()
    assert dash["unique_absences"] == 1
    assert dash["counts"] == {"students": 3, "teachers": 2, "classes": 2}
    assert dash["class_ranking"][0]["class_id"] == school["c1"]


def test_validation_errors_answer_400(client, school):
    _login(client, "ADMIN")

    resp = client.post("/api/students", json={"first_name": "Only"})

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["success"] is False
    assert "last_name" in body["fields"]


def test_unknown_student_answers_404(client):
    _login(client, "ADMIN")

    resp = client.put("/api/students/ghost", json={"first_name": "A", "last_name": "B", "class_id": "x"})

    assert resp.status_code == 404


def test_schedule_assignment_round_trip(client, school):
    _login(client, "ADMIN")

    client.post(f"/api/schedule/{school['c1']}", json={"day": "Monday", "session_id": 3, "teacher_id": school["t2"]})
    grid = client.get(f"/api/schedule/{school['c1']}").get_json()["grid"]

    assert grid["Monday"]["3"]["teacher_name"] == "Sara Mahmoud"
    assert grid["Monday"]["3"]["room"] == "Unassigned room"
    assert grid["Sunday"]["1"] is None


def test_teacher_delete_preview_then_commit(client, school):
    _login(client, "ADMIN")
    client.post(f"/api/schedule/{school['c1']}", json={"day": "Sunday", "session_id": 1, "teacher_id": school["t1"]})

    preview = client.post("/api/teachers/delete-preview", json={"ids": [school["t1"]]}).get_json()
    assert preview["schedule_items"] == 1

    done = client.post("/api/teachers/delete", json={"ids": [school["t1"]]}).get_json()
    assert done["deleted"] == 1
    assert done["schedule_items_cleared"] == 1


def test_template_download_and_import(client, school):
    _login(client, "ADMIN")

    resp = client.get("/api/students/template.xlsx")
    assert resp.status_code == 200
    assert resp.data[:2] == b"PK"

    wb = Workbook()
    ws = wb.active
    ws.title = "1 Letters 1"
    for _ in range(7):
        ws.append([None])
    ws.append(["No", "Last name", "First name"])
    ws.append([1, "Saidi", "Amina"])
    buf = io.BytesIO()
    wb.save(buf)
    buf.seek(0)

    resp = client.post(
        "/api/students/import",
        data={"file": (buf, "lists.xlsx")},
        content_type="multipart/form-data",
    )

    assert resp.status_code == 200
    assert resp.get_json()["imported"] == 1


def test_insight_endpoint_reports_text(client, school, generator):
    _login(client, "ADMIN")

    body = client.get("/api/dashboard/insight").get_json()

    assert body["success"] is True
    assert "text" in body and "loading" in body


def test_numeric_date_in_json_answers_400(client, school):
    _login(client, "TEACHER")

    resp = client.post(
        "/api/attendance",
        json={"student_id": school["s1"], "date": 20240101, "session_id": 1, "status": "ABSENT"},
    )

    assert resp.status_code == 400
    assert resp.get_json()["fields"] == {"date": "invalid"}


def test_numeric_names_and_days_answer_400(client, school):
    _login(client, "ADMIN")

    assert client.post("/api/classes", json={"name": 7}).status_code == 400
    assert client.post("/api/teachers", json={"name": ["x"], "subject": "Mathematics"}).status_code == 400
    resp = client.post(f"/api/schedule/{school['c1']}", json={"day": 1, "session_id": 1, "teacher_id": school["t1"]})
    assert resp.status_code == 400
