from __future__ import annotations

import json

import pytest

from config import testing
from src.school_admin.school_admin.container import build_container
from src.school_admin.school_admin.main import create_app

TEACHER_ROW = {
    "id": 2,
    "personnelTitle": "นาง",
    "personnelName": "สมใจ",
    "position": "ครู",
    "idCard": "2222222222222",
    "role": "user",
    "status": "approved",
}
ADMIN_ROW = dict(TEACHER_ROW, id=1, personnelName="ผู้ดูแล", idCard=testing.SCHOOL_CONFIG["admin_id_card"])


class FakeResponse:
    status_code = 200
    ok = True

    def __init__(self, body):
        self.text = json.dumps(body, ensure_ascii=False)


class FakeBridge:
    """Answers bridge actions the way the deployed script does."""

    def __init__(self):
        self.bodies = []
        self.data = {
            "personnel": [TEACHER_ROW, ADMIN_ROW],
            "students": [{"id": 10, "studentName": "มะลิ", "studentClass": "ป.1"}],
            "dutyRecords": [],
            "reports": [],
            "leaveRecords": [],
            "settings": {"schoolName": "โรงเรียนทดสอบ", "adminPassword": "secret"},
        }

    def post(self, url, *, params, data, headers, timeout):
        body = json.loads(data)
        self.bodies.append(body)
        action = body["action"]
        if action == "login":
            row = {TEACHER_ROW["idCard"]: TEACHER_ROW, ADMIN_ROW["idCard"]: ADMIN_ROW}.get(body["idCard"])
            if row is None:
                return FakeResponse({"status": "error", "message": "ไม่พบผู้ใช้งาน"})
            return FakeResponse({"status": "success", "data": row})
        if action == "getAllData":
            return FakeResponse({"status": "success", "data": self.data})
        if action in ("saveDutyRecord", "addReport", "saveLeaveRecord"):
            return FakeResponse({"status": "success", "data": [body["data"]]})
        return FakeResponse({"status": "error", "message": f"Invalid action: {action}"})


@pytest.fixture
def bridge():
    return FakeBridge()


@pytest.fixture
def client(monkeypatch, bridge):
    monkeypatch.setenv("APP_ENV", "testing")
    container = build_container(
        sync_config=testing.SYNC_CONFIG,
        school_config=testing.SCHOOL_CONFIG,
        session=bridge,
        sleep=lambda _: None,
    )
    app = create_app(container=container)
    return app.test_client()


def _login(client, id_card):
    return client.post("/api/login", json={"idCard": id_card, "password": "pw1234"})


def test_protected_routes_need_login(client):
    assert client.get("/api/dashboard").status_code == 401
    assert client.get("/api/students").status_code == 401


def test_login_and_me(client):
    resp = _login(client, TEACHER_ROW["idCard"])
    assert resp.status_code == 200
    assert resp.get_json()["data"]["full_name"] == "นางสมใจ"

    me = client.get("/api/me").get_json()
    assert me["data"]["role"] == "user"


def test_failed_login_is_401(client):
    resp = _login(client, "9999999999999")
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_auth_is_injected_after_login(client, bridge):
    _login(client, TEACHER_ROW["idCard"])
    client.get("/api/students")

    last = bridge.bodies[-1]
    assert last["action"] == "getAllData"
    assert last["auth"] == {"id": 2, "token": "pw1234", "idCard": "2222222222222"}


def test_admin_only_routes(client):
    _login(client, TEACHER_ROW["idCard"])
    assert client.post("/api/settings", json={"schoolName": "x"}).status_code == 403
    assert client.post("/api/students/delete", json={"ids": [10]}).status_code == 403


def test_admin_override_by_id_card(client):
    resp = _login(client, ADMIN_ROW["idCard"])
    assert resp.get_json()["data"]["role"] == "admin"


def test_public_settings_hide_password(client):
    data = client.get("/api/settings").get_json()["data"]
    assert data["schoolName"] == "โรงเรียนทดสอบ"
    assert "adminPassword" not in data


def test_duty_check_in_round_trip(client, bridge):
    _login(client, TEACHER_ROW["idCard"])
    lat, lng = testing.SCHOOL_CONFIG["school_lat"], testing.SCHOOL_CONFIG["school_lng"]

    resp = client.post("/api/duty/check-in", json={"type": "check_in", "latitude": lat, "longitude": lng})

    assert resp.status_code == 201
    saved = resp.get_json()["data"]
    assert saved["status"] == "within_range"
    assert saved["personnelName"] == "นางสมใจ"
    assert bridge.bodies[-1]["action"] == "saveDutyRecord"


def test_stale_deployment_surfaces_as_502(client):
    _login(client, ADMIN_ROW["idCard"])
    resp = client.post("/api/students/delete", json={"ids": [10]})
    assert resp.status_code == 502
    assert "Deploy" in resp.get_json()["message"]


def test_duty_check_in_uses_saved_school_location(client, bridge):
    bridge.data["settings"].update({"schoolLat": 13.7563, "schoolLng": 100.5018, "checkInRadius": 500})
    _login(client, TEACHER_ROW["idCard"])

    resp = client.post("/api/duty/check-in", json={"type": "check_in", "latitude": 13.7563, "longitude": 100.5018})

    assert resp.status_code == 201
    saved = resp.get_json()["data"]
    assert saved["status"] == "within_range"
    assert saved["distance"] == 0


def test_delete_with_malformed_ids_is_400(client, bridge):
    _login(client, ADMIN_ROW["idCard"])
    sent = len(bridge.bodies)

    resp = client.post("/api/personnel/delete", json={"ids": ["abc"]})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "รูปแบบข้อมูลไม่ถูกต้อง"
    assert len(bridge.bodies) == sent


def test_dormitory_report_and_daily_summary(client, bridge):
    bridge.data["settings"]["dormitories"] = ["ภูพาน"]
    bridge.data["students"][0]["dormitory"] = "ภูพาน"
    _login(client, TEACHER_ROW["idCard"])

    resp = client.post(
        "/api/dormitory/reports",
        json={"reportDate": "15/03/2567", "dormitory": "ภูพาน", "presentCount": 1, "sickCount": 0},
    )

    assert resp.status_code == 200
    sent = bridge.bodies[-1]
    assert sent["action"] == "addReport"
    assert sent["data"]["reporterName"] == "นางสมใจ"

    bridge.data["reports"].append(sent["data"])
    summary = client.get("/api/dormitory/summary?date=15/03/2567").get_json()["data"]
    assert summary["dormitories"] == [{"name": "ภูพาน", "present": 1, "sick": 0, "home": 0, "total": 1}]


def test_leave_request_then_staff_cannot_decide(client, bridge):
    _login(client, TEACHER_ROW["idCard"])

    resp = client.post("/api/leave", json={"type": "ลาป่วย", "startDate": "11/03/2567", "endDate": "12/03/2567"})

    assert resp.status_code == 200
    saved = resp.get_json()["data"]
    assert saved["daysCount"] == 2
    assert saved["status"] == "pending"
    assert bridge.bodies[-1]["action"] == "saveLeaveRecord"

    bridge.data["leaveRecords"].append(saved)
    decision = client.post(f"/api/leave/{saved['id']}/decision", json={"status": "approved"})
    assert decision.status_code == 403
