"""Tests for the JSON blueprints through the Flask test client."""

import pytest

from plantdiary.services import home

from conftest import PLANT_A, PLANT_B


@pytest.fixture()
def api(client, garden, auth_headers, frozen_today):
    """GET helper that sends the Bearer header and returns (status, json)."""
    def get(path, **kwargs):
        resp = client.get(path, headers=auth_headers, **kwargs)
        return resp.status_code, resp.get_json()
    return get


class TestAuth:
    @pytest.mark.parametrize("path", [
        "/home/today-tasks",
        "/home/my-plants",
        "/diaries/last-uploaded",
        "/diaries/monthly/2025/3",
        "/plants/watering/today",
    ])
    def test_requires_auth(self, client, auth_headers, path):
        resp = client.get(path)
        assert resp.status_code == 401
        assert resp.get_json() == {"success": False, "error": "Authentication required."}

    def test_invalid_token(self, client, auth_headers):
        resp = client.get("/home/today-tasks", headers={"Authorization": "Bearer nope"})
        assert resp.status_code == 401


class TestHome:
    def test_today_tasks(self, api):
        status, body = api("/home/today-tasks")

        assert status == 200
        assert body["success"] is True
        assert body["data"]["wateringCount"] == 1
        assert body["data"]["sunlightCount"] == 2
        assert body["data"]["totalTasks"] == 3
        assert body["data"]["tasks"][1] == {
            "type": "watering",
            "plant": {"id": PLANT_B, "name": "Basil", "variety": None},
        }

    def test_my_plants(self, api):
        status, body = api("/home/my-plants")

        assert status == 200
        monstera, basil = body["data"]
        assert monstera["status"] == "good"
        assert monstera["daysUntilWatering"] == 4
        assert basil["status"] == "needs_care"
        assert basil["sunlightNeeds"] == "Indirect light"
        assert basil["img_url"] == ""

    def test_weekly_diaries(self, api):
        status, body = api("/home/weekly-diaries")

        assert status == 200
        assert body["data"]["totalDiaries"] == 2
        assert body["data"]["streak"] == 2
        assert body["data"]["weekDays"][-1]["date"] == "2025-03-14"

    def test_diaries_by_date(self, api):
        status, body = api("/home/diaries/2025-03-01")
        assert status == 200
        assert [d["id"] for d in body["data"]] == [11, 10]

    def test_diaries_by_bad_date(self, api):
        status, body = api("/home/diaries/yesterday")
        assert status == 400
        assert body["success"] is False


class TestDiaries:
    def test_monthly(self, api):
        status, body = api("/diaries/monthly/2025/3")

        assert status == 200
        assert body["data"] == {
            "year": 2025,
            "month": 3,
            "diaryDates": [1, 5, 13, 14],
            "emotions": {"1": "sad", "5": "calm", "13": "happy", "14": ""},
        }

    @pytest.mark.parametrize("path", ["/diaries/monthly/2025/13", "/diaries/monthly/abc/3", "/diaries/monthly/1800/1"])
    def test_monthly_validation(self, api, path):
        status, body = api(path)
        assert status == 400
        assert body["success"] is False

    def test_last_uploaded(self, api):
        status, body = api("/diaries/last-uploaded")

        assert status == 200
        assert body["data"] == {
            "lastUploadedAt": "2025-03-14",
            "daysSinceLastUpload": 0,
            "mood": "normal",
            "moodImage": "/plant-normal.png",
        }

    def test_last_uploaded_without_diaries(self, api, garden):
        garden.tables["diaries"] = []
        status, body = api("/diaries/last-uploaded")

        assert status == 200
        assert body["data"]["daysSinceLastUpload"] is None
        assert body["data"]["mood"] == "new"
        assert body["data"]["moodImage"] == "/plant-happy.png"

    def test_date(self, api):
        status, body = api("/diaries/date/2025-03-05")
        assert status == 200
        assert [d["emotion"] for d in body["data"]] == ["calm"]

    def test_plant_care_info(self, api):
        status, body = api(f"/diaries/plants/{PLANT_A}/care-info")

        assert status == 200
        assert body["data"]["plant_name"] == "Monstera"
        assert body["data"]["daysUntilWatering"] == 4
        assert body["data"]["status"] == "good"
        assert body["data"]["lastWateringDate"] == "2025-03-11T08:00:00+00:00"

    def test_plant_care_info_not_found(self, api):
        status, body = api("/diaries/plants/cccccccc-cccc-4ccc-8ccc-cccccccccccc/care-info")
        assert status == 404
        assert body["success"] is False

    def test_plant_care_info_bad_id(self, api):
        status, _ = api("/diaries/plants/not-a-uuid/care-info")
        assert status == 400


class TestPlants:
    def test_watering_today(self, api):
        status, body = api("/plants/watering/today")

        assert status == 200
        assert body["data"]["totalCount"] == 1
        assert body["data"]["plants"][0]["id"] == PLANT_B
        assert body["data"]["plants"][0]["daysOverdue"] == 0

    def test_care_stats(self, api):
        status, body = api("/plants/care-stats")

        assert status == 200
        stats = {s["id"]: s for s in body["data"]}
        assert stats[PLANT_A]["careCount"] == 3
        assert stats[PLANT_B]["careCount"] == 1


class TestFailures:
    def test_unexpected_error_is_sanitized(self, api, monkeypatch):
        def boom(user_id, today=None):
            raise RuntimeError("connection string leaked here")

        monkeypatch.setattr(home, "get_today_tasks", boom)
        status, body = api("/home/today-tasks")

        assert status == 500
        assert body["success"] is False
        assert "leaked" not in body["error"]

    def test_unknown_route_is_json(self, client):
        resp = client.get("/nope")
        assert resp.status_code == 404
        assert resp.get_json()["success"] is False

    def test_security_headers(self, client):
        resp = client.get("/home/today-tasks")
        assert resp.headers["X-Content-Type-Options"] == "nosniff"
        assert resp.headers["X-Frame-Options"] == "DENY"
