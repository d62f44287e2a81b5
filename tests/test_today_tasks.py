"""Tests for today's task aggregation."""

from datetime import date

from plantdiary.services.today_tasks import compute_today_tasks

TODAY = date(2025, 3, 14)


def _plant(pid, cycle_type="WEEKLY", cycle_value="1"):
    return {"id": pid, "name": pid.title(), "variety": "v", "cycle_type": cycle_type,
            "cycle_value": cycle_value, "cycle_unit": "days"}


def test_empty_plant_list():
    assert compute_today_tasks([], {}, TODAY) == {
        "wateringCount": 0,
        "sunlightCount": 0,
        "totalTasks": 0,
        "tasks": [],
    }


def test_watering_only_for_due_plants_and_sunlight_for_all():
    plants = [_plant("fern"), _plant("cactus"), _plant("mint", "DAILY", "1")]
    logs = {
        "fern": [{"type": "watering", "completion_date": "2025-03-12T08:00:00+00:00"}],
        "cactus": [],
        "mint": [{"type": "watering", "completion_date": "2025-03-13T08:00:00+00:00"}],
    }

    result = compute_today_tasks(plants, logs, TODAY)

    assert result["wateringCount"] == 2
    assert result["sunlightCount"] == 3
    assert result["totalTasks"] == 5
    assert [(t["type"], t["plant"]["id"]) for t in result["tasks"]] == [
        ("sunlight", "fern"),
        ("watering", "cactus"),
        ("sunlight", "cactus"),
        ("watering", "mint"),
        ("sunlight", "mint"),
    ]


def test_task_plant_reference_fields():
    result = compute_today_tasks([_plant("fern")], {}, TODAY)
    assert result["tasks"][0]["plant"] == {"id": "fern", "name": "Fern", "variety": "v"}


def test_non_watering_logs_do_not_reset_interval():
    logs = {"fern": [{"type": "sunlight", "completion_date": "2025-03-13T08:00:00+00:00"}]}
    result = compute_today_tasks([_plant("fern")], logs, TODAY)
    assert result["wateringCount"] == 1


def test_same_inputs_same_output():
    plants = [_plant("fern"), _plant("cactus")]
    logs = {"fern": [{"type": "watering", "completion_date": "2025-03-01T08:00:00+00:00"}]}
    assert compute_today_tasks(plants, logs, TODAY) == compute_today_tasks(plants, logs, TODAY)
