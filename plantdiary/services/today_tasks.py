"""
Today's care tasks across all of a user's plants.

Watering is due when the plant's interval has elapsed since its last
logged watering (or it has never been watered). Sunlight has no stored
schedule: every plant gets a sunlight check every day.
"""

from __future__ import annotations
from datetime import date, tzinfo
from typing import Optional, Dict, Any, List

from plantdiary.constants import STATUS_NEEDS_CARE, TASK_SUNLIGHT, TASK_WATERING
from plantdiary.services.care_schedule import plant_ref, watering_status


def compute_today_tasks(
    plants: List[Dict[str, Any]],
    task_logs_by_plant: Dict[Any, List[Dict[str, Any]]],
    today: date,
    tz: Optional[tzinfo] = None,
) -> Dict[str, Any]:
    """
    Build today's task list.

    Tasks follow the input plant order; a plant's watering task (if any)
    comes before its sunlight task.

    Args:
        plants: Plant rows (id, name, variety, cycle_type, cycle_value, cycle_unit)
        task_logs_by_plant: plant_id -> task log rows for that plant
        today: Reference day
        tz: Timezone used to place completion timestamps on a calendar day

    Returns:
        {
            "wateringCount": int,
            "sunlightCount": int,
            "totalTasks": int,
            "tasks": [{"type": "watering" | "sunlight", "plant": {id, name, variety}}]
        }
    """
    watering_count = 0
    sunlight_count = 0
    tasks = []

    for plant in plants:
        logs = task_logs_by_plant.get(plant.get("id"), [])
        ref = plant_ref(plant)

        if watering_status(plant, logs, today, tz).status == STATUS_NEEDS_CARE:
            watering_count += 1
            tasks.append({"type": TASK_WATERING, "plant": ref})

        sunlight_count += 1
        tasks.append({"type": TASK_SUNLIGHT, "plant": dict(ref)})

    return {
        "wateringCount": watering_count,
        "sunlightCount": sunlight_count,
        "totalTasks": watering_count + sunlight_count,
        "tasks": tasks,
    }
