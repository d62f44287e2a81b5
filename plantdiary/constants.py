"""
Shared constants used across the application.

This module contains constants that need to be consistent across
different parts of the application (care scheduling, diary summaries,
route validation, etc.).
"""

# Stored plant cycle types (plants.cycle_type)
CYCLE_DAILY = "DAILY"
CYCLE_WEEKLY = "WEEKLY"
CYCLE_BIWEEKLY = "BIWEEKLY"
CYCLE_TRIWEEKLY = "TRIWEEKLY"
CYCLE_MONTHLY = "MONTHLY"

# Days per cycle_value unit when a cycle is read as an elapsed interval
CYCLE_MULTIPLIERS = {
    CYCLE_DAILY: 1,
    CYCLE_WEEKLY: 7,
    CYCLE_BIWEEKLY: 14,
    CYCLE_TRIWEEKLY: 21,
    CYCLE_MONTHLY: 30,
}

# Interval used when cycle_type/cycle_value can't be read
DEFAULT_CYCLE_DAYS = 7

# Calendar-anchored cycles are only stored with this unit
ANCHOR_CYCLE_UNIT = "days"

# Task log types (task_logs.type)
TASK_WATERING = "watering"
TASK_SUNLIGHT = "sunlight"

# Care status values
STATUS_GOOD = "good"
STATUS_WARNING = "warning"
STATUS_NEEDS_CARE = "needs_care"

# daysUntilDue at or below this (and above zero) is a warning
WARNING_DAYS_THRESHOLD = 2

# Mood states derived from diary recency
MOOD_NEW = "new"
MOOD_HAPPY = "happy"
MOOD_NORMAL = "normal"
MOOD_SAD = "sad"
MOOD_SICK = "sick"

# Upper bound (inclusive) of days since last diary that still reads as "sad"
MOOD_SAD_MAX_DAYS = 5

# Plant illustration shown for each mood
MOOD_IMAGES = {
    MOOD_NEW: "/plant-happy.png",
    MOOD_HAPPY: "/plant-happy.png",
    MOOD_NORMAL: "/plant-normal.png",
    MOOD_SAD: "/plant-sad.png",
    MOOD_SICK: "/plant-sick.png",
}

# Length of the home screen diary strip
STREAK_WINDOW_DAYS = 7

# Shown when a plant has no sunlight_needs recorded
DEFAULT_SUNLIGHT_NEEDS = "Indirect light"
