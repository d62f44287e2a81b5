"""
Diary history summaries.

Folds a user's diaries into the calendar-shaped views shown on the home
and diary screens:
- Monthly grid: which days have a diary, and one emotion per day
- Weekly strip: presence for the last 7 days and the current streak
- Recency: days since the last diary and the plant mood it maps to

All functions take the reference day explicitly and never touch storage.
"""

from __future__ import annotations
from datetime import date, datetime, timezone, tzinfo
from typing import Optional, Dict, Any, List, Sequence, Tuple

from plantdiary.constants import (
    MOOD_IMAGES,
    MOOD_NEW,
    MOOD_NORMAL,
    MOOD_SAD,
    MOOD_SAD_MAX_DAYS,
    MOOD_SICK,
    STREAK_WINDOW_DAYS,
)
from plantdiary.utils.dates import as_utc, days_between, parse_datetime, to_day, trailing_days

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def diary_day(diary: Dict[str, Any], tz: Optional[tzinfo] = None) -> Optional[date]:
    """Calendar day a diary belongs to: its ``date`` field, else when it was created."""
    return to_day(diary.get("date"), tz) or to_day(diary.get("created_at"), tz)


def _id_key(value) -> Tuple[int, Any]:
    # Keeps int and string ids comparable without mixing types
    if value is None:
        return (0, 0)
    if isinstance(value, int) and not isinstance(value, bool):
        return (1, value)
    return (2, str(value))


def _recency_key(diary: Dict[str, Any], position: int) -> Tuple[datetime, Tuple[int, Any], int]:
    created = parse_datetime(diary.get("created_at"))
    if created is None:
        created = _EPOCH
    else:
        created = as_utc(created)
    return created, _id_key(diary.get("id")), position


# ============================================================================
# Monthly grid
# ============================================================================

def compute_monthly_status(
    year: int,
    month: int,
    diaries: List[Dict[str, Any]],
    tz: Optional[tzinfo] = None,
) -> Dict[str, Any]:
    """
    Which days of a month have diaries, and the emotion shown for each.

    When several diaries share a day, the most recently created one decides
    the emotion (latest created_at, then highest id, then latest position in
    ``diaries``). A diary without an emotion contributes "". Diaries dated
    outside the month are ignored.

    Returns:
        {
            "year": int,
            "month": int,
            "diaryDates": [int, ...],     # unique day numbers, ascending
            "emotions": {"<day>": str}    # one entry per diary day
        }
    """
    winners: Dict[int, Tuple[Tuple, Dict[str, Any]]] = {}

    for position, diary in enumerate(diaries):
        day = diary_day(diary, tz)
        if day is None or day.year != year or day.month != month:
            continue

        key = _recency_key(diary, position)
        current = winners.get(day.day)
        if current is None or key > current[0]:
            winners[day.day] = (key, diary)

    diary_dates = sorted(winners)
    emotions = {str(day): winners[day][1].get("emotion") or "" for day in diary_dates}

    return {
        "year": year,
        "month": month,
        "diaryDates": diary_dates,
        "emotions": emotions,
    }


# ============================================================================
# Weekly strip & streak
# ============================================================================

def compute_streak(presence: Sequence[bool]) -> int:
    """
    Consecutive days with a diary, counting back from the newest day.

    Args:
        presence: Oldest-first flags, one per day

    Returns:
        Length of the trailing run of True values

    Example:
        >>> compute_streak([True, True, False, True, True, True, True])
        4
    """
    streak = 0
    for has_diary in reversed(presence):
        if not has_diary:
            break
        streak += 1
    return streak


def build_week_presence(
    diaries: List[Dict[str, Any]],
    today: date,
    days: int = STREAK_WINDOW_DAYS,
    tz: Optional[tzinfo] = None,
) -> List[Dict[str, Any]]:
    """
    Per-day diary presence for the ``days`` days ending today, oldest first.

    Returns:
        [{"date": "YYYY-MM-DD", "hasDiary": bool, "diaryCount": int}, ...]
    """
    counts: Dict[date, int] = {}
    for diary in diaries:
        day = diary_day(diary, tz)
        if day is not None:
            counts[day] = counts.get(day, 0) + 1

    return [
        {
            "date": day.isoformat(),
            "hasDiary": counts.get(day, 0) > 0,
            "diaryCount": counts.get(day, 0),
        }
        for day in trailing_days(today, days)
    ]


def compute_weekly_diaries(
    diaries: List[Dict[str, Any]],
    today: date,
    days: int = STREAK_WINDOW_DAYS,
    tz: Optional[tzinfo] = None,
) -> Dict[str, Any]:
    """
    Home screen diary strip.

    Returns:
        {"weekDays": [...], "totalDiaries": int, "streak": int}
    """
    week_days = build_week_presence(diaries, today, days, tz)
    return {
        "weekDays": week_days,
        "totalDiaries": sum(day["diaryCount"] for day in week_days),
        "streak": compute_streak([day["hasDiary"] for day in week_days]),
    }


# ============================================================================
# Recency & mood
# ============================================================================

def compute_recency(last_diary_date, today: date, tz: Optional[tzinfo] = None) -> Optional[int]:
    """
    Whole days since the last diary, or None if the user has never written one.

    A last diary dated after today counts as 0 days.
    """
    last_day = to_day(last_diary_date, tz)
    if last_day is None:
        return None
    return max(0, days_between(last_day, today))


def classify_mood(days_since_last: Optional[int]) -> str:
    """
    Map diary recency to the plant's mood.

    None -> new, 0 -> normal, 1-5 -> sad, 6+ -> sick
    """
    if days_since_last is None:
        return MOOD_NEW
    if days_since_last <= 0:
        return MOOD_NORMAL
    if days_since_last <= MOOD_SAD_MAX_DAYS:
        return MOOD_SAD
    return MOOD_SICK


def mood_image(mood: str) -> str:
    """Illustration path for a mood state."""
    return MOOD_IMAGES.get(mood, MOOD_IMAGES[MOOD_NORMAL])


def compute_last_uploaded(
    last_diary: Optional[Dict[str, Any]],
    today: date,
    tz: Optional[tzinfo] = None,
) -> Dict[str, Any]:
    """
    Recency summary for the user's most recent diary.

    Returns:
        {
            "lastUploadedAt": "YYYY-MM-DD" | None,
            "daysSinceLastUpload": int | None,
            "mood": str,
            "moodImage": str
        }
    """
    last_day = diary_day(last_diary, tz) if last_diary else None
    days = compute_recency(last_day, today)
    mood = classify_mood(days)

    return {
        "lastUploadedAt": last_day.isoformat() if last_day else None,
        "daysSinceLastUpload": days,
        "mood": mood,
        "moodImage": mood_image(mood),
    }
