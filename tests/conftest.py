"""
Shared pytest fixtures.

- app / client / runner: Flask app built with TestConfig
- fake_supabase: in-memory stand-in for the Supabase query builder,
  installed as the admin client
- auth_headers: Bearer header accepted by a patched verify_session
"""

from __future__ import annotations
import copy
from datetime import date

import pytest

from plantdiary import create_app
from plantdiary.services import supabase_client

USER_ID = "11111111-1111-4111-8111-111111111111"
OTHER_USER_ID = "22222222-2222-4222-8222-222222222222"
PLANT_A = "aaaaaaaa-aaaa-4aaa-8aaa-aaaaaaaaaaaa"
PLANT_B = "bbbbbbbb-bbbb-4bbb-8bbb-bbbbbbbbbbbb"
TOKEN = "test-access-token"


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Records the builder calls and applies them to a list of rows on execute()."""

    def __init__(self, client, table, rows):
        self.client = client
        self.table = table
        self.rows = rows
        self.calls = []
        self._filters = []
        self._orders = []
        self._limit = None
        self._single = False
        self._negate_next = False

    def select(self, columns="*"):
        self.calls.append(("select", columns))
        return self

    def eq(self, column, value):
        self.calls.append(("eq", column, value))
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.calls.append(("in_", column, values))
        self._filters.append(lambda row: row.get(column) in values)
        return self

    def gte(self, column, value):
        self.calls.append(("gte", column, value))
        self._filters.append(lambda row: row.get(column) is not None and str(row.get(column)) >= value)
        return self

    def lte(self, column, value):
        self.calls.append(("lte", column, value))
        self._filters.append(lambda row: row.get(column) is not None and str(row.get(column)) <= value)
        return self

    @property
    def not_(self):
        self._negate_next = True
        return self

    def is_(self, column, value):
        negate = self._negate_next
        self._negate_next = False
        self.calls.append(("not.is_" if negate else "is_", column, value))
        expected = None if value == "null" else value
        self._filters.append(lambda row: (row.get(column) is expected) != negate)
        return self

    def order(self, column, desc=False):
        self.calls.append(("order", column, desc))
        self._orders.append((column, desc))
        return self

    def limit(self, count):
        self.calls.append(("limit", count))
        self._limit = count
        return self

    def maybe_single(self):
        self.calls.append(("maybe_single",))
        self._single = True
        return self

    def execute(self):
        if self.client.fail:
            raise RuntimeError("storage unavailable")

        rows = [row for row in self.rows if all(f(row) for f in self._filters)]
        # Later orders are tie-breakers, so sort by them first.
        # NULLs sort last ascending and first descending, as in Postgres.
        for column, desc in reversed(self._orders):
            rows.sort(key=lambda row: (row.get(column) is None, str(row.get(column) or "")), reverse=desc)
        if self._limit is not None:
            rows = rows[:self._limit]

        if self._single:
            return FakeResponse(rows[0] if rows else None)
        return FakeResponse(rows)


class FakeSupabase:
    def __init__(self):
        self.tables = {"profiles": [], "plants": [], "task_logs": [], "diaries": []}
        self.queries = []
        self.fail = False

    def table(self, name):
        query = FakeQuery(self, name, copy.deepcopy(self.tables.setdefault(name, [])))
        self.queries.append(query)
        return query


@pytest.fixture()
def app(monkeypatch):
    monkeypatch.setenv("APP_CONFIG", "plantdiary.config.TestConfig")
    app = create_app()
    yield app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()


@pytest.fixture()
def fake_supabase(app, monkeypatch):
    # Depends on app so create_app()'s init_supabase runs before the fake is installed
    fake = FakeSupabase()
    monkeypatch.setattr(supabase_client, "_supabase_admin", fake)
    return fake


@pytest.fixture()
def auth_headers(monkeypatch):
    def fake_verify(access_token, refresh_token=None):
        if access_token == TOKEN:
            return {"id": USER_ID, "email": "gardener@example.com"}
        return None

    monkeypatch.setattr(supabase_client, "verify_session", fake_verify)
    return {"Authorization": f"Bearer {TOKEN}"}


@pytest.fixture()
def frozen_today(monkeypatch):
    """Pin the user's "today" used by the home service."""
    today = date(2025, 3, 14)
    monkeypatch.setattr("plantdiary.services.home.local_today", lambda tz, now=None: today)
    return today


@pytest.fixture()
def garden(fake_supabase):
    """Two plants with watering history and a handful of diaries for USER_ID."""
    fake_supabase.tables["profiles"] = [{"id": USER_ID, "timezone": "UTC"}]
    fake_supabase.tables["plants"] = [
        {
            "id": PLANT_A, "user_id": USER_ID, "name": "Monstera", "variety": "Deliciosa",
            "img_url": "https://img/monstera.png", "cycle_type": "WEEKLY", "cycle_value": "1",
            "cycle_unit": "days", "sunlight_needs": "Bright indirect",
            "created_at": "2025-01-01T09:00:00+00:00",
        },
        {
            "id": PLANT_B, "user_id": USER_ID, "name": "Basil", "variety": None,
            "img_url": None, "cycle_type": "MONTHLY", "cycle_value": "14",
            "cycle_unit": "days", "sunlight_needs": None,
            "created_at": "2025-01-02T09:00:00+00:00",
        },
        {
            "id": "cccccccc-cccc-4ccc-8ccc-cccccccccccc", "user_id": OTHER_USER_ID,
            "name": "Someone else's fern", "variety": None, "img_url": None,
            "cycle_type": "DAILY", "cycle_value": "1", "cycle_unit": "days",
            "sunlight_needs": None, "created_at": "2025-01-03T09:00:00+00:00",
        },
    ]
    fake_supabase.tables["task_logs"] = [
        # Monstera watered 3 days ago: 4 days left on its 7-day interval
        {"id": 1, "plant_id": PLANT_A, "type": "watering", "completion_date": "2025-03-11T08:00:00+00:00"},
        {"id": 2, "plant_id": PLANT_A, "type": "watering", "completion_date": "2025-03-01T08:00:00+00:00"},
        {"id": 3, "plant_id": PLANT_A, "type": "sunlight", "completion_date": "2025-03-12T08:00:00+00:00"},
        # Basil never watered
        {"id": 4, "plant_id": PLANT_B, "type": "other", "completion_date": "2025-03-10T08:00:00+00:00"},
    ]
    fake_supabase.tables["diaries"] = [
        {"id": 10, "user_id": USER_ID, "plant_id": PLANT_A, "date": "2025-03-01",
         "emotion": "happy", "created_at": "2025-03-01T10:00:00+00:00"},
        {"id": 11, "user_id": USER_ID, "plant_id": PLANT_A, "date": "2025-03-01",
         "emotion": "sad", "created_at": "2025-03-01T20:00:00+00:00"},
        {"id": 12, "user_id": USER_ID, "plant_id": PLANT_B, "date": "2025-03-05",
         "emotion": "calm", "created_at": "2025-03-05T10:00:00+00:00"},
        {"id": 13, "user_id": USER_ID, "plant_id": PLANT_A, "date": "2025-03-13",
         "emotion": "happy", "created_at": "2025-03-13T10:00:00+00:00"},
        {"id": 14, "user_id": USER_ID, "plant_id": PLANT_B, "date": "2025-03-14",
         "emotion": None, "created_at": "2025-03-14T07:00:00+00:00"},
        {"id": 15, "user_id": OTHER_USER_ID, "plant_id": None, "date": "2025-03-14",
         "emotion": "angry", "created_at": "2025-03-14T07:00:00+00:00"},
    ]
    return fake_supabase
