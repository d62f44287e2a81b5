"""
Flask CLI commands for inspecting a user's care and diary summaries.

Usage:
    flask today-tasks --user-id <uuid>                      # Tasks for the user's today
    flask today-tasks --user-id <uuid> --date 2025-03-14    # Tasks as of a given day
    flask diary-summary --user-id <uuid>                    # Week, month, and recency
    flask diary-summary --user-id <uuid> --year 2025 --month 2
"""

from __future__ import annotations

import json

import click
from flask.cli import with_appcontext


def _parse_date_option(value: str | None):
    from plantdiary.utils.validation import parse_iso_date

    if value is None:
        return None
    parsed, error = parse_iso_date(value)
    if error:
        raise click.BadParameter(error, param_hint="--date")
    return parsed


def _require_collaborator() -> None:
    from plantdiary.services import supabase_client

    if not supabase_client.is_configured():
        click.echo("Error: Supabase admin client not configured (SUPABASE_SERVICE_ROLE_KEY missing).")
        raise SystemExit(1)


@click.command("today-tasks")
@click.option("--user-id", required=True, help="Profile id of the user.")
@click.option("--date", "day", default=None, help="Reference day (YYYY-MM-DD). Defaults to the user's today.")
@with_appcontext
def today_tasks_command(user_id: str, day: str | None) -> None:
    """Print today's watering and sunlight tasks as JSON."""
    from plantdiary.services import home

    today = _parse_date_option(day)
    _require_collaborator()

    click.echo(json.dumps(home.get_today_tasks(user_id, today), ensure_ascii=False, indent=2))


@click.command("diary-summary")
@click.option("--user-id", required=True, help="Profile id of the user.")
@click.option("--year", type=int, default=None, help="Month to summarize (defaults to today's).")
@click.option("--month", type=int, default=None, help="Month to summarize (defaults to today's).")
@click.option("--date", "day", default=None, help="Reference day (YYYY-MM-DD). Defaults to the user's today.")
@with_appcontext
def diary_summary_command(user_id: str, year: int | None, month: int | None, day: str | None) -> None:
    """Print the weekly diaries, monthly status, and last upload as JSON."""
    from plantdiary.services import home
    from plantdiary.utils.validation import parse_year_month

    today = _parse_date_option(day)
    _require_collaborator()

    today, _ = home.resolve_user_today(user_id, today)
    parsed, error = parse_year_month(year, month, default=today)
    if error:
        raise click.BadParameter(error, param_hint="--year/--month")

    summary = {
        "weekly": home.get_weekly_diaries(user_id, today),
        "monthly": home.get_monthly_status(user_id, *parsed),
        "lastUploaded": home.get_last_uploaded(user_id, today),
    }
    click.echo(json.dumps(summary, ensure_ascii=False, indent=2))
