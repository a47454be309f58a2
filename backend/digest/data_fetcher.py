"""
Data fetching for the daily digest.

Runs the six read queries a digest needs in parallel and validates the rows
into models. Only the events query is mandatory.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable

from pydantic import BaseModel, Field, ValidationError

from digest.error_logger import log_digest_error
from models import Alert, Broadcaster, Event, Sport, Team, User
from shared.errors import EventsFetchError


class DigestData(BaseModel):
    """Everything a digest run reads from the database."""

    target_date: str
    sports: list[Sport] = Field(default_factory=list)
    events: list[Event] = Field(default_factory=list)
    broadcasters: list[Broadcaster] = Field(default_factory=list)
    teams: list[Team] = Field(default_factory=list)
    alerts: list[Alert] = Field(default_factory=list)
    users: list[User] = Field(default_factory=list)


def _validate_rows(
    model: type[BaseModel], rows: list[dict[str, Any]] | None, dataset: str
) -> list[Any]:
    """
    Validate optional-dataset rows one at a time.

    Invalid rows are skipped and reported; the remaining rows are kept.
    """
    valid = []
    skipped = []
    for row in rows or []:
        try:
            valid.append(model.model_validate(row))
        except ValidationError as e:
            skipped.append({"row": row, "error": str(e)})

    if skipped:
        print(f"  ⚠️  Skipped {len(skipped)} invalid {dataset} row(s)")
        error_file = log_digest_error(
            error_type="validation",
            error_message=f"Skipped {len(skipped)} invalid {dataset} row(s)",
            context={"dataset": dataset, "skipped": skipped},
        )
        if error_file:
            print(f"    Error details logged to: {error_file}")

    return valid


def _fetch_sports(supabase: Any, target_date: str) -> list[Sport]:
    response = supabase.table("sports").select("id, name, emoji").execute()
    return _validate_rows(Sport, response.data, "sports")


def _fetch_events(supabase: Any, target_date: str) -> list[Event]:
    response = (
        supabase.table("events")
        .select("*")
        .eq("status", "forecasted")
        .eq("date", target_date)
        .order("time", desc=False)
        .execute()
    )
    return [Event.model_validate(row) for row in response.data or []]


def _fetch_broadcasters(supabase: Any, target_date: str) -> list[Broadcaster]:
    response = supabase.table("broadcasters").select("*").execute()
    return _validate_rows(Broadcaster, response.data, "broadcasters")


def _fetch_teams(supabase: Any, target_date: str) -> list[Team]:
    response = supabase.table("teams").select("id, name").execute()
    return _validate_rows(Team, response.data, "teams")


def _fetch_alerts(supabase: Any, target_date: str) -> list[Alert]:
    response = (
        supabase.table("alerts")
        .select("id, user_id, sport_id, league_id, team_id, type")
        .eq("type", "email")
        .execute()
    )
    return _validate_rows(Alert, response.data, "alerts")


def _fetch_users(supabase: Any, target_date: str) -> list[User]:
    response = supabase.table("users").select("id, email").execute()
    return _validate_rows(User, response.data, "users")


# Dataset name -> query. Order is the order results are reported in.
QUERIES: dict[str, Callable[[Any, str], list[Any]]] = {
    "sports": _fetch_sports,
    "events": _fetch_events,
    "broadcasters": _fetch_broadcasters,
    "teams": _fetch_teams,
    "alerts": _fetch_alerts,
    "users": _fetch_users,
}


def fetch_digest_data(supabase: Any, target_date: str) -> DigestData:
    """
    Fetch all datasets for a target date concurrently.

    All queries are submitted at once and every result is awaited before
    returning. A failing optional query is logged and treated as empty.

    Args:
        supabase: Supabase client
        target_date: Date the digest covers (YYYY-MM-DD format)

    Returns:
        DigestData with one list per dataset

    Raises:
        EventsFetchError: if the events query fails
    """
    with ThreadPoolExecutor(max_workers=len(QUERIES)) as executor:
        futures = {
            name: executor.submit(query, supabase, target_date)
            for name, query in QUERIES.items()
        }

        results: dict[str, list[Any]] = {}
        for name, future in futures.items():
            try:
                results[name] = future.result()
            except Exception as e:
                if name == "events":
                    raise EventsFetchError(f"Error fetching events: {e}") from e

                error_file = log_digest_error(
                    error_type="fetching",
                    error_message=str(e),
                    context={"dataset": name, "target_date": target_date},
                )
                print(f"  ⚠️  Could not fetch {name}, continuing without them: {e}")
                if error_file:
                    print(f"    Error details logged to: {error_file}")
                results[name] = []

    return DigestData(target_date=target_date, **results)
