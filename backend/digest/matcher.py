"""
Alert matching logic for the daily digest.

Matches the target date's events against users' email alerts and groups the
matched events by user.
"""

from config.sports import TENNIS_LEAGUE_CODES, TENNIS_SPORT_ID
from models import Alert, Event, Team
from models.types import EventID, LeagueID, TeamID, UserID


def build_team_lookup(teams: list[Team]) -> dict[TeamID, str]:
    """Map team id to lowercased team name."""
    return {team.id: team.name.lower() for team in teams}


def league_code_for_competition(competition: str | None) -> LeagueID | None:
    """Return the tennis league id for a tour name, or None for any other competition."""
    if not competition:
        return None
    return TENNIS_LEAGUE_CODES.get(competition)


def _alert_matches_event(
    alert: Alert,
    event: Event,
    team_names: dict[TeamID, str],
    tennis_sport_id: int = TENNIS_SPORT_ID,
) -> bool:
    """
    Check if a single alert matches an event.

    Tennis alerts filter by league (tour); every other sport filters by team.
    A missing filter matches any event of the sport.

    Args:
        alert: Email alert
        event: Enriched event
        team_names: Team id -> lowercased team name
        tennis_sport_id: Sport id that uses league matching

    Returns:
        True if the event belongs in the alert owner's digest
    """
    if alert.sport_id != event.sport_id:
        return False

    if event.sport_id == tennis_sport_id:
        if alert.league_id is None:
            return True
        return alert.league_id == league_code_for_competition(event.competition)

    if alert.team_id is None:
        return True

    # Unknown team never matches
    team_name = team_names.get(alert.team_id)
    if team_name is None:
        return False

    participants = [
        detail.lower()
        for detail in (event.event_detail_1, event.event_detail_2)
        if detail
    ]
    return team_name in participants


def match_events_to_alerts(
    events: list[Event],
    alerts: list[Alert],
    team_names: dict[TeamID, str],
    tennis_sport_id: int = TENNIS_SPORT_ID,
) -> dict[UserID, dict[EventID, Event]]:
    """
    Group matched events by user.

    Each user's events are keyed by event id, so an event matched by several
    alerts of the same user is kept once. Users appear in the order of their
    first match; users without any match are absent.

    Args:
        events: Enriched events for the target date
        alerts: Email alerts
        team_names: Team id -> lowercased team name (see build_team_lookup)
        tennis_sport_id: Sport id that uses league matching

    Returns:
        Dictionary mapping user_id to {event_id: event}
    """
    events_by_user: dict[UserID, dict[EventID, Event]] = {}

    for event in events:
        for alert in alerts:
            if not _alert_matches_event(alert, event, team_names, tennis_sport_id):
                continue

            if alert.user_id not in events_by_user:
                events_by_user[alert.user_id] = {}
            events_by_user[alert.user_id].setdefault(event.id, event)

    return events_by_user
