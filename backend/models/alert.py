"""Pydantic models for user alerts and recipients."""

from pydantic import BaseModel, ConfigDict

from models.types import AlertID, LeagueID, SportID, TeamID, UserID


class Alert(BaseModel):
    """Standing user preference.

    ``league_id`` and ``team_id`` are optional filters; None matches any.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    id: AlertID
    user_id: UserID
    sport_id: SportID
    league_id: LeagueID | None = None
    team_id: TeamID | None = None
    type: str = "email"


class User(BaseModel):
    """Digest recipient."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: UserID
    email: str | None = None
