"""Pydantic models for reference data (sports, teams, broadcasters)."""

from pydantic import BaseModel, ConfigDict, Field

from models.types import BroadcasterID, SportID, TeamID


class Sport(BaseModel):
    """A sport with its display emoji."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: SportID
    name: str = Field(..., min_length=1)
    emoji: str | None = None


class Team(BaseModel):
    """A team, only used to resolve alert team filters by name."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: TeamID
    name: str = Field(..., min_length=1)


class Broadcaster(BaseModel):
    """A TV channel or streaming service showing events."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: BroadcasterID
    name: str = Field(..., min_length=1)
    url: str | None = None
    type: str | None = None
