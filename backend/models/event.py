"""Pydantic models for scheduled sports events."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.reference import Broadcaster
from models.types import BroadcasterID, DateString, EventID, SportID, TimeString


class Event(BaseModel):
    """Event record from the events table.

    ``broadcasters`` is not a column: it is filled in by the enricher from
    ``broadcaster_ids``.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    id: EventID
    sport_id: SportID
    competition: str | None = None
    date: DateString
    time: TimeString | None = None
    event_detail_1: str | None = None
    event_detail_2: str | None = None
    broadcaster_ids: list[BroadcasterID] = Field(default_factory=list)
    status: str = "forecasted"
    start_at: str | None = None
    broadcasters: list[Broadcaster] = Field(default_factory=list)

    @field_validator("broadcaster_ids", mode="before")
    @classmethod
    def _null_ids_to_empty(cls, value):
        return value if value is not None else []
