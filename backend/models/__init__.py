"""Pydantic models for data validation and type checking."""

from models.alert import Alert, User
from models.event import Event
from models.reference import Broadcaster, Sport, Team

__all__ = [
    "Alert",
    "Broadcaster",
    "Event",
    "Sport",
    "Team",
    "User",
]
