"""Shared type definitions for type checking.

Uses NewType for IDs that are easy to mix up (a user UUID vs. any other
string, a sport id vs. any other integer).

Uses TypeAlias for the remaining ids and formatted strings, which are purely
structural.
"""

from typing import NewType, TypeAlias

# ID types using NewType for type safety
UserID = NewType("UserID", str)
SportID = NewType("SportID", int)

# Structural aliases using TypeAlias
EventID: TypeAlias = int | str
AlertID: TypeAlias = int | str
TeamID: TypeAlias = int
LeagueID: TypeAlias = int
BroadcasterID: TypeAlias = int
DateString: TypeAlias = str  # YYYY-MM-DD format
TimeString: TypeAlias = str  # HH:MM:SS format
