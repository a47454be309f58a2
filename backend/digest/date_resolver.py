"""Target date resolution for the daily digest."""

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from config.settings import DEFAULT_TIMEZONE

# Runs triggered before this local hour cover the same day's events
CUTOFF_HOUR = 6


def resolve_target_date(
    now: datetime | None = None, tz_name: str = DEFAULT_TIMEZONE
) -> str:
    """
    Decide which calendar date a digest run covers.

    A run before 6:00 local time sends that day's events (the scheduler fired
    late or early in the morning); any later run sends tomorrow's events.

    Args:
        now: Current instant. Aware datetimes are converted to the reference
             timezone; naive ones are taken as local wall-clock time there.
             Defaults to the current time.
        tz_name: IANA name of the reference timezone

    Returns:
        Target date in ISO format (YYYY-MM-DD)
    """
    tz = ZoneInfo(tz_name)

    if now is None:
        local_now = datetime.now(tz)
    elif now.tzinfo is None:
        local_now = now.replace(tzinfo=tz)
    else:
        local_now = now.astimezone(tz)

    # Arithmetic on the civil date, not on the instant, so DST shifts
    # never move the result
    local_date = local_now.date()
    if local_now.hour < CUTOFF_HOUR:
        return local_date.isoformat()
    return (local_date + timedelta(days=1)).isoformat()
