"""Attaches broadcaster records to events."""

from models import Broadcaster, Event


def attach_broadcasters(
    events: list[Event], broadcasters: list[Broadcaster]
) -> list[Event]:
    """
    Resolve each event's broadcaster_ids into Broadcaster records.

    Broadcasters keep the order of broadcaster_ids. Ids missing from the
    broadcasters table are dropped.

    Args:
        events: Events for the target date
        broadcasters: All known broadcasters

    Returns:
        New list of events with ``broadcasters`` filled in
    """
    broadcasters_by_id = {b.id: b for b in broadcasters}

    enriched = []
    for event in events:
        resolved = [
            broadcasters_by_id[broadcaster_id]
            for broadcaster_id in event.broadcaster_ids
            if broadcaster_id in broadcasters_by_id
        ]
        enriched.append(event.model_copy(update={"broadcasters": resolved}))

    return enriched
