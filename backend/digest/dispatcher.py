"""
Batched sending of daily digest emails.

Sends one email per user, sequentially, pausing after every send and between
batches to stay under the email provider's rate limits.
"""

import time
from typing import Any

from config.settings import (
    DEFAULT_ALERTS_URL,
    DEFAULT_BATCH_SIZE,
    DEFAULT_DELAY_BETWEEN_BATCHES,
    DEFAULT_DELAY_BETWEEN_EMAILS,
    DEFAULT_FROM_EMAIL,
    DEFAULT_SUBJECT,
)
from digest.email_renderer import build_digest_html, build_digest_text, sort_events_for_digest
from digest.email_sender import send_digest_email
from digest.error_logger import log_digest_error
from models import Event, Sport
from models.types import EventID, SportID, UserID


def dispatch_digests(
    events_by_user: dict[UserID, dict[EventID, Event]],
    user_emails: dict[UserID, str | None],
    sports: dict[SportID, Sport],
    from_email: str = DEFAULT_FROM_EMAIL,
    subject: str = DEFAULT_SUBJECT,
    alerts_url: str = DEFAULT_ALERTS_URL,
    batch_size: int = DEFAULT_BATCH_SIZE,
    delay_between_emails: float = DEFAULT_DELAY_BETWEEN_EMAILS,
    delay_between_batches: float = DEFAULT_DELAY_BETWEEN_BATCHES,
    dry_run: bool = False,
) -> dict[str, int]:
    """
    Send digest emails to every matched user.

    Users are processed in the order of events_by_user, batch_size at a time.
    Every send attempt is followed by delay_between_emails; every batch but
    the last is followed by delay_between_batches. A failed send is counted
    and logged but never stops the run, and is not retried.

    Args:
        events_by_user: user_id -> {event_id: event} from the matcher
        user_emails: user_id -> email address
        sports: Sport id -> Sport for rendering
        from_email: Sender address
        subject: Subject line
        alerts_url: Link to the alert management page
        batch_size: Users per batch
        delay_between_emails: Seconds to wait after each send
        delay_between_batches: Seconds to wait between batches
        dry_run: If True, render but don't actually send emails

    Returns:
        Dictionary with stats: sent, failed, skipped
    """
    stats = {"sent": 0, "failed": 0, "skipped": 0}
    users = list(events_by_user.items())

    for start in range(0, len(users), batch_size):
        batch = users[start:start + batch_size]

        for user_id, user_events in batch:
            user_email = user_emails.get(user_id)
            if not user_email or not user_events:
                print(f"  ⚠️  No email or no events for user {user_id}, skipping")
                stats["skipped"] += 1
                continue

            events = sort_events_for_digest(user_events.values())
            html_body = build_digest_html(events, sports, alerts_url)
            text_body = build_digest_text(events, sports, alerts_url)

            if dry_run:
                print(f"  [DRY RUN] Would send {len(events)} events to {user_email}")
                stats["sent"] += 1
                continue

            result = send_digest_email(from_email, user_email, subject, html_body, text_body)

            if result["success"]:
                print(f"  ✓ Sent to {user_email}")
                stats["sent"] += 1
            else:
                _record_failure(user_id, user_email, events, result)
                stats["failed"] += 1

            time.sleep(delay_between_emails)

        if start + batch_size < len(users):
            time.sleep(delay_between_batches)

    return stats


def _record_failure(
    user_id: UserID, user_email: str, events: list[Event], result: dict[str, Any]
) -> None:
    """Print a failed send and write its error report."""
    error_msg = str(result.get("error", "Unknown error"))
    print(f"  ✗ {user_email}: {error_msg}")

    error_file = log_digest_error(
        error_type="sending",
        error_message=error_msg,
        context={
            "user_id": user_id,
            "user_email": user_email,
            "event_count": len(events),
            "event_ids": [e.id for e in events],
        },
    )
    if error_file:
        print(f"    Error details logged to: {error_file}")
