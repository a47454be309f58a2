"""
Entry point for the daily digest job.

Usage:
    # Send tomorrow's digest (or today's if run before 6:00 Paris time)
    uv run python -m digest.run_daily_digest

    # Render and count without sending
    DIGEST_DRY_RUN=true uv run python -m digest.run_daily_digest
"""

import sys

from config.settings import DigestSettings, load_settings
from digest.data_fetcher import fetch_digest_data
from digest.date_resolver import resolve_target_date
from digest.dispatcher import dispatch_digests
from digest.email_sender import configure_email_client
from digest.enricher import attach_broadcasters
from digest.matcher import build_team_lookup, match_events_to_alerts
from shared.db import get_supabase_client
from shared.errors import DigestError
from shared.utils import print_summary


def run_daily_digest(settings: DigestSettings | None = None) -> dict[str, int]:
    """
    Run one digest: fetch, match and send.

    Args:
        settings: Run settings. Defaults to load_settings(), which fails before
                  any network call if a secret is missing.

    Returns:
        Dictionary with stats: sent, failed, skipped

    Raises:
        ConfigurationError: if required settings are missing
        EventsFetchError: if the events query fails
    """
    if settings is None:
        settings = load_settings()

    print("✨ Starting daily digest batch processing")

    target_date = resolve_target_date(tz_name=settings.timezone)
    print(f"Processing daily digest for: {target_date}")

    supabase = get_supabase_client(settings)
    configure_email_client(settings.resend_api_key)

    data = fetch_digest_data(supabase, target_date)

    if not data.events:
        print("No events found for target date.")
        stats = {"sent": 0, "failed": 0, "skipped": 0}
        print_summary(target_date, stats)
        return stats

    print(f"Found {len(data.events)} events for {target_date}")

    events = attach_broadcasters(data.events, data.broadcasters)
    events_by_user = match_events_to_alerts(
        events, data.alerts, build_team_lookup(data.teams)
    )
    print(f"Preparing digest for {len(events_by_user)} users")

    stats = dispatch_digests(
        events_by_user,
        {user.id: user.email for user in data.users},
        {sport.id: sport for sport in data.sports},
        from_email=settings.from_email,
        subject=settings.subject,
        alerts_url=settings.alerts_base_url,
        batch_size=settings.batch_size,
        delay_between_emails=settings.delay_between_emails,
        delay_between_batches=settings.delay_between_batches,
        dry_run=settings.dry_run,
    )

    print_summary(target_date, stats)
    return stats


def main() -> None:
    """CLI entry point. Takes no arguments; exits non-zero on fatal errors."""
    try:
        run_daily_digest()
    except DigestError as e:
        print(f"✗ Daily digest aborted: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
