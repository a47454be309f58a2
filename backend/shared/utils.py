from datetime import datetime


def print_summary(target_date: str, stats: dict[str, int]) -> None:
    """Print digest run summary."""
    print(f"\n{'=' * 60}")
    print(f"[{datetime.now()}] Daily Digest Complete!")
    print(f"{'=' * 60}")
    print(f"Target date: {target_date}")
    print(f"✓ Sent:    {stats.get('sent', 0)}")
    print(f"✗ Failed:  {stats.get('failed', 0)}")
    print(f"⊘ Skipped: {stats.get('skipped', 0)}")
    print(f"{'=' * 60}\n")
