"""
Daily sports digest.

This module handles:
- Resolving which date a run covers
- Fetching events, alerts and reference data from Supabase
- Matching events to users' email alerts
- Rendering and sending one digest email per user via Resend (daily job:
  digest.run_daily_digest)
"""

from .matcher import match_events_to_alerts
from .dispatcher import dispatch_digests

__all__ = [
    'match_events_to_alerts',
    'dispatch_digests',
]
