"""
Error logging utility for the daily digest job.

Writes non-fatal digest errors (degraded fetches, skipped rows, failed sends)
to timestamped report files. Reports go to DIGEST_LOG_DIR, or ./logs under
the working directory.
"""

import os
from datetime import datetime
from typing import Any

DEFAULT_LOG_DIR = "logs"


def get_log_dir() -> str:
    """Directory error reports are written to."""
    return os.getenv("DIGEST_LOG_DIR") or os.path.join(os.getcwd(), DEFAULT_LOG_DIR)


def log_digest_error(
    error_type: str, error_message: str, context: dict[str, Any] | None = None
) -> str | None:
    """
    Write a digest error report.

    A report that can't be written only prints a warning, so a logging
    problem never stops the run.

    Args:
        error_type: Type of error (e.g., 'fetching', 'validation', 'sending')
        error_message: The error message
        context: Optional dictionary with additional context (user_id, dataset, etc.)

    Returns:
        Path to the report file, or None if it couldn't be written
    """
    log_dir = get_log_dir()
    now = datetime.now()
    filename = os.path.join(
        log_dir, f"digest_error_{error_type}_{now.strftime('%Y%m%d_%H%M%S_%f')}.txt"
    )

    try:
        os.makedirs(log_dir, exist_ok=True)
        with open(filename, "w", encoding="utf-8") as f:
            f.write(f"Digest Error Report - {now}\n")
            f.write(f"{'=' * 60}\n\n")
            f.write(f"Type:    {error_type}\n")
            f.write(f"Message: {error_message}\n")

            for key, value in (context or {}).items():
                f.write(f"{key}: {value}\n")
    except OSError as e:
        print(f"  ⚠️  Could not write error report to {log_dir}: {e}")
        return None

    return filename
