"""Unit tests for shared/utils.py and digest/error_logger.py"""

import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from digest.error_logger import get_log_dir, log_digest_error
from shared.utils import print_summary


class TestPrintSummary(unittest.TestCase):
    """Tests for print_summary() function."""

    def test_prints_counts(self):
        output = io.StringIO()
        with redirect_stdout(output):
            print_summary("2024-05-01", {"sent": 3, "failed": 1, "skipped": 2})

        text = output.getvalue()
        self.assertIn("2024-05-01", text)
        self.assertIn("Sent:    3", text)
        self.assertIn("Failed:  1", text)
        self.assertIn("Skipped: 2", text)


class TestLogDigestError(unittest.TestCase):
    """Tests for log_digest_error() function."""

    def test_writes_report_to_configured_dir(self):
        with tempfile.TemporaryDirectory() as tmp:
            log_dir = os.path.join(tmp, "reports")
            with patch.dict(os.environ, {"DIGEST_LOG_DIR": log_dir}):
                path = log_digest_error(
                    "sending", "rate limited", {"user_id": "u1", "event_count": 2}
                )

            self.assertEqual(os.path.dirname(path), log_dir)
            with open(path, encoding="utf-8") as f:
                content = f.read()

        self.assertIn("Type:    sending", content)
        self.assertIn("Message: rate limited", content)
        self.assertIn("user_id: u1", content)
        self.assertIn("event_count: 2", content)

    def test_defaults_to_working_directory(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(get_log_dir(), os.path.join(os.getcwd(), "logs"))

    @patch("digest.error_logger.os.makedirs", side_effect=PermissionError("read-only"))
    def test_unwritable_dir_returns_none(self, mock_makedirs):
        """A report that can't be written is a warning, not an error."""
        output = io.StringIO()
        with redirect_stdout(output):
            path = log_digest_error("sending", "rate limited")

        self.assertIsNone(path)
        self.assertIn("Could not write error report", output.getvalue())


if __name__ == "__main__":
    unittest.main()
