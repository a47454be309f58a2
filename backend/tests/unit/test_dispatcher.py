"""
Unit tests for digest/dispatcher.py

Tests batching, pacing delays, counters and failure isolation.
"""

import unittest
from unittest.mock import call, patch

from config.settings import DigestSettings
from digest.dispatcher import dispatch_digests
from tests.fixtures.digest_factory import create_test_event, create_test_sports


def _events_by_user(count):
    event = create_test_event()
    return {f"u{i}": {event.id: event} for i in range(count)}


def _emails(count):
    return {f"u{i}": f"user{i}@example.com" for i in range(count)}


@patch("digest.dispatcher.log_digest_error", return_value="/tmp/digest_error.txt")
@patch("digest.dispatcher.time.sleep")
@patch("digest.dispatcher.send_digest_email")
class TestDispatchDigests(unittest.TestCase):
    """Tests for dispatch_digests() function."""

    def test_batches_of_five(self, mock_send, mock_sleep, mock_log):
        """12 users send in groups of 5, 5, 2 with two batch delays."""
        mock_send.return_value = {"success": True, "email_id": "id"}

        stats = dispatch_digests(
            _events_by_user(12), _emails(12), create_test_sports(),
            batch_size=5, delay_between_emails=0.6, delay_between_batches=2.0,
        )

        self.assertEqual(stats, {"sent": 12, "failed": 0, "skipped": 0})
        delays = [c.args[0] for c in mock_sleep.call_args_list]
        expected = [0.6] * 5 + [2.0] + [0.6] * 5 + [2.0] + [0.6] * 2
        self.assertEqual(delays, expected)

    def test_no_batch_delay_after_last_batch(self, mock_send, mock_sleep, mock_log):
        mock_send.return_value = {"success": True, "email_id": "id"}

        dispatch_digests(
            _events_by_user(5), _emails(5), create_test_sports(),
            batch_size=5, delay_between_emails=0.6, delay_between_batches=2.0,
        )

        self.assertNotIn(call(2.0), mock_sleep.call_args_list)

    def test_sends_in_user_order(self, mock_send, mock_sleep, mock_log):
        mock_send.return_value = {"success": True, "email_id": "id"}

        dispatch_digests(_events_by_user(3), _emails(3), create_test_sports())

        recipients = [c.args[1] for c in mock_send.call_args_list]
        self.assertEqual(recipients, ["user0@example.com", "user1@example.com", "user2@example.com"])

    def test_failure_isolated(self, mock_send, mock_sleep, mock_log):
        """One failed send doesn't stop the others."""
        mock_send.side_effect = [
            {"success": True, "email_id": "1"},
            {"success": False, "error": "rate limited"},
            {"success": True, "email_id": "3"},
        ]

        stats = dispatch_digests(_events_by_user(3), _emails(3), create_test_sports())

        self.assertEqual(stats, {"sent": 2, "failed": 1, "skipped": 0})
        self.assertEqual(mock_send.call_count, 3)
        mock_log.assert_called_once()
        self.assertEqual(mock_log.call_args.kwargs["error_type"], "sending")
        self.assertEqual(mock_log.call_args.kwargs["context"]["user_id"], "u1")

    def test_delay_after_failed_send(self, mock_send, mock_sleep, mock_log):
        mock_send.return_value = {"success": False, "error": "boom"}

        dispatch_digests(
            _events_by_user(2), _emails(2), create_test_sports(), delay_between_emails=0.6
        )

        self.assertEqual(mock_sleep.call_args_list, [call(0.6), call(0.6)])

    def test_user_without_email_skipped(self, mock_send, mock_sleep, mock_log):
        mock_send.return_value = {"success": True, "email_id": "id"}
        emails = {"u0": "user0@example.com", "u1": None}

        stats = dispatch_digests(_events_by_user(3), emails, create_test_sports())

        self.assertEqual(stats, {"sent": 1, "failed": 0, "skipped": 2})
        mock_send.assert_called_once()
        self.assertEqual(mock_sleep.call_count, 1)

    def test_user_with_no_events_skipped(self, mock_send, mock_sleep, mock_log):
        stats = dispatch_digests({"u0": {}}, _emails(1), create_test_sports())

        self.assertEqual(stats["skipped"], 1)
        mock_send.assert_not_called()

    def test_email_content(self, mock_send, mock_sleep, mock_log):
        mock_send.return_value = {"success": True, "email_id": "id"}
        event = create_test_event(competition="ATP Tour", time="14:30:00")

        dispatch_digests(
            {"u0": {event.id: event}}, {"u0": "a@b.com"}, create_test_sports(),
            from_email="Alert365 <no-reply@alert365.fr>", subject="Programme",
        )

        from_email, to, subject, html_body, text_body = mock_send.call_args.args
        self.assertEqual(from_email, "Alert365 <no-reply@alert365.fr>")
        self.assertEqual(to, "a@b.com")
        self.assertEqual(subject, "Programme")
        self.assertIn("ATP Tour", html_body)
        self.assertIn("14:30", html_body)
        self.assertIn("ATP Tour", text_body)

    def test_events_sorted_by_start(self, mock_send, mock_sleep, mock_log):
        mock_send.return_value = {"success": True, "email_id": "id"}
        late = create_test_event(event_id=1, competition="WTA Tour", start_at="2024-05-01T20:00:00+02:00")
        early = create_test_event(event_id=2, competition="ATP Tour", start_at="2024-05-01T10:00:00+02:00")

        dispatch_digests({"u0": {1: late, 2: early}}, {"u0": "a@b.com"}, create_test_sports())

        html_body = mock_send.call_args.args[3]
        self.assertLess(html_body.index("ATP Tour"), html_body.index("WTA Tour"))

    def test_dry_run_does_not_send(self, mock_send, mock_sleep, mock_log):
        stats = dispatch_digests(_events_by_user(2), _emails(2), create_test_sports(), dry_run=True)

        self.assertEqual(stats, {"sent": 2, "failed": 0, "skipped": 0})
        mock_send.assert_not_called()

    def test_empty_mapping(self, mock_send, mock_sleep, mock_log):
        stats = dispatch_digests({}, {}, create_test_sports())

        self.assertEqual(stats, {"sent": 0, "failed": 0, "skipped": 0})
        mock_sleep.assert_not_called()

    def test_uses_configured_defaults(self, mock_send, mock_sleep, mock_log):
        """Sender and subject default to the settings defaults."""
        mock_send.return_value = {"success": True, "email_id": "id"}
        settings = DigestSettings(
            resend_api_key="k", supabase_url="u", supabase_service_role_key="s"
        )

        dispatch_digests(_events_by_user(1), _emails(1), create_test_sports())

        from_email, _, subject, html_body, _ = mock_send.call_args.args
        self.assertEqual(from_email, settings.from_email)
        self.assertEqual(subject, settings.subject)
        self.assertIn(settings.alerts_base_url, html_body)
        self.assertEqual(mock_sleep.call_args_list, [call(settings.delay_between_emails)])


@patch("digest.dispatcher.time.sleep")
@patch("digest.dispatcher.send_digest_email")
class TestDispatchReportFailures(unittest.TestCase):
    """A failing error report never stops the dispatch."""

    @patch("digest.error_logger.os.makedirs", side_effect=PermissionError("read-only"))
    def test_unwritable_log_dir_keeps_sending(self, mock_makedirs, mock_send, mock_sleep):
        mock_send.side_effect = [
            {"success": False, "error": "rate limited"},
            {"success": True, "email_id": "2"},
        ]

        stats = dispatch_digests(_events_by_user(2), _emails(2), create_test_sports())

        self.assertEqual(stats, {"sent": 1, "failed": 1, "skipped": 0})
        self.assertEqual(mock_send.call_count, 2)
        self.assertEqual(mock_send.call_args.args[1], "user1@example.com")
        mock_makedirs.assert_called_once()


if __name__ == "__main__":
    unittest.main()
