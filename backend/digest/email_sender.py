"""
Email sending via Resend API for the daily digest.
"""

from typing import Any

import resend


def configure_email_client(api_key: str) -> None:
    """Set the Resend API key used by send_digest_email."""
    resend.api_key = api_key


def send_digest_email(
    from_email: str,
    user_email: str,
    subject: str,
    html_body: str,
    text_body: str | None = None,
) -> dict[str, Any]:
    """
    Send one digest email.

    Args:
        from_email: Sender, e.g. "Alert365 <no-reply@alert365.fr>"
        user_email: Recipient email address
        subject: Subject line
        html_body: Rendered HTML digest
        text_body: Optional plain-text alternative

    Returns:
        Dictionary with 'success' (bool), 'email_id' (str if success), 'error' (str if failed)
    """
    params: dict[str, Any] = {
        "from": from_email,
        "to": user_email,
        "subject": subject,
        "html": html_body,
    }
    if text_body:
        params["text"] = text_body

    try:
        response = resend.Emails.send(params)

        return {
            'success': True,
            'email_id': response.get('id')
        }

    except Exception as e:
        return {
            'success': False,
            'error': str(e)
        }
