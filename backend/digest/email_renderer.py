"""
Digest email rendering.

Turns a user's matched events into the HTML and plain-text bodies of the
daily digest email.
"""

from datetime import date
from html import escape
from typing import Any, Iterable

from config.settings import DEFAULT_ALERTS_URL
from config.sports import (
    BROADCASTER_TYPES,
    DEFAULT_SPORT_EMOJI,
    DEFAULT_SPORT_NAME,
    FRENCH_MONTHS,
    FRENCH_WEEKDAYS,
)
from models import Broadcaster, Event, Sport
from models.types import SportID

FONT = "font-family: Arial, sans-serif;"
NAVY = "#0f172a"

# Group label and badge colors per broadcaster type
BROADCASTER_STYLES = {
    "tv": {"label": "TV", "marker": "#ffeaa7", "badge_bg": "#ffeaa7", "badge_fg": "#1f2937"},
    "streaming": {"label": "STREAMING", "marker": "#10b981", "badge_bg": "#00cec9", "badge_fg": "#ffffff"},
}

NO_BROADCASTER_TEXT = "Aucun diffuseur disponible"


def sort_events_for_digest(events: Iterable[Event]) -> list[Event]:
    """Sort events by start_at ascending; events without start_at come first."""
    return sorted(events, key=lambda e: e.start_at or "")


def format_time(time_str: str | None) -> str:
    """Keep HH:MM from an HH:MM:SS time."""
    return time_str[:5] if time_str else ""


def format_long_date(date_str: str | None) -> str:
    """Format an ISO date as a long French date, e.g. 'mercredi 1 mai 2024'."""
    if not date_str:
        return ""
    try:
        day = date.fromisoformat(date_str[:10])
    except ValueError:
        return date_str
    return (
        f"{FRENCH_WEEKDAYS[day.weekday()]} {day.day} "
        f"{FRENCH_MONTHS[day.month - 1]} {day.year}"
    )


def group_broadcasters(broadcasters: list[Broadcaster]) -> dict[str, list[Broadcaster]]:
    """Split broadcasters by type, each group sorted by name. Other types are dropped."""
    return {
        broadcaster_type: sorted(
            (b for b in broadcasters if b.type == broadcaster_type),
            key=lambda b: b.name,
        )
        for broadcaster_type in BROADCASTER_TYPES
    }


def _prepare_event_data(
    events: list[Event], sports: dict[SportID, Sport]
) -> list[dict[str, Any]]:
    """
    Extract and format every field the templates display.

    Formatters below only handle presentation.
    """
    prepared = []
    for event in events:
        sport = sports.get(event.sport_id)
        details = [d for d in (event.event_detail_1, event.event_detail_2) if d]

        prepared.append({
            'sport_name': sport.name if sport else DEFAULT_SPORT_NAME,
            'sport_emoji': (sport.emoji if sport else "") or DEFAULT_SPORT_EMOJI,
            'competition': event.competition,
            'participants': " - ".join(details),
            'date_formatted': format_long_date(event.date),
            'time_formatted': format_time(event.time),
            'broadcasters': group_broadcasters(event.broadcasters),
        })

    return prepared


def _detail_row(label: str, value_html: str, last: bool = False) -> str:
    border = "" if last else " border-bottom: 1px solid #e5e7eb;"
    return f"""
              <tr>
                <td style="padding: 12px 0;{border}">
                  <table width="100%" cellpadding="0" cellspacing="0" border="0">
                    <tr>
                      <td style="color: #6b7280; font-size: 16px; {FONT}" width="30%">{label}</td>
                      <td style="color: #1f2937; font-weight: bold; font-size: 16px; text-align: right; {FONT}" width="70%">{value_html}</td>
                    </tr>
                  </table>
                </td>
              </tr>"""


def _broadcaster_row(broadcaster: Broadcaster, broadcaster_type: str) -> str:
    style = BROADCASTER_STYLES[broadcaster_type]
    link = ""
    if broadcaster.url:
        link = (
            f'<a href="{escape(broadcaster.url)}" style="display: inline-block; padding: 4px 12px; '
            f'background-color: {style["badge_bg"]}; color: {style["badge_fg"]}; text-decoration: none; '
            f'font-weight: bold; font-size: 14px; {FONT} border-radius: 20px;">Voir</a>'
        )
    return f"""
              <tr>
                <td style="padding: 8px 0; border-bottom: 1px solid #e5e7eb;">
                  <table width="100%" cellpadding="0" cellspacing="0" border="0">
                    <tr>
                      <td style="color: #1f2937; font-size: 16px; {FONT}" width="70%">{escape(broadcaster.name)}</td>
                      <td style="text-align: right;" width="30%">{link}</td>
                    </tr>
                  </table>
                </td>
              </tr>"""


def _build_broadcasters_html(groups: dict[str, list[Broadcaster]]) -> str:
    html = ""
    rendered_group = False
    for broadcaster_type in BROADCASTER_TYPES:
        group = groups.get(broadcaster_type, [])
        if not group:
            continue

        style = BROADCASTER_STYLES[broadcaster_type]
        padding_top = "25px" if rendered_group else "4px"
        html += f"""
              <tr>
                <td style="font-size: 14px; font-weight: 600; color: #374151; padding-bottom: 12px; padding-top: {padding_top}; {FONT} text-transform: uppercase; letter-spacing: 0.5px;">
                  <span style="color: {style['marker']}; font-size: 12px; margin-right: 6px;">▶</span> {style['label']}
                </td>
              </tr>"""
        for broadcaster in group:
            html += _broadcaster_row(broadcaster, broadcaster_type)
        rendered_group = True

    if not rendered_group:
        html += f"""
              <tr>
                <td style="color: #6b7280; font-size: 14px; padding: 4px 0; {FONT}">{NO_BROADCASTER_TEXT}</td>
              </tr>"""

    return html


def _build_event_html(event: dict[str, Any]) -> str:
    competition = escape(event['competition'] or "")
    time_badge = (
        f'<span style="background-color: {NAVY}; color: #ffffff; padding: 6px 12px; font-weight: bold; '
        f'font-size: 14px; display: inline-block; {FONT} border-radius: 20px;">{escape(event["time_formatted"])}</span>'
    )

    details_html = (
        _detail_row("Sport", escape(event['sport_name']))
        + _detail_row("Compétition", competition or "N/A")
        + _detail_row("Événement", escape(event['participants']))
        + _detail_row("Date", escape(event['date_formatted']))
        + _detail_row("Heure", time_badge, last=True)
    )

    return f"""
    <table width="100%" cellpadding="0" cellspacing="0" border="0" style="margin-bottom: 15px;">
      <tr>
        <td style="background-color: {NAVY}; color: #ffffff; padding: 12px 20px; font-size: 16px; font-weight: bold; {FONT} border-radius: 6px;">
          {escape(event['sport_emoji'])} {escape(event['sport_name'])} - {competition or 'Compétition'} - {escape(event['time_formatted'])}
        </td>
      </tr>
    </table>

    <div style="margin-bottom: 40px;">
      <table width="100%" cellpadding="0" cellspacing="0" border="0" style="background-color: #f8fafc; margin-bottom: 25px;">
        <tr>
          <td style="padding: 25px;">
            <table width="100%" cellpadding="0" cellspacing="0" border="0">
              <tr>
                <td style="font-size: 18px; font-weight: bold; color: #1f2937; padding-bottom: 15px; {FONT}">Détails de l'événement</td>
              </tr>{details_html}
            </table>
          </td>
        </tr>
      </table>

      <table width="100%" cellpadding="0" cellspacing="0" border="0" style="background-color: #f8fafc;">
        <tr>
          <td style="padding: 25px;">
            <table width="100%" cellpadding="0" cellspacing="0" border="0">
              <tr>
                <td style="font-size: 18px; font-weight: bold; color: #1f2937; padding-bottom: 25px; {FONT}">Diffuseurs</td>
              </tr>{_build_broadcasters_html(event['broadcasters'])}
            </table>
          </td>
        </tr>
      </table>
    </div>
"""


def build_digest_html(
    events: list[Event],
    sports: dict[SportID, Sport],
    alerts_url: str = DEFAULT_ALERTS_URL,
) -> str:
    """
    Build the HTML email body for a user's digest.

    Args:
        events: The user's matched events, already sorted (see sort_events_for_digest)
        sports: Sport id -> Sport, unknown ids fall back to a generic sport
        alerts_url: Link to the alert management page

    Returns:
        Complete HTML document with inline styles
    """
    events_html = "".join(
        _build_event_html(event) for event in _prepare_event_data(events, sports)
    )

    return f"""<!DOCTYPE html>
<html lang="fr">
<head>
  <meta http-equiv="Content-Type" content="text/html; charset=UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1.0" />
  <title>Alert365 : ton programme de demain !</title>
</head>
<body style="margin: 0; padding: 0; background-color: #f3f4f6; {FONT}">
  <table width="100%" cellpadding="0" cellspacing="0" border="0" style="background-color: #f3f4f6; padding: 20px 0;">
    <tr>
      <td align="center">
        <table width="600" cellpadding="0" cellspacing="0" border="0" style="background-color: #ffffff; max-width: 600px; width: 100%;">
          <tr>
            <td style="background-color: {NAVY}; padding: 40px 30px; text-align: center;">
              <div style="color: #ffffff; font-size: 32px; font-weight: bold; {FONT}">Alert<span style="color: #93C5FD;">365</span></div>
              <div style="color: #ffffff; font-size: 16px; padding-top: 8px; opacity: 0.9; {FONT}">Ne manque plus jamais tes matchs préférés</div>
            </td>
          </tr>
          <tr>
            <td style="padding: 30px;">
{events_html}
              <table width="100%" cellpadding="0" cellspacing="0" border="0" style="padding-top: 25px;">
                <tr>
                  <td style="text-align: center; color: #6b7280; font-size: 12px; line-height: 1.6; {FONT}">
                    Tu reçois cet e-mail car tu as configuré une alerte sur Alert365<br>
                    <a href="{escape(alerts_url)}" style="color: {NAVY}; text-decoration: none;">Gérer mes alertes</a>
                  </td>
                </tr>
              </table>
            </td>
          </tr>
        </table>
      </td>
    </tr>
  </table>
</body>
</html>
"""


def build_digest_text(
    events: list[Event],
    sports: dict[SportID, Sport],
    alerts_url: str = DEFAULT_ALERTS_URL,
) -> str:
    """
    Build the plain-text email body for a user's digest.

    Args:
        events: The user's matched events, already sorted
        sports: Sport id -> Sport
        alerts_url: Link to the alert management page

    Returns:
        Plain text string
    """
    prepared_events = _prepare_event_data(events, sports)

    text = f"""ALERT365 : TON PROGRAMME
Ne manque plus jamais tes matchs préférés

{len(prepared_events)} événement(s) au programme :

"""

    for i, event in enumerate(prepared_events, 1):
        text += f"{i}. {event['sport_emoji']} {event['sport_name']} - {event['competition'] or 'Compétition'} - {event['time_formatted']}\n"
        if event['participants']:
            text += f"Événement : {event['participants']}\n"
        text += f"Date : {event['date_formatted']}\n"

        has_broadcasters = False
        for broadcaster_type in BROADCASTER_TYPES:
            group = event['broadcasters'].get(broadcaster_type, [])
            if group:
                label = BROADCASTER_STYLES[broadcaster_type]['label']
                text += f"{label} : {', '.join(b.name for b in group)}\n"
                has_broadcasters = True
        if not has_broadcasters:
            text += f"{NO_BROADCASTER_TEXT}\n"

        text += "\n" + "-" * 60 + "\n\n"

    text += f"""Gérer mes alertes : {alerts_url}
"""

    return text
