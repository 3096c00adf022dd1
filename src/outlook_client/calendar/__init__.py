"""Outlook calendars and events over Microsoft Graph.

Usage:
    from outlook_client.graph import ClientConfig, GraphClient

    async with GraphClient(ClientConfig.from_env()) as client:
        session = await client.new_session(refresh_token)

        # List calendars
        page = await session.calendars().list(max_results=25)

        # Events in the next week of the default calendar
        events = await session.events().list(
            "primary",
            start=datetime.now(timezone.utc),
            end=datetime.now(timezone.utc) + timedelta(days=7),
        )

        # Next page
        if events.has_more:
            events = await session.events().list("primary", next_link=events.next_link)
"""

from __future__ import annotations

from outlook_client.calendar.client import (
    Attendee,
    Calendar,
    CalendarService,
    Event,
    EventService,
    Location,
    PatternedRecurrence,
)

__all__ = [
    "CalendarService",
    "EventService",
    "Calendar",
    "Event",
    "Attendee",
    "Location",
    "PatternedRecurrence",
]
