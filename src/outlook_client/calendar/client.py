"""Outlook calendar and event services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from outlook_client.graph.constants import DEFAULT_LIST_WINDOW
from outlook_client.graph.models import (
    DateTimeTimeZone,
    EmailAddress,
    GraphModel,
    ItemBody,
    ListResult,
    Recipient,
    json_field,
)
from outlook_client.graph.query import format_query_datetime, page_params

if TYPE_CHECKING:
    from outlook_client.graph.session import Session

# Event showAs
SHOW_AS_FREE = "free"
SHOW_AS_TENTATIVE = "tentative"
SHOW_AS_BUSY = "busy"
SHOW_AS_OOF = "oof"
SHOW_AS_WORKING_ELSEWHERE = "workingElsewhere"
SHOW_AS_UNKNOWN = "unknown"

# Event type
EVENT_TYPE_SINGLE_INSTANCE = "singleInstance"
EVENT_TYPE_OCCURRENCE = "occurrence"
EVENT_TYPE_EXCEPTION = "exception"
EVENT_TYPE_SERIES_MASTER = "seriesMaster"

# Event sensitivity
SENSITIVITY_NORMAL = "normal"
SENSITIVITY_PERSONAL = "personal"
SENSITIVITY_PRIVATE = "private"
SENSITIVITY_CONFIDENTIAL = "confidential"

# Importance (events and messages)
IMPORTANCE_LOW = "low"
IMPORTANCE_NORMAL = "normal"
IMPORTANCE_HIGH = "high"

# Recurrence pattern type
PATTERN_DAILY = "daily"
PATTERN_WEEKLY = "weekly"
PATTERN_ABSOLUTE_MONTHLY = "absoluteMonthly"
PATTERN_RELATIVE_MONTHLY = "relativeMonthly"
PATTERN_ABSOLUTE_YEARLY = "absoluteYearly"
PATTERN_RELATIVE_YEARLY = "relativeYearly"

# Recurrence pattern index
INDEX_FIRST = "first"
INDEX_SECOND = "second"
INDEX_THIRD = "third"
INDEX_FOURTH = "fourth"
INDEX_LAST = "last"

# Recurrence range type
RANGE_END_DATE = "endDate"
RANGE_NO_END = "noEnd"
RANGE_NUMBERED = "numbered"

PRIMARY_CALENDAR = "primary"

DEFAULT_EVENT_FIELDS = ",".join(
    [
        "id",
        "start",
        "end",
        "createdDateTime",
        "lastModifiedDateTime",
        "iCalUId",
        "subject",
        "isAllDay",
        "isCancelled",
        "isOrganizer",
        "showAs",
        "onlineMeetingUrl",
        "recurrence",
        "responseStatus",
        "location",
        "attendees",
        "organizer",
        "categories",
        "seriesMasterId",
    ]
)


@dataclass
class Calendar(GraphModel):
    """Represents an Outlook calendar."""

    id: str | None = json_field("id")
    name: str | None = json_field("name")
    color: str | None = json_field("color")
    can_share: bool | None = json_field("canShare")
    can_view_private_items: bool | None = json_field("canViewPrivateItems")
    can_edit: bool | None = json_field("canEdit")
    owner: EmailAddress | None = json_field("owner", EmailAddress)


@dataclass
class ResponseStatus(GraphModel):
    response: str | None = json_field("response")
    time: str | None = json_field("time")


@dataclass
class Address(GraphModel):
    street: str | None = json_field("street")
    city: str | None = json_field("city")
    state: str | None = json_field("state")
    country: str | None = json_field("countryOrRegion")
    postal_code: str | None = json_field("postalCode")


@dataclass
class Location(GraphModel):
    display_name: str | None = json_field("displayName")
    address: Address | None = json_field("address", Address)
    location_type: str | None = json_field("locationType")


@dataclass
class Attendee(GraphModel):
    """Event attendee (required, optional or resource)."""

    type: str | None = json_field("type")
    status: ResponseStatus | None = json_field("status", ResponseStatus)
    email_address: EmailAddress | None = json_field("emailAddress", EmailAddress)


@dataclass
class RecurrencePattern(GraphModel):
    """How often an event repeats."""

    type: str | None = json_field("type")
    interval: int | None = json_field("interval")
    month: int | None = json_field("month")
    day_of_month: int | None = json_field("dayOfMonth")
    days_of_week: list[str] = json_field("daysOfWeek", many=True)
    first_day_of_week: str | None = json_field("firstDayOfWeek")
    index: str | None = json_field("index")


@dataclass
class RecurrenceRange(GraphModel):
    """How long an event repeats. Dates are YYYY-MM-DD."""

    type: str | None = json_field("type")
    start_date: str | None = json_field("startDate")
    end_date: str | None = json_field("endDate")
    number_of_occurrences: int | None = json_field("numberOfOccurrences")
    recurrence_time_zone: str | None = json_field("recurrenceTimeZone")


@dataclass
class PatternedRecurrence(GraphModel):
    pattern: RecurrencePattern | None = json_field("pattern", RecurrencePattern)
    range: RecurrenceRange | None = json_field("range", RecurrenceRange)


@dataclass
class Event(GraphModel):
    """Represents an Outlook calendar event."""

    id: str | None = json_field("id")
    created_on: str | None = json_field("createdDateTime")
    updated_on: str | None = json_field("lastModifiedDateTime")
    ical_uid: str | None = json_field("iCalUId")
    categories: list[str] = json_field("categories", many=True)
    subject: str | None = json_field("subject")
    body_preview: str | None = json_field("bodyPreview")
    importance: str | None = json_field("importance")
    is_organizer: bool | None = json_field("isOrganizer")
    is_cancelled: bool | None = json_field("isCancelled")
    series_master_id: str | None = json_field("seriesMasterId")
    type: str | None = json_field("type")
    body: ItemBody | None = json_field("body", ItemBody)
    start: DateTimeTimeZone | None = json_field("start", DateTimeTimeZone)
    end: DateTimeTimeZone | None = json_field("end", DateTimeTimeZone)
    original_start: str | None = json_field("originalStart")
    original_start_time_zone: str | None = json_field("originalStartTimeZone")
    is_all_day: bool | None = json_field("isAllDay")
    location: Location | None = json_field("location", Location)
    locations: list[Location] = json_field("locations", Location, many=True)
    attendees: list[Attendee] = json_field("attendees", Attendee, many=True)
    organizer: Recipient | None = json_field("organizer", Recipient)
    response_status: ResponseStatus | None = json_field("responseStatus", ResponseStatus)
    web_link: str | None = json_field("webLink")
    online_meeting_url: str | None = json_field("onlineMeetingUrl")
    show_as: str | None = json_field("showAs")
    sensitivity: str | None = json_field("sensitivity")
    response_requested: bool | None = json_field("responseRequested")
    reminder_minutes_before_start: int | None = json_field("reminderMinutesBeforeStart")
    recurrence: PatternedRecurrence | None = json_field("recurrence", PatternedRecurrence)
    is_reminder_on: bool | None = json_field("isReminderOn")
    has_attachments: bool | None = json_field("hasAttachments")


class CalendarService:
    """Calendars of the signed-in user (``/me/calendars``)."""

    base_path = "/calendars"

    def __init__(self, session: Session):
        self.session = session

    async def list(
        self,
        max_results: int = 10,
        next_link: str | None = None,
    ) -> ListResult[Calendar]:
        """List calendars.

        Args:
            max_results: Page size ($top).
            next_link: ``next_link`` of the previous page to continue from.

        Returns:
            One page of calendars.
        """
        params = page_params(max_results, next_link)
        response = await self.session.get(self.base_path, params, ListResult.of(Calendar))
        return response.data

    async def get(self, calendar_id: str) -> Calendar:
        response = await self.session.get(f"{self.base_path}/{calendar_id}", target=Calendar)
        return response.data

    async def create(self, calendar: Calendar) -> Calendar:
        """Create a calendar and return the server's copy."""
        response = await self.session.post(self.base_path, calendar, Calendar)
        return response.data

    async def update(self, calendar_id: str, calendar: Calendar) -> Calendar:
        """Patch a calendar with the fields set on ``calendar``."""
        response = await self.session.patch(
            f"{self.base_path}/{calendar_id}", calendar, Calendar
        )
        return response.data

    async def delete(self, calendar_id: str) -> None:
        await self.session.delete(f"{self.base_path}/{calendar_id}")


class EventService:
    """Calendar events of the signed-in user.

    ``"primary"`` as calendar ID addresses the default calendar.
    """

    base_path = "/events"

    def __init__(self, session: Session):
        self.session = session

    def _event_path(self, calendar_id: str, event_id: str) -> str:
        if calendar_id == PRIMARY_CALENDAR:
            return f"{self.base_path}/{event_id}"
        return f"/calendars/{calendar_id}{self.base_path}/{event_id}"

    async def list(
        self,
        calendar_id: str = PRIMARY_CALENDAR,
        start: datetime | None = None,
        end: datetime | None = None,
        max_results: int = 10,
        next_link: str | None = None,
    ) -> ListResult[Event]:
        """List event occurrences between ``start`` and ``end`` (calendar view).

        Args:
            calendar_id: Calendar ID or "primary".
            start: Start of the window (defaults to now, UTC).
            end: End of the window (defaults to seven days after ``start``).
            max_results: Page size ($top).
            next_link: ``next_link`` of the previous page to continue from.

        Returns:
            One page of events with the default field selection.
        """
        start = start or datetime.now(timezone.utc)
        end = end or start + DEFAULT_LIST_WINDOW

        params = page_params(max_results, next_link)
        params.update(
            {
                "startDateTime": format_query_datetime(start),
                "endDateTime": format_query_datetime(end),
                "$select": DEFAULT_EVENT_FIELDS,
            }
        )

        if calendar_id == PRIMARY_CALENDAR:
            path = "/calendarView"
        else:
            path = f"/calendars/{calendar_id}/calendarView"

        response = await self.session.get(path, params, ListResult.of(Event))
        return response.data

    async def get(self, calendar_id: str, event_id: str) -> Event:
        response = await self.session.get(self._event_path(calendar_id, event_id), target=Event)
        return response.data

    async def create(self, calendar_id: str, event: Event) -> Event:
        """Create an event in ``calendar_id``."""
        if calendar_id == PRIMARY_CALENDAR:
            path = self.base_path
        else:
            path = f"/calendars/{calendar_id}{self.base_path}"
        response = await self.session.post(path, event, Event)
        return response.data

    async def update(self, calendar_id: str, event: Event) -> Event:
        """Patch the event identified by ``event.id``.

        Raises:
            ValueError: If ``event.id`` is not set.
        """
        if not event.id:
            raise ValueError("event.id is required to update an event")
        response = await self.session.patch(
            self._event_path(calendar_id, event.id), event, Event
        )
        return response.data

    async def delete(self, calendar_id: str, event_id: str) -> None:
        await self.session.delete(self._event_path(calendar_id, event_id))
