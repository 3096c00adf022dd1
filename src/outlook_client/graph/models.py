"""Shared Microsoft Graph resource models.

Models are plain dataclasses. Each field records its Graph JSON name (and,
for nested objects, its model type) in the field metadata so the same
declaration drives both ``from_dict`` and ``to_dict``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields
from typing import Any, Generic, TypeVar

from outlook_client.graph.query import extract_param

T = TypeVar("T", bound="GraphModel")


def json_field(name: str, model: type | None = None, many: bool = False) -> Any:
    """Declare a dataclass field mapped to the Graph JSON key ``name``."""
    metadata = {"json": name, "model": model, "many": many}
    if many:
        return field(default_factory=list, metadata=metadata)
    return field(default=None, metadata=metadata)


class GraphModel:
    """Mixin giving dataclasses Graph JSON (de)serialization."""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]):
        """Build a model from a Graph JSON object, ignoring unknown keys."""
        if not isinstance(data, Mapping):
            raise TypeError(f"Expected a JSON object for {cls.__name__}, got {type(data).__name__}")

        kwargs: dict[str, Any] = {}
        for f in fields(cls):
            key = f.metadata.get("json", f.name)
            value = data.get(key)
            if value is None:
                continue
            model = f.metadata.get("model")
            if model is not None:
                if f.metadata.get("many"):
                    value = [model.from_dict(item) for item in value]
                else:
                    value = model.from_dict(value)
            kwargs[f.name] = value
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to Graph JSON, omitting unset fields."""
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None or value == []:
                continue
            if f.metadata.get("model") is not None:
                if f.metadata.get("many"):
                    value = [item.to_dict() for item in value]
                else:
                    value = value.to_dict()
            result[f.metadata.get("json", f.name)] = value
        return result


# Body content types
BODY_CONTENT_TYPE_TEXT = "text"
BODY_CONTENT_TYPE_HTML = "html"


@dataclass
class EmailAddress(GraphModel):
    """Name and address of a mailbox."""

    name: str | None = json_field("name")
    address: str | None = json_field("address")


@dataclass
class Recipient(GraphModel):
    """Message or event recipient."""

    email_address: EmailAddress | None = json_field("emailAddress", EmailAddress)


@dataclass
class ItemBody(GraphModel):
    """Body content of a message or event."""

    content_type: str | None = json_field("contentType")
    content: str | None = json_field("content")


@dataclass
class DateTimeTimeZone(GraphModel):
    """Point in time with its time zone name."""

    date_time: str | None = json_field("dateTime")
    time_zone: str | None = json_field("timeZone")


@dataclass
class User(GraphModel):
    """Microsoft account user."""

    id: str | None = json_field("id")
    first_name: str | None = json_field("givenName")
    last_name: str | None = json_field("surname")
    display_name: str | None = json_field("displayName")
    email: str | None = json_field("userPrincipalName")
    job_title: str | None = json_field("jobTitle")


@dataclass
class ListResult(Generic[T]):
    """One page of a Graph collection.

    Attributes:
        value: Items on this page.
        next_link: ``@odata.nextLink``, empty on the last page.
        context: ``@odata.context``.
        total: ``@odata.count`` when requested with ``$count=true``.
    """

    value: list[T] = field(default_factory=list)
    next_link: str = ""
    context: str = ""
    total: int | None = None

    @property
    def has_more(self) -> bool:
        return bool(self.next_link)

    @property
    def next_skip(self) -> str:
        """``$skip`` token of the next page, or empty string."""
        return extract_param(self.next_link, "$skip")

    @classmethod
    def parse(cls, data: Mapping[str, Any], item_type: type[T]) -> ListResult[T]:
        """Parse a Graph collection response."""
        if not isinstance(data, Mapping):
            raise TypeError(f"Expected a JSON object, got {type(data).__name__}")

        items = data.get("value") or []
        if not isinstance(items, list):
            raise TypeError("Collection 'value' must be a list")

        return cls(
            value=[item_type.from_dict(item) for item in items],
            next_link=data.get("@odata.nextLink") or "",
            context=data.get("@odata.context") or "",
            total=data.get("@odata.count"),
        )

    @classmethod
    def of(cls, item_type: type[T]) -> Callable[[Mapping[str, Any]], ListResult[T]]:
        """Decode target producing a ListResult of ``item_type``."""

        def parse(data: Mapping[str, Any]) -> ListResult[T]:
            return cls.parse(data, item_type)

        return parse
