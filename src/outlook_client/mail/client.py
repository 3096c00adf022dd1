"""Outlook mail folder and message services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from outlook_client.graph.constants import DEFAULT_LIST_WINDOW
from outlook_client.graph.models import (
    GraphModel,
    ItemBody,
    ListResult,
    Recipient,
    json_field,
)
from outlook_client.graph.query import format_query_datetime, page_params

if TYPE_CHECKING:
    from outlook_client.graph.session import Session


@dataclass
class Folder(GraphModel):
    """Represents an Outlook mail folder."""

    id: str | None = json_field("id")
    display_name: str | None = json_field("displayName")
    parent_folder_id: str | None = json_field("parentFolderId")
    child_folder_count: int | None = json_field("childFolderCount")
    unread_item_count: int | None = json_field("unreadItemCount")
    total_item_count: int | None = json_field("totalItemCount")


@dataclass
class Message(GraphModel):
    """Represents an Outlook mail message."""

    id: str | None = json_field("id")
    internet_message_id: str | None = json_field("internetMessageId")
    created_on: str | None = json_field("createdDateTime")
    received_on: str | None = json_field("receivedDateTime")
    sent_on: str | None = json_field("sentDateTime")
    subject: str | None = json_field("subject")
    body_preview: str | None = json_field("bodyPreview")
    importance: str | None = json_field("importance")
    conversation_id: str | None = json_field("conversationId")
    is_read: bool | None = json_field("isRead")
    body: ItemBody | None = json_field("body", ItemBody)
    sender: Recipient | None = json_field("sender", Recipient)
    from_: Recipient | None = json_field("from", Recipient)
    to: list[Recipient] = json_field("toRecipients", Recipient, many=True)
    cc: list[Recipient] = json_field("ccRecipients", Recipient, many=True)
    bcc: list[Recipient] = json_field("bccRecipients", Recipient, many=True)
    reply_to: list[Recipient] = json_field("replyTo", Recipient, many=True)


class FolderService:
    """Mail folders of the signed-in user (``/me/mailFolders``)."""

    base_path = "/mailFolders"

    def __init__(self, session: Session):
        self.session = session

    async def list(
        self,
        max_results: int = 10,
        next_link: str | None = None,
    ) -> ListResult[Folder]:
        """List top-level mail folders.

        Args:
            max_results: Page size ($top).
            next_link: ``next_link`` of the previous page to continue from.
        """
        params = page_params(max_results, next_link)
        response = await self.session.get(self.base_path, params, ListResult.of(Folder))
        return response.data


class MessageService:
    """Messages in a mail folder."""

    base_path = "/messages"

    def __init__(self, session: Session):
        self.session = session

    async def list(
        self,
        folder_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
        max_results: int = 10,
        next_link: str | None = None,
    ) -> ListResult[Message]:
        """List messages in a folder.

        Args:
            folder_id: Folder ID or well-known name (e.g. "inbox").
            start: Sent as startDateTime (defaults to seven days before ``end``).
            end: Sent as endDateTime (defaults to now, UTC).
            max_results: Page size ($top).
            next_link: ``next_link`` of the previous page to continue from.
        """
        end = end or datetime.now(timezone.utc)
        start = start or end - DEFAULT_LIST_WINDOW

        params = page_params(max_results, next_link)
        params["startDateTime"] = format_query_datetime(start)
        params["endDateTime"] = format_query_datetime(end)

        path = f"/mailFolders/{folder_id}{self.base_path}"
        response = await self.session.get(path, params, ListResult.of(Message))
        return response.data
