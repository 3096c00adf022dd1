"""Outlook mail folders and messages over Microsoft Graph."""

from __future__ import annotations

from outlook_client.mail.client import Folder, FolderService, Message, MessageService

__all__ = ["FolderService", "MessageService", "Folder", "Message"]
