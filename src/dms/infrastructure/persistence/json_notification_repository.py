"""JSON-file-backed implementation of NotificationRepository."""

from __future__ import annotations

from datetime import datetime

from dms.domain.model.notification import Notification
from dms.domain.repository.notification_repository import NotificationRepository
from dms.infrastructure.persistence.json_file import JsonFile


class JsonNotificationRepository(JsonFile, NotificationRepository):

    def add(self, notification: Notification) -> None:
        records = self._load_raw()
        records.append(
            {
                "title": notification.title,
                "message": notification.message,
                "type": notification.type,
                "link": notification.link,
                "reference_id": notification.reference_id,
                "metadata": notification.metadata,
                "is_read": notification.is_read,
                "created_at": notification.created_at.isoformat(),
            }
        )
        self._persist_raw(records)

    def list_all(self) -> list[Notification]:
        notifications = [
            Notification(
                title=raw["title"],
                message=raw["message"],
                type=raw.get("type", "dispatch"),
                link=raw.get("link"),
                reference_id=raw.get("reference_id"),
                metadata=raw.get("metadata", {}),
                is_read=raw.get("is_read", False),
                created_at=datetime.fromisoformat(raw["created_at"]),
            )
            for raw in self._load_raw()
        ]
        return sorted(notifications, key=lambda n: n.created_at, reverse=True)
