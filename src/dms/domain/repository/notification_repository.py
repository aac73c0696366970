"""Abstract repository for administrator notifications."""

from __future__ import annotations

from abc import ABC, abstractmethod

from dms.domain.model.notification import Notification


class NotificationRepository(ABC):

    @abstractmethod
    def add(self, notification: Notification) -> None:
        """Store a new notification."""

    @abstractmethod
    def list_all(self) -> list[Notification]:
        """Return notifications, newest first."""
