"""In-app notification raised for administrators after a dispatch."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass
class Notification:
    title: str
    message: str
    type: str = "dispatch"
    link: str | None = "/dispatch"
    reference_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    is_read: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
