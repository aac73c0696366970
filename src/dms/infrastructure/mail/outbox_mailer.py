"""Mailer that queues dispatch emails in a JSON outbox.

Delivery itself belongs to the email service, which drains the outbox.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime, timezone

from dms.application.ports import DispatchEmail, DispatchMailer
from dms.infrastructure.persistence.json_file import JsonFile

logger = logging.getLogger(__name__)


class OutboxMailer(JsonFile, DispatchMailer):

    def send_dispatch_email(self, email: DispatchEmail) -> None:
        records = self._load_raw()
        records.append(
            {
                "template": "dispatch",
                "queued_at": datetime.now(timezone.utc).isoformat(),
                **asdict(email),
            }
        )
        self._persist_raw(records)
        logger.info("Queued dispatch email for order %s", email.order_id)

    def pending(self) -> list[dict]:
        return self._load_raw()
