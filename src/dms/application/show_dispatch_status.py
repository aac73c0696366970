"""Application service: Show Dispatch Status use case (query)."""

from __future__ import annotations

from dms.application.dto import RequirementLineDTO, describe_session
from dms.application.open_dispatch import OpenDispatchHandler


class ShowDispatchStatusHandler:

    def __init__(self, open_handler: OpenDispatchHandler) -> None:
        self._open_handler = open_handler

    def handle(self, order_id: str) -> list[RequirementLineDTO]:
        return describe_session(self._open_handler.handle(order_id))
