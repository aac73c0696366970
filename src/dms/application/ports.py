"""Outbound ports the application layer talks to besides repositories."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class DispatchEmail:
    order_id: str
    dispatch_date: str  # dd/mm/YYYY, as printed in the email
    serial_numbers: list[str]
    product_name: str
    total_quantity: int


class DispatchMailer(ABC):

    @abstractmethod
    def send_dispatch_email(self, email: DispatchEmail) -> None:
        """Hand a dispatch confirmation to the email service."""
