"""Application roles."""

from __future__ import annotations

from enum import Enum

from dms.domain.exceptions import ValidationError


class Role(Enum):
    USER = "user"
    ADMIN = "admin"
    MASTER_ADMIN = "master_admin"

    @property
    def is_admin(self) -> bool:
        return self in (Role.ADMIN, Role.MASTER_ADMIN)

    @staticmethod
    def parse(value: str) -> Role:
        try:
            return Role(value.strip().lower())
        except ValueError as exc:
            raise ValidationError(f"Unknown role: {value!r}") from exc
