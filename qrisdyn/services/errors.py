"""Shared service error definitions."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ServiceError(Exception):
    code: str
    message: str
    status_code: int = 400

    def __str__(self) -> str:  # noqa: D401 override
        return f"{self.code}: {self.message}"


def err_merchant_not_configured(message: str | None = None) -> ServiceError:
    return ServiceError(
        code="ERR_MERCHANT_NOT_CONFIGURED",
        message=message or "No merchant payload supplied or configured",
        status_code=422,
    )
