"""Error taxonomy raised by the QRIS codec."""
from __future__ import annotations

from typing import Any


class QRISError(ValueError):
    """Base class for codec failures; ``code`` is stable for diagnostics."""

    code = "ERR_QRIS"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def details(self) -> dict[str, Any]:
        return {}


class MalformedPayload(QRISError):
    code = "ERR_MALFORMED_PAYLOAD"

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(f"{message} at offset {offset}")
        self.offset = offset

    def details(self) -> dict[str, Any]:
        return {"offset": self.offset}


class InvalidAmount(QRISError):
    code = "ERR_INVALID_AMOUNT"

    def __init__(self, message: str, amount: object) -> None:
        super().__init__(message)
        self.amount = amount

    def details(self) -> dict[str, Any]:
        return {"amount": str(self.amount)}


class ChecksumMismatch(QRISError):
    code = "ERR_CHECKSUM_MISMATCH"

    def __init__(self, expected: str, actual: str | None) -> None:
        if actual is None:
            message = "Checksum field (tag 63) missing or not last"
        else:
            message = f"Checksum mismatch: expected {expected}, found {actual}"
        super().__init__(message)
        self.expected = expected
        self.actual = actual

    def details(self) -> dict[str, Any]:
        return {"expected": self.expected, "actual": self.actual}
