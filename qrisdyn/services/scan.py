"""Inspection of scanned or merchant-supplied QRIS payloads."""
from __future__ import annotations

from dataclasses import dataclass

from ..errors import ChecksumMismatch
from ..qris_encoder import (
    POI_DYNAMIC,
    POI_STATIC,
    TAG_POINT_OF_INITIATION,
    TAG_TRANSACTION_AMOUNT,
    verify_checksum,
)
from ..tlv import Payload, parse_tlv

TAG_MERCHANT_NAME = "59"

_POI_LABELS = {POI_STATIC: "STATIC", POI_DYNAMIC: "DYNAMIC"}


@dataclass(slots=True)
class ScanResult:
    payload: Payload
    crc_valid: bool
    expected_crc: str | None = None

    @property
    def point_of_initiation(self) -> str | None:
        field = self.payload.get(TAG_POINT_OF_INITIATION)
        return _POI_LABELS.get(field.value) if field else None

    @property
    def amount(self) -> str | None:
        field = self.payload.get(TAG_TRANSACTION_AMOUNT)
        return field.value if field else None

    @property
    def merchant_name(self) -> str | None:
        field = self.payload.get(TAG_MERCHANT_NAME)
        return field.value if field else None


class ScanService:
    def inspect(self, raw: str) -> ScanResult:
        """Parse ``raw`` and report its fields along with CRC validity.

        Structural errors propagate as MalformedPayload; a bad checksum is
        reported in the result instead of raised.
        """

        try:
            payload = verify_checksum(raw)
        except ChecksumMismatch as exc:
            return ScanResult(payload=parse_tlv(raw), crc_valid=False, expected_crc=exc.expected)
        return ScanResult(payload=payload, crc_valid=True)
