"""Static-to-dynamic QRIS payload encoder."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, localcontext
from typing import Union

from .crc import crc16_ccitt
from .errors import ChecksumMismatch, InvalidAmount
from .tlv import MAX_VALUE_LENGTH, Payload, TLVField, build_tlv, parse_tlv

TAG_POINT_OF_INITIATION = "01"
TAG_TRANSACTION_AMOUNT = "54"
TAG_CRC = "63"

POI_STATIC = "11"
POI_DYNAMIC = "12"

CRC_PREFIX = f"{TAG_CRC}04"

FIELD_NAMES = {
    "00": "Payload Format Indicator",
    "01": "Point of Initiation Method",
    "52": "Merchant Category Code",
    "53": "Transaction Currency",
    "54": "Transaction Amount",
    "55": "Tip or Convenience Indicator",
    "56": "Value of Convenience Fee Fixed",
    "57": "Value of Convenience Fee Percentage",
    "58": "Country Code",
    "59": "Merchant Name",
    "60": "Merchant City",
    "61": "Postal Code",
    "62": "Additional Data Field Template",
    "63": "CRC",
    "64": "Merchant Information Language Template",
}

Amount = Union[Decimal, int, str, float]

_CENTS = Decimal("0.01")


def field_name(tag: str) -> str:
    if tag in FIELD_NAMES:
        return FIELD_NAMES[tag]
    if "02" <= tag <= "51":
        return "Merchant Account Information"
    if "65" <= tag <= "79":
        return "RFU for EMVCo"
    if "80" <= tag <= "99":
        return "Unreserved Template"
    return "Unknown"


@dataclass(frozen=True)
class EncodedPayload:
    payload: str
    crc: str


def _to_decimal(amount: Amount) -> Decimal:
    if isinstance(amount, bool):
        raise InvalidAmount("Amount must be a number", amount)
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, float):
        # repr gives the shortest round-tripping text, so 50000.5 stays 50000.5
        return Decimal(repr(amount))
    if isinstance(amount, (int, str)):
        try:
            return Decimal(amount)
        except InvalidOperation:
            raise InvalidAmount(f"Amount {amount!r} is not a decimal number", amount) from None
    raise InvalidAmount(f"Unsupported amount type {type(amount).__name__}", amount)


def format_amount(amount: Amount) -> str:
    """Render ``amount`` as the tag 54 value.

    The integer part carries no leading zeros or separators. A non-zero
    fractional part is written with exactly two digits; a zero one is omitted.
    """

    value = _to_decimal(amount)
    if not value.is_finite():
        raise InvalidAmount(f"Amount {amount!r} is not finite", amount)
    if value <= 0:
        raise InvalidAmount(f"Amount must be positive, got {amount!r}", amount)
    if value.adjusted() >= MAX_VALUE_LENGTH:
        raise InvalidAmount(f"Amount {amount!r} exceeds {MAX_VALUE_LENGTH} characters", amount)

    with localcontext() as ctx:
        ctx.prec = MAX_VALUE_LENGTH + 10
        cents = value.quantize(_CENTS)
        if cents != value:
            raise InvalidAmount(f"Amount {amount!r} has more than two fractional digits", amount)
        if cents == cents.to_integral_value():
            text = str(int(cents))
        else:
            text = f"{cents:f}"

    if len(text) > MAX_VALUE_LENGTH:
        raise InvalidAmount(f"Amount {amount!r} exceeds {MAX_VALUE_LENGTH} characters", amount)
    return text


def _insert_ordered(fields: list[TLVField], new_field: TLVField) -> None:
    for idx, field in enumerate(fields):
        if field.tag > new_field.tag:
            fields.insert(idx, new_field)
            return
    fields.append(new_field)


def set_amount(payload: Payload, amount: Amount) -> Payload:
    """Return a dynamic copy of ``payload`` carrying ``amount`` and no CRC field."""

    amount_text = format_amount(amount)
    fields: list[TLVField] = []
    poi_index: int | None = None
    for field in payload:
        if field.tag == TAG_POINT_OF_INITIATION:
            if poi_index is None:
                poi_index = len(fields)
            continue
        if field.tag in (TAG_TRANSACTION_AMOUNT, TAG_CRC):
            continue
        fields.append(field)

    poi = TLVField(tag=TAG_POINT_OF_INITIATION, value=POI_DYNAMIC)
    if poi_index is None:
        _insert_ordered(fields, poi)
    else:
        fields.insert(poi_index, poi)

    _insert_ordered(fields, TLVField(tag=TAG_TRANSACTION_AMOUNT, value=amount_text))
    return Payload(tuple(fields))


def compute_crc(payload: Payload) -> str:
    """CRC over every non-CRC field followed by the ``6304`` prefix."""

    return crc16_ccitt(build_tlv(payload.without(TAG_CRC)) + CRC_PREFIX)


def encode(payload: Payload) -> EncodedPayload:
    body = build_tlv(payload.without(TAG_CRC))
    crc = compute_crc(payload)
    return EncodedPayload(payload=f"{body}{CRC_PREFIX}{crc}", crc=crc)


def serialize(payload: Payload) -> str:
    """Serialize ``payload`` with a freshly computed CRC field appended last."""

    return encode(payload).payload


def verify_checksum(raw: str) -> Payload:
    """Parse ``raw`` and check its trailing CRC field; return the parsed payload."""

    payload = parse_tlv(raw)
    last = payload.fields[-1]
    if last.tag != TAG_CRC or last.length != 4:
        raise ChecksumMismatch(expected=compute_crc(payload), actual=None)
    expected = crc16_ccitt(raw[:-4])
    if last.value.upper() != expected:
        raise ChecksumMismatch(expected=expected, actual=last.value)
    return payload


def make_dynamic(base_payload: str, amount: Amount, *, verify_base: bool = False) -> EncodedPayload:
    """Turn a static merchant payload into a dynamic one for ``amount``."""

    payload = verify_checksum(base_payload) if verify_base else parse_tlv(base_payload)
    return encode(set_amount(payload, amount))
