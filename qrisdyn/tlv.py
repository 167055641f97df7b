"""Utility helpers to build and parse EMV-style TLV payloads."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from .errors import MalformedPayload

MAX_VALUE_LENGTH = 99
_DIGITS = frozenset("0123456789")


def _is_two_digits(text: str) -> bool:
    return len(text) == 2 and all(ch in _DIGITS for ch in text)


@dataclass(frozen=True)
class TLVField:
    tag: str
    value: str

    def __post_init__(self) -> None:
        if not _is_two_digits(self.tag):
            raise ValueError(f"TLV tag must be two ASCII digits, got {self.tag!r}")
        if len(self.value) > MAX_VALUE_LENGTH:
            raise ValueError(f"TLV value for tag {self.tag} exceeds {MAX_VALUE_LENGTH} characters")

    @property
    def length(self) -> int:
        return len(self.value)

    def serialize(self) -> str:
        return f"{self.tag}{self.length:02d}{self.value}"


@dataclass(frozen=True)
class Payload:
    """Ordered, immutable sequence of top-level TLV fields."""

    fields: tuple[TLVField, ...] = ()

    def __iter__(self) -> Iterator[TLVField]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def tags(self) -> list[str]:
        return [field.tag for field in self.fields]

    def get(self, tag: str) -> TLVField | None:
        for field in self.fields:
            if field.tag == tag:
                return field
        return None

    def without(self, *tags: str) -> Payload:
        return Payload(tuple(field for field in self.fields if field.tag not in tags))


def build_tlv(items: Iterable[TLVField]) -> str:
    """Serialize iterable of TLV fields into EMV string."""

    return "".join(item.serialize() for item in items)


def iter_tlv(raw: str) -> Iterator[TLVField]:
    """Yield TLV fields from ``raw``; raise MalformedPayload on the first violation."""

    idx = 0
    total = len(raw)
    if total == 0:
        raise MalformedPayload("Empty payload", 0)
    while idx < total:
        if idx + 4 > total:
            raise MalformedPayload("Truncated field header", idx)
        tag = raw[idx : idx + 2]
        if not _is_two_digits(tag):
            raise MalformedPayload(f"Tag is not two digits ({tag!r})", idx)
        length_text = raw[idx + 2 : idx + 4]
        if not _is_two_digits(length_text):
            raise MalformedPayload(f"Length of tag {tag} is not two digits ({length_text!r})", idx + 2)
        value_start = idx + 4
        value_end = value_start + int(length_text)
        if value_end > total:
            raise MalformedPayload(
                f"Tag {tag} declares {length_text} characters but only {total - value_start} remain",
                value_start,
            )
        yield TLVField(tag=tag, value=raw[value_start:value_end])
        idx = value_end


def parse_tlv(raw: str) -> Payload:
    """Parse TLV payload string into an ordered Payload."""

    return Payload(tuple(iter_tlv(raw)))
