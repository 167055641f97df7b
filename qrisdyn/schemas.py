"""Pydantic schemas for API contracts."""
from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


class DynamicQRRequest(BaseModel):
    amount: Decimal = Field(description="Purchase amount in rupiah, at most two fractional digits")
    merchant_payload: str | None = Field(default=None, description="Static QRIS payload; defaults to the configured merchant")
    render: bool = False


class DynamicQRResponse(BaseModel):
    payload: str
    crc: str
    amount: str
    point_of_initiation: Literal["DYNAMIC"] = "DYNAMIC"
    qr_png_base64: str | None = None


class InspectRequest(BaseModel):
    payload: str = Field(min_length=1)


class FieldSchema(BaseModel):
    tag: str
    name: str
    length: int
    value: str


class InspectResponse(BaseModel):
    fields: list[FieldSchema]
    crc_valid: bool
    expected_crc: str | None = None
    point_of_initiation: Literal["STATIC", "DYNAMIC"] | None = None
    amount: str | None = None
    merchant_name: str | None = None
