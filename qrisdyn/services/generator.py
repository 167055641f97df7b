"""Dynamic payment code generation for the purchase flow."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from ..config import MerchantConfig
from ..monitoring import record_payment_code
from ..qris_encoder import Amount, EncodedPayload, format_amount, make_dynamic
from ..renderer import render_qr_payload
from .errors import err_merchant_not_configured

logger = logging.getLogger("qrisdyn.generator")

Renderer = Callable[..., dict[str, Any]]


@dataclass(slots=True)
class GenerateResult:
    encoded: EncodedPayload
    amount_text: str
    qr_png_base64: str | None = None


class PaymentCodeGenerator:
    def __init__(self, merchant: MerchantConfig, renderer: Renderer = render_qr_payload):
        self.merchant = merchant
        self.renderer = renderer

    def create(self, amount: Amount, *, base_payload: str | None = None, render: bool = False) -> GenerateResult:
        base = base_payload or self.merchant.base_payload
        if not base:
            raise err_merchant_not_configured()

        encoded = make_dynamic(base, amount, verify_base=self.merchant.verify_base_checksum)
        amount_text = format_amount(amount)

        png_base64 = None
        if render:
            png_base64 = self.renderer(encoded.payload, title=self.merchant.name)["png_base64"]

        record_payment_code(rendered=render)
        logger.info(
            "dynamic payload generated",
            extra={"crc": encoded.crc, "amount": amount_text, "rendered": render},
        )
        return GenerateResult(encoded=encoded, amount_text=amount_text, qr_png_base64=png_base64)
