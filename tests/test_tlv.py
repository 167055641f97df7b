"""Unit tests for TLV parsing and building."""
import pytest

from qrisdyn.errors import MalformedPayload
from qrisdyn.tlv import Payload, TLVField, build_tlv, parse_tlv


class TestParse:
    """Test the TLV parser."""

    def test_parse_fields_in_order(self, static_qris):
        payload = parse_tlv(static_qris)

        assert payload.tags == ["00", "01", "26", "52", "53", "58", "59", "60", "63"]
        assert payload.get("01").value == "11"
        assert payload.get("59").value == "DOMAINLUXE"
        assert payload.get("58").length == 2

    def test_nested_template_left_opaque(self, merchant_qris):
        payload = parse_tlv(merchant_qris)

        merchant_account = payload.get("26")
        assert merchant_account.length == 61
        assert merchant_account.value.startswith("0014COM.GO-JEK.WWW")
        assert payload.get("62").value == "0703A01"

    def test_build_round_trip_is_verbatim(self, merchant_qris):
        assert build_tlv(parse_tlv(merchant_qris)) == merchant_qris

    def test_zero_length_value(self):
        payload = parse_tlv("000201" + "6200")
        assert payload.get("62") == TLVField(tag="62", value="")


class TestMalformed:
    """Test structural violations are rejected with their offset."""

    def test_empty_payload(self):
        with pytest.raises(MalformedPayload) as exc_info:
            parse_tlv("")
        assert exc_info.value.offset == 0

    def test_non_digit_tag(self):
        with pytest.raises(MalformedPayload) as exc_info:
            parse_tlv("000201AB0211")
        assert exc_info.value.offset == 6

    def test_non_digit_length(self):
        with pytest.raises(MalformedPayload) as exc_info:
            parse_tlv("000201010X11")
        assert exc_info.value.offset == 8

    def test_value_truncated(self):
        with pytest.raises(MalformedPayload) as exc_info:
            parse_tlv("000201010211" + "5405100")
        assert exc_info.value.offset == 16

    def test_trailing_partial_header(self):
        with pytest.raises(MalformedPayload) as exc_info:
            parse_tlv("00020101")
        assert exc_info.value.offset == 6

    def test_unicode_digits_rejected(self):
        with pytest.raises(MalformedPayload):
            parse_tlv("٠١0201")

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_tlv("0005AB")


class TestFieldAndPayload:
    """Test field construction and payload helpers."""

    def test_serialize_pads_length(self):
        assert TLVField(tag="58", value="ID").serialize() == "5802ID"

    def test_invalid_tag_rejected(self):
        with pytest.raises(ValueError):
            TLVField(tag="5", value="ID")

    def test_oversized_value_rejected(self):
        with pytest.raises(ValueError):
            TLVField(tag="62", value="x" * 100)

    def test_without_returns_new_payload(self, static_qris):
        payload = parse_tlv(static_qris)
        stripped = payload.without("63", "01")

        assert "63" not in stripped.tags
        assert "01" not in stripped.tags
        assert len(payload) == 9
        assert isinstance(stripped, Payload)
