"""Pytest configuration and shared fixtures."""
import binascii

import pytest

# Static code as issued by the acquirer for a live merchant.
MERCHANT_QRIS = (
    "00020101021126610014COM.GO-JEK.WWW01189360091432840999140210G2840999140303UMI"
    "51440014ID.CO.QRIS.WWW0215ID10253780771980303UMI5204549953033605802ID"
    "5916SIINMEDIA, PCNGN6006JEPARA61055946262070703A01630456FE"
)

STATIC_FIELDS = [
    ("00", "01"),
    ("01", "11"),
    ("26", "0014ID.CO.QRIS.WWW0215ID1025378077198"),
    ("52", "5499"),
    ("53", "360"),
    ("58", "ID"),
    ("59", "DOMAINLUXE"),
    ("60", "JEPARA"),
]


def _tlv(fields):
    return "".join(f"{tag}{len(value):02d}{value}" for tag, value in fields)


def _oracle(data):
    return f"{binascii.crc_hqx(data.encode('utf-8'), 0xFFFF):04X}"


@pytest.fixture
def tlv():
    """Build a TLV string from (tag, value) pairs without any checksum."""
    return _tlv


@pytest.fixture
def crc_oracle():
    """Independent CRC-16/CCITT-FALSE implementation."""
    return _oracle


@pytest.fixture
def with_crc():
    """Append a valid tag 63 field to a checksum-less TLV body."""
    def _append(body):
        body = body + "6304"
        return body + _oracle(body)
    return _append


@pytest.fixture
def static_fields():
    return list(STATIC_FIELDS)


@pytest.fixture
def static_qris(with_crc):
    """Static merchant payload with a correct checksum."""
    return with_crc(_tlv(STATIC_FIELDS))


@pytest.fixture
def stale_qris():
    """Static merchant payload whose checksum no longer matches its content."""
    return _tlv(STATIC_FIELDS) + "6304ABCD"


@pytest.fixture
def merchant_qris():
    return MERCHANT_QRIS
