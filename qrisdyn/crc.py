"""CRC-16/CCITT-FALSE implementation used by the QRIS checksum field."""
from __future__ import annotations

CRC16_POLY = 0x1021
CRC16_INIT = 0xFFFF


def crc16_ccitt(data: str | bytes) -> str:
    """Compute CRC-16/CCITT-FALSE and render it as 4 uppercase hex digits."""

    if isinstance(data, str):
        data = data.encode("utf-8")

    checksum = CRC16_INIT
    for byte in data:
        checksum ^= byte << 8
        for _ in range(8):
            if checksum & 0x8000:
                checksum = (checksum << 1) ^ CRC16_POLY
            else:
                checksum <<= 1
            checksum &= 0xFFFF
    return f"{checksum:04X}"
