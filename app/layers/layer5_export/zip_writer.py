"""Minimal stored (uncompressed) ZIP writer.

DOCX 패키지 작성용. 압축 없이(method 0) 파일을 그대로 담습니다.
레코드 배치: [로컬 헤더 + 이름 + 데이터] * N → 중앙 디렉터리 * N → EOCD
"""

import struct
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Union

from app.utils.dates import utc_now

LOCAL_HEADER_SIGNATURE = 0x04034B50
CENTRAL_HEADER_SIGNATURE = 0x02014B50
END_OF_CENTRAL_DIRECTORY_SIGNATURE = 0x06054B50
ZIP_VERSION = 20
STORED = 0

_LOCAL_HEADER = struct.Struct("<IHHHHHIIIHH")
_CENTRAL_HEADER = struct.Struct("<IHHHHHHIIIHHHHHII")
_END_RECORD = struct.Struct("<IHHHHIIH")


def _build_crc_table() -> list[int]:
    table = []
    for n in range(256):
        c = n
        for _ in range(8):
            c = (c >> 1) ^ 0xEDB88320 if c & 1 else c >> 1
        table.append(c)
    return table


CRC_TABLE = _build_crc_table()


def crc32(data: bytes) -> int:
    """CRC-32 (IEEE 802.3, reflected polynomial 0xEDB88320)."""
    crc = 0xFFFFFFFF
    for byte in data:
        crc = CRC_TABLE[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc ^ 0xFFFFFFFF


def to_dos_date_time(moment: Optional[datetime] = None) -> tuple[int, int]:
    """
    UTC 시각을 MS-DOS (time, date) 쌍으로 변환.

    초는 2초 단위, 연도는 1980 미만이면 1980으로 맞춥니다.
    """
    moment = (moment or utc_now()).astimezone(timezone.utc)
    year = max(1980, moment.year)
    dos_time = ((moment.hour & 0x1F) << 11) | ((moment.minute & 0x3F) << 5) | ((moment.second // 2) & 0x1F)
    dos_date = (((year - 1980) & 0x7F) << 9) | ((moment.month & 0x0F) << 5) | (moment.day & 0x1F)
    return dos_time, dos_date


@dataclass
class ZipEntry:
    """ZIP에 담을 파일 하나."""
    name: str
    content: Union[str, bytes]

    def data(self) -> bytes:
        if isinstance(self.content, bytes):
            return self.content
        return self.content.encode("utf-8")


def create_zip_buffer(files: list[ZipEntry], now: Optional[datetime] = None) -> bytes:
    """파일 목록을 stored ZIP 아카이브 바이트로 작성."""
    dos_time, dos_date = to_dos_date_time(now)
    local_parts: list[bytes] = []
    central_parts: list[bytes] = []
    offset = 0

    for entry in files:
        name = entry.name.encode("utf-8")
        data = entry.data()
        checksum = crc32(data)

        local_header = _LOCAL_HEADER.pack(
            LOCAL_HEADER_SIGNATURE,
            ZIP_VERSION,
            0,  # flags
            STORED,
            dos_time,
            dos_date,
            checksum,
            len(data),
            len(data),
            len(name),
            0,  # extra
        )
        local_parts.extend([local_header, name, data])

        central_parts.append(_CENTRAL_HEADER.pack(
            CENTRAL_HEADER_SIGNATURE,
            ZIP_VERSION,  # made by
            ZIP_VERSION,  # needed
            0,
            STORED,
            dos_time,
            dos_date,
            checksum,
            len(data),
            len(data),
            len(name),
            0,  # extra
            0,  # comment
            0,  # disk start
            0,  # internal attrs
            0,  # external attrs
            offset,
        ))
        central_parts.append(name)

        offset += len(local_header) + len(name) + len(data)

    central_directory = b"".join(central_parts)
    end_record = _END_RECORD.pack(
        END_OF_CENTRAL_DIRECTORY_SIGNATURE,
        0,
        0,
        len(files),
        len(files),
        len(central_directory),
        offset,
        0,
    )

    return b"".join(local_parts) + central_directory + end_record
