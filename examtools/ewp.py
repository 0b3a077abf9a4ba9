"""Fixed-size records of the EWP mail protocol."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

MAGIC = b"EWP"
DELIMITER = b"|"
HEADER_SIZE = 8
RECORD_SIZE = 64
TEXT_SIZE = 51

STATUS_SERVICE_READY = "220"
STATUS_OK = "250"
STATUS_CLOSED = "221"
STATUS_READY = "354"

_LEADING_INT = re.compile(rb"\s*([+-]?\d+)")


def _atoi(raw: bytes) -> int:
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else 0


def field_text(raw: bytes) -> str:
    """Return the text of a fixed-size field, up to its first zero byte."""
    return bytes(raw).split(b"\0", 1)[0].decode("utf-8", errors="replace")


@dataclass(frozen=True)
class SizeHeader:
    """The eight-byte header: magic, four ASCII digits of size, delimiter."""

    data_size: int = RECORD_SIZE
    magic: bytes = MAGIC
    delimiter: bytes = DELIMITER

    def to_bytes(self) -> bytes:
        """Pack the header; the size is written as four decimal digits."""
        if not 0 <= self.data_size <= 9999:
            raise ValueError(f"data size {self.data_size} does not fit in four digits")
        if len(self.magic) != 3 or len(self.delimiter) != 1:
            raise ValueError("magic must be 3 bytes and delimiter 1 byte")
        return self.magic + f"{self.data_size:04d}".encode("ascii") + self.delimiter

    @classmethod
    def from_bytes(cls, raw: bytes) -> SizeHeader:
        """Unpack a header; a size that is not a number reads as zero."""
        raw = bytes(raw)
        if len(raw) != HEADER_SIZE:
            raise ValueError(f"header must be {HEADER_SIZE} bytes, got {len(raw)}")
        return cls(data_size=_atoi(raw[3:7]), magic=raw[:3], delimiter=raw[7:8])


@dataclass(frozen=True)
class ServerReply:
    """A 64-byte server record: header, status code, space, text, zero."""

    status: str
    text: str
    header: SizeHeader = field(default_factory=SizeHeader)

    def to_bytes(self) -> bytes:
        """Pack the reply; text longer than the field is cut off."""
        status = self.status.encode("ascii")
        if len(status) != 3:
            raise ValueError(f"status code must be 3 characters, got {self.status!r}")
        text = self.text.encode("utf-8")[:TEXT_SIZE].ljust(TEXT_SIZE, b"\0")
        return self.header.to_bytes() + status + b" " + text + b"\0"

    @classmethod
    def from_bytes(cls, raw: bytes) -> ServerReply:
        """Unpack a 64-byte server record."""
        raw = bytes(raw)
        if len(raw) != RECORD_SIZE:
            raise ValueError(f"reply must be {RECORD_SIZE} bytes, got {len(raw)}")
        return cls(
            status=raw[HEADER_SIZE : HEADER_SIZE + 3].decode("ascii", errors="replace"),
            text=field_text(raw[HEADER_SIZE + 4 : HEADER_SIZE + 4 + TEXT_SIZE]),
            header=SizeHeader.from_bytes(raw[:HEADER_SIZE]),
        )