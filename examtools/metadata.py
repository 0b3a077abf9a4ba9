"""File metadata record: size, byte sum, djb2 hash and letter counts."""

from __future__ import annotations

import argparse
import struct
from dataclasses import dataclass, field
from pathlib import Path

INPUT_FILE = "pgexam25_test.txt"
OUTPUT_FILE = "pgexam25_output.bin"

_NAME_SIZE = 32
_LETTERS = 26
_MASK32 = 0xFFFFFFFF
_WRITE_LAYOUT = struct.Struct("<32sI4sI26s")
_READ_LAYOUT = struct.Struct("<32si4si26s")


def djb2_hash(data: bytes) -> int:
    """Return the 32-bit djb2 hash of ``data``, stopping at the first zero byte.

    Bytes are added as signed chars, so values above 127 count as negative.
    """
    value = 5381
    for byte in data:
        if byte == 0:
            break
        signed = byte - 256 if byte > 127 else byte
        value = (value * 33 + signed) & _MASK32
    return value


def _wrap_int32(value: int) -> int:
    return ((value + 2**31) % 2**32) - 2**31


def size_and_sum(data: bytes) -> tuple[int, int]:
    """Return the size of ``data`` and the sum of its bytes as a 32-bit int."""
    return len(data), _wrap_int32(sum(data))


def count_letters(data: bytes) -> list[int]:
    """Count each letter a-z in ``data``, ignoring case."""
    counts = [0] * _LETTERS
    for byte in data:
        if ord("a") <= byte <= ord("z"):
            counts[byte - ord("a")] += 1
        elif ord("A") <= byte <= ord("Z"):
            counts[byte - ord("A")] += 1
    return counts


@dataclass
class FileMetadata:
    """The packed 70-byte metadata record written for an input file."""

    file_name: str
    file_size: int
    hash: int
    sum_of_chars: int
    alpha_count: list[int] = field(default_factory=lambda: [0] * _LETTERS)

    SIZE = _WRITE_LAYOUT.size

    def to_bytes(self) -> bytes:
        """Pack the record; letter counts keep only their low byte."""
        if len(self.alpha_count) != _LETTERS:
            raise ValueError(f"alpha_count must hold {_LETTERS} counts")
        name = self.file_name.encode()[:_NAME_SIZE]
        return _WRITE_LAYOUT.pack(
            name,
            self.file_size & _MASK32,
            (self.hash & _MASK32).to_bytes(4, "little"),
            self.sum_of_chars & _MASK32,
            bytes(count & 0xFF for count in self.alpha_count),
        )

    @classmethod
    def from_bytes(cls, raw: bytes) -> FileMetadata:
        """Unpack a record produced by :meth:`to_bytes`."""
        if len(raw) != _READ_LAYOUT.size:
            raise ValueError(
                f"metadata record must be {_READ_LAYOUT.size} bytes, got {len(raw)}"
            )
        name, size, hash_bytes, total, counts = _READ_LAYOUT.unpack(raw)
        return cls(
            file_name=name.split(b"\0", 1)[0].decode(errors="replace"),
            file_size=size,
            hash=int.from_bytes(hash_bytes, "little"),
            sum_of_chars=total,
            alpha_count=list(counts),
        )


def build_metadata(data: bytes, file_name: str) -> FileMetadata:
    """Compute the metadata record for ``data``.

    Raises ValueError when the size or the byte sum is zero.
    """
    size, total = size_and_sum(data)
    if size == 0 or total == 0:
        raise ValueError("file size and sum of characters must not be zero")
    return FileMetadata(
        file_name=file_name,
        file_size=size,
        hash=djb2_hash(data),
        sum_of_chars=total,
        alpha_count=count_letters(data),
    )


def main(argv: list[str] | None = None) -> int:
    """Write the metadata of the fixed input file to the fixed output file."""
    argparse.ArgumentParser(
        description=f"Write metadata of {INPUT_FILE} to {OUTPUT_FILE}."
    ).parse_args(argv)
    try:
        data = Path(INPUT_FILE).read_bytes()
    except OSError:
        print("Failed to open input file")
        return 1
    try:
        metadata = build_metadata(data, INPUT_FILE)
    except ValueError:
        print("Something went wrong in SizeAndSumOfCharacters")
        return 1
    try:
        Path(OUTPUT_FILE).write_bytes(metadata.to_bytes())
    except OSError:
        print("Failed to open output file")
        return 1
    return 0