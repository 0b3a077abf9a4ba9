"""Encrypt a file with TEA chunk by chunk while a reader thread feeds the chunks."""

from __future__ import annotations

import argparse
import queue
import struct
import threading
from collections.abc import Sequence
from pathlib import Path
from typing import BinaryIO

from .metadata import djb2_hash
from .tea import encipher

CHUNK_SIZE = 4096
BLOCK_SIZE = 8
OUTPUT_FILE = "task4_pg2265.enc"
DEFAULT_KEY = (0xFFFFFFFF, 0x12345678, 0xFFFFFFFF, 0x87654321)

_BLOCK = struct.Struct("<2I")


def _pad(chunk: bytes) -> bytes:
    fill = BLOCK_SIZE - len(chunk) % BLOCK_SIZE
    return chunk + bytes([fill]) * fill


def encrypt_chunk(chunk: bytes, key: Sequence[int] = DEFAULT_KEY) -> bytes:
    """Pad ``chunk`` PKCS#5 style and encrypt it block by block with TEA."""
    padded = _pad(bytes(chunk))
    return b"".join(
        _BLOCK.pack(*encipher(words, key)) for words in _BLOCK.iter_unpack(padded)
    )


def _read_chunks(
    source: BinaryIO,
    chunks: queue.Queue[bytes | None],
    failures: list[BaseException],
) -> None:
    try:
        while chunk := source.read(CHUNK_SIZE):
            chunks.put(chunk)
    except BaseException as exc:  # handed back to the encrypting thread
        failures.append(exc)
    finally:
        chunks.put(None)


def encrypt_file(
    input_path: str | Path,
    output_path: str | Path,
    hash_path: str | Path,
) -> int:
    """Encrypt ``input_path`` into ``output_path`` and write its djb2 hash.

    The hash goes to ``hash_path`` as four little-endian bytes and is returned.
    """
    chunks: queue.Queue[bytes | None] = queue.Queue(maxsize=1)
    failures: list[BaseException] = []
    with open(input_path, "rb") as source, open(output_path, "wb") as target:
        reader = threading.Thread(
            target=_read_chunks, args=(source, chunks, failures), daemon=True
        )
        reader.start()
        while (chunk := chunks.get()) is not None:
            target.write(encrypt_chunk(chunk, DEFAULT_KEY))
        reader.join()
        if failures:
            raise failures[0]
        source.seek(0)
        digest = djb2_hash(source.read())
    Path(hash_path).write_bytes(digest.to_bytes(4, "little"))
    return digest


def main(argv: list[str] | None = None) -> int:
    """Encrypt the named file into the fixed output file and store its hash."""
    parser = argparse.ArgumentParser(
        description=f"Encrypt a file with TEA into {OUTPUT_FILE}."
    )
    parser.add_argument("filename", nargs="?")
    parser.add_argument(
        "--hash-file", help="where to write the hash (default: <filename>.hash)"
    )
    args = parser.parse_args(argv)
    if args.filename is None:
        print("Must specify file name!!!")
        return 1
    hash_path = args.hash_file or f"{args.filename}.hash"
    try:
        encrypt_file(args.filename, OUTPUT_FILE, hash_path)
    except OSError as exc:
        print(f"Failed to open file: {exc.strerror or exc}")
        return 1
    return 0