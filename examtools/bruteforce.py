"""Fetch a TEA-encrypted HTTP body and recover it by trying every repeating-byte key."""

from __future__ import annotations

import re
import socket
import struct
import sys
from collections.abc import Sequence
from pathlib import Path

from .tea import decipher

RESPONSE_LIMIT = 4096
OUTPUT_FILE = "decrypted.txt"
_HOST_SIZE = 15
_LENGTH_HEADER = b"Content-Length: "
_LENGTH_DIGITS = 3
_BODY_SEPARATOR = b"\r\n\r\n"
_BLOCK = struct.Struct("<2I")
_LEADING_INT = re.compile(rb"\s*([+-]?\d+)")
_CONTROL_CHARS = frozenset({9, 10, 13})

Key = tuple[int, int, int, int]


def _atoi(raw: bytes) -> int:
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else 0


def is_allowed_char(value: int) -> bool:
    """Return True for printable ASCII (32-127), tab, line feed and carriage return."""
    return 32 <= value <= 127 or value in _CONTROL_CHARS


def decrypt_text(words: Sequence[int], key: Sequence[int]) -> bytes | None:
    """Decrypt ``words`` two at a time; None unless every byte is allowed.

    Raises ValueError when the number of words is odd.
    """
    if len(words) % 2:
        raise ValueError("encrypted text must hold an even number of 32-bit words")
    if not words:
        return None
    blocks = []
    for first, second in zip(words[::2], words[1::2]):
        block = _BLOCK.pack(*decipher((first, second), key))
        if not all(is_allowed_char(byte) for byte in block):
            return None
        blocks.append(block)
    return b"".join(blocks)


def brute_force(words: Sequence[int]) -> list[tuple[Key, bytes]]:
    """Try every key made of one byte repeated; return each key that decrypts cleanly."""
    found: list[tuple[Key, bytes]] = []
    for byte in range(256):
        word = int.from_bytes(bytes([byte]) * 4, "big")
        key: Key = (word, word, word, word)
        text = decrypt_text(words, key)
        if text is not None:
            found.append((key, text))
    return found


def parse_http_body(response: bytes) -> list[int]:
    """Return the body of an HTTP response as little-endian 32-bit words.

    The length is read from the first three digits of Content-Length.
    Raises ValueError if the header or the body is missing or short.
    """
    start = response.find(_LENGTH_HEADER)
    if start < 0:
        raise ValueError("response has no Content-Length header")
    digits_at = start + len(_LENGTH_HEADER)
    size = _atoi(response[digits_at : digits_at + _LENGTH_DIGITS])
    separator = response.find(_BODY_SEPARATOR)
    if separator < 0:
        raise ValueError("response has no body")
    body = response[separator + len(_BODY_SEPARATOR) :]
    count = max(size, 0) // 4
    if len(body) < count * 4:
        raise ValueError(
            f"body holds {len(body)} bytes, Content-Length promised {size}"
        )
    return list(struct.unpack(f"<{count}I", body[: count * 4]))


def fetch(host: str, port: int) -> bytes:
    """Connect, read until the server closes, and return at most 4096 bytes."""
    data = bytearray()
    with socket.create_connection((host, port)) as connection:
        while len(data) < RESPONSE_LIMIT:
            chunk = connection.recv(RESPONSE_LIMIT - len(data))
            if not chunk:
                break
            data += chunk
    return bytes(data)


def parse_args(argv: Sequence[str]) -> tuple[str, int]:
    """Parse ``-server HOST -port PORT``; raise ValueError with a message otherwise."""
    if len(argv) != 4:
        raise ValueError("Invalid amount of args")
    if argv[0] != "-server" or argv[2] != "-port":
        raise ValueError("Invalid flags, use -server and -port")
    port = _atoi(argv[3].encode())
    if port == 0:
        raise ValueError("Invalid port number")
    if not 0 < port <= 65535:
        raise ValueError("Invalid port number")
    return argv[1][:_HOST_SIZE], port


def main(argv: list[str] | None = None) -> int:
    """Download the encrypted text, brute-force the key and save the plaintext."""
    try:
        host, port = parse_args(sys.argv[1:] if argv is None else argv)
    except ValueError as exc:
        print(exc)
        return 1
    try:
        response = fetch(host, port)
    except OSError:
        print("Connect failed")
        return 1
    try:
        words = parse_http_body(response)
    except ValueError as exc:
        print(f"Failed to read contents: {exc}")
        return 1
    if len(words) % 2:
        words = words[:-1]
    results = brute_force(words)
    for key, text in results:
        print(text.decode("ascii"))
        print("\nKEY: " + " ".join(f"{word:X}" for word in key))
    plaintext = results[-1][1] if results else b""
    if not results:
        print("No key gave a readable text")
    try:
        Path(OUTPUT_FILE).write_bytes(plaintext)
    except OSError:
        print("Failed to open file")
        return 1
    return 0