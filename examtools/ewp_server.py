"""A single-connection EWP server that receives one mail file from a client."""

from __future__ import annotations

import re
import socket
import sys
from datetime import datetime
from pathlib import Path

from .ewp import (
    HEADER_SIZE,
    RECORD_SIZE,
    STATUS_CLOSED,
    STATUS_OK,
    STATUS_READY,
    STATUS_SERVICE_READY,
    ServerReply,
    SizeHeader,
    field_text,
)

HOST = "127.0.0.1"
GREETING = " Hello sensor"
_ID_SIZE = 31
_COMMAND_SIZE = 4
_HELO_TEXT = slice(HEADER_SIZE + 5, HEADER_SIZE + 55)
_COMMAND_REST = 52
_FILENAME = slice(1, 51)
_TRAILER_SIZE = 5
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class EwpSession:
    """One client conversation over an accepted connection."""

    def __init__(
        self,
        connection: socket.socket,
        server_id: str,
        directory: str | Path = ".",
        timestamp: str | None = None,
    ) -> None:
        self.connection = connection
        self.server_id = server_id
        self.directory = Path(directory)
        self.timestamp = timestamp or datetime.now().strftime("%d.%m.%Y %H:%M:%S")
        self.header = SizeHeader(RECORD_SIZE)

    def _receive(self, size: int) -> bytes:
        data = bytearray()
        while len(data) < size:
            chunk = self.connection.recv(size - len(data))
            if not chunk:
                break
            data += chunk
        return bytes(data)

    def _reply(self, status: str, text: str) -> None:
        self.connection.sendall(ServerReply(status, text, self.header).to_bytes())

    def handshake(self) -> str:
        """Send the accept record, read HELO and answer it; return the client IP."""
        self._reply(
            STATUS_SERVICE_READY,
            f"{HOST} SMTP {self.server_id} {self.timestamp}",
        )
        helo = self._receive(RECORD_SIZE).ljust(RECORD_SIZE, b"\0")
        text = field_text(helo[_HELO_TEXT])
        client_ip = text.split(".", 1)[1] if "." in text else ""
        self._reply(STATUS_OK, client_ip + GREETING)
        return client_ip

    def check_address(self, size: int, ok_text: str, bad_text: str) -> bool:
        """Read an address record of ``size`` bytes and accept it if it holds '@'."""
        record = self._receive(size)
        if "@" in field_text(record[HEADER_SIZE:]):
            self._reply(STATUS_OK, ok_text)
            return True
        self._reply(STATUS_CLOSED, bad_text)
        return False

    def _read_content(self) -> bytes:
        head = self._receive(HEADER_SIZE).ljust(HEADER_SIZE, b"\0")
        size = SizeHeader.from_bytes(head).data_size
        if size <= 0:
            print("Couldnt get data size")
            return b""
        content = self._receive(size)
        print("Finished reading file content from client")
        return content[: max(len(content) - _TRAILER_SIZE, 0)]

    def receive_file(self, path: str | Path) -> bool:
        """Accept a file upload into ``path``; False if the file cannot be opened."""
        try:
            target = open(path, "wb")
        except OSError:
            print("Failed to open file, might be due to invalid filename")
            self._reply(STATUS_CLOSED, "Invalid filename")
            return False
        with target:
            self._reply(STATUS_READY, "Filename is Okay")
            target.write(self._read_content())
        self._reply(STATUS_OK, "Read and wrote to file\n")
        return True

    def run(self) -> bool:
        """Run the whole conversation; True when it ends normally."""
        try:
            self.handshake()
        except OSError:
            print("Failed to establish connection")
            return False
        try:
            if not self.check_address(
                RECORD_SIZE,
                "Sender address is OK",
                "Sender address is invalid, closing server",
            ):
                return False
            if not self.check_address(
                RECORD_SIZE,
                "Recieving address is OK",
                "Recieving address is invalid, closing server",
            ):
                return False
            while True:
                head = self._receive(HEADER_SIZE)
                if not head:
                    return True
                command = self._receive(_COMMAND_SIZE)
                rest = self._receive(_COMMAND_REST)
                if command == b"DATA":
                    name = field_text(rest[_FILENAME])
                    if not self.receive_file(self.directory / name):
                        return False
                else:
                    self._reply(STATUS_CLOSED, "Server is closing")
                    return True
        except OSError as exc:
            print(f"Connection failed: {exc}")
            return False


def parse_args(argv: list[str]) -> tuple[int, str]:
    """Parse ``-port PORT -id ID``; raise ValueError with a message otherwise."""
    if len(argv) != 4:
        raise ValueError("Invalid amount of args. Run with -port [port] -id [id]")
    if argv[0] != "-port" or argv[2] != "-id":
        raise ValueError("Invalid flags, run with -port and -id")
    match = _LEADING_INT.match(argv[1])
    port = int(match.group(1)) if match else 0
    if not 0 < port <= 65535:
        raise ValueError("Invalid input for -port or -id")
    return port, argv[3][:_ID_SIZE]


def serve(port: int, server_id: str) -> bool:
    """Listen on the loopback address, serve one client and return its outcome."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
        server.bind((HOST, port))
        server.listen(5)
        connection, _ = server.accept()
        with connection:
            return EwpSession(connection, server_id).run()


def main(argv: list[str] | None = None) -> int:
    """Start the server from ``-port PORT -id ID`` arguments."""
    try:
        port, server_id = parse_args(sys.argv[1:] if argv is None else argv)
    except ValueError as exc:
        print(exc)
        return 1
    try:
        ok = serve(port, server_id)
    except OSError as exc:
        print(f"Bind failed: {exc}")
        return 1
    return 0 if ok else 1