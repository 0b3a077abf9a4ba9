import socket
import struct
import threading

import pytest

from examtools.bruteforce import (
    brute_force,
    decrypt_text,
    fetch,
    is_allowed_char,
    main,
    parse_args,
    parse_http_body,
)
from examtools.tea import encipher

PLAINTEXT = b"Hello secret msg\n\tok, all fine!!"


def _repeat_key(byte):
    word = int.from_bytes(bytes([byte]) * 4, "little")
    return (word, word, word, word)


def _encrypt(plaintext, key):
    words = []
    for first, second in struct.iter_unpack("<2I", plaintext):
        words.extend(encipher((first, second), key))
    return words


def _http(words):
    body = struct.pack(f"<{len(words)}I", *words)
    head = f"HTTP/1.1 200 OK\r\nContent-Length: {len(body)}\r\n\r\n".encode()
    return head + body


def _serve_once(payload):
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(1)
    port = server.getsockname()[1]

    def run():
        conn, _ = server.accept()
        with conn:
            conn.sendall(payload)
        server.close()

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    return port, thread


@pytest.mark.parametrize("value", [9, 10, 13, 32, 65, 127])
def test_allowed_chars(value):
    assert is_allowed_char(value) is True


@pytest.mark.parametrize("value", [0, 8, 11, 31, 128, 255])
def test_disallowed_chars(value):
    assert is_allowed_char(value) is False


def test_decrypt_text_round_trip():
    key = _repeat_key(0x5A)
    words = _encrypt(PLAINTEXT, key)
    assert decrypt_text(words, key) == PLAINTEXT


def test_decrypt_text_rejects_unprintable():
    key = _repeat_key(0x10)
    plain = b"abc\x00defg" + b"12345678"
    words = _encrypt(plain, key)
    assert decrypt_text(words, key) is None


def test_decrypt_text_empty_is_none():
    assert decrypt_text([], _repeat_key(1)) is None


def test_decrypt_text_odd_words():
    with pytest.raises(ValueError):
        decrypt_text([1, 2, 3], _repeat_key(1))


def test_brute_force_finds_key():
    key = _repeat_key(0xC3)
    results = brute_force(_encrypt(PLAINTEXT, key))
    assert (key, PLAINTEXT) in results
    assert all(decrypt_text(_encrypt(PLAINTEXT, key), k) == t for k, t in results)


def test_parse_http_body_round_trip():
    words = [1, 0xFFFFFFFF, 0x12345678, 42]
    assert parse_http_body(_http(words)) == words


def test_parse_http_body_missing_header():
    with pytest.raises(ValueError):
        parse_http_body(b"HTTP/1.1 200 OK\r\n\r\nabcd")


def test_parse_http_body_short_body():
    response = b"HTTP/1.1 200 OK\r\nContent-Length: 16\r\n\r\nabcd"
    with pytest.raises(ValueError):
        parse_http_body(response)


def test_parse_args_valid():
    assert parse_args(["-server", "127.0.0.1", "-port", "8080"]) == ("127.0.0.1", 8080)


def test_parse_args_truncates_host():
    host, _ = parse_args(["-server", "a" * 20, "-port", "80"])
    assert host == "a" * 15


@pytest.mark.parametrize(
    "argv",
    [
        ["-server", "127.0.0.1"],
        ["-host", "127.0.0.1", "-port", "80"],
        ["-server", "127.0.0.1", "-port", "abc"],
    ],
)
def test_parse_args_errors(argv):
    with pytest.raises(ValueError):
        parse_args(argv)


def test_fetch_reads_until_close():
    payload = b"x" * 100 + b"end"
    port, thread = _serve_once(payload)
    assert fetch("127.0.0.1", port) == payload
    thread.join(timeout=5)


def test_fetch_limits_size():
    port, thread = _serve_once(b"y" * 5000)
    assert len(fetch("127.0.0.1", port)) == 4096
    thread.join(timeout=5)


def test_main_writes_decrypted_file(tmp_path, monkeypatch, capsys):
    key = _repeat_key(0x7E)
    port, thread = _serve_once(_http(_encrypt(PLAINTEXT, key)))
    monkeypatch.chdir(tmp_path)
    assert main(["-server", "127.0.0.1", "-port", str(port)]) == 0
    thread.join(timeout=5)
    assert (tmp_path / "decrypted.txt").read_bytes() == PLAINTEXT
    assert "KEY: 7E7E7E7E 7E7E7E7E 7E7E7E7E 7E7E7E7E" in capsys.readouterr().out


def test_main_bad_args():
    assert main(["-server"]) == 1