import struct

import pytest

from examtools.encryptor import (
    CHUNK_SIZE,
    DEFAULT_KEY,
    OUTPUT_FILE,
    encrypt_chunk,
    encrypt_file,
    main,
)
from examtools.metadata import djb2_hash
from examtools.tea import decipher


def _decrypt(data, key=DEFAULT_KEY):
    return b"".join(
        struct.pack("<2I", *decipher(words, key))
        for words in struct.iter_unpack("<2I", data)
    )


def _unpad(data):
    return data[: -data[-1]]


@pytest.mark.parametrize("size", [0, 1, 7, 8, 9, 100, CHUNK_SIZE])
def test_encrypted_length_is_padded_to_blocks(size):
    out = encrypt_chunk(bytes(range(256)) * 16 and (b"x" * size))
    assert len(out) % 8 == 0
    assert size < len(out) <= size + 8


@pytest.mark.parametrize("size", [0, 5, 8, 13, 64, CHUNK_SIZE])
def test_round_trip(size):
    chunk = bytes((i * 7) % 256 for i in range(size))
    assert _unpad(_decrypt(encrypt_chunk(chunk))) == chunk


def test_full_chunk_gets_padding_block_of_eights():
    out = encrypt_chunk(b"a" * CHUNK_SIZE)
    assert _decrypt(out[-8:]) == bytes([8]) * 8


def test_blocks_are_encrypted_independently():
    assert encrypt_chunk(b"abcdefgh" * 2)[:8] == encrypt_chunk(b"abcdefgh")[:8]


def test_key_changes_output():
    other_key = (1, 2, 3, 4)
    assert encrypt_chunk(b"hello", other_key) != encrypt_chunk(b"hello")
    assert _unpad(_decrypt(encrypt_chunk(b"hello", other_key), other_key)) == b"hello"


def test_encrypt_file_output_and_hash(tmp_path):
    data = bytes((i * 13) % 251 + 1 for i in range(5000))
    source = tmp_path / "in.bin"
    source.write_bytes(data)
    target = tmp_path / "out.enc"
    hash_file = tmp_path / "in.hash"
    digest = encrypt_file(source, target, hash_file)
    expected = encrypt_chunk(data[:CHUNK_SIZE]) + encrypt_chunk(data[CHUNK_SIZE:])
    assert target.read_bytes() == expected
    assert digest == djb2_hash(data)
    assert hash_file.read_bytes() == digest.to_bytes(4, "little")


def test_encrypt_file_chunks_round_trip(tmp_path):
    data = b"The quick brown fox jumps over the lazy dog.\n" * 300
    source = tmp_path / "in.txt"
    source.write_bytes(data)
    target = tmp_path / "out.enc"
    encrypt_file(source, target, tmp_path / "h")
    encrypted = target.read_bytes()
    full = CHUNK_SIZE + 8
    pieces = [encrypted[i : i + full] for i in range(0, len(encrypted), full)]
    assert b"".join(_unpad(_decrypt(piece)) for piece in pieces) == data


def test_empty_file(tmp_path):
    source = tmp_path / "empty"
    source.write_bytes(b"")
    target = tmp_path / "out.enc"
    hash_file = tmp_path / "h"
    assert encrypt_file(source, target, hash_file) == 5381
    assert target.read_bytes() == b""
    assert hash_file.read_bytes() == (5381).to_bytes(4, "little")


def test_missing_input_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        encrypt_file(tmp_path / "missing", tmp_path / "out", tmp_path / "h")


def test_main_requires_filename(capsys):
    assert main([]) == 1
    assert "Must specify file name!!!" in capsys.readouterr().out


def test_main_missing_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["nothere.txt"]) == 1
    assert "Failed to open file" in capsys.readouterr().out


def test_main_writes_output(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "input.txt").write_bytes(b"secret message")
    assert main(["input.txt"]) == 0
    encrypted = (tmp_path / OUTPUT_FILE).read_bytes()
    assert _unpad(_decrypt(encrypted)) == b"secret message"
    assert (tmp_path / "input.txt.hash").read_bytes() == djb2_hash(
        b"secret message"
    ).to_bytes(4, "little")