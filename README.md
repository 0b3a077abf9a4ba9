# examtools

A handful of small, self-contained utilities collected in one package.
It needs nothing beyond the Python standard library (Python 3.10 or later).

- **File metadata** (`examtools.metadata`): `djb2_hash`, `size_and_sum` and
  `count_letters` compute the djb2 hash, the size, the byte sum and the
  per-letter counts of some bytes; `build_metadata` gathers them into a
  `FileMetadata` record, which `to_bytes` packs into 70 bytes and
  `from_bytes` reads back.
- **Flight register** (`examtools.flights`): `FlightRegistry` keeps flight
  departures in the order they were added; each `Flight` keeps its
  `Passenger` list sorted by seat. `examtools.flights_cli.run_menu` drives
  a registry from a numbered text menu.
- **TEA cipher** (`examtools.tea`): `encipher` and `decipher` work on a block
  of two 32-bit words with a key of four 32-bit words.
- **File encryptor** (`examtools.encryptor`): `encrypt_file` reads a file in
  4096-byte chunks on a reader thread, encrypts each chunk with TEA after
  padding it to whole 8-byte blocks (`encrypt_chunk`), and writes the djb2
  hash of the input as four little-endian bytes.
- **EWP server** (`examtools.ewp`, `examtools.ewp_server`): `SizeHeader` and
  `ServerReply` are the fixed-size records of a small SMTP-like protocol;
  `EwpSession` greets a client, checks that the sender and recipient
  addresses contain `@`, and stores the files the client sends.
- **Brute-forcer** (`examtools.bruteforce`): `parse_http_body` turns an HTTP
  response body into 32-bit words; `brute_force` tries every key made of one
  byte repeated and keeps the decryptions whose bytes are all printable
  ASCII, tab, line feed or carriage return.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Commands

Read `pgexam25_test.txt` from the current directory and write its metadata
record to `pgexam25_output.bin` (it fails if the file is empty or its byte
sum is zero):

```
examtools-metadata
```

Manage flights and passengers from an interactive menu (choose `9` to quit):

```
examtools-flights
```

Encrypt a file with TEA into `task4_pg2265.enc` in the current directory and
store its hash in `FILE.hash`, or in the file given with `--hash-file`:

```
examtools-encrypt FILE
examtools-encrypt FILE --hash-file FILE.djb2
```

Accept one EWP client on 127.0.0.1 at the given port, announcing the given
server id (at most 31 characters are kept); received files are written to
the current directory:

```
examtools-ewp-server -port 2525 -id testserver
```

Connect to a server, read what it sends until it closes the connection (at
most 4096 bytes), and search the body for its key. Each readable decryption
is printed with its key, and the last one found is written to
`decrypted.txt`:

```
examtools-bruteforce -server 127.0.0.1 -port 8080
```

## Library use

```python
from examtools.encryptor import DEFAULT_KEY, encrypt_chunk
from examtools.tea import encipher, decipher
from examtools.metadata import djb2_hash, build_metadata, FileMetadata
from examtools.flights import FlightRegistry

block = encipher((1, 2), DEFAULT_KEY)
assert decipher(block, DEFAULT_KEY) == (1, 2)
assert len(encrypt_chunk(b"hello")) == 8

registry = FlightRegistry()
flight = registry.add_flight("BA-42", "Oslo", 120, 1430)
flight.add_passenger("Kari", 34, 12)
assert registry.index_of_destination("Oslo") == 0
print(flight.describe())

record = build_metadata(b"hello", "hello.txt")
assert FileMetadata.from_bytes(record.to_bytes()) == record
print(djb2_hash(b"hello"))
```

## What it does not do

- The flight register lives only in memory: flights and passengers are not
  saved anywhere and are gone when the menu quits.
- The EWP server serves a single connection and then exits; it does not
  relay or deliver mail, it only stores the uploaded files.
- The brute-forcer sends no HTTP request of its own and reads only the first
  three digits of `Content-Length`; it tries only the 256 keys built from
  one repeated byte.