"""File metadata, a flight register, the TEA cipher, a file encryptor, an EWP server and a key brute-forcer."""

__version__ = "0.1.0"