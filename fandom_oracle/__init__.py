"""Enclave oracle that fetches, caches and signs external fandom metrics."""

__version__ = "0.1.0"
