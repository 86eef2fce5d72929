"""Encoding and decoding of Bitcoin peer-to-peer wire messages, and peer discovery."""

__version__ = "0.1.0"