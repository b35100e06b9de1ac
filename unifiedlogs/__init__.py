"""Parsers for macOS Unified Log headers, timesync files and printf-style messages."""

__version__ = "0.5.1"

__all__ = [
    "errors",
    "header",
    "sources",
    "timesync",
    "filesystem",
    "printf",
    "formatter",
    "message",
]