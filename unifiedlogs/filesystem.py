"""Locate Unified Log files on a live system or inside a logarchive."""

from __future__ import annotations

import os
import string
from collections.abc import Iterator
from enum import Enum
from pathlib import Path, PurePath

from unifiedlogs.sources import FileProvider, SourceFile

TRACE_FOLDERS = frozenset({"HighVolume", "Special", "Signpost", "Persist"})
LIVE_DATA_FILE = "logdata.LiveData.tracev3"

_HEX_DIGITS = frozenset(string.hexdigits)

_LIVE_DIAGNOSTICS = Path("/private/var/db/diagnostics")
_LIVE_UUIDTEXT = Path("/private/var/db/uuidtext")
_LIVE_DSC = _LIVE_UUIDTEXT / "dsc"
_LIVE_TIMESYNC = _LIVE_DIAGNOSTICS / "timesync"


def only_hex_chars(val: str) -> bool:
    """Return True if every character of ``val`` is an ASCII hex digit."""
    return all(char in _HEX_DIGITS for char in val)


class LogFileType(Enum):
    """The kind of Unified Log file a path refers to."""

    TRACEV3 = "tracev3"
    UUIDTEXT = "uuidtext"
    DSC = "dsc"
    TIMESYNC = "timesync"
    INVALID = "invalid"

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> LogFileType:
        """Classify a path by its file name and the name of its parent directory."""
        pure = PurePath(path)
        parts = pure.parts
        if len(parts) < 2:
            return cls.INVALID
        parent, filename = parts[-2], parts[-1]
        if parent in (pure.anchor, "..", ".") or filename in ("..", "."):
            return cls.INVALID

        if filename.startswith("._"):
            return cls.INVALID

        if filename == LIVE_DATA_FILE or (
            filename.endswith(".tracev3") and parent in TRACE_FOLDERS
        ):
            return cls.TRACEV3

        if (
            len(filename) == 30
            and only_hex_chars(filename)
            and len(parent) == 2
            and only_hex_chars(parent)
        ):
            return cls.UUIDTEXT

        if len(filename) == 32 and only_hex_chars(filename) and parent == "dsc":
            return cls.DSC

        if filename.endswith(".timesync") and parent == "timesync":
            return cls.TIMESYNC

        return cls.INVALID


class LocalFile(SourceFile):
    """A log file on the local filesystem.

    The file is opened once on creation so that unreadable files are
    rejected with an ``OSError`` straight away.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        with open(self._path, "rb"):
            pass
        self._source = str(path)

    @property
    def source_path(self) -> str:
        return self._source

    def read(self) -> bytes:
        """Return the whole contents of the file."""
        return self._path.read_bytes()


def _walk_directory(directory: str, sort: bool) -> Iterator[str]:
    try:
        with os.scandir(directory) as scan:
            entries = list(scan)
    except OSError:
        return
    if sort:
        entries.sort(key=lambda entry: os.fsencode(entry.name))
    for entry in entries:
        yield entry.path
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            is_dir = False
        if is_dir:
            yield from _walk_directory(entry.path, sort)


def _walk(root: Path, sort: bool) -> Iterator[str]:
    """Yield ``root`` and, depth first, every path below it."""
    root_text = str(root)
    if not os.path.lexists(root_text):
        return
    yield root_text
    if os.path.isdir(root_text):
        yield from _walk_directory(root_text, sort)


def _collect(root: Path, kind: LogFileType, sort: bool) -> Iterator[SourceFile]:
    for path in _walk(root, sort):
        if LogFileType.from_path(path) is not kind:
            continue
        try:
            yield LocalFile(path)
        except OSError:
            continue


class LiveSystemProvider(FileProvider):
    """Finds the log files at their standard locations on a live macOS system."""

    def tracev3_files(self) -> Iterator[SourceFile]:
        return _collect(_LIVE_DIAGNOSTICS, LogFileType.TRACEV3, sort=True)

    def uuidtext_files(self) -> Iterator[SourceFile]:
        return _collect(_LIVE_UUIDTEXT, LogFileType.UUIDTEXT, sort=False)

    def dsc_files(self) -> Iterator[SourceFile]:
        return _collect(_LIVE_DSC, LogFileType.DSC, sort=True)

    def timesync_files(self) -> Iterator[SourceFile]:
        return _collect(_LIVE_TIMESYNC, LogFileType.TIMESYNC, sort=False)


class LogarchiveProvider(FileProvider):
    """Finds the log files inside a ``.logarchive`` directory."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.base = Path(path)

    def tracev3_files(self) -> Iterator[SourceFile]:
        return _collect(self.base, LogFileType.TRACEV3, sort=True)

    def uuidtext_files(self) -> Iterator[SourceFile]:
        return _collect(self.base, LogFileType.UUIDTEXT, sort=False)

    def dsc_files(self) -> Iterator[SourceFile]:
        return _collect(self.base, LogFileType.DSC, sort=True)

    def timesync_files(self) -> Iterator[SourceFile]:
        return _collect(self.base, LogFileType.TIMESYNC, sort=False)