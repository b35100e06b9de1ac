"""Interfaces for supplying Unified Log files to the parser."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator


class SourceFile(ABC):
    """A single log file together with the path it was collected from."""

    @property
    @abstractmethod
    def source_path(self) -> str:
        """Path of the file on the machine it was collected from."""

    @abstractmethod
    def read(self) -> bytes:
        """Return the whole contents of the file."""


class FileProvider(ABC):
    """Supplies the tracev3, UUIDText, shared cache and timesync files."""

    @abstractmethod
    def tracev3_files(self) -> Iterator[SourceFile]:
        """Yield the ``.tracev3`` log files."""

    @abstractmethod
    def uuidtext_files(self) -> Iterator[SourceFile]:
        """Yield the UUIDText string files from the two-character directories."""

    @abstractmethod
    def dsc_files(self) -> Iterator[SourceFile]:
        """Yield the shared string cache files from the ``dsc`` directory."""

    @abstractmethod
    def timesync_files(self) -> Iterator[SourceFile]:
        """Yield the ``.timesync`` files."""