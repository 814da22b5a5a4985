"""Directory access for the script repository.

The repository only ever looks one level deep: the subdirectories of the
database root, and the files directly inside each of them. Everything it
needs from the disk goes through the FileSystem protocol so tests can
substitute an in-memory tree.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

_BOMS = (
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


@dataclass(frozen=True)
class DirectoryEntry:
    """Immediate subdirectory of a scanned directory."""

    name: str
    path: str


@dataclass(frozen=True)
class FileEntry:
    """Immediate file of a scanned directory."""

    name: str
    path: str


class FileSystem(Protocol):
    """Interface for the directory and file access the script repository needs."""

    def list_directories(self, path: str) -> list[DirectoryEntry]:
        """Return the immediate subdirectories of path."""
        ...

    def list_files(self, path: str) -> list[FileEntry]:
        """Return the immediate files of path (no recursion)."""
        ...

    def read_text(self, path: str) -> str:
        """Return the full text content of a file."""
        ...


class LocalFileSystem:
    """FileSystem implementation backed by the local disk (pathlib)."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def list_directories(self, path: str) -> list[DirectoryEntry]:
        """List subdirectories, sorted by name. Raises OSError if path is unreadable."""
        root = Path(path)
        if not root.is_dir():
            raise NotADirectoryError(f"Not a directory: {root}")
        return [
            DirectoryEntry(name=p.name, path=str(p))
            for p in sorted(root.iterdir(), key=lambda p: p.name)
            if p.is_dir()
        ]

    def list_files(self, path: str) -> list[FileEntry]:
        """List files, sorted by name."""
        return [
            FileEntry(name=p.name, path=str(p))
            for p in sorted(Path(path).iterdir(), key=lambda p: p.name)
            if p.is_file()
        ]

    def read_text(self, path: str) -> str:
        """
        Read a file as text.

        A byte order mark selects UTF-8 or UTF-16 (SSMS saves "Unicode" files
        as UTF-16 LE with a BOM); without one the configured encoding is used.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the content is not valid in that encoding.
        """
        raw = Path(path).read_bytes()
        for bom, encoding in _BOMS:
            if raw.startswith(bom):
                return raw.decode(encoding)
        return raw.decode(self.encoding)
