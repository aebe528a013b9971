"""Operating-system capability consumed by the framework.

The framework only needs a filesystem able to tell whether a path exists
and to mount a directory so that files can be read by name. Everything else
on the capability is passed through untouched to commands and services.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class Directory(Protocol):
    """A mounted directory whose files are addressed by name."""

    def contains(self, name: str) -> bool: ...  # pragma: no cover

    def read(self, name: str) -> str: ...  # pragma: no cover


class Filesystem(Protocol):
    def contains(self, path: Path) -> bool: ...  # pragma: no cover

    def mount(self, path: Path) -> Directory: ...  # pragma: no cover


class OperatingSystem(Protocol):
    def filesystem(self) -> Filesystem: ...  # pragma: no cover


class LocalDirectory:
    """A directory on the local disk."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def contains(self, name: str) -> bool:
        return (self.path / name).is_file()

    def read(self, name: str) -> str:
        return (self.path / name).read_text(encoding="utf-8", errors="replace")


class LocalFilesystem:
    def contains(self, path: Path) -> bool:
        return Path(path).exists()

    def mount(self, path: Path) -> LocalDirectory:
        return LocalDirectory(Path(path))


class LocalOperatingSystem:
    """Default capability backed by the machine the process runs on."""

    def __init__(self, filesystem: Filesystem | None = None) -> None:
        self._filesystem = filesystem or LocalFilesystem()

    def filesystem(self) -> Filesystem:
        return self._filesystem
