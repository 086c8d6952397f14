# ABOUTME: File-system manager interface and its local-disk implementation.
# ABOUTME: Archive members are addressed as "<archive>:<member>" and read through zipfile.

import io
import logging
import os
import zipfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO

logger = logging.getLogger(__name__)

ARCHIVE_DELIMITER = ":"
PATH_DELIMITER = "/"

ARCHIVE_ZIP = 1


class ArchiveReadError(Exception):
    """Raised when an archive cannot be opened or a member is missing."""


@dataclass(frozen=True)
class FileInfo:
    """Existence, size, and kind of a path as seen by an FSManager."""

    exists: bool
    size: int = 0
    is_directory: bool = False


class FSManager(ABC):
    """Abstract file-system access used by BookFile and the format plugins.

    Subclasses supply the platform-specific primitives; path splitting
    rules and the forced-file table are shared.
    """

    def __init__(self) -> None:
        self._forced_files: dict[str, int] = {}

    @property
    def forced_files(self) -> dict[str, int]:
        """Paths whose archive type is forced regardless of their extension."""
        return self._forced_files

    def put_forced_file(self, path: str, archive_type: int) -> None:
        self._forced_files[path] = archive_type

    @abstractmethod
    def create_input_stream(self, path: str) -> BinaryIO: ...

    @abstractmethod
    def create_output_stream(self, path: str) -> BinaryIO: ...

    @abstractmethod
    def file_info(self, path: str) -> FileInfo: ...

    @abstractmethod
    def remove_file(self, path: str) -> bool: ...

    @abstractmethod
    def list_archive_members(self, path: str) -> list[str]: ...

    def find_archive_delimiter(self, path: str) -> int:
        """Index of the last archive delimiter in path, or -1."""
        return path.rfind(ARCHIVE_DELIMITER)

    def find_last_delimiter(self, path: str) -> int:
        """Index of the delimiter that precedes the file's own name, or -1."""
        return max(self.find_archive_delimiter(path), path.rfind(PATH_DELIMITER))

    @abstractmethod
    def root_directory_path(self) -> str: ...

    @abstractmethod
    def parent_path(self, path: str) -> str: ...


class LocalFSManager(FSManager):
    """FSManager over the local POSIX file system and zip archives."""

    def _split_member(self, path: str) -> tuple[str, str] | None:
        index = self.find_archive_delimiter(path)
        if index == -1:
            return None
        return path[:index], path[index + 1 :]

    def _open_archive(self, archive_path: str) -> zipfile.ZipFile:
        """Open a (possibly nested) zip archive for reading."""
        split = self._split_member(archive_path)
        try:
            if split is None:
                return zipfile.ZipFile(archive_path)
            outer, member = split
            with self._open_archive(outer) as zf:
                return zipfile.ZipFile(io.BytesIO(zf.read(member)))
        except (OSError, KeyError, zipfile.BadZipFile) as exc:
            raise ArchiveReadError(f"Cannot open archive {archive_path}: {exc}") from exc

    def create_input_stream(self, path: str) -> BinaryIO:
        """Open path for binary reading. Archive members are read into memory.

        Raises:
            FileNotFoundError: If a plain file does not exist.
            ArchiveReadError: If the archive or member cannot be read.
        """
        split = self._split_member(path)
        if split is None:
            return open(path, "rb")
        archive_path, member = split
        with self._open_archive(archive_path) as zf:
            try:
                data = zf.read(member)
            except KeyError as exc:
                raise ArchiveReadError(f"No member {member!r} in {archive_path}") from exc
        return io.BytesIO(data)

    def create_output_stream(self, path: str) -> BinaryIO:
        if self._split_member(path) is not None:
            raise ArchiveReadError(f"Cannot write inside an archive: {path}")
        return open(path, "wb")

    def file_info(self, path: str) -> FileInfo:
        split = self._split_member(path)
        if split is None:
            try:
                stat = os.stat(path)
            except OSError:
                return FileInfo(exists=False)
            return FileInfo(
                exists=True,
                size=stat.st_size,
                is_directory=os.path.isdir(path),
            )

        archive_path, member = split
        try:
            with self._open_archive(archive_path) as zf:
                info = zf.getinfo(member)
        except (ArchiveReadError, KeyError):
            return FileInfo(exists=False)
        return FileInfo(exists=True, size=info.file_size, is_directory=info.is_dir())

    def remove_file(self, path: str) -> bool:
        if self._split_member(path) is not None:
            return False
        try:
            os.remove(path)
        except OSError as exc:
            logger.warning("Failed to remove %s: %s", path, exc)
            return False
        return True

    def list_archive_members(self, path: str) -> list[str]:
        """List file members of a zip archive, in archive order.

        Raises:
            ArchiveReadError: If the archive cannot be opened.
        """
        with self._open_archive(path) as zf:
            return [info.filename for info in zf.infolist() if not info.is_dir()]

    def root_directory_path(self) -> str:
        return PATH_DELIMITER

    def parent_path(self, path: str) -> str:
        index = self.find_last_delimiter(path)
        if index <= 0:
            return self.root_directory_path()
        return path[:index]
