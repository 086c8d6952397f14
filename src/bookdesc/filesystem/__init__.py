# ABOUTME: Public API for the bookdesc file abstraction.
# ABOUTME: Exports BookFile, the FSManager interface, and the local-disk implementation.

from bookdesc.filesystem.file import BookFile
from bookdesc.filesystem.manager import (
    ARCHIVE_DELIMITER,
    ArchiveReadError,
    FileInfo,
    FSManager,
    LocalFSManager,
)

__all__ = [
    "ARCHIVE_DELIMITER",
    "ArchiveReadError",
    "BookFile",
    "FSManager",
    "FileInfo",
    "LocalFSManager",
]
