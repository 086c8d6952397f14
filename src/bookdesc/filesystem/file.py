# ABOUTME: BookFile value object naming a book on disk or inside a zip archive.
# ABOUTME: Resolves physical paths, extensions, and display names through an FSManager.

from typing import BinaryIO

from bookdesc.filesystem.manager import ARCHIVE_ZIP, FileInfo, FSManager

ARCHIVE_EXTENSIONS: dict[str, int] = {"zip": ARCHIVE_ZIP}


class BookFile:
    """A path as the reader sees it: either a plain file or "archive:member".

    The physical file path is the real on-disk file after stripping every
    archive member suffix, e.g. "/books/a.zip:inner/b.fb2" -> "/books/a.zip".
    """

    def __init__(self, path: str, fs: FSManager) -> None:
        self.path = path
        self._fs = fs
        self._info: FileInfo | None = None

    def __repr__(self) -> str:
        return f"BookFile({self.path!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, BookFile) and other.path == self.path

    def __hash__(self) -> int:
        return hash(self.path)

    @property
    def fs(self) -> FSManager:
        return self._fs

    @property
    def physical_file_path(self) -> str:
        path = self.path
        index = self._fs.find_archive_delimiter(path)
        while index != -1:
            path = path[:index]
            index = self._fs.find_archive_delimiter(path)
        return path

    @property
    def is_archive_member(self) -> bool:
        return self.physical_file_path != self.path

    def physical_file(self) -> "BookFile":
        """The containing on-disk file (self when not an archive member)."""
        if not self.is_archive_member:
            return self
        return BookFile(self.physical_file_path, self._fs)

    def _file_info(self) -> FileInfo:
        if self._info is None:
            self._info = self._fs.file_info(self.path)
        return self._info

    @property
    def exists(self) -> bool:
        return self._file_info().exists

    @property
    def size(self) -> int:
        return self._file_info().size

    @property
    def is_directory(self) -> bool:
        return self._file_info().is_directory

    @property
    def name(self) -> str:
        """File name without its directory or archive prefix, with extension."""
        return self.path[self._fs.find_last_delimiter(self.path) + 1 :]

    @property
    def extension(self) -> str:
        """Lower-case extension without the dot, or "" if there is none."""
        name = self.name
        index = name.rfind(".")
        if index <= 0:
            return ""
        return name[index + 1 :].lower()

    def display_name(self, with_extension: bool = True) -> str:
        name = self.name
        if with_extension:
            return name
        index = name.rfind(".")
        return name[:index] if index > 0 else name

    @property
    def is_archive(self) -> bool:
        forced = self._fs.forced_files.get(self.path)
        if forced is not None:
            return forced == ARCHIVE_ZIP
        return self.extension in ARCHIVE_EXTENSIONS

    def archive_members(self) -> list[str]:
        """Member names of this archive; empty when the file is not an archive."""
        if not self.is_archive:
            return []
        return self._fs.list_archive_members(self.path)

    def open(self) -> BinaryIO:
        return self._fs.create_input_stream(self.path)
