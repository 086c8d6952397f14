# ABOUTME: EPUB format plugin reading book descriptions with ebooklib.
# ABOUTME: Defensive wrapper that reports malformed files as a failed read.

import logging
import shutil
import tempfile
from pathlib import Path

from ebooklib import epub

from bookdesc.description.editing import (
    add_author,
    set_language,
    set_number_in_sequence,
    set_sequence_name,
    set_title,
)
from bookdesc.description.types import BookDescription
from bookdesc.filesystem.file import BookFile
from bookdesc.filesystem.manager import ArchiveReadError, FSManager
from bookdesc.formats.plugin import FormatReadError

logger = logging.getLogger(__name__)


def _get_metadata_value(book: epub.EpubBook, namespace: str, name: str) -> str | None:
    """Extract a single metadata value from an EpubBook, or None if missing."""
    try:
        values = book.get_metadata(namespace, name)
    except KeyError:
        return None
    if not values:
        return None
    # Metadata entries are tuples of (value, attributes)
    value = values[0][0]
    return str(value).strip() if value else None


def _get_meta_content(book: epub.EpubBook, name: str) -> str | None:
    """Extract the content attribute of an OPF <meta name=...> entry.

    ebooklib files named meta elements such as calibre:series under the
    OPF namespace, keyed by "meta", with the name kept in the attributes.
    """
    try:
        values = book.get_metadata("OPF", "meta")
    except KeyError:
        return None
    for _, attrs in values:
        attrs = attrs or {}
        if attrs.get("name") != name:
            continue
        content = attrs.get("content")
        if content:
            return str(content).strip()
    return None


def _get_creators(book: epub.EpubBook) -> list[tuple[str, str]]:
    """Extract (name, file-as) pairs for every DC creator."""
    try:
        creators = book.get_metadata("DC", "creator")
    except KeyError:
        return []
    result = []
    for value, attrs in creators:
        if not value:
            continue
        file_as = ""
        for key, attr in (attrs or {}).items():
            if key.endswith("file-as"):
                file_as = str(attr)
        result.append((str(value), file_as))
    return result


def _parse_series_index(raw: str | None) -> int:
    if not raw:
        return 0
    try:
        return int(float(raw))
    except (ValueError, OverflowError):
        return 0


def read_epub_book(path: Path) -> epub.EpubBook:
    """Open an EPUB file with ebooklib.

    Raises:
        FormatReadError: If the file cannot be read or parsed.
    """
    try:
        return epub.read_epub(str(path), options={"ignore_ncx": True})
    except Exception as exc:
        raise FormatReadError(f"Failed to read EPUB: {path}: {exc}") from exc


class EpubPlugin:
    """Reads title, authors, language, and calibre series data from EPUB files."""

    name = "epub"
    provides_meta_info = True

    def __init__(self, fs: FSManager) -> None:
        self._fs = fs

    def accepts(self, file: BookFile) -> bool:
        return file.extension == "epub"

    def _load(self, file: BookFile) -> epub.EpubBook:
        if not file.is_archive_member:
            return read_epub_book(Path(file.path))

        # ebooklib only opens real paths, so archive members go through a temp copy
        with tempfile.TemporaryDirectory(prefix="bookdesc-") as tmp:
            copy = Path(tmp) / Path(file.name).name
            try:
                with file.open() as src, open(copy, "wb") as dst:
                    shutil.copyfileobj(src, dst)
            except (OSError, ArchiveReadError) as exc:
                raise FormatReadError(f"Failed to extract {file.path}: {exc}") from exc
            return read_epub_book(copy)

    def read_description(self, file_path: str, description: BookDescription) -> bool:
        file = BookFile(file_path, self._fs)
        try:
            book = self._load(file)
        except FormatReadError as exc:
            logger.warning("%s", exc)
            return False

        title = _get_metadata_value(book, "DC", "title")
        if title:
            set_title(description, title)

        for name, file_as in _get_creators(book):
            add_author(description, name, file_as)

        language = _get_metadata_value(book, "DC", "language")
        if language:
            set_language(description, language)

        series = _get_meta_content(book, "calibre:series")
        if series:
            set_sequence_name(description, series)
            index = _parse_series_index(_get_meta_content(book, "calibre:series_index"))
            set_number_in_sequence(description, index)

        return True
