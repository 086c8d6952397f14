# ABOUTME: Plain-text format plugin.
# ABOUTME: Text files carry no metadata; the encoding is sniffed and the language is unknown.

import logging

from bookdesc.description.editing import set_encoding, set_language
from bookdesc.description.types import UNKNOWN_LANGUAGE, BookDescription
from bookdesc.filesystem.file import BookFile
from bookdesc.filesystem.manager import ArchiveReadError, FSManager

logger = logging.getLogger(__name__)

_SNIFF_SIZE = 4096


def _detect_encoding(sample: bytes) -> str:
    """Return "utf-8" when the sample decodes as UTF-8, else "" (autodetect later)."""
    if sample.startswith(b"\xef\xbb\xbf"):
        return "utf-8"
    try:
        sample.decode("utf-8")
    except UnicodeDecodeError as exc:
        # A multi-byte sequence cut off at the end of the sample is still UTF-8
        if exc.start < len(sample) - 3:
            return ""
    return "utf-8"


class TxtPlugin:
    """Accepts .txt files; title and author fall back to the cache defaults."""

    name = "txt"
    provides_meta_info = False

    def __init__(self, fs: FSManager) -> None:
        self._fs = fs

    def accepts(self, file: BookFile) -> bool:
        return file.extension == "txt"

    def read_description(self, file_path: str, description: BookDescription) -> bool:
        file = BookFile(file_path, self._fs)
        try:
            with file.open() as stream:
                sample = stream.read(_SNIFF_SIZE)
        except (OSError, ArchiveReadError) as exc:
            logger.warning("Failed to read text file %s: %s", file_path, exc)
            return False

        set_encoding(description, _detect_encoding(sample))
        set_language(description, UNKNOWN_LANGUAGE)
        return True
