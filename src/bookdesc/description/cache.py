# ABOUTME: DescriptionCache, the per-process cache of book descriptions keyed by file path.
# ABOUTME: Loads from persisted BookInfo when trusted, else from a format plugin, then writes back.

import enum
import logging
import threading
from dataclasses import dataclass

from bookdesc.description.author import UNKNOWN_AUTHOR
from bookdesc.description.info import (
    FILES_CATEGORY,
    BookInfo,
    check_info,
    list_archive_entries,
    reset_archive_info,
    save_info,
)
from bookdesc.description.types import (
    AUTO_ENCODING,
    BookDescription,
    set_author,
    set_encoding,
    set_title,
)
from bookdesc.filesystem.file import BookFile
from bookdesc.filesystem.manager import FSManager
from bookdesc.formats.plugin import FormatPlugin, PluginCollection
from bookdesc.options.store import OptionStore

logger = logging.getLogger(__name__)


class LoadFailure(enum.Enum):
    """Why a description could not be obtained."""

    NOT_FOUND = "not found"
    UNSUPPORTED_FORMAT = "unsupported format"
    EXTRACTION_FAILED = "extraction failed"


@dataclass
class LoadResult:
    """Outcome of DescriptionCache.load.

    description is set only on success; failure is set only on failure.
    """

    description: BookDescription | None = None
    failure: LoadFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


class DescriptionCache:
    """Cache of BookDescription objects for one application run.

    Owns no resources of its own beyond the in-memory map; the option
    store, plugin registry, and file-system manager are supplied by the
    caller. A description requested once stays cached until invalidate,
    clear, or close.
    """

    def __init__(self, store: OptionStore, plugins: PluginCollection, fs: FSManager) -> None:
        self._store = store
        self._plugins = plugins
        self._fs = fs
        self._descriptions: dict[str, BookDescription] = {}
        self._locks: dict[str, threading.RLock] = {}
        self._guard = threading.Lock()

    def __len__(self) -> int:
        return len(self._descriptions)

    def __contains__(self, file_path: object) -> bool:
        return file_path in self._descriptions

    def _lock_for(self, file_path: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(file_path)
            if lock is None:
                lock = threading.RLock()
                self._locks[file_path] = lock
            return lock

    def peek(self, file_path: str) -> BookDescription | None:
        """Return the cached description without loading anything."""
        return self._descriptions.get(file_path)

    def get(self, file_path: str | None, check_file: bool = True) -> BookDescription | None:
        """Return the description for file_path, or None if none can be obtained.

        Args:
            file_path: Book path, possibly an "archive:member" path.
            check_file: Verify the physical file exists and that its
                persisted info is current before trusting it.
        """
        if file_path is None:
            return None
        return self.load(file_path, check_file).description

    def load(self, file_path: str, check_file: bool = True) -> LoadResult:
        """Load the description for file_path, reporting why it failed if it did.

        Successive calls for the same path return the same BookDescription
        instance, refreshed from the option store or the book file.
        """
        book_file = BookFile(file_path, self._fs)
        physical = book_file.physical_file()
        if check_file and not physical.exists:
            logger.debug("Book file not found: %s", file_path)
            return LoadResult(failure=LoadFailure.NOT_FOUND)

        with self._lock_for(file_path):
            description = self._descriptions.get(file_path)
            if description is None:
                description = BookDescription(file_path)
                self._descriptions[file_path] = description

            info = BookInfo(self._store, book_file)
            if not check_file or check_info(self._store, physical):
                info.load_into(description)
                if info.is_full():
                    logger.debug("Loaded %s from persisted info", file_path)
                    return LoadResult(description=description)
            else:
                if physical.path != file_path:
                    reset_archive_info(self._store, physical, self._plugins)
                save_info(self._store, physical)

            plugin = self._plugins.get_plugin(book_file, strict=False)
            if plugin is None:
                logger.debug("No format plugin for %s", file_path)
                return LoadResult(failure=LoadFailure.UNSUPPORTED_FORMAT)
            if not self._read_with(plugin, file_path, description):
                return LoadResult(failure=LoadFailure.EXTRACTION_FAILED)

            self._apply_defaults(book_file, description)
            info.save_from(description)
            logger.debug("Saved description of %s via %s plugin", file_path, plugin.name)
            return LoadResult(description=description)

    def _read_with(
        self, plugin: FormatPlugin, file_path: str, description: BookDescription
    ) -> bool:
        try:
            return plugin.read_description(file_path, description)
        except Exception:
            logger.warning("%s plugin failed on %s", plugin.name, file_path, exc_info=True)
            return False

    @staticmethod
    def _apply_defaults(book_file: BookFile, description: BookDescription) -> None:
        if not description.title:
            set_title(description, book_file.display_name(with_extension=False))
        author = description.author
        if author is None or not author.display_name:
            set_author(description, UNKNOWN_AUTHOR)
        if not description.encoding:
            set_encoding(description, AUTO_ENCODING)

    def archive_entries(self, archive_path: str) -> list[str]:
        """Book entries inside a zip archive, recording them on first use."""
        archive = BookFile(archive_path, self._fs)
        entries = list_archive_entries(self._store, archive)
        if not entries:
            reset_archive_info(self._store, archive, self._plugins)
            entries = list_archive_entries(self._store, archive)
        return entries

    def invalidate(self, file_path: str) -> None:
        """Forget file_path in memory and in the option store.

        The next load re-reads the book file through its plugin.
        """
        with self._lock_for(file_path):
            self._descriptions.pop(file_path, None)
            book_file = BookFile(file_path, self._fs)
            BookInfo(self._store, book_file).reset()
            self._store.remove_scope(FILES_CATEGORY, book_file.physical_file_path)

    def clear(self) -> None:
        """Drop every in-memory description. Persisted info and path locks are kept."""
        with self._guard:
            self._descriptions.clear()

    def close(self) -> None:
        """Clear the cache and close the option store."""
        self.clear()
        self._store.close()
