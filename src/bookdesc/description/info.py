# ABOUTME: BookInfo, the persisted mirror of a BookDescription in the option store.
# ABOUTME: Also tracks file size stamps and the book entries recorded for zip archives.

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bookdesc.description.author import SingleAuthor
from bookdesc.description.types import (
    UNKNOWN_LANGUAGE,
    BookDescription,
    set_author,
    set_encoding,
    set_language,
    set_number_in_sequence,
    set_sequence_name,
    set_title,
)
from bookdesc.filesystem.file import BookFile
from bookdesc.filesystem.manager import ARCHIVE_DELIMITER, ArchiveReadError
from bookdesc.options.store import OptionStore
from bookdesc.options.typed import (
    BooleanOption,
    IntegerOption,
    IntegerRangeOption,
    StringOption,
)

if TYPE_CHECKING:
    from bookdesc.formats.plugin import PluginCollection

logger = logging.getLogger(__name__)

BOOKS_CATEGORY = "books"
FILES_CATEGORY = "files"
STATE_CATEGORY = "state"

MAX_NUMBER_IN_SEQUENCE = 100

# FB2 books always carry sequence data, so their records count as sequence-defined
SEQUENCE_DEFINED_EXTENSIONS = frozenset({"fb2"})

_SIZE = "Size"
_ENTRIES_NUMBER = "EntriesNumber"
_ENTRY = "Entry"


class BookInfo:
    """Persisted snapshot of one book's description, scoped by its file path."""

    def __init__(self, store: OptionStore, file: BookFile) -> None:
        scope = file.path
        self.author_display_name = StringOption(
            store, BOOKS_CATEGORY, scope, "AuthorDisplayName", ""
        )
        self.author_sort_key = StringOption(store, BOOKS_CATEGORY, scope, "AuthorSortKey", "")
        self.title = StringOption(store, BOOKS_CATEGORY, scope, "Title", "")
        self.sequence_name = StringOption(store, BOOKS_CATEGORY, scope, "Sequence", "")
        self.number_in_sequence = IntegerRangeOption(
            store, BOOKS_CATEGORY, scope, "Number in seq", 0, MAX_NUMBER_IN_SEQUENCE, 0
        )
        self.language = StringOption(store, BOOKS_CATEGORY, scope, "Language", UNKNOWN_LANGUAGE)
        self.encoding = StringOption(store, BOOKS_CATEGORY, scope, "Encoding", "")
        # Records written before sequence fields existed lack them; this flag
        # marks a record whose (possibly empty) sequence is known to be final.
        self.sequence_defined = BooleanOption(
            store,
            BOOKS_CATEGORY,
            scope,
            "SequenceDefined",
            file.extension in SEQUENCE_DEFINED_EXTENSIONS,
        )

    def is_full(self) -> bool:
        return bool(
            self.author_display_name.value
            and self.author_sort_key.value
            and self.title.value
            and self.encoding.value
            and self.sequence_defined.value
        )

    def reset(self) -> None:
        """Return every field except the sequence-defined flag to its default."""
        self.author_display_name.set_value("")
        self.author_sort_key.set_value("")
        self.title.set_value("")
        self.sequence_name.set_value("")
        self.number_in_sequence.set_value(0)
        self.language.set_value(UNKNOWN_LANGUAGE)
        self.encoding.set_value("")

    def load_into(self, description: BookDescription) -> None:
        """Copy the persisted fields into description.

        A record without an author display name leaves the author unset.
        """
        display_name = self.author_display_name.value
        if display_name:
            set_author(description, SingleAuthor(display_name, self.author_sort_key.value))
        else:
            set_author(description, None)
        set_title(description, self.title.value)
        set_sequence_name(description, self.sequence_name.value)
        set_number_in_sequence(description, self.number_in_sequence.value)
        set_language(description, self.language.value)
        set_encoding(description, self.encoding.value)

    def save_from(self, description: BookDescription) -> None:
        """Write every field of description and mark the sequence as defined.

        The description must have an author; the cache guarantees this
        after normalization.
        """
        author = description.author
        if author is None:
            raise ValueError(f"Cannot save description without author: {description.file_path}")
        self.author_display_name.set_value(author.display_name)
        self.author_sort_key.set_value(author.sort_key)
        self.title.set_value(description.title)
        self.sequence_name.set_value(description.sequence_name)
        self.number_in_sequence.set_value(description.number_in_sequence)
        self.language.set_value(description.language)
        self.encoding.set_value(description.encoding)
        self.sequence_defined.set_value(True)


def _size_option(store: OptionStore, file: BookFile) -> IntegerOption:
    return IntegerOption(store, FILES_CATEGORY, file.path, _SIZE, -1)


def check_info(store: OptionStore, file: BookFile) -> bool:
    """Whether the file is unchanged since its info was last saved.

    Compares the stored size stamp with the file's current size; a file
    that was never stamped fails the check.
    """
    return _size_option(store, file).value == file.size


def save_info(store: OptionStore, file: BookFile) -> None:
    """Stamp the file's current size so later loads can trust its BookInfo."""
    _size_option(store, file).set_value(file.size)


def reset_archive_info(
    store: OptionStore, archive: BookFile, plugins: PluginCollection
) -> int:
    """Reset the BookInfo of every readable book inside a zip archive.

    Members with a matching format plugin are recorded as the archive's
    entries so list_archive_entries can return them without reopening
    the archive.

    Returns:
        The number of entries recorded, or -1 if the archive is unreadable.
    """
    try:
        members = archive.archive_members()
    except ArchiveReadError as exc:
        logger.warning("Cannot list archive %s: %s", archive.path, exc)
        return -1

    entry = StringOption(store, STATE_CATEGORY, archive.path, _ENTRY, "")
    previous = list_archive_entries(store, archive)
    for stale in range(len(previous)):
        entry.change_name(f"{_ENTRY}{stale}")
        entry.set_value("")

    counter = 0
    for member in members:
        member_file = BookFile(f"{archive.path}{ARCHIVE_DELIMITER}{member}", archive.fs)
        if plugins.get_plugin(member_file, strict=False) is None:
            continue
        entry.change_name(f"{_ENTRY}{counter}")
        entry.set_value(member_file.path)
        BookInfo(store, member_file).reset()
        counter += 1

    IntegerOption(store, STATE_CATEGORY, archive.path, _ENTRIES_NUMBER, -1).set_value(counter)
    logger.debug("Reset %d archive entries for %s", counter, archive.path)
    return counter


def list_archive_entries(store: OptionStore, archive: BookFile) -> list[str]:
    """Book entries recorded for an archive by the last reset_archive_info."""
    count = IntegerOption(store, STATE_CATEGORY, archive.path, _ENTRIES_NUMBER, -1).value
    entry = StringOption(store, STATE_CATEGORY, archive.path, _ENTRY, "")
    entries = []
    for index in range(max(count, 0)):
        entry.change_name(f"{_ENTRY}{index}")
        if entry.value:
            entries.append(entry.value)
    return entries
