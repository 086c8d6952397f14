# ABOUTME: Author-list editing for BookDescription, plus the WritableDescription facade.
# ABOUTME: Format plugins and editors change descriptions only through this API.

from bookdesc.description.author import Author, SingleAuthor, add_to
from bookdesc.description.types import (
    BookDescription,
    set_author,
    set_encoding,
    set_language,
    set_number_in_sequence,
    set_sequence_name,
    set_title,
)

__all__ = [
    "WritableDescription",
    "add_author",
    "clear_author",
    "set_author",
    "set_encoding",
    "set_language",
    "set_number_in_sequence",
    "set_sequence_name",
    "set_title",
]


def _split_name(name: str) -> tuple[str, str]:
    """Derive a sort key from the text after the first space.

    "Jane Doe" -> ("Jane Doe", "Doe"); "Jane   van Doe" -> ("Jane van Doe", "van Doe").
    A name without spaces is its own sort key.
    """
    index = name.find(" ")
    if index == -1:
        return name, name
    sort_key = name[index + 1 :].lstrip(" ")
    first = name[:index].rstrip(" ")
    return f"{first} {sort_key}", sort_key


def add_author(description: BookDescription, name: str, sort_key: str = "") -> None:
    """Credit one more author on description.

    Both inputs are trimmed. An empty name is ignored. When sort_key is
    empty it is derived from name (see _split_name).
    """
    name = name.strip()
    if not name:
        return

    sort_key = sort_key.strip()
    if not sort_key:
        name, sort_key = _split_name(name)

    set_author(description, add_to(description.author, SingleAuthor(name, sort_key)))


def clear_author(description: BookDescription) -> None:
    set_author(description, None)


class WritableDescription:
    """Editing facade over a cached BookDescription.

    Exposes setters for the editable fields and author-list management;
    the file path stays read-only.
    """

    def __init__(self, description: BookDescription) -> None:
        self._description = description

    @property
    def description(self) -> BookDescription:
        return self._description

    @property
    def file_path(self) -> str:
        return self._description.file_path

    @property
    def author(self) -> Author | None:
        return self._description.author

    def add_author(self, name: str, sort_key: str = "") -> None:
        add_author(self._description, name, sort_key)

    def clear_author(self) -> None:
        clear_author(self._description)

    @property
    def title(self) -> str:
        return self._description.title

    @title.setter
    def title(self, value: str) -> None:
        set_title(self._description, value)

    @property
    def sequence_name(self) -> str:
        return self._description.sequence_name

    @sequence_name.setter
    def sequence_name(self, value: str) -> None:
        set_sequence_name(self._description, value)

    @property
    def number_in_sequence(self) -> int:
        return self._description.number_in_sequence

    @number_in_sequence.setter
    def number_in_sequence(self, value: int) -> None:
        set_number_in_sequence(self._description, value)

    @property
    def language(self) -> str:
        return self._description.language

    @language.setter
    def language(self, value: str) -> None:
        set_language(self._description, value)

    @property
    def encoding(self) -> str:
        return self._description.encoding

    @encoding.setter
    def encoding(self, value: str) -> None:
        set_encoding(self._description, value)
