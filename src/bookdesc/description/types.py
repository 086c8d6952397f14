# ABOUTME: BookDescription, the in-memory catalog metadata for one book file.
# ABOUTME: Fields are read-only to callers; the cache and editing API mutate them.

from bookdesc.description.author import Author

# Persisted default for books whose language was never determined.
UNKNOWN_LANGUAGE = "unknown"

# Encoding recorded when no plugin reported one; readers autodetect it.
AUTO_ENCODING = "auto"


class BookDescription:
    """Metadata for one book, keyed by the file path it was requested with.

    Instances are created and cached by DescriptionCache. The file path is
    the identity and never changes; every other field can be refreshed by
    the cache's load sequence or edited through bookdesc.description.editing.
    """

    __slots__ = (
        "_file_path",
        "_author",
        "_title",
        "_sequence_name",
        "_number_in_sequence",
        "_language",
        "_encoding",
    )

    def __init__(self, file_path: str) -> None:
        self._file_path = file_path
        self._author: Author | None = None
        self._title = ""
        self._sequence_name = ""
        self._number_in_sequence = 0
        self._language = ""
        self._encoding = ""

    def __repr__(self) -> str:
        return f"BookDescription({self._file_path!r}, title={self._title!r})"

    @property
    def file_path(self) -> str:
        return self._file_path

    @property
    def author(self) -> Author | None:
        return self._author

    @property
    def title(self) -> str:
        return self._title

    @property
    def sequence_name(self) -> str:
        return self._sequence_name

    @property
    def number_in_sequence(self) -> int:
        return self._number_in_sequence

    @property
    def language(self) -> str:
        return self._language

    @property
    def encoding(self) -> str:
        return self._encoding


# Mutation API. These are the only writers of BookDescription fields.


def set_author(description: BookDescription, author: Author | None) -> None:
    description._author = author


def set_title(description: BookDescription, title: str) -> None:
    description._title = title


def set_sequence_name(description: BookDescription, sequence_name: str) -> None:
    description._sequence_name = sequence_name


def set_number_in_sequence(description: BookDescription, number: int) -> None:
    description._number_in_sequence = number


def set_language(description: BookDescription, language: str) -> None:
    description._language = language


def set_encoding(description: BookDescription, encoding: str) -> None:
    description._encoding = encoding
