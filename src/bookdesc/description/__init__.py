# ABOUTME: Book description package: author variants, the description record, and its cache.
# ABOUTME: Exports the types callers need to load, inspect, and edit book descriptions.

from bookdesc.description.author import (
    UNKNOWN_AUTHOR,
    Author,
    MultiAuthor,
    SingleAuthor,
    is_single,
)
from bookdesc.description.cache import DescriptionCache, LoadFailure, LoadResult
from bookdesc.description.editing import WritableDescription, add_author, clear_author
from bookdesc.description.info import BookInfo
from bookdesc.description.types import AUTO_ENCODING, UNKNOWN_LANGUAGE, BookDescription

__all__ = [
    "AUTO_ENCODING",
    "UNKNOWN_AUTHOR",
    "UNKNOWN_LANGUAGE",
    "Author",
    "BookDescription",
    "BookInfo",
    "DescriptionCache",
    "LoadFailure",
    "LoadResult",
    "MultiAuthor",
    "SingleAuthor",
    "WritableDescription",
    "add_author",
    "clear_author",
    "is_single",
]
