# ABOUTME: Author tagged variant: a single credited author or an ordered list of several.
# ABOUTME: Both variants expose display_name and sort_key for storage and display.

from dataclasses import dataclass


@dataclass(frozen=True)
class SingleAuthor:
    """One credited author with a display name and a sort key."""

    display_name: str
    sort_key: str


@dataclass(frozen=True)
class MultiAuthor:
    """Several credited authors, in the order they were added."""

    authors: tuple[SingleAuthor, ...]

    def __post_init__(self) -> None:
        if not self.authors:
            raise ValueError("MultiAuthor needs at least one author")

    @property
    def display_name(self) -> str:
        return ", ".join(author.display_name for author in self.authors)

    @property
    def sort_key(self) -> str:
        return self.authors[0].sort_key

    def with_author(self, author: SingleAuthor) -> "MultiAuthor":
        """Return a new MultiAuthor with author appended."""
        return MultiAuthor((*self.authors, author))


Author = SingleAuthor | MultiAuthor

# Stored for books whose format plugin found no usable author.
# The sort key keeps unknown authors grouped at the end of sorted listings.
UNKNOWN_AUTHOR = SingleAuthor(display_name="Unknown Author", sort_key="___")


def is_single(author: Author | None) -> bool:
    return isinstance(author, SingleAuthor)


def add_to(author: Author | None, new: SingleAuthor) -> Author:
    """Combine an existing author value with one more author.

    None becomes the new single author; a single author is promoted to a
    MultiAuthor keeping it first; a MultiAuthor gets new appended.
    """
    match author:
        case None:
            return new
        case SingleAuthor():
            return MultiAuthor((author, new))
        case MultiAuthor():
            return author.with_author(new)
    raise TypeError(f"Unsupported author value: {author!r}")
