# ABOUTME: Shared pytest fixtures for bookdesc tests.
# ABOUTME: Provides EPUB, text, and zip archive books, an option store, and a fake plugin.

import zipfile
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from ebooklib import epub

from bookdesc.description.cache import DescriptionCache
from bookdesc.description.editing import add_author, set_title
from bookdesc.description.types import BookDescription
from bookdesc.filesystem.file import BookFile
from bookdesc.filesystem.manager import LocalFSManager
from bookdesc.formats.plugin import PluginCollection
from bookdesc.options.connection import open_options
from bookdesc.options.store import OptionStore


def _write_epub(
    path: Path, title: str | None, authors: list[str], series: tuple[str, str] | None = None
) -> Path:
    book = epub.EpubBook()
    book.set_identifier(f"id-{path.stem}")
    if title:
        book.set_title(title)
    book.set_language("en")
    for author in authors:
        book.add_author(author)
    if series:
        book.add_metadata(None, "meta", "", {"name": "calibre:series", "content": series[0]})
        book.add_metadata(
            None, "meta", "", {"name": "calibre:series_index", "content": series[1]}
        )

    # Add a minimal chapter so the EPUB is structurally valid
    chapter = epub.EpubHtml(title="Chapter 1", file_name="chap01.xhtml", lang="en")
    chapter.content = b"<html><body><h1>Chapter 1</h1><p>Content.</p></body></html>"
    book.add_item(chapter)

    book.toc = [epub.Link("chap01.xhtml", "Chapter 1", "chap01")]
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = ["nav", chapter]

    epub.write_epub(str(path), book)
    return path


@pytest.fixture
def sample_epub(tmp_path: Path) -> Path:
    """Create a minimal valid EPUB file with known metadata."""
    return _write_epub(
        tmp_path / "name_of_the_rose.epub", "The Name of the Rose", ["Umberto Eco"]
    )


@pytest.fixture
def coauthored_epub(tmp_path: Path) -> Path:
    """An EPUB credited to two authors."""
    return _write_epub(
        tmp_path / "good_omens.epub", "Good Omens", ["Terry Pratchett", "Neil Gaiman"]
    )


@pytest.fixture
def authorless_epub(tmp_path: Path) -> Path:
    """An EPUB with a title but no creator entries."""
    return _write_epub(tmp_path / "anonymous.epub", "Beowulf", [])


@pytest.fixture
def series_epub(tmp_path: Path) -> Path:
    """An EPUB carrying calibre series metadata."""
    return _write_epub(
        tmp_path / "dune_messiah.epub",
        "Dune Messiah",
        ["Frank Herbert"],
        series=("Dune Chronicles", "2"),
    )


@pytest.fixture
def corrupt_epub(tmp_path: Path) -> Path:
    """Create a corrupt file that is not a valid EPUB."""
    filepath = tmp_path / "corrupt.epub"
    filepath.write_text("this is not a valid epub file")
    return filepath


@pytest.fixture
def sample_txt(tmp_path: Path) -> Path:
    """A UTF-8 plain-text book."""
    filepath = tmp_path / "war_and_peace.txt"
    filepath.write_text("Well, Prince, so Genoa and Lucca are now just family estates.\n")
    return filepath


@pytest.fixture
def book_archive(tmp_path: Path, sample_epub: Path) -> Path:
    """A zip holding an EPUB, a text book, and a non-book file.

    Layout:
        library.zip
            rose.epub
            notes/diary.txt
            README.md
    """
    filepath = tmp_path / "library.zip"
    with zipfile.ZipFile(filepath, "w") as zf:
        zf.write(sample_epub, "rose.epub")
        zf.writestr("notes/diary.txt", "Dear diary.\n")
        zf.writestr("README.md", "# not a book\n")
    return filepath


@pytest.fixture
def fs() -> LocalFSManager:
    return LocalFSManager()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "options.db"


@pytest.fixture
def option_store(db_path: Path) -> Iterator[OptionStore]:
    """An OptionStore over a fresh database in tmp_path."""
    store = OptionStore(open_options(db_path))
    yield store
    store.close()


class FakePlugin:
    """Configurable FormatPlugin that records every read_description call."""

    name = "fake"
    provides_meta_info = True

    def __init__(
        self,
        extension: str = "book",
        succeed: bool = True,
        fill: Callable[[BookDescription], None] | None = None,
    ) -> None:
        self.extension = extension
        self.succeed = succeed
        self.fill = fill
        self.calls: list[str] = []

    def accepts(self, file: BookFile) -> bool:
        return file.extension == self.extension

    def read_description(self, file_path: str, description: BookDescription) -> bool:
        self.calls.append(file_path)
        if self.fill is not None:
            self.fill(description)
        return self.succeed


def fill_dune(description: BookDescription) -> None:
    set_title(description, "Dune")
    add_author(description, "Frank Herbert")


@pytest.fixture
def fake_plugin() -> FakePlugin:
    """A plugin for *.book files that fills in Dune by Frank Herbert."""
    return FakePlugin(fill=fill_dune)


@pytest.fixture
def book_path(tmp_path: Path) -> Path:
    """An existing *.book file accepted by fake_plugin."""
    filepath = tmp_path / "dune.book"
    filepath.write_bytes(b"spice")
    return filepath


@pytest.fixture
def make_cache(
    option_store: OptionStore, fs: LocalFSManager
) -> Callable[..., DescriptionCache]:
    """Factory building a DescriptionCache over the shared store and given plugins."""

    def _make(*plugins: object) -> DescriptionCache:
        return DescriptionCache(option_store, PluginCollection(list(plugins)), fs)

    return _make
