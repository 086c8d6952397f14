# ABOUTME: Integration tests for description persistence across cache and store lifetimes.
# ABOUTME: Uses real EPUB and text files with the built-in plugins.

import threading
from pathlib import Path

from conftest import FakePlugin, fill_dune

from bookdesc.description.author import UNKNOWN_AUTHOR, MultiAuthor, SingleAuthor
from bookdesc.description.cache import DescriptionCache, LoadFailure
from bookdesc.filesystem.manager import LocalFSManager
from bookdesc.formats import default_plugins
from bookdesc.formats.plugin import PluginCollection
from bookdesc.options.connection import open_options
from bookdesc.options.store import OptionStore


def _open_cache(db_path: Path, plugins: PluginCollection | None = None) -> DescriptionCache:
    fs = LocalFSManager()
    store = OptionStore(open_options(db_path))
    return DescriptionCache(store, plugins or default_plugins(fs), fs)


class CountingPlugins(PluginCollection):
    """Built-in plugins that count read_description calls."""

    def __init__(self, fs: LocalFSManager) -> None:
        super().__init__(default_plugins(fs).plugins)
        self.reads = 0

    def get_plugin(self, file, strict=False):
        plugin = super().get_plugin(file, strict)
        if plugin is None:
            return None
        outer = self

        class _Counting:
            name = plugin.name
            provides_meta_info = plugin.provides_meta_info

            def accepts(self, f):
                return plugin.accepts(f)

            def read_description(self, file_path, description):
                outer.reads += 1
                return plugin.read_description(file_path, description)

        return _Counting()


class TestRestartPersistence:
    """A fresh cache over the same database reuses persisted descriptions."""

    def test_epub_loaded_once_across_restarts(self, db_path: Path, sample_epub: Path) -> None:
        fs = LocalFSManager()
        plugins = CountingPlugins(fs)

        first = _open_cache(db_path, plugins)
        description = first.get(str(sample_epub))
        assert description.title == "The Name of the Rose"
        first.close()

        second = _open_cache(db_path, plugins)
        reloaded = second.get(str(sample_epub))
        second.close()

        assert plugins.reads == 1
        assert reloaded.title == "The Name of the Rose"
        assert reloaded.author == SingleAuthor("Umberto Eco", "Eco")
        assert reloaded.language == "en"
        assert reloaded.encoding == "auto"

    def test_coauthored_epub_persists_joined_author(
        self, db_path: Path, coauthored_epub: Path
    ) -> None:
        first = _open_cache(db_path)
        assert isinstance(first.get(str(coauthored_epub)).author, MultiAuthor)
        first.close()

        second = _open_cache(db_path)
        reloaded = second.get(str(coauthored_epub))
        second.close()
        assert reloaded.author.display_name == "Terry Pratchett, Neil Gaiman"

    def test_epub_series_persists(self, db_path: Path, series_epub: Path) -> None:
        first = _open_cache(db_path)
        description = first.get(str(series_epub))
        first.close()
        assert description.sequence_name == "Dune Chronicles"
        assert description.number_in_sequence == 2

        second = _open_cache(db_path)
        reloaded = second.get(str(series_epub))
        second.close()
        assert reloaded.sequence_name == "Dune Chronicles"
        assert reloaded.number_in_sequence == 2

    def test_text_book_defaults(self, db_path: Path, sample_txt: Path) -> None:
        cache = _open_cache(db_path)
        description = cache.get(str(sample_txt))
        cache.close()

        assert description.title == "war_and_peace"
        assert description.author == UNKNOWN_AUTHOR
        assert description.encoding == "utf-8"
        assert description.language == "unknown"

    def test_authorless_epub_gets_unknown_author(
        self, db_path: Path, authorless_epub: Path
    ) -> None:
        cache = _open_cache(db_path)
        description = cache.get(str(authorless_epub))
        cache.close()
        assert description.author == UNKNOWN_AUTHOR
        assert description.title == "Beowulf"

    def test_corrupt_epub_fails_every_time(self, db_path: Path, corrupt_epub: Path) -> None:
        cache = _open_cache(db_path)
        assert cache.load(str(corrupt_epub)).failure is LoadFailure.EXTRACTION_FAILED
        assert cache.load(str(corrupt_epub)).failure is LoadFailure.EXTRACTION_FAILED
        cache.close()


class TestArchiveMembers:
    """Books addressed inside a zip archive."""

    def test_loads_epub_member(self, db_path: Path, book_archive: Path) -> None:
        cache = _open_cache(db_path)
        description = cache.get(f"{book_archive}:rose.epub")
        cache.close()
        assert description is not None
        assert description.title == "The Name of the Rose"

    def test_member_title_defaults_to_member_name(
        self, db_path: Path, book_archive: Path
    ) -> None:
        cache = _open_cache(db_path)
        description = cache.get(f"{book_archive}:notes/diary.txt")
        cache.close()
        assert description.title == "diary"

    def test_first_member_load_records_archive_entries(
        self, db_path: Path, book_archive: Path
    ) -> None:
        cache = _open_cache(db_path)
        cache.get(f"{book_archive}:rose.epub")
        entries = cache.archive_entries(str(book_archive))
        cache.close()
        assert entries == [f"{book_archive}:rose.epub", f"{book_archive}:notes/diary.txt"]

    def test_non_book_member_is_unsupported(self, db_path: Path, book_archive: Path) -> None:
        cache = _open_cache(db_path)
        result = cache.load(f"{book_archive}:README.md")
        cache.close()
        assert result.failure is LoadFailure.UNSUPPORTED_FORMAT

    def test_missing_archive(self, db_path: Path, tmp_path: Path) -> None:
        cache = _open_cache(db_path)
        result = cache.load(f"{tmp_path / 'nowhere.zip'}:rose.epub")
        cache.close()
        assert result.failure is LoadFailure.NOT_FOUND

    def test_members_reload_from_store_after_restart(
        self, db_path: Path, book_archive: Path
    ) -> None:
        fs = LocalFSManager()
        plugins = CountingPlugins(fs)
        first = _open_cache(db_path, plugins)
        first.get(f"{book_archive}:rose.epub")
        first.get(f"{book_archive}:notes/diary.txt")
        first.close()

        second = _open_cache(db_path, plugins)
        assert second.get(f"{book_archive}:rose.epub").title == "The Name of the Rose"
        assert second.get(f"{book_archive}:notes/diary.txt").title == "diary"
        second.close()
        assert plugins.reads == 2


class TestConcurrentLoads:
    """Threads loading the same book share one extraction."""

    def test_parallel_gets_extract_once(self, db_path: Path, book_path: Path) -> None:
        fs = LocalFSManager()
        plugin = FakePlugin(fill=fill_dune)
        cache = DescriptionCache(
            OptionStore(open_options(db_path)), PluginCollection([plugin]), fs
        )
        results = []
        barrier = threading.Barrier(8)

        def worker() -> None:
            barrier.wait()
            results.append(cache.get(str(book_path)))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        cache.close()

        assert len(plugin.calls) == 1
        assert len(results) == 8
        assert all(result is results[0] for result in results)
        assert results[0].title == "Dune"
