# ABOUTME: Builds the description cache and its collaborators for one CLI invocation.
# ABOUTME: The cache is closed (and its option store with it) when the command exits.

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from bookdesc.description.cache import DescriptionCache
from bookdesc.filesystem.manager import LocalFSManager
from bookdesc.formats import default_plugins
from bookdesc.options.connection import DEFAULT_OPTIONS_PATH, open_options
from bookdesc.options.store import OptionStore


@contextmanager
def open_cache(db_path: Path | None) -> Iterator[DescriptionCache]:
    """Yield a DescriptionCache over the local disk and the option database."""
    fs = LocalFSManager()
    store = OptionStore(open_options(db_path or DEFAULT_OPTIONS_PATH))
    cache = DescriptionCache(store, default_plugins(fs), fs)
    try:
        yield cache
    finally:
        cache.close()
