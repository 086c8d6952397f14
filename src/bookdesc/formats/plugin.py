# ABOUTME: FormatPlugin protocol and the PluginCollection registry.
# ABOUTME: Plugins fill a BookDescription from one book file format.

import logging
from typing import Protocol, runtime_checkable

from bookdesc.description.types import BookDescription
from bookdesc.filesystem.file import BookFile

logger = logging.getLogger(__name__)


class FormatReadError(Exception):
    """Raised inside a plugin when a book file cannot be read or parsed."""


@runtime_checkable
class FormatPlugin(Protocol):
    """Protocol for book format readers.

    read_description mutates description through the editing API and
    reports whether the file could be read.
    """

    @property
    def name(self) -> str: ...

    @property
    def provides_meta_info(self) -> bool: ...

    def accepts(self, file: BookFile) -> bool: ...

    def read_description(self, file_path: str, description: BookDescription) -> bool: ...


class PluginCollection:
    """Ordered registry of format plugins; the first accepting plugin wins."""

    def __init__(self, plugins: list[FormatPlugin] | None = None) -> None:
        self._plugins: list[FormatPlugin] = []
        for plugin in plugins or []:
            self.register(plugin)

    def register(self, plugin: FormatPlugin) -> None:
        if not isinstance(plugin, FormatPlugin):
            raise TypeError(f"Not a format plugin: {plugin!r}")
        self._plugins.append(plugin)

    @property
    def plugins(self) -> list[FormatPlugin]:
        return list(self._plugins)

    def get_plugin(self, file: BookFile, strict: bool = False) -> FormatPlugin | None:
        """Find the plugin for file.

        Args:
            file: The book file to match.
            strict: Only consider plugins that extract real metadata
                (title, authors) rather than just accepting the format.

        Returns:
            The first matching plugin, or None.
        """
        for plugin in self._plugins:
            if strict and not plugin.provides_meta_info:
                continue
            if plugin.accepts(file):
                return plugin
        return None
