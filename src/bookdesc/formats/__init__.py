# ABOUTME: Format plugin package: protocol, registry, and built-in readers.
# ABOUTME: default_plugins builds the registry used by the cache and CLI.

from bookdesc.filesystem.manager import FSManager
from bookdesc.formats.epub import EpubPlugin
from bookdesc.formats.plugin import FormatPlugin, FormatReadError, PluginCollection
from bookdesc.formats.txt import TxtPlugin


def default_plugins(fs: FSManager) -> PluginCollection:
    """Registry with every built-in plugin, richest metadata first."""
    return PluginCollection([EpubPlugin(fs), TxtPlugin(fs)])


__all__ = [
    "EpubPlugin",
    "FormatPlugin",
    "FormatReadError",
    "PluginCollection",
    "TxtPlugin",
    "default_plugins",
]
