# ABOUTME: Public API for the bookdesc option storage layer.
# ABOUTME: Exports connection management, the raw store, and typed option handles.

from bookdesc.options.connection import DEFAULT_OPTIONS_PATH, OptionStoreError, open_options
from bookdesc.options.store import OptionStore
from bookdesc.options.typed import (
    BooleanOption,
    IntegerOption,
    IntegerRangeOption,
    StringOption,
)

__all__ = [
    "DEFAULT_OPTIONS_PATH",
    "BooleanOption",
    "IntegerOption",
    "IntegerRangeOption",
    "OptionStore",
    "OptionStoreError",
    "StringOption",
    "open_options",
]
