# ABOUTME: Typed option handles (string, integer, bounded integer, boolean) over OptionStore.
# ABOUTME: Missing or unparsable values read as the default; writing the default unsets.

import logging

from bookdesc.options.store import OptionStore

logger = logging.getLogger(__name__)


class _Option:
    """Shared addressing for an option: (category, scope, name) in a store."""

    def __init__(self, store: OptionStore, category: str, scope: str, name: str) -> None:
        self._store = store
        self.category = category
        self.scope = scope
        self.name = name

    def change_name(self, name: str) -> None:
        """Retarget this handle to another option name in the same scope."""
        self.name = name

    def _raw(self) -> str | None:
        return self._store.get(self.category, self.scope, self.name)

    def _write(self, text: str, is_default: bool) -> None:
        if is_default:
            self._store.unset(self.category, self.scope, self.name)
        else:
            self._store.set(self.category, self.scope, self.name, text)


class StringOption(_Option):
    """A text option with a literal default."""

    def __init__(
        self, store: OptionStore, category: str, scope: str, name: str, default: str
    ) -> None:
        super().__init__(store, category, scope, name)
        self.default = default

    @property
    def value(self) -> str:
        raw = self._raw()
        return self.default if raw is None else raw

    def set_value(self, value: str) -> None:
        self._write(value, value == self.default)


class IntegerOption(_Option):
    """An unbounded integer option."""

    def __init__(
        self, store: OptionStore, category: str, scope: str, name: str, default: int
    ) -> None:
        super().__init__(store, category, scope, name)
        self.default = default

    def _parse(self) -> int:
        raw = self._raw()
        if raw is None:
            return self.default
        try:
            return int(raw)
        except ValueError:
            logger.warning(
                "Ignoring non-integer value %r for option %s/%s", raw, self.scope, self.name
            )
            return self.default

    @property
    def value(self) -> int:
        return self._parse()

    def set_value(self, value: int) -> None:
        self._write(str(value), value == self.default)


class IntegerRangeOption(IntegerOption):
    """An integer option clamped to [min_value, max_value] on read and write."""

    def __init__(
        self,
        store: OptionStore,
        category: str,
        scope: str,
        name: str,
        min_value: int,
        max_value: int,
        default: int,
    ) -> None:
        if not min_value <= default <= max_value:
            msg = f"default {default} outside range [{min_value}, {max_value}]"
            raise ValueError(msg)
        super().__init__(store, category, scope, name, default)
        self.min_value = min_value
        self.max_value = max_value

    def _clamp(self, value: int) -> int:
        return max(self.min_value, min(self.max_value, value))

    @property
    def value(self) -> int:
        return self._clamp(self._parse())

    def set_value(self, value: int) -> None:
        super().set_value(self._clamp(value))


class BooleanOption(_Option):
    """A boolean option stored as "true"/"false"."""

    def __init__(
        self, store: OptionStore, category: str, scope: str, name: str, default: bool
    ) -> None:
        super().__init__(store, category, scope, name)
        self.default = default

    @property
    def value(self) -> bool:
        raw = self._raw()
        if raw is None:
            return self.default
        if raw == "true":
            return True
        if raw == "false":
            return False
        return self.default

    def set_value(self, value: bool) -> None:
        self._write("true" if value else "false", value == self.default)
