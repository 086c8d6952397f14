# ABOUTME: Toolbar button state model: plain buttons and mutually exclusive toggle groups.
# ABOUTME: Pure state, no rendering; a GUI layer reads is_pressed to draw buttons.

import enum
import logging

logger = logging.getLogger(__name__)


class ItemType(enum.Enum):
    BUTTON = "button"


class ButtonGroup:
    """A set of toggle buttons of which at most one is pressed."""

    def __init__(self, default_action_id: int | None = None) -> None:
        self._items: list[ButtonItem] = []
        self.pressed_item: ButtonItem | None = None
        self.default_action_id = default_action_id

    @property
    def items(self) -> list["ButtonItem"]:
        return list(self._items)

    def _add(self, item: "ButtonItem") -> None:
        if item not in self._items:
            self._items.append(item)
            if self.pressed_item is None and item.action_id == self.default_action_id:
                self.pressed_item = item

    def _remove(self, item: "ButtonItem") -> None:
        if item in self._items:
            self._items.remove(item)
        if self.pressed_item is item:
            self.pressed_item = None

    def press(self, item: "ButtonItem") -> None:
        """Make item the pressed button, releasing whichever was pressed before.

        Raises:
            ValueError: If item does not belong to this group.
        """
        if item not in self._items:
            raise ValueError(f"Button {item.action_id} is not in this group")
        self.pressed_item = item
        logger.debug("Pressed toolbar action %s", item.action_id)


class ButtonItem:
    """A toolbar button bound to an action. Buttons in a group act as toggles."""

    item_type = ItemType.BUTTON

    def __init__(self, action_id: int, icon_name: str, tooltip: str | None = None) -> None:
        self.action_id = action_id
        self.icon_name = icon_name
        self.tooltip = tooltip
        self._button_group: ButtonGroup | None = None

    def __repr__(self) -> str:
        return f"ButtonItem({self.action_id!r}, {self.icon_name!r})"

    @property
    def button_group(self) -> ButtonGroup | None:
        return self._button_group

    @property
    def is_toggle_button(self) -> bool:
        return self._button_group is not None

    def press(self) -> None:
        """Press a toggle button. Plain buttons keep no pressed state."""
        if self._button_group is not None:
            self._button_group.press(self)

    @property
    def is_pressed(self) -> bool:
        return self._button_group is not None and self._button_group.pressed_item is self

    def set_button_group(self, group: ButtonGroup | None) -> None:
        """Move this button to group, or make it a plain button with None."""
        if self._button_group is not None:
            self._button_group._remove(self)
        self._button_group = group
        if group is not None:
            group._add(self)
