from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

try:
    import arcade  # type: ignore
except Exception:  # pragma: no cover
    arcade = None  # type: ignore

log = logging.getLogger(__name__)


@dataclass
class Button:
    x: float
    y: float
    width: float
    height: float
    text: str
    on_click: Callable[[], None]
    enabled: bool = True

    def draw(self) -> None:  # pragma: no cover - rendering
        if arcade is None:
            return
        color = arcade.color.DARK_BLUE if self.enabled else arcade.color.GRAY
        left = self.x - self.width / 2
        bottom = self.y - self.height / 2
        arcade.draw_lrbt_rectangle_filled(left, left + self.width, bottom, bottom + self.height, color)
        arcade.draw_lrbt_rectangle_outline(left, left + self.width, bottom, bottom + self.height, arcade.color.WHITE, 2)
        arcade.draw_text(
            self.text,
            self.x,
            self.y,
            arcade.color.WHITE,
            16,
            anchor_x="center",
            anchor_y="center",
        )

    def hit_test(self, x: float, y: float) -> bool:
        return (
            self.x - self.width / 2 <= x <= self.x + self.width / 2
            and self.y - self.height / 2 <= y <= self.y + self.height / 2
        )

    def click(self) -> None:
        if self.enabled:
            try:
                self.on_click()
            except Exception:  # pragma: no cover - user code
                log.exception("Button click handler failed: %s", self.text)


@dataclass
class TextField:
    """Single-line text input; (x, y) is the centre."""

    x: float
    y: float
    width: float
    height: float
    text: str = ""
    enabled: bool = True

    def draw(self) -> None:  # pragma: no cover - rendering
        if arcade is None:
            return
        left = self.x - self.width / 2
        bottom = self.y - self.height / 2
        border = arcade.color.WHITE if self.enabled else arcade.color.GRAY
        arcade.draw_lrbt_rectangle_filled(left, left + self.width, bottom, bottom + self.height, arcade.color.BLACK)
        arcade.draw_lrbt_rectangle_outline(left, left + self.width, bottom, bottom + self.height, border, 2)
        caret = "_" if self.enabled else ""
        arcade.draw_text(self.text + caret, left + 8, self.y, border, 14, anchor_y="center")

    def hit_test(self, x: float, y: float) -> bool:
        return (
            self.x - self.width / 2 <= x <= self.x + self.width / 2
            and self.y - self.height / 2 <= y <= self.y + self.height / 2
        )


@dataclass
class ListBox:
    """Scrolling list of text rows; (left, top) is the upper-left corner."""

    left: float
    top: float
    width: float
    row_height: float
    rows: List[str] = field(default_factory=list)
    selected: int = -1
    visible_rows: int = 5
    scroll: int = 0

    @property
    def height(self) -> float:
        return self.row_height * self.visible_rows

    def ensure_visible(self) -> None:
        if self.selected < 0:
            self.scroll = 0
        elif self.selected < self.scroll:
            self.scroll = self.selected
        elif self.selected >= self.scroll + self.visible_rows:
            self.scroll = self.selected - self.visible_rows + 1

    def index_at(self, x: float, y: float) -> Optional[int]:
        if not (self.left <= x <= self.left + self.width):
            return None
        if not (self.top - self.height <= y <= self.top):
            return None
        idx = self.scroll + int((self.top - y) // self.row_height)
        if 0 <= idx < len(self.rows):
            return idx
        return None

    def draw(self) -> None:  # pragma: no cover - rendering
        if arcade is None:
            return
        arcade.draw_lrbt_rectangle_outline(
            self.left, self.left + self.width, self.top - self.height, self.top, arcade.color.WHITE, 1
        )
        for offset, text in enumerate(self.rows[self.scroll:self.scroll + self.visible_rows]):
            idx = self.scroll + offset
            row_bottom = self.top - (offset + 1) * self.row_height
            if idx == self.selected:
                arcade.draw_lrbt_rectangle_filled(
                    self.left, self.left + self.width, row_bottom, row_bottom + self.row_height,
                    arcade.color.DARK_SLATE_BLUE,
                )
            arcade.draw_text(
                text, self.left + 6, row_bottom + self.row_height / 2, arcade.color.WHITE, 13, anchor_y="center"
            )
