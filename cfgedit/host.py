from __future__ import annotations

from typing import Tuple

from .colors import RGBA


class WidgetHost:
    """Primitive widgets a presentation shell hands to the projection engine.

    Calls happen in layout order once per frame. Edit widgets return
    ``(changed, value)``: ``changed`` is True only on the frame where the user
    committed a new value, and ``value`` is then that value.
    """

    def begin_frame(self) -> None:
        pass

    def end_frame(self) -> None:
        pass

    def push_id(self, ident: int) -> None:
        raise NotImplementedError

    def pop_id(self) -> None:
        raise NotImplementedError

    def text(self, label: str) -> None:
        raise NotImplementedError

    def button(self, label: str) -> bool:
        raise NotImplementedError

    def checkbox(self, label: str, value: bool) -> Tuple[bool, bool]:
        raise NotImplementedError

    def input_int(self, label: str, value: int) -> Tuple[bool, int]:
        raise NotImplementedError

    def input_float(self, label: str, value: float) -> Tuple[bool, float]:
        raise NotImplementedError

    def input_text(self, label: str, value: str) -> Tuple[bool, str]:
        raise NotImplementedError

    def color_edit(self, label: str, rgba: RGBA, channels: int) -> Tuple[bool, RGBA]:
        raise NotImplementedError

    def tree_node(self, label: str, default_open: bool = True) -> bool:
        """Open a collapsible group; when it returns True, close it with tree_pop()."""
        raise NotImplementedError

    def tree_pop(self) -> None:
        raise NotImplementedError
