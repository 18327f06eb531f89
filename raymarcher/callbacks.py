"""Input state and dispatch of window events to registered callbacks."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Optional, Union

Binding = Union[int, Callable[[], int]]


class Action(IntEnum):
    """What happened to a key or button."""

    RELEASE = 0
    PRESS = 1
    REPEAT = 2


def _resolve(binding: Binding) -> int:
    return binding() if callable(binding) else int(binding)


@dataclass
class InputState:
    """Current state of the keyboard, mouse buttons and cursor."""

    mouse_position: tuple[float, float] = (0.0, 0.0)
    _buttons_down: dict[int, bool] = field(default_factory=dict)
    _keys_down: set[int] = field(default_factory=set)

    def is_down(self, button: int) -> bool:
        """Whether mouse ``button`` is marked as held."""
        return self._buttons_down.get(int(button), False)

    def set_down(self, button: int, down: bool) -> None:
        """Mark mouse ``button`` as held or released."""
        self._buttons_down[int(button)] = bool(down)

    def press_key(self, key: int) -> None:
        """Record that ``key`` is held."""
        self._keys_down.add(int(key))

    def release_key(self, key: int) -> None:
        """Record that ``key`` was released."""
        self._keys_down.discard(int(key))

    def key_pressed(self, key: int, mods: Optional[int] = None) -> bool:
        """Whether ``key`` is held, together with ``mods`` when it is given."""
        if int(key) not in self._keys_down:
            return False
        return mods is None or int(mods) in self._keys_down


class CallbacksManager:
    """Keeps the registered callbacks and calls them when events arrive.

    Key and button bindings may be plain codes or zero-argument callables
    returning the code, so that a binding follows later changes of a setting.
    """

    def __init__(self, width: int = 1920, height: int = 1080) -> None:
        self.width = width
        self.height = height
        self._key_callbacks: list[tuple[Callable[[], None], Binding, int]] = []
        self._mouse_button_callbacks: list[tuple[Callable[[], None], Binding, int]] = []
        self._scroll_callbacks: list[Callable[[tuple[float, float]], None]] = []
        self._resize_callbacks: list[Callable[[int, int], None]] = []

    def add_key_callback(self, callback: Callable[[], None], key: Binding, action: int) -> None:
        """Call ``callback`` whenever ``key`` sees ``action``."""
        self._key_callbacks.append((callback, key, int(action)))

    def add_mouse_button_callback(
        self, callback: Callable[[], None], button: Binding, action: int
    ) -> None:
        """Call ``callback`` whenever mouse ``button`` sees ``action``."""
        self._mouse_button_callbacks.append((callback, button, int(action)))

    def add_mouse_scroll_callback(self, callback: Callable[[tuple[float, float]], None]) -> None:
        """Call ``callback`` with the ``(x, y)`` offset of every scroll."""
        self._scroll_callbacks.append(callback)

    def add_viewport_resize_callback(self, callback: Callable[[int, int], None]) -> None:
        """Call ``callback`` with the new width and height on every resize."""
        self._resize_callbacks.append(callback)

    def key_event(self, key: int, action: int) -> None:
        """Dispatch a keyboard event."""
        for callback, binding, wanted in list(self._key_callbacks):
            if _resolve(binding) == key and wanted == action:
                callback()

    def mouse_button_event(self, button: int, action: int) -> None:
        """Dispatch a mouse button event."""
        for callback, binding, wanted in list(self._mouse_button_callbacks):
            if _resolve(binding) == button and wanted == action:
                callback()

    def scroll_event(self, x_offset: float, y_offset: float) -> None:
        """Dispatch a scroll event."""
        offset = (float(x_offset), float(y_offset))
        for callback in list(self._scroll_callbacks):
            callback(offset)

    def resize_event(self, width: int, height: int) -> None:
        """Record the new framebuffer size and dispatch it."""
        self.width = width
        self.height = height
        for callback in list(self._resize_callbacks):
            callback(width, height)