"""Engine settings: key bindings and camera speeds."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Key(IntEnum):
    """Keyboard key codes."""

    SPACE = 32
    ESCAPE = 256
    ENTER = 257
    TAB = 258
    LEFT_SHIFT = 340
    LEFT_CONTROL = 341
    LEFT_ALT = 342


class MouseButton(IntEnum):
    """Mouse button codes."""

    LEFT = 0
    RIGHT = 1
    MIDDLE = 2


@dataclass
class EngineOptions:
    """Tunable settings of the engine."""

    close_window_button: int = Key.ESCAPE

    camera_zoom_speed: float = 1.0
    camera_pan_speed: float = 0.01
    camera_rotation_speed: float = 0.01
    camera_fov: float = 90.0
    camera_pan_button: int = MouseButton.MIDDLE
    camera_rotation_button: int = MouseButton.RIGHT

    select_object_in_scene: int = MouseButton.LEFT