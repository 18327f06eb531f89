"""Orbiting camera driven by mouse input, exposed to the shader as uniforms."""

from __future__ import annotations

from typing import Any, Optional

import numpy as np

from .callbacks import Action, CallbacksManager, InputState
from .options import EngineOptions
from .shader import ShaderProgram

SCENE_CENTER = np.array([0.0, 0.0, -10.0])


def _normalize(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v)


def look_at(eye: Any, center: Any, up: Any) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` towards ``center``.

    The result is the mathematical matrix: it maps points given as
    column vectors ``(x, y, z, 1)`` into view space.
    """
    eye = np.asarray(eye, dtype=float)
    center = np.asarray(center, dtype=float)
    up = np.asarray(up, dtype=float)

    f = _normalize(center - eye)
    s = _normalize(np.cross(f, up))
    u = np.cross(s, f)

    view = np.identity(4)
    view[0, :3] = s
    view[1, :3] = u
    view[2, :3] = -f
    view[0, 3] = -np.dot(s, eye)
    view[1, 3] = -np.dot(u, eye)
    view[2, 3] = np.dot(f, eye)
    return view


class Camera:
    """Camera that pans, rotates and zooms with the mouse.

    Registers its mouse callbacks on ``callbacks`` and its uniforms on
    ``shader`` when created.
    """

    def __init__(
        self,
        shader: ShaderProgram,
        callbacks: Optional[CallbacksManager] = None,
        input_state: Optional[InputState] = None,
        options: Optional[EngineOptions] = None,
    ) -> None:
        self.shader = shader
        self.callbacks = callbacks if callbacks is not None else CallbacksManager()
        self.input = input_state if input_state is not None else InputState()
        self.options = options if options is not None else EngineOptions()

        self.position = np.zeros(3)
        self.inverse_view_matrix = np.zeros((4, 4))
        self.cursor_captured = False

        self._last_mouse_pos = np.zeros(2)
        self._front = np.array([0.0, 0.0, 1.0])
        self._up = np.array([0.0, 1.0, 0.0])
        self._right = np.array([1.0, 0.0, 0.0])

        self._init_controls()
        self._init_uniforms()

    @property
    def fov(self) -> float:
        """Field of view, taken from the engine options."""
        return self.options.camera_fov

    @property
    def front(self) -> np.ndarray:
        """Direction the camera looks in."""
        return self._front.copy()

    @property
    def right(self) -> np.ndarray:
        """Right-hand direction of the camera."""
        return self._right.copy()

    def _mouse(self) -> np.ndarray:
        return np.asarray(self.input.mouse_position, dtype=float)

    def _init_controls(self) -> None:
        opts = self.options

        def pan_button() -> int:
            return int(opts.camera_pan_button)

        def rotation_button() -> int:
            return int(opts.camera_rotation_button)

        def pan_press() -> None:
            if self.input.is_down(pan_button()):
                return
            self.pan(self._mouse())
            self.cursor_captured = True
            self.input.set_down(pan_button(), True)

        def pan_release() -> None:
            self.input.set_down(pan_button(), False)
            self.cursor_captured = False

        def rotation_press() -> None:
            if self.input.is_down(pan_button()):
                return
            self.rotate(self._mouse())
            self.cursor_captured = True
            self.input.set_down(rotation_button(), True)

        def rotation_release() -> None:
            self.input.set_down(rotation_button(), False)
            self.cursor_captured = False

        def scroll(offset: tuple[float, float]) -> None:
            self.zoom(offset[1])

        self.callbacks.add_mouse_button_callback(pan_press, pan_button, Action.PRESS)
        self.callbacks.add_mouse_button_callback(pan_release, pan_button, Action.RELEASE)
        self.callbacks.add_mouse_button_callback(rotation_press, rotation_button, Action.PRESS)
        self.callbacks.add_mouse_button_callback(
            rotation_release, rotation_button, Action.RELEASE
        )
        self.callbacks.add_mouse_scroll_callback(scroll)

    def _init_uniforms(self) -> None:
        self.shader.add_uniform("FOV", self.fov)
        self.shader.add_uniform("cameraPosition", self.position)
        self.shader.add_uniform("cameraDirection", self._front)
        self.shader.add_uniform("cameraRight", self._right)
        self.shader.add_uniform("inverseViewMatrix", self.inverse_view_matrix)

    def update(self) -> None:
        """Apply held mouse buttons, recompute the view and push the uniforms."""
        pos = self._mouse()
        pan_down = self.input.is_down(self.options.camera_pan_button)
        rotation_down = self.input.is_down(self.options.camera_rotation_button)

        if pan_down:
            self.pan(pos)
        if rotation_down:
            self.rotate(pos)
        elif not pan_down:
            self._last_mouse_pos = pos

        self.position = np.asarray(self.position, dtype=float)
        self._front = _normalize(self.position - SCENE_CENTER)
        self._right = _normalize(np.cross(self._front, self._up))
        self.inverse_view_matrix = np.linalg.inv(
            look_at(self.position, self.position + self._front, self._up)
        )

        self.shader.set_uniform("FOV", self.fov)
        self.shader.set_uniform("cameraPosition", self.position)
        self.shader.set_uniform("cameraDirection", self._front)
        self.shader.set_uniform("cameraRight", self._right)
        self.shader.set_uniform("inverseViewMatrix", self.inverse_view_matrix)

    def pan(self, mouse_pos: Any) -> None:
        """Slide the camera sideways by the cursor movement since last time."""
        mouse = np.asarray(mouse_pos, dtype=float)
        offset = mouse - self._last_mouse_pos
        self._last_mouse_pos = mouse

        x_offset, y_offset = -offset[0], -offset[1]
        tangent = _normalize(np.array([self._front[2], 0.0, -self._front[0]]))
        bitangent = np.cross(self._front, tangent)

        movement = (tangent * x_offset + bitangent * y_offset) * self.options.camera_pan_speed
        self.position = np.asarray(self.position, dtype=float) + movement

    def zoom(self, y_offset: float) -> None:
        """Move the camera along its view direction, then update it."""
        step = self._front * -float(y_offset) * self.options.camera_zoom_speed
        self.position = np.asarray(self.position, dtype=float) + step
        self.update()

    def rotate(self, mouse_pos: Any) -> None:
        """Turn the view direction by the cursor movement since last time."""
        mouse = np.asarray(mouse_pos, dtype=float)
        offset = mouse - self._last_mouse_pos
        self._last_mouse_pos = mouse

        x_offset, y_offset = -offset[0], -offset[1]
        self._front = self._front + (
            self._right * x_offset - self._up * y_offset
        ) * self.options.camera_rotation_speed
        self._front = _normalize(self._front)