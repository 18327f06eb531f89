"""Shader program state: uniforms and shader storage buffers."""

from __future__ import annotations

import itertools
from typing import Any

import numpy as np

from .errors import fail
from .layout import SSBO

_VECTOR_SIZES = (2, 3, 4)


def _normalize_uniform(value: Any) -> Any:
    """Return ``value`` in the form it is stored, or fail if it has no uniform type."""
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, (float, np.floating)):
        return float(value)
    if isinstance(value, (list, tuple, np.ndarray)):
        try:
            array = np.asarray(value, dtype=float)
        except (TypeError, ValueError):
            array = None
        if array is not None:
            if array.ndim == 1 and array.shape[0] in _VECTOR_SIZES:
                return tuple(float(v) for v in array)
            if array.shape == (4, 4):
                return array.copy()
    fail("Type not supported for uniforms")
    return None  # unreachable: fail always raises


class ShaderProgram:
    """A linked vertex/fragment program drawing a full-screen quad.

    The program keeps the values of its uniforms and the contents of its
    shader storage buffers, checking the same ordering rules a GPU program
    of this engine enforces.
    """

    VERTICES: tuple[tuple[float, float], ...] = (
        (1.0, 1.0),
        (1.0, -1.0),
        (-1.0, -1.0),
        (-1.0, 1.0),
    )
    INDICES: tuple[int, ...] = (0, 1, 3, 1, 2, 3)

    def __init__(self, vertex_code: str, fragment_code: str) -> None:
        self.vertex_code = vertex_code
        self.fragment_code = fragment_code
        self._initialized_uniforms: list[str] = []
        self._uniforms: dict[str, Any] = {}
        self._next_free_binding = 0
        self._buffers: dict[int, bytes] = {}
        self._buffer_ids = itertools.count(1)

    def add_uniform(self, name: str, value: Any) -> None:
        """Declare uniform ``name`` and give it its first value."""
        if name in self._initialized_uniforms:
            fail(f"Cannot add uniform as it was already initialized. Name: {name}")
        self._initialized_uniforms.append(name)
        self._uniforms[name] = _normalize_uniform(value)

    def set_uniform(self, name: str, value: Any) -> None:
        """Change the value of a uniform declared earlier."""
        if name not in self._initialized_uniforms:
            fail(f"Cannot set uniform as it was not already initialized. Name: {name}")
        self._uniforms[name] = _normalize_uniform(value)

    def uniform(self, name: str) -> Any:
        """Return the current value of uniform ``name``."""
        try:
            return self._uniforms[name]
        except KeyError:
            raise KeyError(f"Uniform '{name}' has no value.") from None

    def add_ssbo(self, ssbo: SSBO) -> None:
        """Create the buffer of ``ssbo``; bindings must be added in order."""
        if ssbo.binding != self._next_free_binding:
            fail(
                "Cannot initialize SSBO in a non-increasing order.\n"
                f"Binding '{ssbo.binding}', with next free binding '{self._next_free_binding}'."
            )
        if ssbo.data is None:
            fail(f"Cannot modify SSBO as it is empty. Binding '{ssbo.binding}'")
        ssbo.buffer_id = next(self._buffer_ids)
        self._buffers[ssbo.binding] = ssbo.pack()
        self._next_free_binding += 1

    def set_ssbo(self, ssbo: SSBO) -> None:
        """Upload the current contents of an already added ``ssbo``."""
        if ssbo.binding >= self._next_free_binding:
            fail(f"Cannot modify a non-initialized SSBO at binding '{ssbo.binding}'")
        ssbo.needs_update = False
        if ssbo.data is None:
            fail(f"Cannot modify SSBO as it is empty. Binding '{ssbo.binding}'")
        self._buffers[ssbo.binding] = ssbo.pack()

    def buffer(self, binding: int) -> bytes:
        """Return the bytes last uploaded to ``binding``."""
        try:
            return self._buffers[binding]
        except KeyError:
            raise KeyError(f"No SSBO at binding {binding}.") from None