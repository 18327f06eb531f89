"""Interpolation functions used to blend keyframes."""

from __future__ import annotations

import math
from typing import Any, Callable

import numpy as np

ORBIT_CENTER = np.array([0.0, 0.0, -10.0])


def _value(v: Any) -> Any:
    if isinstance(v, (int, float, np.integer, np.floating)):
        return float(v)
    return np.asarray(v, dtype=float)


def _normalize(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v)


def _smoothstep(edge0: float, edge1: float, x: float) -> float:
    t = min(max((x - edge0) / (edge1 - edge0), 0.0), 1.0)
    return t * t * (3.0 - 2.0 * t)


def mix(a: Any, b: Any, c: float) -> Any:
    """Linear interpolation from ``a`` to ``b``."""
    a, b = _value(a), _value(b)
    return a * (1.0 - c) + b * c


def ease_in(a: Any, b: Any, c: float) -> Any:
    """Interpolation that starts slowly (fifth power of the progress)."""
    return mix(a, b, c ** 5)


def ease_out(a: Any, b: Any, c: float) -> Any:
    """Interpolation that starts fast and settles exponentially."""
    return mix(a, b, 1.0 - math.exp(-c))


def keep_first(a: Any, b: Any, c: float) -> Any:
    """Ignore the target and keep the start value."""
    return _value(a)


def fake_gaussian(x: float) -> float:
    """A bell-shaped bump peaking at 0.5, built from two smoothsteps."""
    steepness = 3.0
    f1 = _smoothstep(0.0, 1.0, (x + 0.5) ** steepness)
    f2 = _smoothstep(0.0, 1.0, (-x + 1.5) ** steepness)
    return min(f1, f2)


def rotate(vector: Any, angle: float, normal: Any) -> np.ndarray:
    """Rotate ``vector`` by ``angle`` radians around the axis ``normal``."""
    v = np.asarray(vector, dtype=float)
    k = _normalize(np.asarray(normal, dtype=float))
    cos, sin = math.cos(angle), math.sin(angle)
    return v * cos + np.cross(k, v) * sin + k * np.dot(k, v) * (1.0 - cos)


def coplanar_circle(a: Any, b: Any, n: Any, c: float) -> np.ndarray:
    """Move ``a`` along a circle around the orbit centre, in the plane of ``n``."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    n = np.asarray(n, dtype=float)
    if np.array_equal(a, b):
        return a
    if c == 0.0:
        return a
    if c == 1.0:
        return b

    v1 = _normalize(a - ORBIT_CENTER)
    v2 = _normalize(b - ORBIT_CENTER)
    alpha = math.acos(min(max(float(np.dot(v1, v2)), -1.0), 1.0))
    if np.dot(np.cross(v1, v2), n) > 0:
        alpha = -alpha
    return ORBIT_CENTER + rotate(a - ORBIT_CENTER, alpha * c, n)


def orbit(a: Any, n: Any, theta: float, c: float) -> np.ndarray:
    """Rotate ``a`` around the orbit centre by ``theta * c`` about ``n``."""
    translated = np.asarray(a, dtype=float) - ORBIT_CENTER
    return rotate(translated, theta * c, n) + ORBIT_CENTER


_BY_NAME: dict[str, Callable[[Any, Any, float], Any]] = {
    "glm::mix": mix,
    "easeIn": ease_in,
    "easeOut": ease_out,
}


def get_merge_function(name: str) -> Callable[[Any, Any, float], Any]:
    """Look up an interpolation by its keyframe-file name; unknown names mix."""
    return _BY_NAME.get(name, mix)