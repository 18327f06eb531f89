"""Keyframes of the animation and the blending between two of them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import numpy as np

from .merge import fake_gaussian, keep_first, mix

Interpolation = Callable[[Any, Any, float], Any]
OrbitInterpolation = Callable[[Any, Any, float, float], np.ndarray]


def _zero_vector() -> np.ndarray:
    return np.zeros(3)


@dataclass(eq=False)
class KeyFrame:
    """State of every sphere and of the camera from frame ``start`` on."""

    positions: dict[int, np.ndarray] = field(default_factory=dict)
    colors: dict[int, np.ndarray] = field(default_factory=dict)
    rotation_normals: dict[int, np.ndarray] = field(default_factory=dict)
    sphere_orbit_normals: dict[int, np.ndarray] = field(default_factory=dict)
    radii: dict[int, float] = field(default_factory=dict)
    angles: dict[int, float] = field(default_factory=dict)
    should_render: dict[int, int] = field(default_factory=dict)

    camera_pos: np.ndarray = field(default_factory=_zero_vector)
    camera_rotation_normal: np.ndarray = field(default_factory=_zero_vector)

    start: int = 0

    merge_radii: Interpolation = mix
    merge_positions: Interpolation = mix
    merge_positions_orbit: Optional[OrbitInterpolation] = None
    merge_colors: Interpolation = keep_first


def camera_arc(a: Any, b: Any, n: Any, c: float) -> np.ndarray:
    """Move from ``a`` to ``b`` along a half circle whose plane is normal to ``n``."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    n = np.asarray(n, dtype=float)
    if np.array_equal(a, b):
        return a

    center = (a + b) * 0.5
    radius = float(np.linalg.norm(a - b)) * 0.5

    u = a - center
    u = u / np.linalg.norm(u)
    v = np.cross(n, u)
    v = v / np.linalg.norm(v)

    angle = math.pi * c ** (1.0 + fake_gaussian(c))
    return center + radius * (u * math.cos(angle) + v * math.sin(angle))


def _progression(previous: KeyFrame, following: KeyFrame, frame: int) -> float:
    num = float(frame) - previous.start
    den = float(following.start) - previous.start
    if den == 0.0:
        return 1.0 if num >= 0.0 else 0.0
    return min(max(num / den, 0.0), 1.0)


def merge_keyframes(previous: KeyFrame, following: KeyFrame, frame: int) -> KeyFrame:
    """Blend ``previous`` towards ``following`` for the given frame number."""
    progression = _progression(previous, following, frame)

    positions = dict(previous.positions)
    for idx, pos in following.positions.items():
        if idx not in positions:
            continue
        if previous.merge_positions_orbit is None:
            positions[idx] = previous.merge_positions(positions[idx], pos, progression)
        else:
            positions[idx] = previous.merge_positions_orbit(
                positions[idx],
                previous.rotation_normals[idx],
                previous.angles[idx],
                progression,
            )

    colors = dict(previous.colors)
    for idx, col in following.colors.items():
        if idx in colors:
            colors[idx] = previous.merge_colors(colors[idx], col, progression)

    radii = dict(previous.radii)
    for idx, rad in following.radii.items():
        if idx in radii:
            radii[idx] = previous.merge_radii(radii[idx], rad, progression)

    return KeyFrame(
        positions=positions,
        colors=colors,
        radii=radii,
        should_render=dict(previous.should_render),
        camera_pos=camera_arc(
            previous.camera_pos,
            following.camera_pos,
            previous.camera_rotation_normal,
            progression,
        ),
        start=following.start,
        merge_positions=following.merge_positions,
        merge_colors=following.merge_colors,
    )