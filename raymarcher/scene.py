"""The spheres of the scene, driven by the keyframe timeline."""

from __future__ import annotations

from typing import Any

import numpy as np

from .errors import RayMarcherError
from .keyframe import merge_keyframes
from .layout import Sphere
from .loader import SPHERE_COUNT, Timeline


class SphereManager:
    """Holds the spheres and moves them to the state of the current frame."""

    def __init__(self, timeline: Timeline, sphere_count: int = SPHERE_COUNT) -> None:
        self.timeline = timeline
        self.spheres: list[Sphere] = [Sphere() for _ in range(sphere_count)]
        self.frames = 0
        self.current_keyframe = 0

    def _next_index(self) -> int:
        keyframes = self.timeline.keyframes
        index = next(
            (i for i in range(1, len(keyframes)) if keyframes[i].start >= self.frames),
            len(keyframes),
        )
        return min(index, len(keyframes) - 1)

    def update(self, camera: Any) -> None:
        """Blend the keyframes around the current frame into spheres and camera."""
        keyframes = self.timeline.keyframes
        if len(keyframes) < 2:
            raise RayMarcherError("The timeline needs at least two keyframes.")

        index = self._next_index()
        if self.current_keyframe != index - 1:
            self.current_keyframe = index - 1
            print(f"Current keyframe: {self.current_keyframe} [{keyframes[index].start}]")

        state = merge_keyframes(keyframes[index - 1], keyframes[index], self.frames)
        count = len(self.spheres)
        for idx, pos in state.positions.items():
            if idx < count:
                self.spheres[idx].origin = tuple(float(v) for v in pos)
        for idx, col in state.colors.items():
            if idx < count:
                self.spheres[idx].color = tuple(float(v) for v in col)
        for idx, rad in state.radii.items():
            if idx < count:
                self.spheres[idx].radius = float(rad)
        for idx, render in state.should_render.items():
            if idx < count:
                self.spheres[idx].should_render = int(render)

        camera.position = np.array(state.camera_pos, dtype=float)