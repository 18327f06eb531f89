"""Loading of the animation timeline from its keyframe document."""

from __future__ import annotations

import random
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Callable, Optional, Union

import numpy as np
import yaml

from .errors import RayMarcherError, fail
from .keyframe import KeyFrame
from .merge import ease_in, get_merge_function, mix, orbit

SPHERE_COUNT = 10
_ROWS = (0, 1, 1, 2, 2, 2, 3, 3, 3, 3)


@dataclass
class Timeline:
    """All keyframes of the animation and its named time marks."""

    keyframes: list[KeyFrame] = field(default_factory=list)
    times: dict[str, int] = field(default_factory=dict)


def random_radii(rng: random.Random) -> dict[int, float]:
    """Give every sphere a random radius between 0.6 and 1.4."""
    return {idx: rng.uniform(0.6, 1.4) for idx in range(SPHERE_COUNT)}


def random_render_single(rng: random.Random) -> dict[int, int]:
    """Render one sphere chosen at random."""
    chosen = rng.randint(0, 9)
    return {idx: int(idx == chosen) for idx in range(SPHERE_COUNT)}


def random_render_rows(rng: random.Random) -> dict[int, int]:
    """Render every row of the triangle but one chosen at random."""
    hidden = rng.randint(0, 3)
    return {idx: int(row != hidden) for idx, row in enumerate(_ROWS)}


def random_render_pair(rng: random.Random) -> dict[int, int]:
    """Render two spheres chosen at random (possibly the same one)."""
    first = rng.randint(0, 9)
    second = rng.randint(0, 9)
    return {idx: int(idx in (first, second)) for idx in range(SPHERE_COUNT)}


def _to_uint(value: Any, what: str) -> int:
    if isinstance(value, bool):
        raise RayMarcherError(f"Bad conversion of {what}: {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise RayMarcherError(f"Bad conversion of {what}: {value!r}") from None
    if isinstance(value, float) and number != value:
        raise RayMarcherError(f"Bad conversion of {what}: {value!r}")
    if number < 0:
        raise RayMarcherError(f"Bad conversion of {what}: {value!r}")
    return number


def _to_int(value: Any, what: str) -> int:
    if isinstance(value, bool) or isinstance(value, float):
        raise RayMarcherError(f"Bad conversion of {what}: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise RayMarcherError(f"Bad conversion of {what}: {value!r}") from None


def _to_float(value: Any, what: str) -> float:
    if isinstance(value, bool):
        raise RayMarcherError(f"Bad conversion of {what}: {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise RayMarcherError(f"Bad conversion of {what}: {value!r}") from None


def _to_vec3(value: Any, what: str) -> np.ndarray:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise RayMarcherError(f"Bad conversion of {what}: expected a sequence of 3 numbers")
    return np.array([_to_float(v, what) for v in value])


def _to_map(value: Any, what: str, convert: Callable[[Any, str], Any]) -> dict[int, Any]:
    if not isinstance(value, Mapping):
        raise RayMarcherError(f"Bad conversion of {what}: expected a mapping")
    return {_to_uint(k, what): convert(v, what) for k, v in value.items()}


def _apply_merge(keyframe: KeyFrame, merge: Any) -> None:
    if not isinstance(merge, Mapping):
        raise RayMarcherError("Bad conversion of merge: expected a mapping")
    if "pos" in merge:
        name = str(merge["pos"])
        if name != "orbit":
            keyframe.merge_positions = get_merge_function(name)
            keyframe.merge_positions_orbit = None
        else:
            keyframe.merge_positions_orbit = orbit
    if "col" in merge:
        keyframe.merge_colors = get_merge_function(str(merge["col"]))


def _parse_keyframe(node: Any, base: KeyFrame, start: int) -> KeyFrame:
    if not isinstance(node, Mapping):
        raise RayMarcherError("Bad conversion of keyframe: expected a mapping")
    keyframe = replace(base)

    if "positions" in node:
        keyframe.positions = _to_map(node["positions"], "positions", _to_vec3)
    if "colors" in node:
        keyframe.colors = _to_map(node["colors"], "colors", _to_vec3)
    if "rotationNormals" in node:
        keyframe.rotation_normals = _to_map(node["rotationNormals"], "rotationNormals", _to_vec3)
    if "radii" in node:
        keyframe.radii = _to_map(node["radii"], "radii", _to_float)
    if "render" in node:
        keyframe.should_render = _to_map(node["render"], "render", _to_int)
    if "camera" in node:
        keyframe.camera_pos = _to_vec3(node["camera"], "camera")
    if "cameraNormal" in node:
        keyframe.camera_rotation_normal = _to_vec3(node["cameraNormal"], "cameraNormal")

    if "start" in node:
        keyframe.start = _to_uint(node["start"], "start") + start
    else:
        fail("Keyframe start property requires.")

    if "angles" in node:
        keyframe.angles = _to_map(node["angles"], "angles", _to_float)
    if "merge" in node:
        _apply_merge(keyframe, node["merge"])
    return keyframe


def _time(times: dict[str, int], name: str) -> int:
    try:
        return times[name]
    except KeyError:
        raise RayMarcherError(f"Missing time mark '{name}'.") from None


def _random_phase(
    keyframes: list[KeyFrame], times: dict[str, int], rng: random.Random
) -> list[KeyFrame]:
    if len(keyframes) < 10:
        raise RayMarcherError("The timeline needs at least 10 keyframes before the random phase.")
    triangle_pos = keyframes[6].positions
    final_colors = keyframes[9].colors
    radii = keyframes[9].radii

    random_start = _time(times, "t_rn0")
    end = _time(times, "t_rn1")
    if end < random_start:
        raise RayMarcherError("The random phase ends before it starts.")
    duration = (end - random_start) // 3
    step = duration // 10

    def phase_frame(start: int, frame_radii: dict[int, float], render: dict[int, int]) -> KeyFrame:
        return KeyFrame(
            positions=triangle_pos,
            colors=final_colors,
            radii=frame_radii,
            should_render=render,
            camera_pos=np.zeros(3),
            camera_rotation_normal=np.array([0.0, 1.0, 0.0]),
            start=start,
            merge_radii=ease_in,
            merge_positions=mix,
            merge_colors=mix,
        )

    phase: list[KeyFrame] = []
    for i in range(10):
        phase.append(phase_frame(random_start + i * step, radii, random_render_single(rng)))
    for i in range(10):
        frame_radii = random_radii(rng) if i else radii
        phase.append(
            phase_frame(random_start + duration + i * step, frame_radii, random_render_rows(rng))
        )
    for i in range(10):
        phase.append(
            phase_frame(random_start + duration * 2 + i * step, radii, random_render_pair(rng))
        )
    return phase


def parse_timeline(document: Any, rng: Optional[random.Random] = None) -> Timeline:
    """Build the timeline from a parsed keyframe document."""
    if rng is None:
        rng = random.Random()
    if not isinstance(document, Mapping):
        raise RayMarcherError("The keyframe document must be a mapping.")
    if "start" not in document:
        raise RayMarcherError("The keyframe document has no 'start' value.")
    start = _to_uint(document["start"], "start")

    times = {
        str(key): _to_uint(value, str(key)) + start
        for key, value in document.items()
        if str(key).startswith("t_")
    }

    nodes = document.get("keyframes") or []
    if not isinstance(nodes, list):
        raise RayMarcherError("Bad conversion of keyframes: expected a sequence")
    keyframes: list[KeyFrame] = []
    for node in nodes:
        base = keyframes[-1] if keyframes else KeyFrame()
        keyframes.append(_parse_keyframe(node, base, start))

    phase = _random_phase(keyframes, times, rng)
    end = times["t_rn1"]
    index = next((i for i, kf in enumerate(keyframes) if kf.start == end), len(keyframes))
    keyframes[index:index] = phase
    return Timeline(keyframes=keyframes, times=times)


def load_timeline(
    path: Union[str, Path], rng: Optional[random.Random] = None
) -> Timeline:
    """Read a YAML keyframe file and build its timeline."""
    try:
        with open(path, encoding="utf-8") as handle:
            document = yaml.safe_load(handle)
    except (OSError, yaml.YAMLError) as exc:
        print(exc)
        raise
    return parse_timeline(document, rng)