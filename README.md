# raymarcher

Building blocks for a keyframed ray-marching animation. Ten spheres move,
change colour and radius, and appear or vanish along a timeline. While it
plays, a camera moves between keyframes along a half-circle.

## What is in the package

- **Timelines** (`raymarcher.loader`)
  - `load_timeline(path, rng)` reads a YAML keyframe file and returns a
    `Timeline` with `keyframes` and `times`.
  - `parse_timeline(document, rng)` does the same for a document that is
    already loaded.
  - The document must hold a `start` value. Each `t_*` key becomes a named
    time, offset by `start`.
  - Each keyframe must have its own `start`. It inherits every field it does
    not set from the keyframe before it.
  - The document needs at least ten keyframes and the marks `t_rn0` and
    `t_rn1`. Thirty randomised keyframes are inserted before the keyframe
    that starts at `t_rn1`.
  - The random choices come from `rng`, so a seeded `random.Random` makes the
    result reproducible.
  - The helpers `random_radii`, `random_render_single`, `random_render_rows`
    and `random_render_pair` are public.
- **Keyframes** (`raymarcher.keyframe`)
  - `KeyFrame` holds per-sphere positions, colours, radii, rotation normals,
    angles and render flags. It also holds the camera position, the camera
    rotation normal, the start frame and its interpolation functions.
  - `merge_keyframes(previous, following, frame)` blends two keyframes at a
    frame number.
  - `camera_arc(a, b, n, c)` moves a point from `a` to `b` along a
    half-circle.
- **Interpolation** (`raymarcher.merge`)
  - The functions are `mix`, `ease_in`, `ease_out`, `keep_first`, `orbit`,
    `coplanar_circle`, `rotate` and `fake_gaussian`.
  - `get_merge_function(name)` resolves the names used in keyframe files:
    `glm::mix`, `easeIn` and `easeOut`. Any other name gives `mix`.
- **Buffer layout** (`raymarcher.layout`)
  - `Sphere.to_bytes()` packs one sphere as little-endian bytes.
  - `SSBO.pack()` writes an optional element-count header, padded to the
    buffer's `alignment()`, followed by the elements.
  - `type_padding` and `max_padding` give the alignment of each `FieldType`.
- **Shader state** (`raymarcher.shader`)
  - `ShaderProgram` keeps its uniform values and the bytes of its storage
    buffers.
  - It raises `RayMarcherError` in these cases:
    - a uniform is added twice;
    - a uniform is set before it is added;
    - a uniform's value is not a bool, an int, a float, a 2-, 3- or
      4-vector, or a 4×4 matrix;
    - storage buffers are added out of binding order.
- **Input** (`raymarcher.callbacks`)
  - `CallbacksManager` dispatches key, mouse-button, scroll and resize events
    to the callbacks registered for them.
  - `InputState` records held keys, held buttons and the cursor position.
- **Camera** (`raymarcher.camera`)
  - `Camera` pans, rotates and zooms with the mouse.
  - It registers these uniforms on a `ShaderProgram`: `FOV`,
    `cameraPosition`, `cameraDirection`, `cameraRight` and
    `inverseViewMatrix`.
  - `look_at` builds a view matrix.
- **Scene** (`raymarcher.scene`)
  - `SphereManager(timeline).update(camera)` blends the keyframes around
    `frames` into its `spheres` and sets the camera position.
  - The caller advances `frames`.
- **Frame output** (`raymarcher.renderer`)
  - `FrameWriter(path, frame_size)` appends raw frames to a file from a
    background thread. It can be used as a context manager.
  - `close()` waits until every queued frame has been written.
- **Settings and diagnostics**
  - `raymarcher.options.EngineOptions` holds key bindings and camera speeds.
  - `raymarcher.debug.format_debug_message` renders a graphics debug report.
  - `raymarcher.debug.report_debug_message` writes only high-severity reports.

## Example

```python
import random

from raymarcher.loader import load_timeline
from raymarcher.merge import ease_in, get_merge_function, mix

timeline = load_timeline("keyframes.yaml", random.Random(42))
print(len(timeline.keyframes), timeline.times["t_rn0"])

assert get_merge_function("easeIn") is ease_in
assert get_merge_function("unknown") is mix
```

## Errors

Rule breaches the renderer cannot recover from are raised as
`raymarcher.errors.RayMarcherError`. Examples are a keyframe without `start`,
a missing time mark, or a misuse of uniforms or buffers.

Other failures use the ordinary Python exceptions:

- `load_timeline` lets file and YAML errors through;
- an unknown `FieldType` raises `TypeError`;
- a frame shorter than `frame_size` raises `ValueError`.

## What the package does not do

The package opens no window and does not compile or run shaders. It draws
nothing on a GPU and loads no skybox images. `ShaderProgram` only keeps the
state a program would be given.

There is no command that plays the animation. To drive it, build a
`ShaderProgram`, a `Camera` and a `SphereManager`, then step `frames`
yourself.