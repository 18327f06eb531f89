import numpy as np
import pytest

from raymarcher.callbacks import Action, CallbacksManager, InputState
from raymarcher.camera import Camera, look_at
from raymarcher.errors import RayMarcherError
from raymarcher.options import EngineOptions, MouseButton
from raymarcher.shader import ShaderProgram


@pytest.fixture
def rig():
    shader = ShaderProgram("vertex", "fragment")
    callbacks = CallbacksManager()
    state = InputState()
    options = EngineOptions()
    camera = Camera(shader, callbacks, state, options)
    return camera, shader, callbacks, state, options


def test_construction_declares_uniforms(rig):
    camera, shader, *_ = rig
    assert shader.uniform("FOV") == 90.0
    assert shader.uniform("cameraPosition") == (0.0, 0.0, 0.0)
    assert shader.uniform("cameraDirection") == (0.0, 0.0, 1.0)
    assert shader.uniform("cameraRight") == (1.0, 0.0, 0.0)


def test_second_camera_on_same_shader_fails(rig):
    _, shader, *_ = rig
    with pytest.raises(RayMarcherError):
        Camera(shader)


def test_update_points_away_from_scene_center(rig):
    camera, shader, *_ = rig
    camera.position = np.array([3.0, 0.0, -10.0])
    camera.update()
    assert np.allclose(shader.uniform("cameraDirection"), (1.0, 0.0, 0.0))
    assert np.isclose(np.linalg.norm(shader.uniform("cameraRight")), 1.0)
    assert np.isclose(np.dot(shader.uniform("cameraRight"), shader.uniform("cameraDirection")), 0.0)


def test_inverse_view_maps_origin_to_position(rig):
    camera, shader, *_ = rig
    camera.position = np.array([1.0, 2.0, 3.0])
    camera.update()
    origin = camera.inverse_view_matrix @ np.array([0.0, 0.0, 0.0, 1.0])
    assert np.allclose(origin[:3], camera.position)
    assert np.allclose(shader.uniform("inverseViewMatrix"), camera.inverse_view_matrix)


def test_look_at_invariants():
    eye = np.array([1.0, 2.0, 3.0])
    forward = np.array([0.0, 0.0, -1.0])
    view = look_at(eye, eye + forward, [0.0, 1.0, 0.0])
    assert np.allclose(view @ np.append(eye, 1.0), [0.0, 0.0, 0.0, 1.0])
    rot = view[:3, :3]
    assert np.allclose(rot @ rot.T, np.identity(3))
    assert np.allclose(rot @ forward, [0.0, 0.0, -1.0])


def test_scroll_zooms_along_front(rig):
    camera, _, callbacks, _, options = rig
    before = camera.front
    callbacks.scroll_event(0.0, 2.0)
    moved = camera.position
    assert np.isclose(np.linalg.norm(moved), 2.0 * options.camera_zoom_speed)
    assert np.allclose(moved / np.linalg.norm(moved), -before)


def test_pan_press_and_release(rig):
    camera, _, callbacks, state, _ = rig
    callbacks.mouse_button_event(MouseButton.MIDDLE, Action.PRESS)
    assert state.is_down(MouseButton.MIDDLE)
    assert camera.cursor_captured is True
    callbacks.mouse_button_event(MouseButton.MIDDLE, Action.RELEASE)
    assert not state.is_down(MouseButton.MIDDLE)
    assert camera.cursor_captured is False


def test_pan_moves_sideways(rig):
    camera, _, callbacks, state, options = rig
    front = camera.front
    callbacks.mouse_button_event(MouseButton.MIDDLE, Action.PRESS)
    state.mouse_position = (10.0, 0.0)
    camera.pan(np.asarray(state.mouse_position))
    movement = camera.position
    assert np.isclose(np.linalg.norm(movement), 10.0 * options.camera_pan_speed)
    assert np.isclose(np.dot(movement, front), 0.0)


def test_rotation_ignored_while_panning(rig):
    camera, _, callbacks, state, _ = rig
    callbacks.mouse_button_event(MouseButton.MIDDLE, Action.PRESS)
    callbacks.mouse_button_event(MouseButton.RIGHT, Action.PRESS)
    assert not state.is_down(MouseButton.RIGHT)


def test_rotate_keeps_front_unit_length(rig):
    camera, *_ = rig
    before = camera.front
    camera.rotate((5.0, -3.0))
    after = camera.front
    assert np.isclose(np.linalg.norm(after), 1.0)
    assert not np.allclose(after, before)


def test_binding_follows_option_change(rig):
    _, _, callbacks, state, options = rig
    options.camera_pan_button = MouseButton.LEFT
    callbacks.mouse_button_event(MouseButton.LEFT, Action.PRESS)
    assert state.is_down(MouseButton.LEFT)


def test_idle_update_tracks_cursor(rig):
    camera, _, callbacks, state, _ = rig
    state.mouse_position = (50.0, 50.0)
    camera.update()
    start = camera.position.copy()
    callbacks.mouse_button_event(MouseButton.MIDDLE, Action.PRESS)
    assert np.allclose(camera.position, start)