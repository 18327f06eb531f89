from raymarcher.options import EngineOptions, Key, MouseButton


def test_default_buttons():
    options = EngineOptions()
    assert options.close_window_button == Key.ESCAPE
    assert options.camera_pan_button == MouseButton.MIDDLE
    assert options.camera_rotation_button == MouseButton.RIGHT
    assert options.select_object_in_scene == MouseButton.LEFT


def test_default_camera_settings():
    options = EngineOptions()
    assert options.camera_zoom_speed == 1.0
    assert options.camera_pan_speed == 0.01
    assert options.camera_rotation_speed == 0.01
    assert options.camera_fov == 90.0


def test_instances_are_independent():
    first = EngineOptions()
    second = EngineOptions(camera_fov=60.0)
    first.camera_pan_button = MouseButton.LEFT
    assert second.camera_pan_button == MouseButton.MIDDLE
    assert first.camera_fov == 90.0
    assert second.camera_fov == 60.0


def test_default_mouse_bindings_are_distinct():
    options = EngineOptions()
    bindings = {
        options.camera_pan_button,
        options.camera_rotation_button,
        options.select_object_in_scene,
    }
    assert len(bindings) == 3