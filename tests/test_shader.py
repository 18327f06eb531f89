import struct

import numpy as np
import pytest

from raymarcher.errors import RayMarcherError
from raymarcher.layout import SSBO, FieldType, Sphere
from raymarcher.shader import ShaderProgram


@pytest.fixture
def program():
    return ShaderProgram("void main() {}", "void main() {}")


def test_quad_indices_cover_two_triangles(program):
    assert len(program.INDICES) == 6
    assert set(program.INDICES) == set(range(len(program.VERTICES)))


def test_add_and_read_scalar_uniforms(program):
    program.add_uniform("time", 0.5)
    program.add_uniform("count", 3)
    program.add_uniform("flag", True)
    assert program.uniform("time") == 0.5
    assert program.uniform("count") == 3
    assert program.uniform("flag") is True


def test_vector_uniform_stored_as_floats(program):
    program.add_uniform("resolution", np.array([1920, 1080]))
    assert program.uniform("resolution") == (1920.0, 1080.0)
    program.add_uniform("pos", [1, 2, 3])
    assert program.uniform("pos") == (1.0, 2.0, 3.0)


def test_matrix_uniform(program):
    matrix = np.eye(4)
    program.add_uniform("view", matrix)
    matrix[0, 0] = 5.0
    assert np.array_equal(program.uniform("view"), np.eye(4))


def test_adding_uniform_twice_fails(program):
    program.add_uniform("time", 0.0)
    with pytest.raises(RayMarcherError):
        program.add_uniform("time", 1.0)
    assert program.uniform("time") == 0.0


def test_set_uniform_changes_value(program):
    program.add_uniform("frames", 0.0)
    program.set_uniform("frames", 12.0)
    assert program.uniform("frames") == 12.0


def test_set_unknown_uniform_fails(program):
    with pytest.raises(RayMarcherError, match="not already initialized"):
        program.set_uniform("missing", 1.0)


def test_unsupported_uniform_type_fails(program):
    with pytest.raises(RayMarcherError, match="Type not supported"):
        program.add_uniform("name", "text")
    # The name is registered even though its value was rejected.
    with pytest.raises(RayMarcherError, match="Type not supported"):
        program.set_uniform("name", [1.0] * 5)


def test_unknown_uniform_lookup_raises(program):
    with pytest.raises(KeyError):
        program.uniform("nothing")


def test_add_ssbo_uploads_packed_data(program):
    spheres = [Sphere(), Sphere(radius=2.0)]
    ssbo = SSBO(0, spheres)
    program.add_ssbo(ssbo)
    data = program.buffer(0)
    assert data == ssbo.pack()
    assert struct.unpack_from("<i", data)[0] == len(spheres)
    assert len(data) == ssbo.alignment() + len(spheres) * Sphere.size


def test_add_ssbo_assigns_distinct_buffer_ids(program):
    first = SSBO(0, [Sphere()])
    second = SSBO(1, [1.0, 2.0], element=FieldType.FLOAT)
    program.add_ssbo(first)
    program.add_ssbo(second)
    assert first.buffer_id != second.buffer_id
    assert program.buffer(1) == second.pack()


def test_add_ssbo_out_of_order_fails(program):
    with pytest.raises(RayMarcherError, match="non-increasing"):
        program.add_ssbo(SSBO(1, [Sphere()]))


def test_add_ssbo_without_data_fails(program):
    with pytest.raises(RayMarcherError, match="empty"):
        program.add_ssbo(SSBO(0, None))


def test_set_ssbo_reuploads_changed_data(program):
    spheres = [Sphere()]
    ssbo = SSBO(0, spheres)
    program.add_ssbo(ssbo)
    spheres[0].radius = 3.0
    spheres.append(Sphere())
    program.set_ssbo(ssbo)
    assert program.buffer(0) == ssbo.pack()
    assert struct.unpack_from("<i", program.buffer(0))[0] == len(spheres)
    assert ssbo.needs_update is False


def test_set_ssbo_not_added_fails(program):
    with pytest.raises(RayMarcherError, match="non-initialized"):
        program.set_ssbo(SSBO(0, [Sphere()]))


def test_unknown_buffer_raises(program):
    with pytest.raises(KeyError):
        program.buffer(4)