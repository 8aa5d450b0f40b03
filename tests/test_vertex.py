import numpy as np
import pytest

from duckpond.vertex import (
    POSITION,
    POSITION_NORMAL_TEXTURE,
    POSITION_TEXTURE,
    Attribute,
    Mesh,
    VertexFormat,
)


def test_stride_of_position_normal_texture():
    assert POSITION_NORMAL_TEXTURE.stride() == 36


def test_offsets_of_position_normal_texture():
    assert POSITION_NORMAL_TEXTURE.offsets() == [0, 16, 28]


@pytest.mark.parametrize("fmt", [POSITION, POSITION_TEXTURE, POSITION_NORMAL_TEXTURE])
def test_offsets_end_at_stride(fmt):
    offsets = fmt.offsets()
    assert offsets[0] == 0
    assert offsets == sorted(offsets)
    last = fmt.attributes[-1]
    assert offsets[-1] + last.size * 4 == fmt.stride()


def test_pack_round_trip():
    vertices = [
        ((-1.0, 0.0, -1.0, 1.0), (0.0, 0.0)),
        ((1.0, 0.0, 1.0, 1.0), (1.0, 1.0)),
    ]
    packed = POSITION_TEXTURE.pack(vertices)
    assert packed.dtype == np.float32
    assert packed.shape == (2, POSITION_TEXTURE.components)
    for row, (position, uv) in zip(packed, vertices):
        assert tuple(row[:4]) == position
        assert tuple(row[4:]) == uv


def test_pack_empty():
    packed = POSITION.pack([])
    assert packed.shape == (0, POSITION.components)


def test_pack_rejects_wrong_component_count():
    with pytest.raises(ValueError):
        POSITION_TEXTURE.pack([((0.0, 0.0, 0.0), (0.0, 0.0))])


def test_pack_rejects_missing_attribute():
    with pytest.raises(ValueError):
        POSITION_TEXTURE.pack([((0.0, 0.0, 0.0, 1.0),)])


def test_attribute_size_validated():
    with pytest.raises(ValueError):
        Attribute("bad", 5)


def test_custom_format_stride_matches_bytes():
    fmt = VertexFormat("pair", (Attribute("a", 2), Attribute("b", 1)))
    packed = fmt.pack([((1.0, 2.0), (3.0,))])
    assert packed.nbytes == fmt.stride()


def test_mesh_defaults_are_independent():
    first = Mesh(POSITION)
    second = Mesh(POSITION)
    first.indices.append(7)
    assert second.indices == []
    assert first.vertex_format is POSITION