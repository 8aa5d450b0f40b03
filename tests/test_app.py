import os

from duckpond.app import cubemap_faces


def test_faces_in_cube_map_order():
    names = [os.path.basename(path) for path in cubemap_faces("res")]
    assert names == ["posx.jpg", "negx.jpg", "posy.jpg", "negy.jpg", "posz.jpg", "negz.jpg"]


def test_faces_live_under_resource_dir():
    paths = cubemap_faces("somewhere")
    assert len(paths) == 6
    for path in paths:
        assert path.startswith(os.path.join("somewhere", "textures", "cubeTextures"))


def test_faces_are_distinct():
    assert len(set(cubemap_faces("r"))) == 6