"""Loading image files into 2D and cube map textures."""

from __future__ import annotations

from collections.abc import Sequence

GL_RED = 0x1903
GL_RGB = 0x1907
GL_RGBA = 0x1908

_PIXEL_LAYOUTS = {GL_RED: ("R", 1), GL_RGB: ("RGB", 3), GL_RGBA: ("RGBA", 4)}


def gl_format_for_channels(channels: int) -> int:
    """OpenGL pixel format for an image with the given channel count; RGB when unknown."""
    return {1: GL_RED, 3: GL_RGB, 4: GL_RGBA}.get(channels, GL_RGB)


def _load_pixels(filename: str, gl_format: int | None = None):
    """Decode an image top row first; returns (width, height, gl format, bytes)."""
    import pyglet

    image = pyglet.image.load(filename).get_image_data()
    if gl_format is None:
        gl_format = gl_format_for_channels(len(image.format))
    layout, channels = _PIXEL_LAYOUTS[gl_format]
    data = image.get_data(layout, -image.width * channels)
    return image.width, image.height, gl_format, bytes(data)


def load_cubemap(faces: Sequence[str]) -> int:
    """Create a cube map from six face images, +X, -X, +Y, -Y, +Z, -Z in that order."""
    from pyglet import gl

    texture = gl.GLuint(0)
    gl.glGenTextures(1, texture)
    gl.glBindTexture(gl.GL_TEXTURE_CUBE_MAP, texture.value)
    gl.glPixelStorei(gl.GL_UNPACK_ALIGNMENT, 1)
    for number, face in enumerate(faces):
        try:
            width, height, _, data = _load_pixels(face, GL_RGB)
        except Exception:
            print(f"Cubemap tex failed to load at path: {face}")
            continue
        gl.glTexImage2D(
            gl.GL_TEXTURE_CUBE_MAP_POSITIVE_X + number,
            0,
            gl.GL_RGB,
            width,
            height,
            0,
            gl.GL_RGB,
            gl.GL_UNSIGNED_BYTE,
            data,
        )
    gl.glTexParameteri(gl.GL_TEXTURE_CUBE_MAP, gl.GL_TEXTURE_MIN_FILTER, gl.GL_LINEAR)
    gl.glTexParameteri(gl.GL_TEXTURE_CUBE_MAP, gl.GL_TEXTURE_MAG_FILTER, gl.GL_LINEAR)
    gl.glTexParameteri(gl.GL_TEXTURE_CUBE_MAP, gl.GL_TEXTURE_WRAP_S, gl.GL_CLAMP_TO_EDGE)
    gl.glTexParameteri(gl.GL_TEXTURE_CUBE_MAP, gl.GL_TEXTURE_WRAP_T, gl.GL_CLAMP_TO_EDGE)
    gl.glTexParameteri(gl.GL_TEXTURE_CUBE_MAP, gl.GL_TEXTURE_WRAP_R, gl.GL_CLAMP_TO_EDGE)
    return texture.value


def load_texture(filename: str) -> int:
    """Create a mipmapped, repeating 2D texture from an image file."""
    from pyglet import gl

    texture = gl.GLuint(0)
    gl.glGenTextures(1, texture)
    try:
        width, height, gl_format, data = _load_pixels(filename)
    except Exception:
        print(f"Failed to load texture at path: {filename}")
        return texture.value
    gl.glBindTexture(gl.GL_TEXTURE_2D, texture.value)
    gl.glPixelStorei(gl.GL_UNPACK_ALIGNMENT, 1)
    gl.glTexImage2D(
        gl.GL_TEXTURE_2D, 0, gl_format, width, height, 0, gl_format, gl.GL_UNSIGNED_BYTE, data
    )
    gl.glGenerateMipmap(gl.GL_TEXTURE_2D)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_S, gl.GL_REPEAT)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_T, gl.GL_REPEAT)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MIN_FILTER, gl.GL_LINEAR_MIPMAP_LINEAR)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MAG_FILTER, gl.GL_LINEAR)
    return texture.value