"""Thin object wrappers over OpenGL buffers, vertex arrays, renderers and shader programs."""

from __future__ import annotations

import warnings
from collections.abc import Mapping, Sequence
from enum import IntEnum
from typing import TYPE_CHECKING

import numpy as np

from duckpond.shaders import ShaderType
from duckpond.vertex import Mesh, VertexFormat

if TYPE_CHECKING:
    from duckpond.shaders import ShaderBuilder


def _gl():
    from pyglet import gl

    return gl


class GLError(RuntimeError):
    """An error flag reported by OpenGL after a call."""

    def __init__(self, code: int, description: str) -> None:
        super().__init__(f"[OpenGL Error] (0x{code:x}): {description}")
        self.code = code
        self.description = description


def _clear_errors() -> None:
    gl = _gl()
    while gl.glGetError() != gl.GL_NO_ERROR:
        pass


def check_errors(description: str) -> None:
    """Raise GLError if OpenGL has an error flag set."""
    gl = _gl()
    code = gl.glGetError()
    if code != gl.GL_NO_ERROR:
        raise GLError(int(code), description)


def _call(description: str, function, *args):
    _clear_errors()
    result = function(*args)
    check_errors(description)
    return result


class RenderingMode(IntEnum):
    """Primitive type used when drawing."""

    LINES = 0x0001
    TRIANGLES = 0x0004
    PATCHES = 0x000E


def _gen_buffer() -> int:
    gl = _gl()
    handle = gl.GLuint(0)
    _call("glGenBuffers", gl.glGenBuffers, 1, handle)
    return handle.value


def _upload(target: int, data: np.ndarray) -> None:
    gl = _gl()
    _call(
        "glBufferData",
        gl.glBufferData,
        target,
        data.nbytes,
        data.tobytes(),
        gl.GL_DYNAMIC_DRAW,
    )


class IndexBuffer:
    """An element array buffer of unsigned int indices."""

    def __init__(self, indices: Sequence[int] | None = None) -> None:
        self.id = _gen_buffer()
        self.length = 0
        if indices is not None:
            self.assign(indices)

    def assign(self, indices: Sequence[int]) -> None:
        gl = _gl()
        data = np.ascontiguousarray(indices, dtype=np.uint32)
        self.length = len(data)
        self.bind()
        _upload(gl.GL_ELEMENT_ARRAY_BUFFER, data)
        self.unbind()

    def bind(self) -> None:
        gl = _gl()
        _call("glBindBuffer", gl.glBindBuffer, gl.GL_ELEMENT_ARRAY_BUFFER, self.id)

    def unbind(self) -> None:
        gl = _gl()
        _call("glBindBuffer", gl.glBindBuffer, gl.GL_ELEMENT_ARRAY_BUFFER, 0)

    def delete(self) -> None:
        gl = _gl()
        gl.glDeleteBuffers(1, gl.GLuint(self.id))


class VertexBuffer:
    """An array buffer holding interleaved vertices of one format."""

    def __init__(self, vertex_format: VertexFormat, vertices=None) -> None:
        self.vertex_format = vertex_format
        self.id = _gen_buffer()
        self.length = 0
        if vertices is not None:
            self.assign(vertices)

    def assign(self, vertices) -> None:
        gl = _gl()
        data = np.ascontiguousarray(self.vertex_format.pack(vertices), dtype=np.float32)
        self.length = len(data)
        self.bind()
        _upload(gl.GL_ARRAY_BUFFER, data)
        self.unbind()

    def bind(self) -> None:
        gl = _gl()
        _call("glBindBuffer", gl.glBindBuffer, gl.GL_ARRAY_BUFFER, self.id)

    def unbind(self) -> None:
        gl = _gl()
        _call("glBindBuffer", gl.glBindBuffer, gl.GL_ARRAY_BUFFER, 0)

    def delete(self) -> None:
        gl = _gl()
        gl.glDeleteBuffers(1, gl.GLuint(self.id))


class VertexArray:
    """A vertex array object recording the attribute layout of a vertex buffer."""

    def __init__(
        self, vertex_format: VertexFormat, vbo: VertexBuffer, ibo: IndexBuffer | None = None
    ) -> None:
        gl = _gl()
        handle = gl.GLuint(0)
        _call("glGenVertexArrays", gl.glGenVertexArrays, 1, handle)
        self.id = handle.value
        self.bind()
        vbo.bind()
        if ibo is not None:
            ibo.bind()
        stride = vertex_format.stride()
        for location, (attribute, offset) in enumerate(
            zip(vertex_format.attributes, vertex_format.offsets())
        ):
            _call(
                "glVertexAttribPointer",
                gl.glVertexAttribPointer,
                location,
                attribute.size,
                gl.GL_FLOAT,
                gl.GL_FALSE,
                stride,
                offset,
            )
            _call("glEnableVertexAttribArray", gl.glEnableVertexAttribArray, location)
        self.unbind()
        vbo.unbind()
        if ibo is not None:
            ibo.unbind()

    def bind(self) -> None:
        gl = _gl()
        _call("glBindVertexArray", gl.glBindVertexArray, self.id)

    def unbind(self) -> None:
        gl = _gl()
        _call("glBindVertexArray", gl.glBindVertexArray, 0)

    def delete(self) -> None:
        gl = _gl()
        gl.glDeleteVertexArrays(1, gl.GLuint(self.id))


class Renderer:
    """Vertex and index buffers with their vertex array, drawn together."""

    def __init__(self, vertex_format: VertexFormat) -> None:
        self.vertex_format = vertex_format
        self.vbo = VertexBuffer(vertex_format)
        self.ibo = IndexBuffer()
        self.vao = VertexArray(vertex_format, self.vbo, self.ibo)

    def assign_mesh(self, mesh: Mesh) -> None:
        if mesh.vertex_format != self.vertex_format:
            raise ValueError(
                f"mesh format {mesh.vertex_format.name!r} does not match "
                f"renderer format {self.vertex_format.name!r}"
            )
        self.vbo.assign(mesh.vertices)
        self.ibo.assign(mesh.indices)

    def render(self, mode: RenderingMode = RenderingMode.TRIANGLES) -> None:
        gl = _gl()
        self.vao.bind()
        if self.ibo.length > 0:
            _call(
                "glDrawElements",
                gl.glDrawElements,
                int(mode),
                self.ibo.length,
                gl.GL_UNSIGNED_INT,
                None,
            )
        else:
            _call("glDrawArrays", gl.glDrawArrays, int(mode), 0, self.vbo.length)
        self.vao.unbind()


_STAGE_NAMES = {
    ShaderType.VERTEX: "vertex",
    ShaderType.FRAGMENT: "fragment",
    ShaderType.GEOMETRY: "geometry",
    ShaderType.TESSELATION_CONTROL: "tesscontrol",
    ShaderType.TESSELATION_EVALUATION: "tessevaluation",
}


class Shader:
    """A linked shader program whose uniforms are set by name."""

    def __init__(self, sources: Mapping[ShaderType, str], patch_size: int = 4) -> None:
        self.patch_size = patch_size
        self.program = self._create(sources)
        self.id = self.program.id

    @classmethod
    def from_builder(cls, builder: ShaderBuilder) -> Shader:
        return cls(builder.sources, builder.patch_size)

    @staticmethod
    def _create(sources: Mapping[ShaderType, str]):
        from pyglet.graphics.shader import Shader as ShaderStage
        from pyglet.graphics.shader import ShaderException, ShaderProgram

        gl = _gl()
        try:
            stages = [
                ShaderStage(source, _STAGE_NAMES[shader_type])
                for shader_type, source in sources.items()
            ]
            program = ShaderProgram(*stages)
        except ShaderException as error:
            raise RuntimeError(f"failed to build shader program: {error}") from error
        _call("glValidateProgram", gl.glValidateProgram, program.id)
        return program

    def bind(self) -> None:
        gl = _gl()
        self.program.use()
        _call("glPatchParameteri", gl.glPatchParameteri, gl.GL_PATCH_VERTICES, self.patch_size)

    def unbind(self) -> None:
        self.program.stop()

    def delete(self) -> None:
        self.program.delete()

    def _set(self, name: str, value) -> None:
        from pyglet.graphics.shader import ShaderException

        try:
            self.program[name] = value
        except (ShaderException, KeyError):
            warnings.warn(f"uniform {name!r} doesn't exist", stacklevel=3)

    def set_mat4(self, name: str, matrix) -> None:
        # Matrices are row-major; OpenGL expects column-major order.
        values = np.asarray(matrix, dtype=np.float32).reshape(4, 4).T.flatten()
        self._set(name, tuple(float(v) for v in values))

    def set_vec4(self, name: str, vector) -> None:
        x, y, z, w = (float(v) for v in vector)
        self._set(name, (x, y, z, w))

    def set_vec3(self, name: str, vector) -> None:
        x, y, z = (float(v) for v in vector)
        self._set(name, (x, y, z))

    def set_vec2(self, name: str, vector) -> None:
        x, y = (float(v) for v in vector)
        self._set(name, (x, y))

    def set_int(self, name: str, value: int) -> None:
        self._set(name, int(value))