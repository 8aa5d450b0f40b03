"""Shader stages and a builder that collects their source code from files."""

from __future__ import annotations

import os
import warnings
from enum import Enum


class ShaderType(Enum):
    """A programmable pipeline stage."""

    VERTEX = 1
    FRAGMENT = 2
    GEOMETRY = 3
    TESSELATION_CONTROL = 4
    TESSELATION_EVALUATION = 5

    @property
    def file_extension(self) -> str:
        return _EXTENSIONS[self]

    @property
    def gl_shader_id(self) -> int:
        """The OpenGL enum naming this stage."""
        return _GL_IDS[self]


_EXTENSIONS = {
    ShaderType.VERTEX: ".vert",
    ShaderType.FRAGMENT: ".frag",
    ShaderType.GEOMETRY: ".geom",
    ShaderType.TESSELATION_CONTROL: ".tesc",
    ShaderType.TESSELATION_EVALUATION: ".tese",
}

_GL_IDS = {
    ShaderType.VERTEX: 0x8B31,
    ShaderType.FRAGMENT: 0x8B30,
    ShaderType.GEOMETRY: 0x8DD9,
    ShaderType.TESSELATION_CONTROL: 0x8E88,
    ShaderType.TESSELATION_EVALUATION: 0x8E87,
}


def read_shader_code(path: str | os.PathLike[str]) -> str:
    """Read a shader source file, ending every line with a newline."""
    with open(path, encoding="utf-8") as stream:
        return "".join(line.rstrip("\n") + "\n" for line in stream)


class ShaderBuilder:
    """Collects stage sources from a resource directory for one shader program."""

    def __init__(self, resource_directory: str) -> None:
        self.resource_directory = os.fspath(resource_directory)
        self.sources: dict[ShaderType, str] = {}
        self.patch_size = 4

    def add_shader(self, shader_type: ShaderType, filename: str) -> ShaderBuilder:
        """Load the stage's source from the directory, file name plus stage extension."""
        if shader_type in self.sources:
            warnings.warn(f"shader of type {shader_type.name} already added", stacklevel=2)
        path = self.resource_directory + filename + shader_type.file_extension
        self.sources[shader_type] = read_shader_code(path)
        return self

    def change_patch_size(self, patch_size: int) -> ShaderBuilder:
        self.patch_size = patch_size
        return self