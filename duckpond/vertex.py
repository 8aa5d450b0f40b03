"""Vertex layouts and meshes built from them."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

FLOAT_SIZE = 4


@dataclass(frozen=True)
class Attribute:
    """One float vector attribute of a vertex, such as a position or a normal."""

    name: str
    size: int

    def __post_init__(self) -> None:
        if not 1 <= self.size <= 4:
            raise ValueError(f"attribute {self.name!r} must have 1 to 4 components, got {self.size}")


@dataclass(frozen=True)
class VertexFormat:
    """An interleaved layout of float attributes; attribute locations follow their order."""

    name: str
    attributes: tuple[Attribute, ...]

    @property
    def components(self) -> int:
        """Number of floats in one vertex."""
        return sum(attribute.size for attribute in self.attributes)

    def stride(self) -> int:
        """Size of one vertex in bytes."""
        return self.components * FLOAT_SIZE

    def offsets(self) -> list[int]:
        """Byte offset of each attribute within a vertex."""
        result = []
        offset = 0
        for attribute in self.attributes:
            result.append(offset)
            offset += attribute.size * FLOAT_SIZE
        return result

    def pack(self, vertices: Iterable[Sequence[Sequence[float]]]) -> np.ndarray:
        """Interleave vertices into a float32 array of shape (count, components).

        Each vertex is a sequence holding one value sequence per attribute.
        """
        floats: list[float] = []
        count = 0
        for number, vertex in enumerate(vertices):
            if len(vertex) != len(self.attributes):
                raise ValueError(
                    f"vertex {number} has {len(vertex)} attributes, expected {len(self.attributes)}"
                )
            for attribute, value in zip(self.attributes, vertex):
                values = [float(v) for v in value]
                if len(values) != attribute.size:
                    raise ValueError(
                        f"vertex {number}: attribute {attribute.name!r} has {len(values)} "
                        f"components, expected {attribute.size}"
                    )
                floats.extend(values)
            count += 1
        return np.asarray(floats, dtype=np.float32).reshape(count, self.components)


POSITION = VertexFormat("position", (Attribute("position", 4),))
POSITION_NORMAL = VertexFormat(
    "position_normal", (Attribute("position", 4), Attribute("normal", 3))
)
POSITION_COLOR = VertexFormat(
    "position_color", (Attribute("position", 4), Attribute("color", 4))
)
POSITION_NORMAL_TEXTURE = VertexFormat(
    "position_normal_texture",
    (Attribute("position", 4), Attribute("normal", 3), Attribute("texture_coords", 2)),
)
POSITION_NORMAL_CUBE_TEXTURE = VertexFormat(
    "position_normal_cube_texture",
    (Attribute("position", 4), Attribute("normal", 3), Attribute("texture_coords", 3)),
)
POSITION_TEXTURE = VertexFormat(
    "position_texture", (Attribute("position", 4), Attribute("texture_coords", 2))
)


@dataclass
class Mesh:
    """Vertices in a given format and the triangle indices into them."""

    vertex_format: VertexFormat
    vertices: list[Any] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)