"""Memory layout of the data that is sent to shader storage buffers."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Iterable, Sequence

from .errors import RayMarcherError


class FieldType(Enum):
    """Types a shader storage struct member may have."""

    INT = "int"
    FLOAT = "float"
    VEC2 = "vec2"
    VEC3 = "vec3"
    VEC4 = "vec4"
    ANY = "any"


_PADDING = {
    FieldType.INT: 4,
    FieldType.FLOAT: 4,
    FieldType.VEC2: 8,
    FieldType.VEC3: 16,
    FieldType.VEC4: 16,
    FieldType.ANY: 0,
}

_FORMATS = {
    FieldType.INT: "<i",
    FieldType.FLOAT: "<f",
    FieldType.VEC2: "<2f",
    FieldType.VEC3: "<3f",
    FieldType.VEC4: "<4f",
}


def type_padding(kind: FieldType) -> int:
    """Return the alignment in bytes of a struct member of type ``kind``."""
    try:
        return _PADDING[kind]
    except (KeyError, TypeError):
        raise TypeError(f"Struct member type padding not implemented: {kind!r}") from None


def max_padding(kinds: Iterable[FieldType]) -> int:
    """Return the largest alignment among ``kinds``."""
    paddings = [type_padding(kind) for kind in kinds]
    if not paddings:
        raise ValueError("A struct needs at least one member to have a padding.")
    return max(paddings)


_SPHERE_STRUCT = struct.Struct("<3ff3fi")


@dataclass
class Sphere:
    """One sphere of the scene as the shader sees it."""

    origin: Sequence[float] = (0.0, 0.0, -10.0)
    radius: float = 1.0
    color: Sequence[float] = (1.0, 1.0, 1.0)
    should_render: int = 0

    FIELDS: ClassVar[tuple[FieldType, ...]] = (
        FieldType.VEC3,
        FieldType.FLOAT,
        FieldType.VEC3,
        FieldType.INT,
    )
    padding: ClassVar[int] = max_padding(FIELDS)
    size: ClassVar[int] = _SPHERE_STRUCT.size

    def to_bytes(self) -> bytes:
        """Encode the sphere in the layout the shader reads."""
        return _SPHERE_STRUCT.pack(
            *(float(v) for v in self.origin),
            float(self.radius),
            *(float(v) for v in self.color),
            int(self.should_render),
        )


def _is_padded_struct(element: Any) -> bool:
    return isinstance(getattr(element, "padding", None), int) and callable(
        getattr(element, "to_bytes", None)
    )


@dataclass
class SSBO:
    """A shader storage buffer bound to ``binding`` and backed by ``data``."""

    binding: int
    data: list | None
    element: Any = Sphere
    has_size_as_uniform: bool = True
    needs_update: bool = True
    buffer_id: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.element, FieldType) and not _is_padded_struct(self.element):
            raise TypeError("SSBO type must be a builtin field type or a padded struct.")

    def alignment(self) -> int:
        """Return the byte offset reserved for the element count header."""
        if isinstance(self.element, FieldType):
            return type_padding(self.element)
        return self.element.padding

    def _encode(self, item: Any) -> bytes:
        if not isinstance(self.element, FieldType):
            return item.to_bytes()
        if self.element is FieldType.ANY:
            raise TypeError("Values of an untyped SSBO cannot be encoded.")
        fmt = _FORMATS[self.element]
        if self.element in (FieldType.INT, FieldType.FLOAT):
            return struct.pack(fmt, item)
        return struct.pack(fmt, *(float(v) for v in item))

    def pack(self) -> bytes:
        """Return the buffer contents: optional count header, then the elements."""
        if self.data is None:
            raise RayMarcherError(f"Cannot modify SSBO as it is empty. Binding '{self.binding}'")
        body = b"".join(self._encode(item) for item in self.data)
        if not self.has_size_as_uniform:
            return body
        offset = self.alignment()
        header = struct.pack("<i", len(self.data)).ljust(offset, b"\0")
        return header + body