"""Vectors, quaternions and costumes as carried in packets."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar

from .errors import NotEnoughDataError

_VEC = struct.Struct("<3f")
_QUAT = struct.Struct("<4f")


@dataclass(frozen=True)
class Vector3:
    """A three component vector of 32-bit floats."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    SIZE: ClassVar[int] = _VEC.size

    def to_bytes(self) -> bytes:
        """Encode as three little-endian floats."""
        return _VEC.pack(self.x, self.y, self.z)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Vector3":
        """Decode from the first 12 bytes of ``data``."""
        if len(data) < _VEC.size:
            raise NotEnoughDataError()
        return cls(*_VEC.unpack_from(data))


@dataclass(frozen=True)
class Quaternion:
    """A rotation; on the wire the order is i, j, k, w."""

    w: float = 0.0
    i: float = 0.0
    j: float = 0.0
    k: float = 0.0

    SIZE: ClassVar[int] = _QUAT.size

    def to_bytes(self) -> bytes:
        """Encode as four little-endian floats, scalar part last."""
        return _QUAT.pack(self.i, self.j, self.k, self.w)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Quaternion":
        """Decode from the first 16 bytes of ``data``."""
        if len(data) < _QUAT.size:
            raise NotEnoughDataError()
        i, j, k, w = _QUAT.unpack_from(data)
        return cls(w=w, i=i, j=j, k=k)


@dataclass(frozen=True)
class Costume:
    """The body and cap a player is wearing."""

    body_name: str = "Mario"
    cap_name: str = "Mario"