"""Game modes as encoded in the upper nibble of tag packets."""

from __future__ import annotations

import enum

from .errors import EncodingError


class GameMode(enum.IntEnum):
    """A game mode; the wire value 15 means no mode (-1)."""

    LEGACY = 0
    HIDE_AND_SEEK = 1
    SARDINES = 2
    FREEZE_TAG = 3
    UNKNOWN04 = 4
    UNKNOWN05 = 5
    UNKNOWN06 = 6
    UNKNOWN07 = 7
    UNKNOWN08 = 8
    UNKNOWN09 = 9
    UNKNOWN10 = 10
    UNKNOWN11 = 11
    UNKNOWN12 = 12
    UNKNOWN13 = 13
    RESERVED = 14
    NONE = 15

    @classmethod
    def from_u8(cls, value: int) -> "GameMode":
        """Map a nibble value to a mode; anything outside 0..14 is NONE."""
        if 0 <= value <= 14:
            return cls(value)
        return cls.NONE

    @classmethod
    def from_i8(cls, value: int) -> "GameMode":
        """Map a signed value, using only its low nibble."""
        return cls.from_u8(value & 0x0F)

    def to_i8(self) -> int:
        """The signed form, in which NONE is -1."""
        return (self.value + 1) % 16 - 1

    @classmethod
    def parse(cls, text: str) -> "GameMode":
        """Parse a mode from its number or its name."""
        mode = _BY_TEXT.get(text)
        if mode is None:
            raise EncodingError(f"Unknown game mode: {text!r}")
        return mode

    def __str__(self) -> str:
        return _DISPLAY[self]


_DISPLAY = {
    GameMode.LEGACY: "Legacy",
    GameMode.HIDE_AND_SEEK: "HideAndSeek",
    GameMode.SARDINES: "Sardines",
    GameMode.FREEZE_TAG: "FreezeTag",
    **{GameMode(n): f"Unknown{n:02d}" for n in range(4, 14)},
    GameMode.RESERVED: "Reserved",
    GameMode.NONE: "None",
}

_BY_TEXT = {
    "-1": GameMode.NONE,
    "None": GameMode.NONE,
    "Legacy": GameMode.LEGACY,
    "HideAndSeek": GameMode.HIDE_AND_SEEK,
    "Sardines": GameMode.SARDINES,
    "FreezeTag": GameMode.FREEZE_TAG,
    **{str(n): GameMode(n) for n in range(0, 15)},
}