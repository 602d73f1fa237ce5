"""Level pixel materials."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag


class MaterialFlag(IntFlag):
    DIRT = 1 << 0
    DIRT2 = 1 << 1
    ROCK = 1 << 2
    BACKGROUND = 1 << 3
    SEE_SHADOW = 1 << 4
    WORM = 1 << 5


@dataclass(frozen=True)
class Material:
    """The set of material flags attached to a palette index."""

    flags: int = 0

    def _has(self, mask: int) -> bool:
        return (self.flags & mask) != 0

    def dirt(self) -> bool:
        return self._has(MaterialFlag.DIRT)

    def dirt2(self) -> bool:
        return self._has(MaterialFlag.DIRT2)

    def rock(self) -> bool:
        return self._has(MaterialFlag.ROCK)

    def background(self) -> bool:
        return self._has(MaterialFlag.BACKGROUND)

    def see_shadow(self) -> bool:
        return self._has(MaterialFlag.SEE_SHADOW)

    def dirt_rock(self) -> bool:
        return self._has(MaterialFlag.DIRT | MaterialFlag.DIRT2 | MaterialFlag.ROCK)

    def any_dirt(self) -> bool:
        return self._has(MaterialFlag.DIRT | MaterialFlag.DIRT2)

    def dirt_back(self) -> bool:
        return self._has(MaterialFlag.DIRT | MaterialFlag.DIRT2 | MaterialFlag.BACKGROUND)

    def worm(self) -> bool:
        return self._has(MaterialFlag.WORM)