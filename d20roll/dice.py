"""
Dice primitives for the 2d20 family of games.

Two kinds of dice exist. Action rolls use plain d20s: a uniform die showing
1 through 20. Damage and other "effect" rolls use combat dice: six-sided
dice showing 1, 2, some blanks (0) and one or two Effect symbols. An Effect
face is not a number; it triggers the specials (weapon qualities and the
like) that are active for the roll.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from d20roll.types import EffectFace, Face, Rng

EFFECT: EffectFace = "Effect"


@dataclass(frozen=True)
class Die:
    """An ordered, non-empty set of faces sampled uniformly at random."""

    faces: tuple[Face, ...]

    def __post_init__(self) -> None:
        if not self.faces:
            raise ValueError("a die needs at least one face")

    @classmethod
    def numbered(cls, sides: int) -> Die:
        """A standard 1..sides die."""
        if sides < 1:
            raise ValueError(f"a die needs at least one side, not {sides}")
        return cls(tuple(range(1, sides + 1)))

    def sample(self, rng: Rng | None = None) -> Face:
        """Draw one face. Falls back to the module-level generator when no
        random source is injected."""
        return (rng or random).choice(self.faces)

    def roll(self, count: int, rng: Rng | None = None) -> list[Face]:
        """Draw ``count`` independent faces. Non-positive counts roll nothing."""
        return [self.sample(rng) for _ in range(max(count, 0))]

    def __len__(self) -> int:
        return len(self.faces)


def is_effect(face: Face) -> bool:
    return face == EFFECT


def face_text(face: Face) -> str:
    """Faces render as their number or as the Effect symbol's name."""
    return str(face)


D20 = Die.numbered(20)

# The classic combat die: one Effect face.
COMBAT_DIE = Die((1, 2, 0, 0, 0, EFFECT))

# The later revision trades a blank for a second Effect face.
COMBAT_DIE_TWO_EFFECTS = Die((1, 2, 0, 0, EFFECT, EFFECT))

