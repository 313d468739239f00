"""
Domain-specific type aliases for the d20roll dice engine.

These aren't used for runtime type checking; they exist to make function
signatures self-documenting. When you see a parameter typed as Face instead
of ``int | str``, you immediately know it's something a die can show, not an
arbitrary value.
"""

from typing import Callable, Literal, Protocol, Sequence, TypeAlias, TypeVar

T = TypeVar("T")

# The symbolic face of a combat die. It contributes no fixed number;
# instead it triggers the active specials of the roll.
EffectFace: TypeAlias = Literal["Effect"]

# A single die face: a plain number or the Effect symbol.
Face: TypeAlias = int | EffectFace

# Maps a special's level to its secondary numeric contribution, or None
# when the special contributes nothing for that level.
NumericOf: TypeAlias = Callable[[int], int | None]


class Rng(Protocol):
    """The part of ``random.Random`` the dice need: pick one of N items.

    Seeded ``random.Random`` instances satisfy this, as do scripted fakes
    in the tests.
    """

    def choice(self, seq: Sequence[T]) -> T: ...
