"""
Specials: the named modifiers that ride along with a roll.

A special is a weapon quality, a talent effect, a complication tally:
anything with a name and a level that the dice engine has to carry through
a roll and report back. Three things decide how a special behaves:

- ``stacks``: whether repeated occurrences accumulate. Two Vicious(s1)
  specials merge into Vicious(s2); two non-stacking Piercing specials merge
  into the first one seen.
- ``numeric_of``: an optional pure function from the level to a secondary
  numeric contribution. This is what an Effect face on a combat die adds to
  the total: Vicious with ``Multiplier(1)`` adds its level per Effect face.
- ``bounds``: optional minimum/maximum levels. Bounded specials are
  "qualities"; a quality with ``is_template`` set is a generator that
  :meth:`Special.instantiate` turns into concrete qualities.

All of these live on one frozen dataclass rather than a class hierarchy, so
merge and stacking logic can stay in one place (see :mod:`d20roll.merge`).
"""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from functools import total_ordering

from d20roll.types import NumericOf

# A letter-led word, optionally hyphenated: Vicious, Close-Quarters, Area2.
NAME_PATTERN = r"[^\W\d_][^\W_]*(?:-[^\W_]+)*"
NAME_RE = re.compile(NAME_PATTERN)

# Level of a special written without an explicit value.
DEFAULT_VALUE = 1

COMPLICATION = "Complication"


class InvalidNameError(ValueError):
    """A special's name does not match the name grammar."""


class LevelError(ValueError):
    """A quality level falls outside its bounds."""


def valid_name(name: str | None) -> bool:
    return bool(name) and NAME_RE.fullmatch(name) is not None


@dataclass(frozen=True)
class FixedValue:
    """Numeric contribution that ignores the level: ``Name(3=5)`` is worth 5."""

    value: int

    def __call__(self, level: int) -> int:
        return self.value


@dataclass(frozen=True)
class Multiplier:
    """Numeric contribution proportional to the level."""

    factor: int

    def __call__(self, level: int) -> int:
        return self.factor * level


# The most common derivation: the special is worth its own level.
CURRENT_VALUE = Multiplier(1)


@dataclass(frozen=True)
class Bounds:
    """Inclusive level limits. A missing limit is unbounded on that side."""

    minimum: int | None = None
    maximum: int | None = None

    def contains(self, level: int) -> bool:
        if self.minimum is not None and level < self.minimum:
            return False
        if self.maximum is not None and level > self.maximum:
            return False
        return True

    def __str__(self) -> str:
        lo = "" if self.minimum is None else str(self.minimum)
        hi = "" if self.maximum is None else str(self.maximum)
        return f"in[{lo},{hi}]"


@total_ordering
@dataclass(frozen=True)
class Special:
    """An immutable named modifier.

    Construction validates the name and raises :class:`InvalidNameError`
    for anything outside the grammar. Use :meth:`quality` and
    :meth:`quality_template` for bounded specials; they validate levels.
    """

    name: str
    value: int = DEFAULT_VALUE
    stacks: bool = False
    numeric_of: NumericOf | None = None
    bounds: Bounds | None = None
    is_template: bool = False

    def __post_init__(self) -> None:
        if not valid_name(self.name):
            raise InvalidNameError(f"invalid special name: {self.name!r}")
        if self.is_template and self.value != 0:
            raise LevelError(
                f"template {self.name} must have level 0, not {self.value}"
            )

    # -----------------------------------------------------------
    # Bounded specials
    # -----------------------------------------------------------

    @classmethod
    def quality(
        cls,
        name: str,
        level: int,
        *,
        stacks: bool = False,
        numeric_of: NumericOf | None = None,
        minimum: int | None = None,
        maximum: int | None = None,
    ) -> Special:
        """A concrete quality whose level must lie within the bounds."""
        bounds = Bounds(minimum, maximum)
        if not bounds.contains(level):
            raise LevelError(
                f"invalid level of quality {name}: {level} not {bounds}"
            )
        return cls(name, level, stacks, numeric_of, bounds)

    @classmethod
    def quality_template(
        cls,
        name: str,
        *,
        stacks: bool = True,
        numeric_of: NumericOf | None = None,
        minimum: int | None = None,
        maximum: int | None = None,
    ) -> Special:
        """A level-0 generator of qualities."""
        return cls(name, 0, stacks, numeric_of, Bounds(minimum, maximum), True)

    @property
    def is_bounded(self) -> bool:
        return self.bounds is not None

    @property
    def is_derived(self) -> bool:
        return self.numeric_of is not None

    def valid_level(self, level: int | None) -> bool:
        """An undefined level is always acceptable (the default level then
        applies); a defined one must lie within the bounds, if any."""
        if level is None:
            return True
        return self.bounds is None or self.bounds.contains(level)

    def default_level(self) -> int:
        if self.valid_level(DEFAULT_VALUE):
            return DEFAULT_VALUE
        bounds = self.bounds or Bounds()
        if bounds.minimum is not None and DEFAULT_VALUE < bounds.minimum:
            return bounds.minimum
        if bounds.maximum is not None:
            return bounds.maximum
        return DEFAULT_VALUE

    def instantiate(self, level: int | None = None) -> Special:
        """Create a concrete quality of this template at ``level``.

        Raises LevelError when the level is out of bounds.
        """
        if level is None:
            level = self.default_level()
        if not self.valid_level(level):
            raise LevelError(
                f"invalid level of quality {self.name}: {level} not {self.bounds}"
            )
        return dataclasses.replace(self, value=level, is_template=False)

    # -----------------------------------------------------------
    # Values
    # -----------------------------------------------------------

    def stacked(self, delta: int) -> Special:
        """Apply another occurrence worth ``delta``.

        Stacking specials accumulate; non-stacking ones come back unchanged
        and the increment is dropped. A template has no level of its own, so
        stacking onto it yields a concrete quality at ``delta``. Bounds are
        checked only when a quality is created, never when it accumulates.
        """
        if self.is_template:
            return dataclasses.replace(self, value=self.value + delta, is_template=False)
        if not self.stacks:
            return self
        return dataclasses.replace(self, value=self.value + delta)

    def numeric_value(self) -> int | None:
        if self.numeric_of is None:
            return None
        return self.numeric_of(self.value)

    # -----------------------------------------------------------
    # Ordering and rendering
    # -----------------------------------------------------------

    @property
    def sort_key(self) -> tuple:
        """(name, value, numeric value, min, max). A missing numeric value
        or minimum sorts first, a missing maximum sorts last."""
        numeric = self.numeric_value()
        bounds = self.bounds or Bounds()
        return (
            self.name,
            self.value,
            (0,) if numeric is None else (1, numeric),
            (0,) if bounds.minimum is None else (1, bounds.minimum),
            (1,) if bounds.maximum is None else (0, bounds.maximum),
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Special):
            return NotImplemented
        return self.sort_key < other.sort_key

    def value_text(self) -> str:
        """The part inside the parentheses, or "" for a plain level-1 special."""
        numeric = self.numeric_value()
        if (
            self.value == DEFAULT_VALUE
            and not self.stacks
            and numeric is None
            and self.bounds is None
        ):
            return ""
        text = f"{'s' if self.stacks else ''}{self.value}"
        if numeric is not None:
            text += f"={numeric}"
        if self.bounds is not None:
            text += f" {self.bounds}"
        return text

    def __str__(self) -> str:
        if self.name == COMPLICATION and self.value == 0:
            return ""
        value_text = self.value_text()
        return f"{self.name}({value_text})" if value_text else self.name


def stacking(name: str, value: int = DEFAULT_VALUE,
             numeric_of: NumericOf | None = None) -> Special:
    return Special(name, value, True, numeric_of)


def complication(count: int) -> Special:
    """The stacking tally of complications rolled on an action roll. Renders
    as empty text when nothing went wrong."""
    return Special(COMPLICATION, count, True)
