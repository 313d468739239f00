"""Structured roll records.

These dataclasses capture the outcome of a roll (the dice as drawn, how
each die fared, and the specials the roll produced) so the same result can
be rendered as chat text (TextRenderer) or laid out in the Streamlit UI.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from d20roll.merge import combine
from d20roll.specials import Special


@dataclass(frozen=True)
class ActionDie:
    """A single d20 of an action roll, judged against the roll's thresholds."""

    face: int

    success: bool
    """At or under the target number."""

    critical: bool
    """At or under the critical range: counts two successes."""

    complication: bool
    """At or over the complication range."""

    @property
    def successes(self) -> int:
        if not self.success:
            return 0
        return 2 if self.critical else 1


@dataclass(frozen=True, init=False)
class RollResult:
    """Immutable snapshot of a finished roll.

    Equality is structural over (value, rolls, specials). The specials are
    always stored merged and sorted by name, whatever order they were
    given in.
    """

    value: int

    rolls: tuple[str, ...]
    """Each die as rendered, in draw order."""

    specials: tuple[Special, ...]

    def __init__(self, value: int, rolls: Iterable[object] = (),
                 specials: Iterable[Special] = ()) -> None:
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "rolls", tuple(str(r) for r in rolls))
        object.__setattr__(self, "specials", tuple(combine(specials)))

    def special(self, name: str) -> Special | None:
        return next((s for s in self.specials if s.name == name), None)

    def special_value(self, name: str) -> int:
        """Level of the named special, or 0 when the roll has none."""
        found = self.special(name)
        return 0 if found is None else found.value
