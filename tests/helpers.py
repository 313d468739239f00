"""Shared test helpers."""

from __future__ import annotations

from typing import Iterable, Sequence, TypeVar

T = TypeVar("T")


class ScriptedRng:
    """A random source that "draws" a fixed script of faces in order.

    Each scripted face must be one the die actually has, so a test cannot
    accidentally roll a 21 on a d20.
    """

    def __init__(self, draws: Iterable[object]) -> None:
        self.draws = list(draws)
        self.calls = 0

    def choice(self, seq: Sequence[T]) -> T:
        if self.calls >= len(self.draws):
            raise AssertionError(f"rolled more than the {len(self.draws)} scripted dice")
        draw = self.draws[self.calls]
        self.calls += 1
        assert draw in seq, f"{draw!r} is not a face of {seq!r}"
        return draw  # type: ignore[return-value]
