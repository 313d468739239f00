"""
The merge rule: how a new occurrence of a special joins a list of specials.

Every list of specials the engine produces is kept sorted by name with no
two entries sharing a name. When a special with an existing name arrives:

- if the existing entry stacks, the newcomer's level is added to it;
- otherwise, if the newcomer stacks, the existing level is added to the
  newcomer, which takes the existing entry's place;
- otherwise neither stacks and the newcomer is dropped: the first occurrence
  wins, silently.

A special with a new name is inserted at its sorted position. The same rule
serves per-roll lists and anything else that needs a canonical form.
"""

from __future__ import annotations

import logging
from bisect import bisect_left
from typing import Iterable

from d20roll.specials import Special

logger = logging.getLogger(__name__)


class MergeInvariantError(RuntimeError):
    """A merge left the list in an impossible state. Always a bug."""


def find(ordered: list[Special], name: str) -> tuple[int, bool]:
    """Binary search ``ordered`` by name. Returns the index and whether an
    entry with that name sits there."""
    index = bisect_left(ordered, name, key=lambda s: s.name)
    return index, index < len(ordered) and ordered[index].name == name


def merge_into(ordered: list[Special], incoming: Special) -> None:
    """Fold one special into a name-sorted, collision-free list in place."""
    index, found = find(ordered, incoming.name)
    if found:
        existing = ordered[index]
        if existing.stacks:
            ordered[index] = existing.stacked(incoming.value)
        elif incoming.stacks:
            ordered[index] = incoming.stacked(existing.value)
        else:
            logger.debug("Keeping %s over non-stacking %s", existing, incoming)
            return
        logger.debug("Merged %s into %s at %d", incoming, ordered[index], index)
        if ordered[index].name != incoming.name:
            raise MergeInvariantError(
                f"merging {incoming} replaced the entry at {index} with {ordered[index]}"
            )
    else:
        size = len(ordered)
        ordered.insert(index, incoming)
        if len(ordered) != size + 1 or ordered[index] is not incoming:
            raise MergeInvariantError(f"could not insert {incoming} at {index}")
        logger.debug("Added %s at %d", incoming, index)


def merge_all(ordered: list[Special], incoming: Iterable[Special]) -> None:
    """Fold each of ``incoming`` into ``ordered``, in the given order."""
    for special in incoming:
        merge_into(ordered, special)


def combine(specials: Iterable[Special] | None) -> list[Special]:
    """The canonical merged form of any collection of specials."""
    result: list[Special] = []
    if specials is not None:
        merge_all(result, specials)
    return result


def special_total(specials: Iterable[Special] | None) -> int:
    """Sum of the numeric contributions. Specials without one count as 0."""
    if specials is None:
        return 0
    return sum(s.numeric_value() or 0 for s in specials)
