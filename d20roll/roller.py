"""
Roll resolution: the two kinds of roll a 2d20 game asks for.

Action rolls throw a handful of d20s against a target number. Each die at
or under the target is a success, and a die at or under the critical range
(the character's focus) is worth two. Dice at or over the complication
range each add a complication, whatever else they did.

Combat-dice rolls ("effect" or damage rolls) throw combat dice and add
their numbers to a base value. An Effect face adds no number of its own;
it adds the combined numeric contribution of the active specials, and it
folds those specials into the result, so a roll with two Effect faces and a
stacking Vicious(s1) reports Vicious(s2).

All randomness comes from the roller's injected random source, so a seeded
``random.Random`` makes every roll reproducible.
"""

from __future__ import annotations

import logging
import random
from typing import Iterable, Sequence

from d20roll.dice import COMBAT_DIE, D20, Die, face_text, is_effect
from d20roll.merge import combine, merge_all, special_total
from d20roll.records import ActionDie, RollResult
from d20roll.renderers import TextRenderer
from d20roll.specials import Special, complication
from d20roll.types import Face, Rng

logger = logging.getLogger(__name__)


def judge(face: int, target: int, critical_range: int,
          complication_range: int) -> ActionDie:
    success = face <= target
    return ActionDie(
        face=face,
        success=success,
        critical=success and face <= critical_range,
        complication=face >= complication_range,
    )


class DiceRoller:
    """Resolves rolls against one random source.

    Args:
        rng: Anything with ``choice``; defaults to a fresh, unseeded
            ``random.Random``.
        combat_die: The die thrown for combat-dice rolls.
        renderer: Renders action dice into the result's roll texts.
    """

    def __init__(self, rng: Rng | None = None, combat_die: Die = COMBAT_DIE,
                 renderer: TextRenderer | None = None) -> None:
        self.rng = rng or random.Random()
        self.combat_die = combat_die
        self.renderer = renderer or TextRenderer()

    # -----------------------------------------------------------
    # Action rolls
    # -----------------------------------------------------------

    def action_result(self, faces: Iterable[int], target: int,
                      critical_range: int, complication_range: int) -> RollResult:
        """Score d20 faces that have already been drawn."""
        dice = [judge(face, target, critical_range, complication_range) for face in faces]
        return RollResult(
            sum(d.successes for d in dice),
            [self.renderer.render_action_die(d) for d in dice],
            [complication(sum(d.complication for d in dice))],
        )

    def roll_action(self, dice_count: int, target: int, critical_range: int = 0,
                    complication_range: int = 20) -> RollResult:
        """Roll ``dice_count`` d20s. No dice (or a negative count) yields a
        value of 0, no rolls and an empty complication."""
        faces = D20.roll(dice_count, self.rng)
        logger.debug("Action roll %s vs TN %d (focus %d, complication %d+)",
                     faces, target, critical_range, complication_range)
        return self.action_result(faces, target, critical_range, complication_range)  # type: ignore[arg-type]

    # -----------------------------------------------------------
    # Combat-dice rolls
    # -----------------------------------------------------------

    def combat_result(self, base: int, faces: Sequence[Face],
                      specials: Iterable[Special] | None = None) -> RollResult:
        """Score combat-dice faces that have already been drawn.

        Every Effect face adds the specials' combined numeric contribution
        and merges a copy of the combined specials into the result, so
        stacking specials accumulate once per Effect face.
        """
        active = combine(specials)
        total = special_total(active)
        value = base
        triggered: list[Special] = []
        for face in faces:
            if is_effect(face):
                value += total
                merge_all(triggered, list(active))
            else:
                value += face  # type: ignore[operator]
        return RollResult(value, [face_text(f) for f in faces], triggered)

    def roll_combat(self, base: int, dice_count: int,
                    specials: Iterable[Special] | None = None) -> RollResult:
        """Roll ``dice_count`` combat dice on top of ``base``."""
        faces = self.combat_die.roll(dice_count, self.rng)
        logger.debug("Combat roll %d + %s", base, faces)
        return self.combat_result(base, faces, specials)
