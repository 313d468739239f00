"""
Roll commands: validate what a player asked for, roll, and word the reply.

These are the handlers a chat front end calls with the options a player
typed. They check the options against the game's limits, refuse out-of-range
requests with one sentence listing every problem, and otherwise return the
rolled result in words. All wording goes through a message bundle so a front
end can swap in another language by passing its own dict.
"""

from __future__ import annotations

import logging
from typing import Mapping

from d20roll.registry import SpecialRegistry, default_templates
from d20roll.renderers import TextRenderer
from d20roll.roller import DiceRoller
from d20roll.specials import COMPLICATION, Special, stacking

logger = logging.getLogger(__name__)

MESSAGES: dict[str, str] = {
    "action_roll.title_format": (
        "Difficulty {difficulty} test with {dice} dice "
        "(TN {tn}, focus {focus}, complication range {complication})"
    ),
    "action_roll.success_format": (
        "{title}: success with {momentum} momentum and {complications} "
        "complications. Result: {result}"
    ),
    "action_roll.failure_format": (
        "{title}: failure with {complications} complications. Result: {result}"
    ),
    "action_roll.refusal": "I cannot do this as {reasons}",
    "action_roll.delimiter": ", and ",
    "action_roll.difficulty.too_low": "nothing is that easy",
    "action_roll.difficulty.too_high": "nothing is that hard",
    "action_roll.dice.too_low": "not even I can throw dice that do not exist",
    "action_roll.dice.too_high": "not even I can throw that many dice",
    "action_roll.tn.too_low": "not even the most unskilled are that unskilled",
    "action_roll.tn.too_high": "nobody is that skilled",
    "action_roll.focus.too_low": "nobody has that little focus",
    "action_roll.focus.too_high": "nobody has that much focus",
    "action_roll.complication.too_low": "nothing is that risky",
    "action_roll.complication.too_high": "it cannot be safer than safe",
    "effect_roll.result_format": "{base} + {dice} combat dice: {result}",
}

# (option, lowest allowed, highest allowed) for action rolls.
ACTION_LIMITS: tuple[tuple[str, int, int], ...] = (
    ("difficulty", 0, 5),
    ("dice", 0, 5),
    ("tn", 1, 20),
    ("focus", 0, 5),
    ("complication", 16, 21),
)


class Messages:
    """A message bundle with ``str.format`` placeholders.

    A key missing from the bundle is logged and its name used as the
    message; a template with unknown placeholders is logged and used
    unformatted. Either way a bad translation shows up in the reply
    instead of crashing the command.
    """

    def __init__(self, bundle: Mapping[str, str] | None = None) -> None:
        self.bundle = dict(MESSAGES)
        if bundle:
            self.bundle.update(bundle)

    def get(self, key: str, **values: object) -> str:
        try:
            template = self.bundle[key]
        except KeyError:
            logger.error("Missing message %s", key)
            return key
        try:
            return template.format(**values)
        except (KeyError, IndexError, ValueError) as e:
            logger.error("Cannot format message %s: %r", key, e)
            return template


class ActionRollCommand:
    """The ``action`` command: a d20 test against a difficulty."""

    def __init__(self, roller: DiceRoller, messages: Messages | None = None,
                 renderer: TextRenderer | None = None) -> None:
        self.roller = roller
        self.messages = messages or Messages()
        self.renderer = renderer or TextRenderer()

    def problems(self, **options: int) -> list[str]:
        """Every out-of-range option, as refusal reasons in option order."""
        reasons = []
        for option, lowest, highest in ACTION_LIMITS:
            value = options[option]
            if value < lowest:
                reasons.append(self.messages.get(f"action_roll.{option}.too_low"))
            elif value > highest:
                reasons.append(self.messages.get(f"action_roll.{option}.too_high"))
        return reasons

    def execute(self, difficulty: int = 1, dice: int = 2, tn: int = 1,
                focus: int = 0, complication: int = 20) -> str:
        options = dict(difficulty=difficulty, dice=dice, tn=tn,
                       focus=focus, complication=complication)
        title = self.messages.get("action_roll.title_format", **options)
        logger.debug(title)

        reasons = self.problems(**options)
        if reasons:
            delimiter = self.messages.get("action_roll.delimiter")
            return self.messages.get("action_roll.refusal", reasons=delimiter.join(reasons))

        result = self.roller.roll_action(dice, tn, focus, complication)
        complications = result.special_value(COMPLICATION)
        text = self.renderer.render_result(result)
        if result.value < difficulty:
            return self.messages.get(
                "action_roll.failure_format",
                title=title, complications=complications, result=text,
            )
        return self.messages.get(
            "action_roll.success_format",
            title=title, momentum=result.value - difficulty,
            complications=complications, result=text,
        )


class EffectRollCommand:
    """The ``effect`` command: combat dice with the weapon's qualities."""

    def __init__(self, roller: DiceRoller, registry: SpecialRegistry | None = None,
                 messages: Messages | None = None,
                 renderer: TextRenderer | None = None) -> None:
        self.roller = roller
        self.registry = registry if registry is not None else default_templates()
        self.messages = messages or Messages()
        self.renderer = renderer or TextRenderer()

    def traits(self, text: str) -> list[Special]:
        """Resolve typed traits. Without any, Effect faces are tallied as a
        stacking Effect that adds nothing to the total."""
        if not text or not text.strip():
            return [stacking("Effect")]
        return self.registry.resolve_all(text)

    def execute(self, base: int = 0, dice: int = 0, traits: str = "") -> str:
        dice = max(dice, 0)
        result = self.roller.roll_combat(base, dice, self.traits(traits))
        return self.messages.get(
            "effect_roll.result_format",
            base=base, dice=dice, result=self.renderer.render_result(result),
        )
