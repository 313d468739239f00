"""Renderers that convert roll records into chat text.

The TextRenderer produces Discord-flavoured markdown: failed action dice
are struck through, critical successes bolded and complications
underlined. Anything taken from a special's name or a rendered die is
escaped before it is spliced into the message, so a stray quote or
backslash in user input cannot break the surrounding text.
"""

from __future__ import annotations

import re
from typing import Iterable

from d20roll.records import ActionDie, RollResult
from d20roll.specials import Special

ESCAPED = re.compile(r"([\\'\"])")


def escape(text: str) -> str:
    """Backslash-escape quotes and backslashes."""
    return ESCAPED.sub(r"\\\1", text)


class TextRenderer:
    """Renders roll records to single-line chat text."""

    def render_action_die(self, die: ActionDie) -> str:
        text = str(die.face)
        if not die.success:
            text = f"~~{text}~~"
        elif die.critical:
            text = f"**{text}**"
        if die.complication:
            text = f"__{text}__"
        return text

    def render_specials(self, specials: Iterable[Special]) -> str:
        """Join special texts as "A, B, and C". Specials that render as
        empty text (a zero Complication) are left out."""
        texts = [escape(text) for text in map(str, specials) if text]
        if len(texts) < 2:
            return "".join(texts)
        return ", ".join(texts[:-1]) + ", and " + texts[-1]

    def render_rolls(self, rolls: Iterable[str]) -> str:
        return "[" + ", ".join(escape(roll) for roll in rolls) + "]"

    def render_result(self, result: RollResult) -> str:
        """``<value>[ with <specials>] [<rolls>]``."""
        specials = self.render_specials(result.specials)
        with_part = f" with {specials}" if specials else ""
        return f"{result.value}{with_part} {self.render_rolls(result.rolls)}"
