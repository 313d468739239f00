"""
Parser for the textual special grammar.

Specials are written the way players type them into a roll command::

    Vicious            level 1, non-stacking
    Vicious(2)         level 2, non-stacking
    Vicious(s2)        level 2, stacking
    Vicious(s2=4)      level 2, stacking, numeric contribution fixed at 4
    Vicious(s2 in[0,9])  as above, bounded to levels 0..9

The parser is pure: :func:`parse_token` turns text into a
:class:`SpecialToken` and :func:`build` turns a token into a
:class:`~d20roll.specials.Special`. Rendering a special with ``str()`` and
parsing the result gives back an equal special, as long as the special's
numeric contribution was a literal rather than a derivation function.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from d20roll.specials import DEFAULT_VALUE, NAME_PATTERN, FixedValue, Special

logger = logging.getLogger(__name__)

INT_PATTERN = r"[+-]?\d+"

TOKEN_RE = re.compile(
    rf"^(?P<name>{NAME_PATTERN})"
    rf"(?:\((?P<stacking>[sS])?(?P<value>{INT_PATTERN})"
    rf"(?:=(?P<numeric>{INT_PATTERN}))?"
    rf"(?:\s*in\[(?P<minimum>{INT_PATTERN})?,(?P<maximum>{INT_PATTERN})?\])?"
    r"\))?$"
)

NAME_PREFIX_RE = re.compile(rf"^{NAME_PATTERN}")

# A token is a run of non-space characters, except that anything inside
# parentheses (including the space before "in[") belongs to the token.
SPLIT_RE = re.compile(r"(?:[^\s(]+|\([^)]*\)?)+")


class SpecialSyntaxError(ValueError):
    """Text that does not match the special grammar."""


@dataclass(frozen=True)
class SpecialToken:
    """The structured form of one special as written."""

    name: str
    stacks: bool = False
    value: int | None = None
    numeric_value: int | None = None
    bounded: bool = False
    minimum: int | None = None
    maximum: int | None = None


def _int_or_none(text: str | None) -> int | None:
    return None if text is None else int(text)


def parse_token(text: str) -> SpecialToken:
    match = TOKEN_RE.match(text.strip())
    if match is None:
        raise SpecialSyntaxError(f"not a special: {text!r}")
    return SpecialToken(
        name=match["name"],
        stacks=match["stacking"] is not None,
        value=_int_or_none(match["value"]),
        numeric_value=_int_or_none(match["numeric"]),
        bounded="in[" in match.group(0),
        minimum=_int_or_none(match["minimum"]),
        maximum=_int_or_none(match["maximum"]),
    )


def build(token: SpecialToken, *, template: bool = False) -> Special:
    """Construct the special a token describes.

    Templates default to level 0 and may not be given any other level.
    Raises InvalidNameError or LevelError for tokens that parse but do not
    describe a valid special.
    """
    numeric_of = None if token.numeric_value is None else FixedValue(token.numeric_value)
    if template:
        if token.value not in (None, 0):
            raise SpecialSyntaxError(
                f"template {token.name} cannot have level {token.value}"
            )
        return Special.quality_template(
            token.name,
            stacks=token.stacks,
            numeric_of=numeric_of,
            minimum=token.minimum,
            maximum=token.maximum,
        )

    value = DEFAULT_VALUE if token.value is None else token.value
    if token.bounded:
        return Special.quality(
            token.name,
            value,
            stacks=token.stacks,
            numeric_of=numeric_of,
            minimum=token.minimum,
            maximum=token.maximum,
        )
    return Special(token.name, value, token.stacks, numeric_of)


def parse_special(text: str, *, template: bool = False) -> Special:
    """Parse one special, failing fast on anything malformed."""
    return build(parse_token(text), template=template)


def split_tokens(text: str) -> list[str]:
    return SPLIT_RE.findall(text or "")


def parse_specials(text: str) -> list[Special]:
    """Parse a whitespace-separated list of specials, strictly."""
    return [parse_special(token) for token in split_tokens(text)]


def best_effort(text: str) -> Special | None:
    """Salvage a malformed token: keep its leading name at the default level.

    Returns None when not even a name can be recovered.
    """
    match = NAME_PREFIX_RE.match(text.strip())
    if match is None:
        logger.warning("Ignoring unreadable special %r", text)
        return None
    logger.warning("Reading malformed special %r as %s", text, match.group(0))
    return Special(match.group(0))
