"""
Registries of known specials.

A registry maps names to specials that the bot knows about ahead of time,
typically quality templates such as Vicious or Penetration. When a player
types ``Vicious(2)`` into a roll command, the registry turns the text into
the registered Vicious quality at level 2, so that its stacking rule and
numeric contribution come from the game's definition rather than from
whatever the player typed.

Registration never merges: registering a name twice fails and returns
False, leaving the first registration in place. Registries are not
synchronized; callers that mutate one from several threads must serialize
access themselves.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Mapping

from d20roll.data import TEMPLATE_DEFINITIONS
from d20roll.parsing import SpecialSyntaxError, best_effort, build, parse_token, split_tokens
from d20roll.specials import LevelError, Multiplier, Special

logger = logging.getLogger(__name__)


class SpecialRegistry:
    """Name-keyed store of known specials."""

    def __init__(self, specials: Iterable[Special] = ()) -> None:
        self._specials: dict[str, Special] = {}
        for special in specials:
            self.register(special)

    def __contains__(self, name: object) -> bool:
        return name in self._specials

    def __len__(self) -> int:
        return len(self._specials)

    def __iter__(self) -> Iterator[Special]:
        """Registered specials in name order."""
        return iter(sorted(self._specials.values(), key=lambda s: s.name))

    def get(self, name: str) -> Special | None:
        return self._specials.get(name)

    def names(self) -> list[str]:
        return sorted(self._specials)

    def accepts(self, special: Special) -> bool:
        """Whether this registry can hold ``special`` at all."""
        return True

    def register(self, special: Special) -> bool:
        if special.name in self._specials:
            logger.debug("Not registering %s: %s already registered",
                         special, self._specials[special.name])
            return False
        if not self.accepts(special):
            logger.debug("Not registering %s: rejected by %s",
                         special, type(self).__name__)
            return False
        self._specials[special.name] = special
        logger.debug("Registered %s", special)
        return True

    def unregister(self, key: str | Special) -> bool:
        """Remove by name, or by special. A special is only removed if it is
        the one registered under its name."""
        if isinstance(key, Special):
            if self._specials.get(key.name) != key:
                return False
            key = key.name
        if key not in self._specials:
            return False
        del self._specials[key]
        return True

    def resolve(self, text: str) -> Special | None:
        """Turn one player-typed token into a special, never raising.

        A registered template is instantiated at the typed level; any other
        registered special is stacked with it. An unregistered but
        well-formed token is taken as written. Anything else degrades to a
        best-effort special named by the token's leading word, or None if
        no name can be recovered.
        """
        try:
            token = parse_token(text)
        except SpecialSyntaxError:
            return best_effort(text)

        known = self._specials.get(token.name)
        try:
            if known is None:
                return build(token)
            if known.is_template:
                return known.instantiate(token.value)
            if token.value is None:
                return known
            return known.stacked(token.value)
        except (LevelError, SpecialSyntaxError) as e:
            logger.warning("Reading %r at its default level: %s", text, e)
            if known is not None and known.is_template:
                return known.instantiate()
            return best_effort(text)

    def resolve_all(self, text: str) -> list[Special]:
        """Resolve every whitespace-separated token, dropping unreadable ones."""
        resolved = (self.resolve(token) for token in split_tokens(text))
        return [special for special in resolved if special is not None]


class QualityTemplates(SpecialRegistry):
    """A registry that only holds quality templates.

    Level-0 specials are accepted and converted to templates if they are
    not templates already; any other level is refused.
    """

    def accepts(self, special: Special) -> bool:
        return special.is_template

    def register(self, special: Special) -> bool:
        if special.value != 0:
            logger.debug("Not registering %s: templates have level 0", special)
            return False
        if not special.is_template:
            special = Special.quality_template(
                special.name,
                stacks=special.stacks,
                numeric_of=special.numeric_of,
            )
        return super().register(special)


def load_templates(
    definitions: Iterable[Mapping[str, object]],
    registry: QualityTemplates | None = None,
) -> QualityTemplates:
    """Build quality templates from plain definitions.

    Each definition is a mapping with a ``name`` and optional ``stacks``
    (default True), ``multiplier`` (the numeric contribution per level),
    ``min`` and ``max``. Raises ValueError for malformed definitions;
    duplicates are skipped with a warning.
    """
    registry = registry if registry is not None else QualityTemplates()
    for definition in definitions:
        if "name" not in definition:
            raise ValueError(f"quality definition without a name: {definition!r}")
        multiplier = definition.get("multiplier")
        template = Special.quality_template(
            str(definition["name"]),
            stacks=bool(definition.get("stacks", True)),
            numeric_of=None if multiplier is None else Multiplier(int(multiplier)),
            minimum=_optional_int(definition, "min"),
            maximum=_optional_int(definition, "max"),
        )
        if not registry.register(template):
            logger.warning("Skipping duplicate quality definition %s", template.name)
    return registry


def _optional_int(definition: Mapping[str, object], key: str) -> int | None:
    value = definition.get(key)
    if value is None:
        return None
    try:
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        raise ValueError(f"{key} of {definition.get('name')} is not a number: {value!r}") from None


def default_templates() -> QualityTemplates:
    """The well-known templates every roller starts with."""
    return load_templates(TEMPLATE_DEFINITIONS)
