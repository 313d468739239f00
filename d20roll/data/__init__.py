"""
Definitions of the qualities every roller knows out of the box.

Each entry is a plain dict so the same shape can come from anywhere: this
module, a JSON file, a table pasted into a UI. ``load_templates`` in
d20roll/registry.py turns them into quality templates:

    {
        "name": "Vicious",   # the quality's name, as players type it
        "stacks": True,      # repeated occurrences add up (default True)
        "multiplier": 1,     # numeric contribution per level; omit for none
        "min": 0,            # lowest level an instance may have
        "max": 9,            # highest level an instance may have
    }

The multiplier is what makes a quality matter on a combat-dice roll: every
Effect face adds the sum of the active qualities' contributions. Vicious(2)
with a multiplier of 1 adds 2 damage per Effect face rolled. Penetration and
Effect carry no multiplier, so Effect faces only tally them in the result
(Penetration(s2) after two Effect faces on a Penetration 1 weapon) without
touching the total.

Levels are bounded 0..9 for all of them; typing Vicious(12) degrades to the
default Vicious level instead of voiding the whole roll.
"""

MIN_LEVEL = 0
MAX_LEVEL = 9

TEMPLATE_DEFINITIONS: list[dict] = [
    {"name": "Vicious", "stacks": True, "multiplier": 1, "min": MIN_LEVEL, "max": MAX_LEVEL},
    {"name": "Penetration", "stacks": True, "min": MIN_LEVEL, "max": MAX_LEVEL},
    {"name": "Effect", "stacks": True, "min": MIN_LEVEL, "max": MAX_LEVEL},
    {"name": "Tariff", "stacks": True, "multiplier": 1, "min": MIN_LEVEL, "max": MAX_LEVEL},
]
