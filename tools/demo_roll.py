#!/usr/bin/env python3
"""Run a quick demo: an action roll and a Vicious combat-dice roll."""

import logging
import random

from d20roll.commands import ActionRollCommand, EffectRollCommand
from d20roll.roller import DiceRoller

logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

roller = DiceRoller(random.Random(2024))
print(ActionRollCommand(roller).execute(difficulty=2, dice=3, tn=11, focus=2))
print(EffectRollCommand(roller).execute(base=2, dice=4, traits="Vicious(2) Piercing(s1)"))
