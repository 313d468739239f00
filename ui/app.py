"""Streamlit dice roller UI.

Run with: PYTHONPATH=. streamlit run ui/app.py
"""

from __future__ import annotations

import random

import streamlit as st

from d20roll.commands import ActionRollCommand, EffectRollCommand
from d20roll.dice import COMBAT_DIE, COMBAT_DIE_TWO_EFFECTS, Die
from d20roll.registry import default_templates
from d20roll.roller import DiceRoller

COMBAT_DICE: dict[str, Die] = {
    "One Effect face": COMBAT_DIE,
    "Two Effect faces": COMBAT_DIE_TWO_EFFECTS,
}
COMBAT_DIE_NAMES = list(COMBAT_DICE.keys())
TEMPLATES = default_templates()


def make_roller(config: dict) -> DiceRoller:
    """Build a roller from the sidebar config.

    A seed of 0 means "unseeded"; any other seed makes the rolls
    reproducible across reruns.
    """
    seed = config.get("seed", 0)
    rng = random.Random(seed) if seed else random.Random()
    return DiceRoller(rng, combat_die=COMBAT_DICE[config.get("combat_die", COMBAT_DIE_NAMES[0])])


def run_action(config: dict, roller: DiceRoller | None = None) -> str:
    roller = roller or make_roller(config)
    return ActionRollCommand(roller).execute(
        difficulty=config["difficulty"],
        dice=config["dice"],
        tn=config["tn"],
        focus=config["focus"],
        complication=config["complication"],
    )


def run_effect(config: dict, roller: DiceRoller | None = None) -> str:
    roller = roller or make_roller(config)
    return EffectRollCommand(roller, TEMPLATES).execute(
        base=config["base"],
        dice=config["combat_dice"],
        traits=config["traits"],
    )


def roller_config() -> dict:
    """Render sidebar controls shared by both rolls and return config dict."""
    st.sidebar.subheader("Dice")
    combat_die = st.sidebar.selectbox("Combat die", COMBAT_DIE_NAMES, index=0)
    seed = st.sidebar.number_input(
        "Seed (0 for random)", min_value=0, value=0, step=1,
    )
    return {"combat_die": combat_die, "seed": int(seed)}


def action_config() -> dict:
    """Render the action roll controls and return config dict."""
    cols = st.columns(5)
    return {
        "difficulty": cols[0].number_input("Difficulty", value=1, step=1),
        "dice": cols[1].number_input("Dice", value=2, step=1),
        "tn": cols[2].number_input("TN", value=10, step=1),
        "focus": cols[3].number_input("Focus", value=0, step=1),
        "complication": cols[4].number_input("Complication range", value=20, step=1),
    }


def effect_config() -> dict:
    """Render the combat-dice roll controls and return config dict."""
    cols = st.columns(2)
    base = cols[0].number_input("Base", value=0, step=1)
    combat_dice = cols[1].number_input("Combat dice", min_value=0, value=2, step=1)
    traits = st.text_input(
        "Traits",
        placeholder="Vicious(2) Piercing(s1)",
        help="Known qualities: " + ", ".join(TEMPLATES.names()),
    )
    return {"base": base, "combat_dice": combat_dice, "traits": traits}


def main() -> None:
    st.set_page_config(page_title="2d20 Dice Roller", layout="wide")
    st.title("2d20 Dice Roller")

    st.sidebar.header("Roller Configuration")
    shared = roller_config()

    action_tab, effect_tab = st.tabs(["Action roll", "Combat dice"])
    with action_tab:
        config = {**shared, **action_config()}
        if st.button("Roll action", type="primary"):
            st.markdown(run_action(config))
    with effect_tab:
        config = {**shared, **effect_config()}
        if st.button("Roll combat dice", type="primary"):
            st.markdown(run_effect(config))


if __name__ == "__main__":
    main()
