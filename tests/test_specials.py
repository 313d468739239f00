"""Tests for the special value model."""

import pytest

from d20roll.specials import (
    CURRENT_VALUE,
    Bounds,
    FixedValue,
    InvalidNameError,
    LevelError,
    Multiplier,
    Special,
    complication,
    stacking,
    valid_name,
)


class TestNames:
    """Tests for the special name grammar."""

    @pytest.mark.parametrize("name", [
        "Vicious", "Piercing", "Close-Quarters", "Area2", "vicious", "Väinämöinen",
    ])
    def test_valid(self, name: str) -> None:
        assert valid_name(name)
        assert Special(name).name == name

    @pytest.mark.parametrize("name", [
        "", " Vicious", "Vicious ", "Two Words", "2Hand", "-Lead", "Trail-",
        "Semi;colon", 'Quo"te', "Back\\slash", "Paren(", None,
    ])
    def test_invalid(self, name: str) -> None:
        assert not valid_name(name)
        with pytest.raises(InvalidNameError):
            Special(name)  # type: ignore[arg-type]

    def test_invalid_name_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            Special("not valid")


class TestStacking:
    """Tests for Special.stacked."""

    def test_stacking_accumulates(self) -> None:
        assert stacking("Vicious", 2).stacked(3) == stacking("Vicious", 5)

    def test_non_stacking_discards_increment(self) -> None:
        piercing = Special("Piercing", 2)
        assert piercing.stacked(3) == piercing

    def test_negative_delta(self) -> None:
        assert stacking("Tariff", 2).stacked(-3).value == -1

    def test_stacking_keeps_derivation(self) -> None:
        vicious = stacking("Vicious", 1, CURRENT_VALUE).stacked(2)
        assert vicious.numeric_of == CURRENT_VALUE
        assert vicious.numeric_value() == 3

    def test_stacking_past_bounds_does_not_raise(self) -> None:
        """Bounds constrain creating a quality, not accumulating it."""
        quality = Special.quality("Vicious", 9, stacks=True, maximum=9)
        assert quality.stacked(4).value == 13

    def test_specials_are_immutable(self) -> None:
        special = stacking("Vicious")
        special.stacked(1)
        assert special.value == 1
        with pytest.raises(AttributeError):
            special.value = 4  # type: ignore[misc]


class TestNumericValue:
    """Tests for the numeric contribution functions."""

    def test_no_function_no_value(self) -> None:
        assert Special("Piercing", 3).numeric_value() is None

    def test_fixed_value(self) -> None:
        assert Special("Piercing", 3, numeric_of=FixedValue(5)).numeric_value() == 5

    def test_multiplier(self) -> None:
        assert Special("Vicious", 3, numeric_of=Multiplier(2)).numeric_value() == 6

    def test_current_value(self) -> None:
        assert Special("Vicious", 4, numeric_of=CURRENT_VALUE).numeric_value() == 4

    def test_custom_function(self) -> None:
        """Any callable works, including one that sometimes contributes nothing."""
        def halved(level: int) -> int | None:
            return level // 2 if level > 1 else None

        assert Special("Spread", 5, numeric_of=halved).numeric_value() == 2
        assert Special("Spread", 1, numeric_of=halved).numeric_value() is None

    def test_derivation_objects_compare_structurally(self) -> None:
        assert Special("A", 1, numeric_of=Multiplier(2)) == Special("A", 1, numeric_of=Multiplier(2))
        assert Special("A", 1, numeric_of=Multiplier(2)) != Special("A", 1, numeric_of=FixedValue(2))

    def test_capabilities(self) -> None:
        assert not Special("A").is_derived
        assert Special("A", numeric_of=FixedValue(1)).is_derived
        assert not Special("A").is_bounded
        assert Special.quality("A", 1, minimum=0).is_bounded


class TestOrdering:
    """Tests for the (name, value, numeric value) order."""

    def test_name_first(self) -> None:
        assert Special("Alpha", 9) < Special("Beta", 1)

    def test_then_value(self) -> None:
        assert Special("Alpha", 1) < Special("Alpha", 2)

    def test_missing_numeric_value_sorts_first(self) -> None:
        assert Special("Alpha", 1) < Special("Alpha", 1, numeric_of=FixedValue(-5))

    def test_then_numeric_value(self) -> None:
        assert Special("Alpha", 1, numeric_of=FixedValue(1)) < Special("Alpha", 1, numeric_of=FixedValue(2))

    def test_sorted(self) -> None:
        specials = [Special("Vicious", 2), Special("Area"), Special("Vicious", 1)]
        assert [str(s) for s in sorted(specials)] == ["Area", "Vicious", "Vicious(2)"]

    def test_comparisons_are_total(self) -> None:
        a, b = Special("Alpha"), Special("Beta")
        assert a <= b
        assert b > a
        assert b >= a
        assert a <= Special("Alpha")


class TestQualities:
    """Tests for bounded specials and templates."""

    def test_quality_within_bounds(self) -> None:
        quality = Special.quality("Vicious", 3, minimum=0, maximum=9)
        assert quality.value == 3
        assert quality.bounds == Bounds(0, 9)

    def test_quality_out_of_bounds(self) -> None:
        with pytest.raises(LevelError):
            Special.quality("Vicious", 10, minimum=0, maximum=9)
        with pytest.raises(LevelError):
            Special.quality("Vicious", -1, minimum=0, maximum=9)

    def test_valid_level(self) -> None:
        template = Special.quality_template("Vicious", minimum=1, maximum=3)
        assert template.valid_level(None)
        assert template.valid_level(1)
        assert template.valid_level(3)
        assert not template.valid_level(0)
        assert not template.valid_level(4)

    def test_half_open_bounds(self) -> None:
        assert Bounds(minimum=2).contains(100)
        assert not Bounds(minimum=2).contains(1)
        assert Bounds(maximum=2).contains(-100)
        assert Bounds().contains(12345)

    def test_template_has_level_zero(self) -> None:
        template = Special.quality_template("Vicious")
        assert template.value == 0
        assert template.is_template

    def test_template_must_be_level_zero(self) -> None:
        with pytest.raises(LevelError):
            Special("Vicious", 2, is_template=True)

    def test_instantiate(self) -> None:
        template = Special.quality_template(
            "Vicious", numeric_of=CURRENT_VALUE, minimum=0, maximum=9,
        )
        quality = template.instantiate(4)
        assert quality == Special("Vicious", 4, True, CURRENT_VALUE, Bounds(0, 9))
        assert not quality.is_template
        assert quality.numeric_value() == 4

    def test_instantiate_out_of_range(self) -> None:
        template = Special.quality_template("Vicious", minimum=0, maximum=9)
        with pytest.raises(LevelError):
            template.instantiate(10)

    def test_instantiate_default_level(self) -> None:
        assert Special.quality_template("Vicious").instantiate().value == 1
        assert Special.quality_template("Vicious", minimum=2).instantiate().value == 2
        assert Special.quality_template("Vicious", maximum=0).instantiate().value == 0

    def test_stacking_onto_template_instantiates(self) -> None:
        template = Special.quality_template("Penetration", minimum=0, maximum=9)
        assert template.stacked(2) == template.instantiate(2)

    def test_non_stacking_template_still_instantiates(self) -> None:
        template = Special.quality_template("Piercing", stacks=False)
        assert template.stacked(3).value == 3

    def test_stacking_onto_template_ignores_bounds(self) -> None:
        """Accumulating never raises, even past the template's bounds."""
        template = Special.quality_template("Vicious", minimum=0, maximum=9)
        assert template.stacked(-1).value == -1
        assert template.stacked(12).value == 12
        assert not template.stacked(12).is_template
        assert template.stacked(12).bounds == Bounds(0, 9)

    def test_default_level_outside_bounds(self) -> None:
        assert Special.quality_template("Vicious", minimum=-5, maximum=-2).default_level() == -2
        assert Special.quality_template("Vicious", minimum=3, maximum=5).default_level() == 3

    def test_quality_ordering_by_bounds(self) -> None:
        """Equal name and level: missing minimum first, missing maximum last."""
        assert Special.quality("A", 1) < Special.quality("A", 1, minimum=0)
        assert Special.quality("A", 1, maximum=5) < Special.quality("A", 1)


class TestRendering:
    """Tests for the canonical text of a special."""

    def test_plain(self) -> None:
        assert str(Special("Vicious")) == "Vicious"

    def test_level(self) -> None:
        assert str(Special("Vicious", 2)) == "Vicious(2)"

    def test_stacking_level_one(self) -> None:
        assert str(stacking("Vicious")) == "Vicious(s1)"

    def test_negative(self) -> None:
        assert str(Special("Tariff", -2)) == "Tariff(-2)"

    def test_numeric_value(self) -> None:
        assert str(Special("Vicious", 2, True, FixedValue(4))) == "Vicious(s2=4)"
        assert str(Special("Vicious", 3, True, CURRENT_VALUE)) == "Vicious(s3=3)"

    def test_bounds(self) -> None:
        assert str(Special.quality("Vicious", 2, stacks=True, minimum=0, maximum=9)) == "Vicious(s2 in[0,9])"
        assert str(Special.quality("Vicious", 1, maximum=9)) == "Vicious(1 in[,9])"

    def test_template(self) -> None:
        assert str(Special.quality_template("Effect", minimum=0)) == "Effect(s0 in[0,])"

    def test_complication(self) -> None:
        assert str(complication(2)) == "Complication(s2)"

    def test_zero_complication_is_empty(self) -> None:
        assert str(complication(0)) == ""
        assert complication(0).stacks
