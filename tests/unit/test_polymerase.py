import pytest

from mrpcr.polymerase import KINETIC_PROFILES, RECIPES, Polymerase


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Taq", Polymerase.TAQ),
        ("taq", Polymerase.TAQ),
        (" PHUSION ", Polymerase.PHUSION),
        ("q5", Polymerase.Q5),
        (Polymerase.Q5, Polymerase.Q5),
    ],
)
def test_from_name(name, expected):
    assert Polymerase.from_name(name) is expected


def test_from_name_unknown():
    with pytest.raises(ValueError, match="Unknown polymerase"):
        Polymerase.from_name("Pfu")


def test_tables_cover_all_polymerases():
    assert set(RECIPES) == set(Polymerase)
    assert set(KINETIC_PROFILES) == set(Polymerase)


def test_optional_reagents():
    assert Polymerase.TAQ.recipe.mgcl2 is not None
    assert Polymerase.TAQ.recipe.gc_enhancer is None
    for polymerase in (Polymerase.PHUSION, Polymerase.Q5):
        assert polymerase.recipe.mgcl2 is None
        assert polymerase.recipe.gc_enhancer is not None


def test_profiles():
    assert Polymerase.TAQ.profile.denaturation_temp == 95
    assert Polymerase.TAQ.profile.annealing_offset == -5
    assert Polymerase.PHUSION.profile.extension_rate == 15
    assert Polymerase.Q5.profile.final_extension == "2 minutes"


def test_display_name():
    assert Polymerase.Q5.display_name == "NEB Q5 High-Fidelity Polymerase"
    assert str(Polymerase.PHUSION) == "Phusion"
