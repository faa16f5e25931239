import pytest

from fieldfriends.core.types import CREATURE_TYPES
from fieldfriends.domain.type_chart import classify, effectiveness, get_multiplier


@pytest.mark.parametrize(
    ("attacker", "defender", "expected"),
    [
        ("field", "water", 1.5),
        ("water", "wind", 1.5),
        ("wind", "field", 1.5),
        ("water", "field", 0.75),
        ("wind", "water", 0.75),
        ("field", "wind", 0.75),
        ("field", "field", 1.0),
        ("meadow", "water", 1.0),
        ("wind", "meadow", 1.0),
    ],
)
def test_multiplier_cycle(attacker, defender, expected) -> None:
    assert get_multiplier(attacker, defender) == expected


def test_every_pair_is_one_of_three_values() -> None:
    for attacker in CREATURE_TYPES:
        for defender in CREATURE_TYPES:
            assert get_multiplier(attacker, defender) in (0.75, 1.0, 1.5)


def test_same_type_is_neutral() -> None:
    for creature_type in CREATURE_TYPES:
        assert get_multiplier(creature_type, creature_type) == 1.0


def test_classify_and_effectiveness() -> None:
    assert classify(1.5) == "strong"
    assert classify(0.75) == "weak"
    assert classify(1.0) == "neutral"
    assert effectiveness("field", "water") == (1.5, "strong")
