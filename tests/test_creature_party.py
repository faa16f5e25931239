import pytest

from fieldfriends.data.repositories import CreaturesRepository
from fieldfriends.domain.entities import Party
from fieldfriends.services.errors import FactoryError
from fieldfriends.services.factories import create_creature, create_creature_by_id, create_wild_creature
from tests.helpers.creatures import make_creature


def test_factory_triples_hp_and_copies_stats() -> None:
    creature = create_creature(CreaturesRepository().get("skirl"))

    assert creature.max_hp == 12
    assert creature.current_hp == 12
    assert (creature.attack, creature.defense, creature.speed) == (5, 2, 8)
    assert creature.state == "active"
    assert creature.friendship == 0
    assert not creature.is_wild


def test_wild_factory_marks_creature_wild() -> None:
    creature = create_wild_creature(CreaturesRepository().get("drift"))

    assert creature.friendship == -1
    assert creature.is_wild


def test_factory_by_unknown_id_raises() -> None:
    with pytest.raises(FactoryError):
        create_creature_by_id("ghost", creatures_repo=CreaturesRepository())


def test_damage_to_zero_sets_resting_and_heal_revives() -> None:
    creature = make_creature(hp=10)

    assert creature.take_damage(4) == 4
    assert creature.current_hp == 6
    assert creature.take_damage(50) == 6
    assert creature.current_hp == 0
    assert creature.is_resting

    assert creature.heal(3) == 3
    assert creature.state == "active"
    assert creature.heal(100) == 7
    assert creature.current_hp == 10


def test_party_caps_at_three_members() -> None:
    party = Party([make_creature("A"), make_creature("B"), make_creature("C")])

    assert not party.add(make_creature("D"))
    assert len(party) == 3
    with pytest.raises(ValueError):
        Party([make_creature(str(i)) for i in range(4)])


def test_lead_skips_resting_members() -> None:
    first = make_creature("Mossbit")
    second = make_creature("Plen", "water")
    party = Party([first, second])

    first.take_damage(first.max_hp)

    assert party.get_lead() is second
    assert party.get_active_party() == [second]
    assert not party.all_resting()

    second.take_damage(second.max_hp)
    assert party.get_lead() is None
    assert party.all_resting()


def test_swap_and_remove_reject_bad_indices() -> None:
    first = make_creature("Mossbit")
    second = make_creature("Plen", "water")
    party = Party([first, second])

    assert not party.swap_order(0, 5)
    assert party.swap_order(0, 1)
    assert party.members == [second, first]
    assert party.remove(9) is None
    assert party.remove(0) is second
    assert party.members == [first]


def test_heal_all_restores_every_member() -> None:
    first = make_creature("Mossbit", hp=24)
    second = make_creature("Plen", "water", hp=18)
    party = Party([first, second])
    first.take_damage(24)
    second.take_damage(5)

    party.heal_all()

    assert first.current_hp == 24 and first.state == "active"
    assert second.current_hp == 18


def test_party_has_ability_ignores_resting_members() -> None:
    calm = make_creature("Petalyn", "meadow", ability="calm_field")
    party = Party([make_creature(), calm])
    assert party.party_has_ability("calm_field")

    calm.take_damage(calm.max_hp)
    assert not party.party_has_ability("calm_field")
