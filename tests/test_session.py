import pytest

from outpost.constants import OXYGEN_SECONDS
from outpost.models.colony import ColonyMode
from outpost.models.commands import MoveAvatar, PlaceModule, ResearchTech, SetMode
from outpost.models.grid import DEPOSIT, EMPTY
from outpost.models.modules import ModuleType
from outpost.models.resources import ResourceType
from outpost.models.session import ColonySession, Placement, PlacementProblem

MATERIALS = ResourceType.BUILDING_MATERIALS
POWER = ResourceType.POWER


def test_new_session_layout(session):
    assert session.command_center == (20, 15)
    assert session.grid.get(20, 15) == "C"
    assert (session.avatar_x, session.avatar_y) == (21, 15)
    assert session.placements == []


def test_build_habitation_next_to_command_center(session):
    result = session.place_module(20, 16, ModuleType.HABITATION)
    assert result.ok

    colony = session.colony
    assert colony.resources[MATERIALS] == 400
    assert colony.resources[POWER] == 50
    assert colony.count(ModuleType.HABITATION) == 1
    assert colony.kerbal_capacity == 10
    assert session.grid.get(20, 16) == "H"
    assert session.placements == [Placement(20, 16, ModuleType.HABITATION)]


def test_placement_beyond_reach_is_rejected(session):
    assert session.placement_problem(25, 15, ModuleType.SOLAR_ARRAY) is PlacementProblem.OUT_OF_RANGE
    result = session.place_module(25, 15, ModuleType.SOLAR_ARRAY)
    assert not result.ok
    assert session.colony.resources[MATERIALS] == 500

    assert session.place_module(24, 15, ModuleType.SOLAR_ARRAY).ok


def test_occupied_tile(session):
    assert session.placement_problem(20, 15, ModuleType.SOLAR_ARRAY) is PlacementProblem.OCCUPIED


def test_unaffordable(session):
    session.colony.resources.set(MATERIALS, 50)
    assert session.placement_problem(21, 16, ModuleType.SOLAR_ARRAY) is PlacementProblem.UNAFFORDABLE


def test_mining_needs_a_deposit(session):
    assert session.placement_problem(23, 15, ModuleType.MINING_RIG) is PlacementProblem.NEEDS_DEPOSIT

    session.grid.deposits[15][23] = True
    session.grid.set(23, 15, DEPOSIT)
    assert session.is_valid_placement(23, 15, ModuleType.MINING_RIG)
    assert session.place_module(23, 15, ModuleType.MINING_RIG).ok
    assert session.active_mining_rigs() == 1


def test_modules_must_join_the_network(session):
    assert session.placement_problem(22, 16, ModuleType.GREENHOUSE) is PlacementProblem.NOT_CONNECTED
    # Solar arrays are not connectors, so nothing may hang off them
    assert session.place_module(21, 16, ModuleType.SOLAR_ARRAY).ok
    assert session.placement_problem(22, 16, ModuleType.GREENHOUSE) is PlacementProblem.NOT_CONNECTED

    assert session.place_module(20, 16, ModuleType.HABITATION).ok
    session.colony.add_resource(POWER, 100)
    assert session.placement_problem(20, 17, ModuleType.GREENHOUSE) is None


def test_locked_module_cannot_be_placed(session):
    result = session.place_module(20, 16, ModuleType.COMMS_RELAY)
    assert not result.ok
    assert session.grid.get(20, 16) == EMPTY


def test_apply_commands(session):
    assert session.apply(MoveAvatar(-1, 1)).ok
    assert (session.avatar_x, session.avatar_y) == (20, 16)

    assert session.apply(SetMode(ColonyMode.ORBITAL)).ok
    assert session.colony.mode == ColonyMode.ORBITAL

    assert not session.apply(ResearchTech("Comms")).ok
    session.colony.add_resource(ResourceType.SCIENCE, 200)
    assert session.apply(ResearchTech("Comms")).ok
    assert session.apply(PlaceModule(19, 15, ModuleType.COMMS_RELAY)).ok


def test_apply_rejects_unknown_commands(session):
    with pytest.raises(TypeError):
        session.apply("build everything")


def test_avatar_wraps(session):
    session.move_avatar(-25, -20)
    assert (session.avatar_x, session.avatar_y) == (36, 25)


def test_oxygen_drains_away_from_base(session):
    session.move_avatar(20, 0)
    assert session.distance_from_base() == 19

    session.update_oxygen(5.0)
    assert session.away_from_base
    assert session.oxygen == pytest.approx(OXYGEN_SECONDS - 5.0)

    session.update_oxygen(20.0)
    assert session.oxygen == OXYGEN_SECONDS

    session.move_avatar(-20, 0)
    session.oxygen = 3.0
    session.update_oxygen(1.0)
    assert not session.away_from_base
    assert session.oxygen == OXYGEN_SECONDS


def test_step_runs_clamped_tick(session):
    session.step(now=1.0, dt=1 / 60)
    assert session.colony.resources[POWER] == pytest.approx(102.5)


def test_restore_placements_does_not_charge(session):
    session.restore_placements([Placement(62, 16, ModuleType.HABITATION)])
    assert session.grid.get(22, 16) == "H"
    assert session.placements[0].x == 22
    assert session.colony.resources[MATERIALS] == 500
