import json

from outpost.models import save
from outpost.models.modules import ModuleType
from outpost.models.resources import ResourceType
from outpost.models.session import Placement


def test_round_trip(session, save_file):
    assert session.place_module(20, 16, ModuleType.HABITATION).ok
    session.move_avatar(0, 1)
    session.oxygen = 9.0

    assert not save.has_save()
    assert save.save_game(session) == save_file
    assert save.has_save()

    loaded = save.load_game()
    assert loaded is not None
    assert loaded.grid.seed == 42
    assert (loaded.grid.width, loaded.grid.height) == (40, 30)
    assert loaded.grid.deposit_chance == 0.0
    assert loaded.grid.get(20, 15) == "C"
    assert loaded.grid.get(20, 16) == "H"
    assert loaded.placements == [Placement(20, 16, ModuleType.HABITATION)]
    assert loaded.colony.count(ModuleType.HABITATION) == 1
    assert loaded.colony.resources[ResourceType.BUILDING_MATERIALS] == 400
    assert (loaded.avatar_x, loaded.avatar_y) == (21, 16)
    assert loaded.oxygen == 9.0


def test_missing_save_loads_nothing():
    assert save.load_game() is None


def test_corrupt_json_returns_none(save_file):
    save_file.write_text("{not json")
    assert save.load_game() is None


def test_wrong_version_returns_none(session, save_file):
    data = save.session_to_dict(session)
    data["version"] = 99
    save_file.write_text(json.dumps(data))
    assert save.load_game() is None


def test_missing_grid_returns_none(save_file):
    save_file.write_text(json.dumps({"version": save.SAVE_VERSION}))
    assert save.load_game() is None


def test_bad_placement_entries_are_skipped(session, save_file, caplog):
    data = save.session_to_dict(session)
    data["placements"] = [
        {"x": 20, "y": 16, "module": "Habitation"},
        {"x": 1, "y": 1, "module": "Death Ray"},
        {"y": 2},
    ]
    save_file.write_text(json.dumps(data))

    loaded = save.load_game()
    assert loaded.placements == [Placement(20, 16, ModuleType.HABITATION)]
    assert "Death Ray" in caplog.text


def test_delete_save(session):
    save.save_game(session)
    save.delete_save()
    assert not save.has_save()
    save.delete_save()


def test_non_object_json_returns_none(save_file):
    save_file.write_text("[1, 2]")
    assert save.load_game() is None


def test_null_colony_falls_back_to_a_fresh_colony(session, save_file):
    data = save.session_to_dict(session)
    data["colony"] = None
    save_file.write_text(json.dumps(data))

    loaded = save.load_game()
    assert loaded is not None
    assert loaded.colony.count(ModuleType.COMMAND_CENTER) == 1
    assert loaded.colony.resources[ResourceType.BUILDING_MATERIALS] == 500


def test_bad_avatar_keeps_the_rest_of_the_save(session, save_file, caplog):
    assert session.place_module(20, 16, ModuleType.HABITATION).ok
    data = save.session_to_dict(session)
    data["avatar"] = ["a", 1]
    save_file.write_text(json.dumps(data))

    loaded = save.load_game()
    assert loaded is not None
    assert loaded.colony.count(ModuleType.HABITATION) == 1
    assert (loaded.avatar_x, loaded.avatar_y) == (21, 15)
    assert "avatar" in caplog.text
