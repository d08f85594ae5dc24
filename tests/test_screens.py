import pygame
import pytest

from outpost.models.colony import ColonyMode
from outpost.models.commands import CommandResult, MoveAvatar, PlaceModule, ResearchTech, SetMode
from outpost.models.modules import ModuleType
from outpost.models.save import save_game
from outpost.screens.colony_view import ColonyViewScreen
from outpost.screens.research import ResearchScreen
from outpost.screens.title import TitleScreen
from outpost.states import GameState
from outpost.ui.hud import HUD, buildable_modules


def key(k, kind=pygame.KEYDOWN):
    return pygame.event.Event(kind, key=k)


@pytest.fixture
def view(display, session):
    return ColonyViewScreen(session)


def test_buildable_modules_follow_unlocks(session):
    assert buildable_modules(session) == [
        ModuleType.HABITATION,
        ModuleType.GREENHOUSE,
        ModuleType.SCIENCE_LAB,
        ModuleType.SOLAR_ARRAY,
        ModuleType.MINING_RIG,
    ]


def test_number_keys_select_and_escape_cancels(view):
    view.handle_events(key(pygame.K_1))
    assert view.selected == ModuleType.HABITATION
    view.handle_events(key(pygame.K_9))
    assert view.selected == ModuleType.HABITATION
    view.handle_events(key(pygame.K_TAB))
    assert view.selected == ModuleType.GREENHOUSE
    assert view.cancel_selection()
    assert not view.cancel_selection()


def test_click_queues_placement(view, session):
    view.handle_events(key(pygame.K_4))
    grid = session.grid
    pos = (grid.origin_x + 5, grid.origin_y + 5)
    view.handle_events(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos))

    expected = grid.hit_test(*pos, session.avatar_x, session.avatar_y, 1280, 720)
    assert view.commands == [PlaceModule(expected[0], expected[1], ModuleType.SOLAR_ARRAY)]


def test_click_without_selection_does_nothing(view, session):
    pos = (session.grid.origin_x + 5, session.grid.origin_y + 5)
    view.handle_events(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos))
    assert view.commands == []


def test_mode_toggle_and_research_keys(view):
    view.handle_events(key(pygame.K_m))
    assert view.commands == [SetMode(ColonyMode.ORBITAL)]
    view.handle_events(key(pygame.K_t))
    assert view.next_state == GameState.RESEARCH


def test_held_key_moves_once_per_interval(view):
    view.handle_events(key(pygame.K_d))
    view.update(0.0)
    view.update(0.05)
    assert view.commands == [MoveAvatar(1, 0)]
    view.update(0.1)
    assert view.commands == [MoveAvatar(1, 0), MoveAvatar(1, 0)]

    view.handle_events(key(pygame.K_d, pygame.KEYUP))
    view.update(1.0)
    assert len(view.commands) == 2


def test_wheel_zoom_resizes_cells(view, session):
    view.handle_events(pygame.event.Event(pygame.MOUSEWHEEL, x=0, y=1))
    assert view.zoom == pytest.approx(1.1)
    assert session.grid.cell_w == 26
    for _ in range(50):
        view.handle_events(pygame.event.Event(pygame.MOUSEWHEEL, x=0, y=-1))
    assert view.zoom == pytest.approx(0.5)
    assert session.grid.cell_h == 12


def test_colony_view_and_hud_draw(display, view, session):
    view.handle_events(key(pygame.K_1))
    view.show_result(CommandResult(False, "Too far from your kerbal"))
    view.update(0.016)
    view.draw(display)
    HUD().draw(display, session, view.selected)


def test_research_screen_queues_selected_tech(display, session):
    screen = ResearchScreen(session)
    screen.handle_events(key(pygame.K_RETURN))
    first = screen.commands[0]
    assert isinstance(first, ResearchTech)
    assert session.colony.tech_graph.get(first.tech_id).tier == 1

    screen.show_result(session.apply(first))
    screen.draw(display)
    screen.handle_events(key(pygame.K_t))
    assert screen.next_state == GameState.PLAYING


def test_title_menu_without_save(display):
    title = TitleScreen()
    assert title.options == ["New Game", "Quit"]
    title.handle_events(key(pygame.K_RETURN))  # skips fade-in
    title.handle_events(key(pygame.K_RETURN))
    assert title.next_state == GameState.PLAYING
    assert not title.load_save
    title.draw(display)


def test_title_offers_continue_with_a_save(display, session):
    save_game(session)
    title = TitleScreen()
    assert title.options[0] == "Continue"
    title.update(5.0)
    assert title.menu_ready
    title.handle_events(key(pygame.K_RETURN))
    assert title.load_save
    assert title.next_state == GameState.PLAYING


def test_hover_label_names_the_tile(view, session):
    assert view.hover_label() == ""
    view.hovered = session.command_center
    assert view.hover_label() == "(20, 15) Command Center"
    view.hovered = (0, 0)
    assert view.hover_label() == "(0, 0) Ground"
