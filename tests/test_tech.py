import pytest

from outpost.models.colony import Colony
from outpost.models.modules import ModuleType
from outpost.models.resources import ResourceType
from outpost.models.tech import TECHS, ResearchResult, TechGraph

SCIENCE = ResourceType.SCIENCE


@pytest.fixture
def graph():
    return TechGraph()


@pytest.fixture
def colony():
    c = Colony(now=0.0)
    c.add_resource(SCIENCE, 1000)
    return c


def test_prerequisites_are_enforced(graph, colony):
    assert graph.research("Orbital Assembly", colony) is ResearchResult.MISSING_PREREQUISITE
    assert colony.resources[SCIENCE] == 1000
    assert ModuleType.ORBITAL_ASSEMBLY not in colony.unlocked

    assert graph.research("Comms", colony) is ResearchResult.OK
    assert colony.resources[SCIENCE] == 800
    assert graph.research("Advanced Habitats", colony) is ResearchResult.INSUFFICIENT_SCIENCE

    colony.add_resource(SCIENCE, 100)
    assert graph.research("Advanced Habitats", colony) is ResearchResult.OK
    assert colony.resources[SCIENCE] == 0
    assert colony.is_unlocked(ModuleType.ADVANCED_HABITAT)


def test_exact_cost_is_deducted(graph, colony):
    assert graph.research("Advanced Power", colony) is ResearchResult.OK
    assert colony.resources[SCIENCE] == 1000 - TECHS["Advanced Power"].cost
    assert colony.unlocked_techs == {"Advanced Power"}


def test_research_reasons(graph, colony):
    assert graph.research("Warp Drive", colony) is ResearchResult.UNKNOWN
    assert graph.research("Comms", colony) is ResearchResult.OK
    assert graph.research("Comms", colony) is ResearchResult.ALREADY_RESEARCHED

    poor = Colony(now=0.0)
    assert graph.research("Comms", poor) is ResearchResult.INSUFFICIENT_SCIENCE
    assert poor.unlocked_techs == set()


def test_can_research_does_not_mutate(graph, colony):
    assert graph.can_research("ISRU", colony.unlocked_techs, 500)
    assert not graph.can_research("ISRU", colony.unlocked_techs, 499)
    assert colony.unlocked_techs == set()


def test_available_for_research(graph):
    assert set(graph.available_for_research([])) == {"Comms", "Advanced Power", "ISRU"}
    after = set(graph.available_for_research(["Comms", "Advanced Power"]))
    assert {"Orbital Assembly", "Advanced Habitats", "Fusion Power", "Quantum Computing"} <= after
    assert "Comms" not in after
    assert "Plasma Extraction" not in after


def test_tiers_are_ordered(graph):
    tiers = graph.techs_by_tier()
    assert sorted(tiers) == [1, 2, 3, 4, 5]
    for tier, techs in tiers.items():
        for tech in techs:
            assert tech.tier == tier
            assert all(TECHS[p].tier < tier for p in tech.prerequisites)


def test_every_tech_unlocks_something():
    for tech in TECHS.values():
        assert tech.unlocks
