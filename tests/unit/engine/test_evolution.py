"""Tests for the skill evolution graph."""

from __future__ import annotations

import pytest

from statforge.core.exceptions import EvolutionCycleError, EvolutionGraphError
from statforge.engine.evolution import SkillEvolutionGraph
from statforge.models import EvolutionLink, Skill


@pytest.fixture
def skills() -> list[Skill]:
    """A small fire skill family plus an unrelated skill."""
    return [
        Skill(id="spark", name="Spark"),
        Skill(id="flame", name="Flame"),
        Skill(id="ember", name="Ember"),
        Skill(id="inferno", name="Inferno"),
        Skill(id="punch", name="Punch"),
    ]


@pytest.fixture
def graph(skills: list[Skill]) -> SkillEvolutionGraph:
    """Evolution graph: spark -> flame -> inferno, spark -> ember -> inferno."""
    links = [
        EvolutionLink(source="spark", target="flame"),
        EvolutionLink(source="spark", target="ember"),
        EvolutionLink(source="flame", target="inferno"),
        EvolutionLink(source="ember", target="inferno"),
    ]
    return SkillEvolutionGraph.from_catalog(skills, links)


class TestSkillEvolutionGraph:
    """Tests for SkillEvolutionGraph queries."""

    def test_size_and_membership(self, graph: SkillEvolutionGraph) -> None:
        """Test node count and membership."""
        assert len(graph) == 5
        assert "spark" in graph
        assert "ice" not in graph

    def test_roots(self, graph: SkillEvolutionGraph) -> None:
        """Test skills with no predecessor, in catalog order."""
        assert graph.roots() == ["spark", "punch"]

    def test_evolutions_of(self, graph: SkillEvolutionGraph) -> None:
        """Test direct evolutions in catalog order."""
        assert graph.evolutions_of("spark") == ["flame", "ember"]
        assert graph.evolutions_of("inferno") == []

    def test_lineage(self, graph: SkillEvolutionGraph) -> None:
        """Test ancestors, nearest first."""
        assert graph.lineage("inferno") == ["flame", "ember", "spark"]
        assert graph.lineage("spark") == []

    def test_tree(self, graph: SkillEvolutionGraph) -> None:
        """Test the nested evolution tree."""
        tree = graph.tree("flame")

        assert tree == {
            "id": "flame",
            "name": "Flame",
            "evolutions": [{"id": "inferno", "name": "Inferno", "evolutions": []}],
        }

    def test_links(self, graph: SkillEvolutionGraph) -> None:
        """Test listing links in catalog order."""
        assert [(link.source, link.target) for link in graph.links()] == [
            ("spark", "flame"),
            ("spark", "ember"),
            ("flame", "inferno"),
            ("ember", "inferno"),
        ]

    def test_skill_record(self, graph: SkillEvolutionGraph) -> None:
        """Test retrieving a stored skill."""
        assert graph.skill("punch").name == "Punch"


class TestSkillEvolutionGraphErrors:
    """Tests for rejected links."""

    def test_cycle_rejected(self, graph: SkillEvolutionGraph) -> None:
        """Test that closing a loop raises EvolutionCycleError."""
        with pytest.raises(EvolutionCycleError) as exc_info:
            graph.link("inferno", "spark")

        assert exc_info.value.details == {"source_skill": "inferno", "target_skill": "spark"}
        assert graph.evolutions_of("inferno") == []

    def test_unknown_skill_rejected(self, graph: SkillEvolutionGraph) -> None:
        """Test linking to an unknown skill."""
        with pytest.raises(EvolutionGraphError):
            graph.link("spark", "ice")

    def test_self_link_rejected(self, graph: SkillEvolutionGraph) -> None:
        """Test linking a skill to itself."""
        with pytest.raises(EvolutionGraphError):
            graph.link("punch", "punch")

    def test_unknown_skill_query(self, graph: SkillEvolutionGraph) -> None:
        """Test querying an unknown skill."""
        with pytest.raises(EvolutionGraphError):
            graph.lineage("ice")

    def test_from_catalog_unknown_link(self, skills: list[Skill]) -> None:
        """Test that a dangling link fails catalog loading."""
        with pytest.raises(EvolutionGraphError):
            SkillEvolutionGraph.from_catalog(skills, [EvolutionLink(source="spark", target="ice")])
