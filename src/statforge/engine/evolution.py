"""Skill evolution graph.

Skills can evolve into stronger skills. The links form a directed acyclic
graph kept in a networkx ``DiGraph``; a link that would close a cycle is
rejected.

Example:
    >>> graph = SkillEvolutionGraph.from_catalog(skills, links)
    >>> graph.evolutions_of("spark")
    ['flame']
    >>> graph.lineage("inferno")
    ['flame', 'spark']
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import networkx as nx

from statforge.core.exceptions import EvolutionCycleError, EvolutionGraphError
from statforge.core.logging import get_logger
from statforge.models.skills import EvolutionLink, Skill


logger = get_logger(__name__)


class SkillEvolutionGraph:
    """Directed acyclic graph of skill evolutions.

    Nodes are skill ids carrying the :class:`Skill` record under the
    ``skill`` attribute. Insertion order of skills is kept for listings.
    """

    def __init__(self) -> None:
        """Initialize an empty graph."""
        self._graph: nx.DiGraph = nx.DiGraph()
        self._order: list[str] = []

    @classmethod
    def from_catalog(
        cls,
        skills: Iterable[Skill],
        links: Iterable[EvolutionLink] = (),
    ) -> SkillEvolutionGraph:
        """Build a graph from a skill catalog and its links.

        Args:
            skills: Skills in catalog order.
            links: Evolution links between those skills.

        Returns:
            The populated graph.

        Raises:
            EvolutionGraphError: If a link references an unknown skill.
            EvolutionCycleError: If the links contain a cycle.
        """
        graph = cls()
        for skill in skills:
            graph.add_skill(skill)
        for link in links:
            graph.link(link.source, link.target)
        logger.debug("Evolution graph built", skills=len(graph), links=graph._graph.number_of_edges())
        return graph

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def add_skill(self, skill: Skill) -> None:
        """Add a skill, replacing the record if the id is already present."""
        if skill.id not in self._graph:
            self._order.append(skill.id)
        self._graph.add_node(skill.id, skill=skill)

    def skill(self, skill_id: str) -> Skill:
        """Get the record of a skill.

        Raises:
            EvolutionGraphError: If the skill is not in the graph.
        """
        self._require(skill_id)
        return self._graph.nodes[skill_id]["skill"]

    def _require(self, skill_id: str, **context: str) -> None:
        if skill_id not in self._graph:
            raise EvolutionGraphError(f"Unknown skill: {skill_id}", **context)

    def link(self, source: str, target: str) -> None:
        """Record that ``source`` evolves into ``target``.

        Args:
            source: Skill id evolving.
            target: Skill id it evolves into.

        Raises:
            EvolutionGraphError: If either skill is unknown or they are the same.
            EvolutionCycleError: If ``target`` already leads back to ``source``.
        """
        context = {"source_skill": source, "target_skill": target}
        self._require(source, **context)
        self._require(target, **context)
        if source == target:
            raise EvolutionGraphError("A skill cannot evolve into itself", **context)
        if nx.has_path(self._graph, target, source):
            raise EvolutionCycleError(
                f"Linking {source} -> {target} would create a cycle", **context
            )
        self._graph.add_edge(source, target)

    def links(self) -> list[EvolutionLink]:
        """All links, ordered by source then target catalog position."""
        position = {skill_id: index for index, skill_id in enumerate(self._order)}
        edges = sorted(self._graph.edges, key=lambda e: (position[e[0]], position[e[1]]))
        return [EvolutionLink(source=s, target=t) for s, t in edges]

    def roots(self) -> list[str]:
        """Skills nothing evolves into, in catalog order."""
        return [skill_id for skill_id in self._order if self._graph.in_degree(skill_id) == 0]

    def evolutions_of(self, skill_id: str) -> list[str]:
        """Direct evolutions of a skill, in catalog order."""
        self._require(skill_id)
        successors = set(self._graph.successors(skill_id))
        return [s for s in self._order if s in successors]

    def lineage(self, skill_id: str) -> list[str]:
        """Every skill that eventually evolves into ``skill_id``.

        Returns:
            Ancestors, nearest first; equally near ones in catalog order.
        """
        self._require(skill_id)
        distances = nx.single_source_shortest_path_length(self._graph.reverse(copy=False), skill_id)
        position = {s: index for index, s in enumerate(self._order)}
        ancestors = [s for s in distances if s != skill_id]
        return sorted(ancestors, key=lambda s: (distances[s], position[s]))

    def tree(self, skill_id: str) -> dict[str, Any]:
        """Nested evolution tree rooted at a skill.

        Returns:
            ``{"id": ..., "name": ..., "evolutions": [subtrees]}``.
        """
        skill = self.skill(skill_id)
        return {
            "id": skill.id,
            "name": skill.name,
            "evolutions": [self.tree(child) for child in self.evolutions_of(skill_id)],
        }


__all__ = [
    "SkillEvolutionGraph",
]
