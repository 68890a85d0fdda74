#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Path Resolver: turn the simplified graph into final contig routes.

One iterative depth-first search runs per source node. Successors are
pushed in ascending edge-weight order so the best-supported branch is
explored first. Competing routes are arbitrated by sequence length:

- at an end node (no outgoing edges), the longer of the recorded route and
  the new route keeps the end node;
- at a node already owned by a recorded route, the longer prefix up to that
  node is spliced onto the recorded route's suffix.

Ties keep whatever was recorded first. Traversal state lives in scratch
maps owned by the resolver, never on the graph nodes.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass
from typing import Dict, List, Set, Tuple, Optional, Callable, Any
import logging

from .data_structures import ContigNodeStore

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, Dict[str, Any]], None]


@dataclass
class ResolvedRoute:
    """
    A recorded route through the simplified graph.

    Attributes:
        end_node: Id of the end node this route claims
        node_ids: Node ids in traversal order
        sequence: Concatenated fragment sequences
    """
    end_node: int
    node_ids: List[int]
    sequence: str

    @property
    def length(self) -> int:
        return len(self.sequence)


class PathResolver:
    """
    Extract one contig per locally-best traversal.

    The store must already be simplified; it is only read, never mutated.
    """

    def __init__(
        self,
        store: ContigNodeStore,
        progress_callback: Optional[ProgressCallback] = None
    ):
        self.store = store
        self.progress_callback = progress_callback

        # end node id -> recorded route (insertion order = output order)
        self._routes: Dict[int, List[int]] = {}
        # node id -> end node id of the recorded route it belongs to
        self._owner: Dict[int, int] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self) -> List[ResolvedRoute]:
        """Run one search per source and return the recorded routes."""
        self._routes = {}
        self._owner = {}

        sources = self.store.sources()
        logger.info(f"Resolving paths from {len(sources)} source nodes")

        for index, source_id in enumerate(sources):
            outcome = self._search(source_id)
            logger.debug(f"Source {source_id}: {outcome}")
            if self.progress_callback is not None:
                self.progress_callback('source_search_complete', {
                    'source': source_id,
                    'index': index,
                    'total_sources': len(sources),
                    'outcome': outcome,
                    'routes': len(self._routes),
                })

        routes = [
            ResolvedRoute(end_node=end_id, node_ids=list(node_ids), sequence=self._spell(node_ids))
            for end_id, node_ids in self._routes.items()
        ]
        logger.info(f"Resolved {len(routes)} contig routes")
        return routes

    def contigs(self) -> List[str]:
        """Resolve and return only the contig strings."""
        return [route.sequence for route in self.resolve()]

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def _search(self, source_id: int) -> str:
        """
        Depth-first search from one source.

        Returns:
            Short outcome label: 'claimed', 'replaced', 'spliced' or 'none'
        """
        visited: Set[int] = set()
        route: List[int] = []
        # (node id, depth of that node on the route)
        stack: List[Tuple[int, int]] = [(source_id, 0)]

        while stack:
            node_id, depth = stack.pop()

            # Drop whatever the previous branch left past this depth
            del route[depth:]

            if node_id in visited:
                continue

            route.append(node_id)
            node = self.store[node_id]

            if node.out_degree == 0:
                recorded = self._routes.get(node_id)
                if recorded is None:
                    self._record(node_id, list(route))
                    return 'claimed'
                if self._route_length(route) > self._route_length(recorded):
                    self._replace(node_id, list(route))
                    return 'replaced'
                # Lost the end node; try the remaining branches
                route.pop()
                continue

            owner = self._owner.get(node_id)
            if owner is not None:
                if self._splice(owner, node_id, route):
                    return 'spliced'
                route.pop()
                continue

            visited.add(node_id)
            successors = sorted(node.outgoing.items(), key=lambda item: item[1])
            for succ_id, _weight in successors:
                stack.append((succ_id, depth + 1))

        return 'none'

    # ------------------------------------------------------------------
    # Route bookkeeping
    # ------------------------------------------------------------------

    def _route_length(self, node_ids: List[int]) -> int:
        return sum(self.store[node_id].length for node_id in node_ids)

    def _spell(self, node_ids: List[int]) -> str:
        return ''.join(self.store[node_id].sequence for node_id in node_ids)

    def _record(self, end_id: int, node_ids: List[int]):
        self._routes[end_id] = node_ids
        for node_id in node_ids:
            self._owner[node_id] = end_id

    def _release(self, end_id: int, node_ids: List[int]):
        for node_id in node_ids:
            if self._owner.get(node_id) == end_id:
                del self._owner[node_id]

    def _replace(self, end_id: int, node_ids: List[int]):
        self._release(end_id, self._routes[end_id])
        self._record(end_id, node_ids)

    def _splice(self, end_id: int, junction_id: int, route: List[int]) -> bool:
        """
        Contest a recorded route at ``junction_id``.

        ``route`` ends at the junction. If it is longer than the recorded
        route's prefix up to the junction, the recorded prefix is replaced
        by ``route``.

        Returns:
            True if the current route won
        """
        recorded = self._routes[end_id]
        cut = recorded.index(junction_id)
        recorded_prefix = recorded[:cut + 1]

        if self._route_length(route) <= self._route_length(recorded_prefix):
            return False

        self._replace(end_id, list(route) + recorded[cut + 1:])
        return True


def resolve_contigs(
    store: ContigNodeStore,
    progress_callback: Optional[ProgressCallback] = None
) -> List[str]:
    """Convenience function: resolve a simplified store into contig strings."""
    return PathResolver(store, progress_callback=progress_callback).contigs()

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
