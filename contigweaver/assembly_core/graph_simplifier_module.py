#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Graph Simplifier: in-place pipe contraction of the de Bruijn graph.

Three passes run in a fixed order, each followed by a purge of tombstoned
nodes:

1. Sources: contract forward from every node with no incoming edges.
2. Post-divergence: every successor of a fork is cut back to its terminal
   base and contracted forward.
3. Post-convergence: every merge node is cut back to its terminal base and
   contracted forward.

Cutting fork successors and merge nodes back to one base keeps the shared
(k-2)-base prefix out of every branch, so concatenating the fragments along
a route spells the route exactly once.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Callable, Any
import logging

from .data_structures import ContigNode, ContigNodeStore

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, Dict[str, Any]], None]


@dataclass
class SimplificationStats:
    """
    Counters collected over one simplifier run.

    Attributes:
        nodes_before: Live nodes before the first pass
        nodes_after: Live nodes after the last purge
        contractions: Pass name -> number of nodes merged away
        purged: Pass name -> number of nodes physically removed
        trimmed: Nodes cut back to their terminal base
    """
    nodes_before: int = 0
    nodes_after: int = 0
    contractions: Dict[str, int] = field(default_factory=dict)
    purged: Dict[str, int] = field(default_factory=dict)
    trimmed: int = 0

    @property
    def total_contractions(self) -> int:
        return sum(self.contractions.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            'nodes_before': self.nodes_before,
            'nodes_after': self.nodes_after,
            'contractions': dict(self.contractions),
            'purged': dict(self.purged),
            'trimmed': self.trimmed,
            'total_contractions': self.total_contractions,
        }


class GraphSimplifier:
    """
    Collapse non-branching chains of a ContigNodeStore in place.

    Example:
        >>> store = build_dbg_from_reads(reads, k=31)
        >>> stats = GraphSimplifier(store).run()
        >>> print(stats.total_contractions)
    """

    PASSES = ('sources', 'forks', 'merges')

    def __init__(
        self,
        store: ContigNodeStore,
        check_invariants: bool = False,
        progress_callback: Optional[ProgressCallback] = None
    ):
        self.store = store
        self.check_invariants = check_invariants
        self.progress_callback = progress_callback
        self.stats = SimplificationStats()

    def run(self) -> SimplificationStats:
        """Run all three passes and return the collected stats."""
        self.stats = SimplificationStats(nodes_before=len(self.store.live_nodes()))

        if self.check_invariants:
            self.store.check_invariants()

        for name, simplify_pass in (
            ('sources', self._pass_sources),
            ('forks', self._pass_forks),
            ('merges', self._pass_merges),
        ):
            contractions = simplify_pass()
            self._finish_pass(name, contractions)

        self.stats.nodes_after = len(self.store.live_nodes())
        logger.info(
            f"Simplified graph: {self.stats.nodes_before} -> {self.stats.nodes_after} nodes "
            f"({self.stats.total_contractions} contractions, {self.stats.trimmed} trimmed)"
        )
        return self.stats

    # ------------------------------------------------------------------
    # Passes
    # ------------------------------------------------------------------

    def _pass_sources(self) -> int:
        contractions = 0
        for node_id in self.store.sources():
            if self.store[node_id].deleted:
                continue
            contractions += self.contract_chain(node_id)
        return contractions

    def _pass_forks(self) -> int:
        """
        Trim and extend fork successors.

        Contraction can fold a fork into the chain that precedes it, which
        hands its out-edges to a node that was not a fork when the scan
        started, so scan again until nothing new is trimmed.
        """
        contractions = 0
        while True:
            trimmed_this_scan = 0
            for fork_id in self.store.forks():
                fork = self.store[fork_id]
                if fork.deleted:
                    continue
                for succ_id in list(fork.outgoing):
                    succ = self.store[succ_id]
                    if succ.deleted or not self._trim(succ):
                        continue
                    trimmed_this_scan += 1
                    contractions += self.contract_chain(succ_id)
            if trimmed_this_scan == 0:
                break
        return contractions

    def _pass_merges(self) -> int:
        contractions = 0
        for node_id in self.store.merges():
            node = self.store[node_id]
            if node.deleted:
                continue
            self._trim(node)
            contractions += self.contract_chain(node_id)
        return contractions

    def _finish_pass(self, name: str, contractions: int):
        purged = self.store.purge()
        if self.check_invariants:
            self.store.check_invariants()

        self.stats.contractions[name] = contractions
        self.stats.purged[name] = purged

        summary = self.store.summary()
        logger.info(
            f"Pass '{name}': {contractions} contractions, {purged} purged, "
            f"{summary['nodes']} nodes / {summary['edges']} edges remain"
        )
        if self.progress_callback is not None:
            self.progress_callback('simplify_pass_complete', {
                'pass': name,
                'contractions': contractions,
                'purged': purged,
                **summary,
            })

    # ------------------------------------------------------------------
    # Core rewrites
    # ------------------------------------------------------------------

    def contract_chain(self, anchor_id: int) -> int:
        """
        Greedily merge the unique successor into ``anchor_id``.

        Stops at a sink, a branch point, a successor with more than one
        incoming edge, or a self-loop.

        Returns:
            Number of nodes merged into the anchor
        """
        anchor = self.store[anchor_id]
        merged = 0

        while anchor.out_degree == 1:
            succ_id = next(iter(anchor.outgoing))
            if succ_id == anchor.id:
                break
            succ = self.store[succ_id]
            if succ.in_degree != 1:
                break
            self._absorb(anchor, succ)
            merged += 1

        return merged

    def _absorb(self, anchor: ContigNode, succ: ContigNode):
        """Merge ``succ`` into ``anchor`` and tombstone it."""
        weight = anchor.outgoing.pop(succ.id)
        del succ.incoming[anchor.id]

        # Adjacent windows overlap by k-2 bases; only the last base is new
        anchor.sequence += succ.sequence[-1]
        anchor.absorbed_weight += weight + succ.absorbed_weight

        for next_id, next_weight in succ.outgoing.items():
            target = self.store[next_id]
            del target.incoming[succ.id]
            target.incoming[anchor.id] = next_weight
            anchor.outgoing[next_id] = next_weight

        succ.outgoing = {}
        succ.absorbed_weight = 0
        self.store.tombstone(succ.id)

    def _trim(self, node: ContigNode) -> bool:
        """Cut a node back to its terminal base. Returns False if already trimmed."""
        if node.trimmed:
            return False
        node.sequence = node.sequence[-1:]
        node.trimmed = True
        self.stats.trimmed += 1
        return True


def simplify_graph(
    store: ContigNodeStore,
    check_invariants: bool = False,
    progress_callback: Optional[ProgressCallback] = None
) -> SimplificationStats:
    """Convenience wrapper around GraphSimplifier.run()."""
    return GraphSimplifier(
        store,
        check_invariants=check_invariants,
        progress_callback=progress_callback
    ).run()

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
