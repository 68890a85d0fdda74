#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Contig node store: the arena that owns every node of the de Bruijn graph.

Nodes are addressed by stable integer ids. Adjacency is held as
id -> weight maps in both directions, so nodes never hold references to
each other. Deletion is a tombstone (``deleted``) followed by a purge
pass; nothing is physically removed while a rewrite pass is iterating.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass, field
from typing import Dict, List, Iterator, Any
import logging

from .errors import StructuralInvariantViolation

logger = logging.getLogger(__name__)


# ============================================================================
# Node
# ============================================================================

@dataclass
class ContigNode:
    """
    Node in the de Bruijn graph.

    Before simplification each node is a single (k-1)-mer. After
    simplification a node holds a variable-length fragment: the full
    sequence for a source, or only its novel suffix when it hangs off a
    fork or merge point.

    Attributes:
        id: Stable handle inside the owning store
        sequence: Bases carried by this node
        incoming: Predecessor id -> edge weight
        outgoing: Successor id -> edge weight
        deleted: Tombstone flag, cleared only by a purge
        absorbed_weight: Weight of edges consumed by chain contraction
        trimmed: Sequence has been cut back to its terminal base
    """
    id: int
    sequence: str
    incoming: Dict[int, int] = field(default_factory=dict)
    outgoing: Dict[int, int] = field(default_factory=dict)
    deleted: bool = False
    absorbed_weight: int = 0
    trimmed: bool = False

    @property
    def in_degree(self) -> int:
        return len(self.incoming)

    @property
    def out_degree(self) -> int:
        return len(self.outgoing)

    @property
    def length(self) -> int:
        return len(self.sequence)

    def __hash__(self):
        return hash(self.id)


# ============================================================================
# Store
# ============================================================================

class ContigNodeStore:
    """
    Exclusive owner of all graph nodes.

    Adjacency maps on nodes are lookups into this store only; removing a
    node from ``nodes`` (via :meth:`purge`) is the sole way a node is
    destroyed.
    """

    def __init__(self, k: int = 0):
        self.k = k
        self.nodes: Dict[int, ContigNode] = {}
        self.next_node_id = 0

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: int) -> bool:
        return node_id in self.nodes

    def __getitem__(self, node_id: int) -> ContigNode:
        return self.nodes[node_id]

    def __iter__(self) -> Iterator[ContigNode]:
        return iter(self.nodes.values())

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_node(self, sequence: str) -> ContigNode:
        """Create a new node and return it."""
        node = ContigNode(id=self.next_node_id, sequence=sequence)
        self.nodes[node.id] = node
        self.next_node_id += 1
        return node

    def add_edge(self, from_id: int, to_id: int, weight: int = 1) -> int:
        """
        Add ``weight`` to the edge from_id -> to_id, creating it if needed.

        Both directions are updated together.

        Returns:
            The resulting edge weight
        """
        if weight < 1:
            raise ValueError(f"Edge weight must be >= 1, got {weight}")

        source = self.nodes[from_id]
        target = self.nodes[to_id]

        new_weight = source.outgoing.get(to_id, 0) + weight
        source.outgoing[to_id] = new_weight
        target.incoming[from_id] = new_weight
        return new_weight

    def edge_weight(self, from_id: int, to_id: int) -> int:
        """Weight of from_id -> to_id, or 0 if there is no such edge."""
        return self.nodes[from_id].outgoing.get(to_id, 0)

    # ------------------------------------------------------------------
    # Degree queries
    # ------------------------------------------------------------------

    def live_nodes(self) -> List[ContigNode]:
        return [node for node in self.nodes.values() if not node.deleted]

    def sources(self) -> List[int]:
        """Ids of live nodes with no incoming edges."""
        return [node.id for node in self.live_nodes() if node.in_degree == 0]

    def sinks(self) -> List[int]:
        """Ids of live nodes with no outgoing edges."""
        return [node.id for node in self.live_nodes() if node.out_degree == 0]

    def forks(self) -> List[int]:
        """Ids of live nodes with more than one outgoing edge."""
        return [node.id for node in self.live_nodes() if node.out_degree > 1]

    def merges(self) -> List[int]:
        """Ids of live nodes with more than one incoming edge."""
        return [node.id for node in self.live_nodes() if node.in_degree > 1]

    def num_edges(self) -> int:
        return sum(node.out_degree for node in self.nodes.values())

    def total_edge_weight(self) -> int:
        """
        Weight accounted for by the graph.

        Sum of all live edge weights plus weight absorbed into nodes by
        contraction. This value is invariant under simplification.
        """
        total = 0
        for node in self.nodes.values():
            total += sum(node.outgoing.values())
            total += node.absorbed_weight
        return total

    # ------------------------------------------------------------------
    # Tombstones
    # ------------------------------------------------------------------

    def tombstone(self, node_id: int):
        """Mark a node deleted; caller must already have detached its edges."""
        node = self.nodes[node_id]
        if node.incoming or node.outgoing:
            raise StructuralInvariantViolation(
                f"Node {node_id} tombstoned with live edges "
                f"(in={list(node.incoming)}, out={list(node.outgoing)})"
            )
        node.deleted = True

    def purge(self) -> int:
        """
        Physically remove every tombstoned node.

        Returns:
            Number of nodes removed

        Raises:
            StructuralInvariantViolation: a live node still points at a
                tombstoned one
        """
        doomed = {node_id for node_id, node in self.nodes.items() if node.deleted}
        if not doomed:
            return 0

        for node in self.nodes.values():
            if node.deleted:
                continue
            dangling = (doomed & node.incoming.keys()) | (doomed & node.outgoing.keys())
            if dangling:
                raise StructuralInvariantViolation(
                    f"Node {node.id} references purged node(s) {sorted(dangling)}"
                )

        for node_id in doomed:
            del self.nodes[node_id]

        logger.debug(f"Purged {len(doomed)} tombstoned nodes, {len(self.nodes)} remain")
        return len(doomed)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def check_invariants(self):
        """
        Verify bidirectional adjacency, positive weights and absence of
        dangling edges.

        Raises:
            StructuralInvariantViolation: on the first inconsistency found
        """
        for node in self.nodes.values():
            if node.deleted and (node.incoming or node.outgoing):
                raise StructuralInvariantViolation(
                    f"Tombstoned node {node.id} still has edges"
                )

            for succ_id, weight in node.outgoing.items():
                if weight < 1:
                    raise StructuralInvariantViolation(
                        f"Edge {node.id}->{succ_id} has weight {weight}"
                    )
                succ = self.nodes.get(succ_id)
                if succ is None or succ.deleted:
                    raise StructuralInvariantViolation(
                        f"Edge {node.id}->{succ_id} points at a missing or deleted node"
                    )
                if succ.incoming.get(node.id) != weight:
                    raise StructuralInvariantViolation(
                        f"Edge {node.id}->{succ_id} (w={weight}) not mirrored "
                        f"(incoming w={succ.incoming.get(node.id)})"
                    )

            for pred_id, weight in node.incoming.items():
                pred = self.nodes.get(pred_id)
                if pred is None or pred.deleted:
                    raise StructuralInvariantViolation(
                        f"Edge {pred_id}->{node.id} comes from a missing or deleted node"
                    )
                if pred.outgoing.get(node.id) != weight:
                    raise StructuralInvariantViolation(
                        f"Edge {pred_id}->{node.id} (w={weight}) not mirrored "
                        f"(outgoing w={pred.outgoing.get(node.id)})"
                    )

    def summary(self) -> Dict[str, Any]:
        """Node/edge counts for logging and progress events."""
        live = self.live_nodes()
        return {
            'nodes': len(live),
            'edges': self.num_edges(),
            'sources': sum(1 for n in live if n.in_degree == 0),
            'sinks': sum(1 for n in live if n.out_degree == 0),
            'total_weight': self.total_edge_weight(),
        }

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
