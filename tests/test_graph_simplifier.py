#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Tests for graph simplification (pipe contraction and fork/merge trimming).

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest

from contigweaver.assembly_core.dbg_engine_module import build_dbg_from_reads
from contigweaver.assembly_core.graph_simplifier_module import (
    GraphSimplifier,
    SimplificationStats,
    simplify_graph,
)


BRANCHY_READS = [
    "ACGTTGCAAT",
    "ACGTTGCTAT",
    "GGACGTTGCA",
    "TTGCAATCCA",
    "CAATCCATTG",
]


def _snapshot(store):
    return {
        node.id: (node.sequence, dict(node.incoming), dict(node.outgoing))
        for node in store
    }


class TestChainContraction:
    """Test collapse of unbranched chains."""

    def test_linear_five_node_chain(self):
        # k=4: ACG CGT GTC TCA CAT, all distinct
        store = build_dbg_from_reads(["ACGTCAT"], k=4)
        assert len(store) == 5

        stats = GraphSimplifier(store).run()

        assert len(store) == 1
        node = next(iter(store))
        # First node's full sequence plus one base per later node
        assert node.sequence == "ACG" + "T" + "C" + "A" + "T"
        assert node.incoming == {} and node.outgoing == {}
        assert stats.contractions['sources'] == 4
        assert stats.nodes_before == 5
        assert stats.nodes_after == 1

    def test_tiled_reads_collapse_to_genome(self, tiled_reads):
        store = build_dbg_from_reads(tiled_reads, k=4)
        simplify_graph(store)

        assert [node.sequence for node in store] == ["ACGTTGCAAT"]

    def test_contract_chain_stops_at_merge(self, make_store):
        # A -> B -> M <- C
        store = make_store(["XA", "AB", "BM", "YB"], [(0, 1, 1), (1, 2, 1), (3, 2, 1)])
        simplifier = GraphSimplifier(store)

        merged = simplifier.contract_chain(0)

        assert merged == 1
        assert store[0].sequence == "XAB"
        assert store[0].outgoing == {2: 1}
        assert store[2].incoming == {0: 1, 3: 1}
        assert store[1].deleted

    def test_contraction_preserves_downstream_weights(self, make_store):
        # A -> B (w=4), B -> C (w=3), B -> D (w=1)
        store = make_store(["XA", "AB", "BC", "BD"], [(0, 1, 4), (1, 2, 3), (1, 3, 1)])
        simplifier = GraphSimplifier(store)

        simplifier.contract_chain(0)

        assert store[0].outgoing == {2: 3, 3: 1}
        assert store[2].incoming == {0: 3}
        assert store[3].incoming == {0: 1}
        assert store[0].absorbed_weight == 4

    def test_self_loop_stops_contraction(self, make_store):
        # S -> M, M -> C1 -> C2 -> M
        store = make_store(
            ["XA", "AB", "BC", "CA"],
            [(0, 1, 1), (1, 2, 1), (2, 3, 1), (3, 1, 1)]
        )

        stats = GraphSimplifier(store, check_invariants=True).run()

        assert len(store) == 2
        merge = store[1]
        assert merge.sequence == "BCA"
        assert merge.outgoing == {1: 1}
        assert merge.incoming == {0: 1, 1: 1}
        assert stats.contractions['merges'] == 2


class TestForkMergeTrimming:
    """Test the truncate-then-contract passes."""

    def test_fork_branches_carry_no_shared_prefix(self, by_sequence):
        # k=4: AAA -> AAC forks into ACC -> CCC and ACG -> CGG
        store = build_dbg_from_reads(["AAACCC", "AAACGG"], k=4)

        GraphSimplifier(store).run()

        nodes = by_sequence(store)
        assert set(nodes) == {"AAAC", "CC", "GG"}
        fork = nodes["AAAC"]
        assert set(fork.outgoing) == {nodes["CC"].id, nodes["GG"].id}
        for branch in ("CC", "GG"):
            assert "AAC" not in nodes[branch].sequence
            assert nodes[branch].trimmed

    def test_merge_node_is_trimmed(self, by_sequence):
        # k=4: TTC-TCA and GGC-GCA both feed CAA -> AAA
        store = build_dbg_from_reads(["TTCAAA", "GGCAAA"], k=4)

        stats = GraphSimplifier(store).run()

        nodes = by_sequence(store)
        assert set(nodes) == {"TTCA", "GGCA", "AA"}
        merge = nodes["AA"]
        assert merge.incoming == {nodes["TTCA"].id: 1, nodes["GGCA"].id: 1}
        assert merge.absorbed_weight == 2
        assert stats.contractions == {'sources': 2, 'forks': 0, 'merges': 1}

    def test_fork_successor_trimmed_once(self, make_store):
        # Two forks share successor Z; Z must keep its extension
        store = make_store(
            ["XA", "YA", "AP", "AQ", "AZ", "ZW"],
            [(0, 2, 1), (0, 4, 1), (1, 3, 1), (1, 4, 1), (4, 5, 1)]
        )

        stats = GraphSimplifier(store).run()

        z = store[4]
        assert z.sequence == "ZW"
        assert stats.trimmed == 3


class TestSimplifierProperties:
    """Invariants that must survive every rewrite."""

    def test_weight_conservation(self):
        store = build_dbg_from_reads(BRANCHY_READS, k=4)
        before = store.total_edge_weight()

        GraphSimplifier(store).run()

        assert store.total_edge_weight() == before

    def test_no_dangling_tombstones(self):
        store = build_dbg_from_reads(BRANCHY_READS, k=4)

        GraphSimplifier(store).run()

        for node in store:
            assert not node.deleted
            for neighbour_id in list(node.incoming) + list(node.outgoing):
                assert neighbour_id in store
                assert not store[neighbour_id].deleted

    def test_edge_symmetry_after_simplification(self):
        store = build_dbg_from_reads(BRANCHY_READS, k=4)

        GraphSimplifier(store, check_invariants=True).run()

        store.check_invariants()

    def test_idempotent(self):
        store = build_dbg_from_reads(BRANCHY_READS, k=4)
        GraphSimplifier(store).run()
        snapshot = _snapshot(store)

        stats = GraphSimplifier(store).run()

        assert stats.total_contractions == 0
        assert stats.trimmed == 0
        assert _snapshot(store) == snapshot

    def test_node_count_never_grows(self):
        store = build_dbg_from_reads(BRANCHY_READS, k=4)
        before = len(store)

        stats = GraphSimplifier(store).run()

        assert stats.nodes_after <= before
        assert stats.nodes_before - stats.nodes_after == stats.total_contractions

    def test_pure_cycle_left_alone(self, cyclic_reads):
        store = build_dbg_from_reads(cyclic_reads, k=3)

        stats = GraphSimplifier(store).run()

        assert stats.total_contractions == 0
        assert len(store) == 4

    def test_progress_callback_per_pass(self, tiled_reads):
        events = []
        store = build_dbg_from_reads(tiled_reads, k=4)

        GraphSimplifier(store, progress_callback=lambda e, p: events.append((e, p))).run()

        assert [e for e, _ in events] == ['simplify_pass_complete'] * 3
        assert [p['pass'] for _, p in events] == ['sources', 'forks', 'merges']
        assert events[0][1]['purged'] == 7

    def test_stats_to_dict(self):
        stats = SimplificationStats(nodes_before=5, nodes_after=1, contractions={'sources': 4})
        data = stats.to_dict()

        assert data['total_contractions'] == 4
        assert data['nodes_after'] == 1

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
