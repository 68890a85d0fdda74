#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Pytest configuration and shared fixtures.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest
from pathlib import Path
import tempfile
import shutil

from contigweaver.assembly_core.data_structures import ContigNodeStore


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="contigweaver_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def cyclic_reads():
    """Two reads whose 2-mers form a single weighted cycle (k=3)."""
    return ["ACGTAC", "CGTACG"]


@pytest.fixture
def tiled_reads():
    """Overlapping reads tiling ACGTTGCAAT; every 3-mer is unique (k=4)."""
    return ["ACGTTG", "GTTGCA", "TGCAAT"]


@pytest.fixture
def simple_fastq():
    """Generate simple FASTQ reads for testing."""
    return """@read1
ACGTTG
+
IIIIII
@read2
GTTGCA
+
IIIIII
@read3
tgcaat
+
IIIIII
"""


@pytest.fixture
def simple_fasta():
    """Generate simple FASTA reads for testing."""
    return ">read1\nACGTTG\n>read2\nGTTGCA\n>read3\nTGCAAT\n"


@pytest.fixture
def make_store():
    """Factory fixture: build a store by hand from sequences and (from, to, weight) index tuples."""
    return _make_store


@pytest.fixture
def by_sequence():
    """Factory fixture: map live node sequence -> node."""
    return _by_sequence


def _make_store(sequences, edges):
    store = ContigNodeStore()
    ids = [store.add_node(seq).id for seq in sequences]
    for from_idx, to_idx, weight in edges:
        store.add_edge(ids[from_idx], ids[to_idx], weight)
    return store


def _by_sequence(store):
    """Map live node sequence -> node (sequences assumed unique)."""
    return {node.sequence: node for node in store if not node.deleted}

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
