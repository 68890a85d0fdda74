#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
ContigWeaver v0.1.0

De Bruijn Graph (DBG) construction engine.
- Slides a (k-1)-length window over every read
- One node per distinct (k-1)-mer, deduplicated through a build-scoped index
- Consecutive windows within a read become an edge; repeats increment its weight
- Hands the populated ContigNodeStore to the simplifier and drops the index

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional
import logging

from .data_structures import ContigNodeStore
from .errors import InvalidParameterError

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class KmerGraphConfig:
    """Configuration for k-mer graph construction."""
    k: int  # K-mer size; nodes are (k-1)-mers

    def __post_init__(self):
        """Validate configuration."""
        if not isinstance(self.k, int) or isinstance(self.k, bool):
            raise InvalidParameterError(f"k must be an integer, got {self.k!r}")
        if self.k < 2:
            raise InvalidParameterError(f"k must be >= 2, got {self.k}")

    @property
    def window(self) -> int:
        """Length of the node key (k-1)."""
        return self.k - 1


# ============================================================================
# De Bruijn Graph Builder
# ============================================================================

class DeBruijnGraphBuilder:
    """
    Builder class for constructing the initial, maximal-resolution
    de Bruijn graph from plain read strings.
    """

    def __init__(self, config: KmerGraphConfig):
        self.config = config
        self.reads_seen = 0
        self.reads_skipped = 0

    def build(self, reads: Iterable[str]) -> ContigNodeStore:
        """
        Build a de Bruijn graph from reads.

        Args:
            reads: Iterable of sequence strings

        Returns:
            ContigNodeStore holding one node per distinct (k-1)-mer

        Algorithm:
            1. For each read, walk windows of length k-1
            2. Look up or create the node for each window
            3. Link each window to the one before it (weight +1)
        """
        window = self.config.window
        store = ContigNodeStore(k=self.config.k)

        # Build-phase index: (k-1)-mer -> node id. Only lives for this call.
        kmer_index: Dict[str, int] = {}
        shortest: Optional[int] = None

        for read in reads:
            self.reads_seen += 1
            seq = read.upper()

            if shortest is None or len(seq) < shortest:
                shortest = len(seq)

            if len(seq) < window:
                self.reads_skipped += 1
                continue

            previous_id: Optional[int] = None
            for i in range(len(seq) - window + 1):
                kmer = seq[i:i + window]

                current_id = kmer_index.get(kmer)
                if current_id is None:
                    current_id = store.add_node(kmer).id
                    kmer_index[kmer] = current_id

                # First window of the read has no predecessor
                if previous_id is not None:
                    store.add_edge(previous_id, current_id)

                previous_id = current_id

        if shortest is not None and self.config.k > shortest:
            logger.warning(
                f"k={self.config.k} exceeds the shortest read ({shortest} bp); "
                f"short reads contribute few or no k-mers"
            )
        if self.reads_skipped:
            logger.debug(f"Skipped {self.reads_skipped} reads shorter than {window} bp")

        logger.info(
            f"Built DBG from {self.reads_seen} reads (k={self.config.k}): "
            f"{len(store)} nodes, {store.num_edges()} edges"
        )
        return store


def build_dbg_from_reads(reads: Iterable[str], k: int) -> ContigNodeStore:
    """
    Convenience function to build a DBG from reads.

    Args:
        reads: Iterable of sequence strings
        k: K-mer size (>= 2)

    Returns:
        Uncompacted ContigNodeStore

    Raises:
        InvalidParameterError: if k < 2
    """
    builder = DeBruijnGraphBuilder(KmerGraphConfig(k=k))
    return builder.build(reads)

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
