#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Assembly statistics: N50 and related contiguity metrics.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass, asdict
from typing import Dict, Iterable, List, Any, Tuple
import logging

import numpy as np

from ..assembly_core.errors import EmptyInputError

logger = logging.getLogger(__name__)

# Returned by compute_n50 for an empty contig set; never a valid length
N50_EMPTY = -1


def _nx(sorted_lengths: np.ndarray, fraction: float) -> Tuple[int, int]:
    """
    Nx/Lx over lengths already sorted in descending order.

    Returns:
        (length of the contig where the cumulative sum first reaches
        ``fraction`` of the total, 1-based count of contigs needed)
    """
    cumsum = np.cumsum(sorted_lengths)
    idx = int(np.searchsorted(cumsum, cumsum[-1] * fraction, side='left'))
    return int(sorted_lengths[idx]), idx + 1


def compute_n50(lengths: Iterable[int], strict: bool = False) -> int:
    """
    Compute N50 from a collection of contig lengths.

    Args:
        lengths: Contig lengths
        strict: Raise instead of returning the sentinel on empty input

    Returns:
        N50, or ``N50_EMPTY`` (-1) when there are no contigs

    Raises:
        EmptyInputError: empty input and ``strict`` is set

    Example:
        >>> compute_n50([2, 3, 4, 8, 10])
        8
    """
    values = np.asarray(list(lengths), dtype=np.int64)
    if values.size == 0:
        if strict:
            raise EmptyInputError("Cannot compute N50 of an empty contig set")
        return N50_EMPTY

    sorted_lengths = np.sort(values)[::-1]
    n50, _ = _nx(sorted_lengths, 0.5)
    return n50


@dataclass
class AssemblyStats:
    """Summary metrics for a set of contigs."""
    num_contigs: int
    total_length: int
    longest: int
    shortest: int
    n50: int
    l50: int
    n90: int
    l90: int
    gc_content: float  # Percent

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def calculate_assembly_stats(contigs: List[str]) -> AssemblyStats:
    """
    Calculate contiguity statistics for a list of contig sequences.

    An empty list yields zero counts and ``N50_EMPTY`` for every Nx/Lx value.
    """
    if not contigs:
        logger.warning("No contigs to summarize")
        return AssemblyStats(
            num_contigs=0, total_length=0, longest=0, shortest=0,
            n50=N50_EMPTY, l50=N50_EMPTY, n90=N50_EMPTY, l90=N50_EMPTY,
            gc_content=0.0,
        )

    lengths = np.array([len(seq) for seq in contigs], dtype=np.int64)
    sorted_lengths = np.sort(lengths)[::-1]
    total = int(lengths.sum())

    n50, l50 = _nx(sorted_lengths, 0.5)
    n90, l90 = _nx(sorted_lengths, 0.9)

    gc = sum(seq.upper().count('G') + seq.upper().count('C') for seq in contigs)

    return AssemblyStats(
        num_contigs=len(contigs),
        total_length=total,
        longest=int(sorted_lengths[0]),
        shortest=int(sorted_lengths[-1]),
        n50=n50,
        l50=l50,
        n90=n90,
        l90=l90,
        gc_content=(gc / total * 100) if total > 0 else 0.0,
    )

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
