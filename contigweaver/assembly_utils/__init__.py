"""
Assembly utilities for ContigWeaver.

- assembly_stats: N50/L50/N90 and summary metrics over final contigs
"""

from .assembly_stats import (
    N50_EMPTY,
    AssemblyStats,
    compute_n50,
    calculate_assembly_stats
)

__all__ = [
    "N50_EMPTY",
    "AssemblyStats",
    "compute_n50",
    "calculate_assembly_stats",
]
