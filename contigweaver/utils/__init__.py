"""
Utilities module for ContigWeaver.

This module provides:
- Pipeline orchestration (build -> simplify -> resolve -> metrics)
- Logging setup
"""

from .pipeline import (
    AssemblyPipeline,
    AssemblyResult,
    run_assembly,
    setup_logging,
)

__all__ = [
    "AssemblyPipeline",
    "AssemblyResult",
    "run_assembly",
    "setup_logging",
]
