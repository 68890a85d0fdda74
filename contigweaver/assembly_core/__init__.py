"""
Assembly Core module for ContigWeaver.

This module provides the de Bruijn graph assembly engine:
- Contig node store (arena of nodes with weighted bidirectional adjacency)
- De Bruijn graph construction from plain reads
- Graph simplification (pipe contraction, fork/merge trimming)
- Path resolution into final contigs
"""

from .errors import (
    AssemblyError,
    InvalidParameterError,
    EmptyInputError,
    StructuralInvariantViolation
)

from .data_structures import (
    ContigNode,
    ContigNodeStore
)

from .dbg_engine_module import (
    KmerGraphConfig,
    DeBruijnGraphBuilder,
    build_dbg_from_reads
)

from .graph_simplifier_module import (
    GraphSimplifier,
    SimplificationStats,
    simplify_graph
)

from .path_resolver_module import (
    PathResolver,
    ResolvedRoute,
    resolve_contigs
)

__all__ = [
    # Errors
    "AssemblyError",
    "InvalidParameterError",
    "EmptyInputError",
    "StructuralInvariantViolation",
    # Store
    "ContigNode",
    "ContigNodeStore",
    # Construction
    "KmerGraphConfig",
    "DeBruijnGraphBuilder",
    "build_dbg_from_reads",
    # Simplification
    "GraphSimplifier",
    "SimplificationStats",
    "simplify_graph",
    # Resolution
    "PathResolver",
    "ResolvedRoute",
    "resolve_contigs",
]
