#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Error taxonomy for the assembly engine.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""


class AssemblyError(Exception):
    """Base class for all assembly engine errors."""
    pass


class InvalidParameterError(AssemblyError, ValueError):
    """Raised when an assembly parameter (e.g. k-mer size) is out of bounds."""
    pass


class EmptyInputError(AssemblyError):
    """Raised when there is nothing to assemble or summarize."""
    pass


class StructuralInvariantViolation(AssemblyError):
    """
    Raised when the graph store is internally inconsistent.
    
    This indicates a defect in a rewrite operation (asymmetric adjacency,
    dangling edge to a tombstoned node), never a recoverable condition.
    """
    pass

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
