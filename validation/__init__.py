"""
Validation Framework for the Geotum projection engine.

This module provides runtime consistency checks for projections.
"""

from validation.projection_checks import (
    ProjectionConsistencyChecker,
    ReferenceVector,
    ValidationResult,
    REFERENCE_VECTORS,
    sample_grid,
)

__all__ = [
    "ProjectionConsistencyChecker",
    "ReferenceVector",
    "ValidationResult",
    "REFERENCE_VECTORS",
    "sample_grid",
]
