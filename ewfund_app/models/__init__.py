"""
Derived table models.

Immutable weight and allocation snapshots produced by the weighting stages.
"""
