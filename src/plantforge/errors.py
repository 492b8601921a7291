from __future__ import annotations


class PlantError(Exception):
    """Base class for model construction failures."""


class InvalidParameter(PlantError, ValueError):
    """A physical or identified parameter is outside its valid domain."""


class DimensionMismatch(PlantError, ValueError):
    """A matrix shape disagrees with the system's state/input/output counts."""
