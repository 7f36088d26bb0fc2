#!/usr/bin/env python3
"""Exceptions raised by the mission coordinator."""


class MissionError(Exception):
    """Base class for all mission coordinator errors."""


class ConfigurationError(MissionError, ValueError):
    """Raised when mission configuration cannot be parsed or is incomplete."""


class CatalogIndexError(MissionError, IndexError):
    """Raised when a waypoint or marker slot index is out of range."""


class UnsetLocationError(MissionError, LookupError):
    """Raised when reading a marker location slot that was never recorded."""


class TransformUnavailableError(MissionError):
    """Raised when the transform chain to the map frame cannot be resolved yet."""
