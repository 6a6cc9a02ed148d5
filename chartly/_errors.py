"""Exception and warning types raised by chartly."""
from __future__ import annotations


class ChartlyError(Exception):
    """Base class for chartly errors."""


class InvalidInputError(ChartlyError, ValueError):
    """Input rejected before any geometry is computed."""


class NonConvergenceWarning(UserWarning):
    """A swarm point could not be separated within the iteration cap."""
