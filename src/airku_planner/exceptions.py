"""Error types raised by the capacity and routing services."""

from __future__ import annotations


class PlannerError(Exception):
    """Base class for planner failures."""


class InvalidArgumentError(PlannerError, ValueError):
    """Structurally invalid input: bad factors, negative quantities, broken coordinates."""


class DivideByZeroError(PlannerError, ZeroDivisionError):
    """A ratio was requested against a zero vehicle capacity."""
