"""Route group exports."""

from . import capacity, health, routes

__all__ = ["capacity", "health", "routes"]
