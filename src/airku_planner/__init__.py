"""Capacity accounting and savings-based route planning for water deliveries."""

__version__ = "0.1.0"
