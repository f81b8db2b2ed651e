"""Targeting engine for a client of the grid "sink the fleet" game."""

__version__ = "0.1.0"
