"""Pickup soccer roster, team split and rotation manager."""

__version__ = "0.1.0"
