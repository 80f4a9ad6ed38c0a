"""Autonomous light-cycle agent for toroidal multi-player grid games."""

__version__ = "0.1.0"
