"""Visualization layer: board and territory field rendering."""

from lightcycle.viz.render import render_board

__all__ = ["render_board"]
