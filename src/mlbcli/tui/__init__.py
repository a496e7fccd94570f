"""Interactive terminal browser for mlb-cli."""

from .app import MLBApp

__all__ = ["MLBApp"]
