"""mlb-cli - MLB statistics in the terminal."""

__version__ = "0.1.0"
