"""Swing-by: launch a probe past a giant planet and grade the gravity assist."""

__version__ = "1.0.0"
