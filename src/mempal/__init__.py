"""mempal: procedural multi-elevation dungeons and familiar pathfinding."""

__version__ = "0.1.0"
