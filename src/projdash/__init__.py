"""projdash - local project dashboard generator."""

__version__ = "0.1.0"
