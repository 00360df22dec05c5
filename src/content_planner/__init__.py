"""Content planner: article plan store and planning dashboard."""

__version__ = "0.1.0"
