"""Command-line orchestrator for an interactive spaces master and its live activity fleet."""

__version__ = "0.1.0"
