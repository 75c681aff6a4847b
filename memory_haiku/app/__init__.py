"""Application layer: session workflow, formatting and the command line."""

from .app import MemoryHaikuApp

__all__ = ["MemoryHaikuApp"]
