"""Task file access for the CLI."""

from .store import TaskFile

__all__ = ['TaskFile']
