"""
Storage module for the combat engine.

This module defines the repository contract the engine persists through and
an in-memory implementation of it.
"""

from .memory import InMemoryCombatRepository
from .repository import CombatRepository

__all__ = [
    "CombatRepository",
    "InMemoryCombatRepository",
]
