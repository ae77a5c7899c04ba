"""
Error types raised by the combat engine.

Dependency failures (dice, storage) are wrapped with the operation that was
running and propagated to the caller. Each error carries an optional context
dictionary, the same key/value pairs that are handed to the loggers.
"""

from typing import Any, Optional


class CombatEngineError(Exception):
    """Base class for every error raised by the combat engine."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context or {}

    def __str__(self) -> str:
        if self.__cause__ is not None:
            return f"{self.message}: {self.__cause__}"
        return self.message


class DiceRollError(CombatEngineError):
    """Raised by a dice roller when a notation cannot be rolled."""


class StorageError(CombatEngineError):
    """Raised by a repository when a record cannot be stored or found."""


class ResolutionError(CombatEngineError):
    """Raised when an encounter cannot be auto-resolved."""


class InitiativeError(CombatEngineError):
    """Raised when initiative cannot be rolled for a roster."""


class AnalyticsError(CombatEngineError):
    """Raised when the analytics of a finished combat cannot be produced."""
