"""
Core system module for the combat engine.

This module contains the fundamental components shared by every part of the
engine, including enumerations, heuristic tables, the dice primitive,
schema-less documents, error types, configuration and console utilities.
"""

from .config import EngineConfig, load_config
from .constants import (
    ActionOutcome,
    ActionType,
    CombatantType,
    Difficulty,
    NiceEnum,
    OutcomeTier,
    PerformanceRating,
    Rarity,
)
from .dice_parser import DiceRoller, RollResult, StandardDiceRoller, roll_d20
from .documents import Document, doc_bool, doc_mapping, doc_number, parse_document
from .error_handling import (
    AnalyticsError,
    CombatEngineError,
    DiceRollError,
    InitiativeError,
    ResolutionError,
    StorageError,
)
from .logging import setup_logging
from .utils import ccapture, cprint, crule, make_bar

__all__ = [
    # Import from config.py
    "EngineConfig",
    "load_config",
    # Import from constants.py
    "ActionOutcome",
    "ActionType",
    "CombatantType",
    "Difficulty",
    "NiceEnum",
    "OutcomeTier",
    "PerformanceRating",
    "Rarity",
    # Import from dice_parser.py
    "DiceRoller",
    "RollResult",
    "StandardDiceRoller",
    "roll_d20",
    # Import from documents.py
    "Document",
    "doc_bool",
    "doc_mapping",
    "doc_number",
    "parse_document",
    # Import from error_handling.py
    "AnalyticsError",
    "CombatEngineError",
    "DiceRollError",
    "InitiativeError",
    "ResolutionError",
    "StorageError",
    # Import from logging.py
    "setup_logging",
    # Import from utils.py
    "ccapture",
    "cprint",
    "crule",
    "make_bar",
]
