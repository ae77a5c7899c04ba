"""
Combat automation module for the combat engine.

This module handles everything that runs instead of a detailed combat: the
outcome simulator for skipped encounters and the initiative calculator.
"""

from .initiative import (
    InitiativeCalculator,
    initiative_bonus,
    priority_offset,
    resolve_ties,
    sort_initiative_entries,
)
from .outcome_simulator import (
    OutcomeSimulator,
    average_party_level,
    calculate_experience,
    determine_outcome,
    encounter_cr,
    parse_cr,
)
from .service import CombatAutomationService

__all__ = [
    "CombatAutomationService",
    "InitiativeCalculator",
    "OutcomeSimulator",
    "average_party_level",
    "calculate_experience",
    "determine_outcome",
    "encounter_cr",
    "initiative_bonus",
    "parse_cr",
    "priority_offset",
    "resolve_ties",
    "sort_initiative_entries",
]
