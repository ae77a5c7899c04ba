"""
Data models for the combat engine.

This module contains the pydantic records read and written by the outcome
simulator, the initiative calculator and the analytics aggregator.
"""

from .analytics import (
    CombatActionLog,
    CombatAnalytics,
    CombatAnalyticsReport,
    CombatantAnalytics,
    CombatantReport,
    TacticalAnalysis,
)
from .combatant import Combat, Combatant, EnemyInfo, PartyCharacter
from .initiative import InitiativeCombatant, InitiativeEntry, SmartInitiativeRule
from .resolution import AutoCombatResolution, AutoResolveRequest

__all__ = [
    # Analytics
    "CombatActionLog",
    "CombatAnalytics",
    "CombatAnalyticsReport",
    "CombatantAnalytics",
    "CombatantReport",
    "TacticalAnalysis",
    # Combatants
    "Combat",
    "Combatant",
    "EnemyInfo",
    "PartyCharacter",
    # Initiative
    "InitiativeCombatant",
    "InitiativeEntry",
    "SmartInitiativeRule",
    # Auto resolution
    "AutoCombatResolution",
    "AutoResolveRequest",
]
