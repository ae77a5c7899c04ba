"""
Analytics module for the combat engine.

This module turns the action log of a finished combat into statistics,
performance ratings, a tactical analysis and recommendations.
"""

# Import from aggregator.py
from .aggregator import CombatAnalyticsService, calculate_combat_analytics

# Import from combatant_stats.py
from .combatant_stats import ACTION_PROCESSORS, calculate_combatant_analytics

# Import from scoring.py
from .scoring import (
    build_report,
    determine_outcome_factors,
    extract_key_moments,
    generate_highlights,
    performance_score,
    rate_performance,
    rating_for_score,
)

# Import from summary.py
from .summary import generate_combat_summary, generate_recommendations

# Import from tactics.py
from .tactics import (
    analyze_positioning,
    analyze_resource_use,
    analyze_tactics,
    analyze_targeting,
    analyze_teamwork,
    clamp_score,
    find_missed_opportunities,
)

__all__ = [
    # Aggregator
    "CombatAnalyticsService",
    "calculate_combat_analytics",
    # Combatant statistics
    "ACTION_PROCESSORS",
    "calculate_combatant_analytics",
    # Scoring
    "build_report",
    "determine_outcome_factors",
    "extract_key_moments",
    "generate_highlights",
    "performance_score",
    "rate_performance",
    "rating_for_score",
    # Summary
    "generate_combat_summary",
    "generate_recommendations",
    # Tactics
    "analyze_positioning",
    "analyze_resource_use",
    "analyze_tactics",
    "analyze_targeting",
    "analyze_teamwork",
    "clamp_score",
    "find_missed_opportunities",
]
