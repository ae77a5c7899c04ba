"""
Recommendations and summary for a finished combat.
"""

from typing import Any

from core import tables
from core.constants import PerformanceRating
from core.documents import Document
from models.analytics import CombatAnalytics, CombatantReport, TacticalAnalysis
from models.combatant import Combat

from analytics.scoring import determine_outcome_factors, extract_key_moments


def generate_recommendations(
    combat: Combat,
    reports: list[CombatantReport],
    analysis: TacticalAnalysis,
) -> list[str]:
    """
    Actionable advice for the table.

    Args:
        combat (Combat): The finished combat.
        reports (list[CombatantReport]): The combatant reports.
        analysis (TacticalAnalysis): The tactical analysis.

    Returns:
        list[str]: The recommendations, possibly empty.

    """
    recommendations: list[str] = []

    if analysis.positioning_score < tables.RECOMMENDATION_SCORE:
        recommendations.append(tables.ADVICE_POSITIONING)
    if analysis.resource_management < tables.RECOMMENDATION_SCORE:
        recommendations.append(tables.ADVICE_RESOURCES)
    if analysis.target_prioritization < tables.RECOMMENDATION_SCORE:
        recommendations.append(tables.ADVICE_TARGETING)
    if analysis.teamwork_score < tables.RECOMMENDATION_SCORE:
        recommendations.append(tables.ADVICE_TEAMWORK)

    poor_performers = sum(
        1 for r in reports if r.performance_rating == PerformanceRating.POOR
    )
    if poor_performers > len(reports) // 3:
        recommendations.append(tables.ADVICE_STRUGGLING)

    if combat.round > tables.LONG_COMBAT_ROUNDS:
        recommendations.append(tables.ADVICE_LONG_COMBAT)
    elif combat.round < tables.SHORT_COMBAT_ROUNDS:
        recommendations.append(tables.ADVICE_SHORT_COMBAT)

    return recommendations


def generate_combat_summary(
    analytics: CombatAnalytics,
    reports: list[CombatantReport],
    analysis: TacticalAnalysis,
) -> Document:
    """
    Composes the summary document patched onto the analytics record.

    Args:
        analytics (CombatAnalytics): The combat totals.
        reports (list[CombatantReport]): The combatant reports.
        analysis (TacticalAnalysis): The tactical analysis.

    Returns:
        Document: Overview, MVP, key moments, tactical scores and outcome factors.

    """
    mvp: dict[str, Any] = {
        "id": analytics.mvp_id,
        "type": analytics.mvp_type,
        "reason": "Highest damage dealer",
    }
    return {
        "overview": (
            f"Combat lasted {analytics.combat_duration} rounds with "
            f"{analytics.total_damage_dealt} total damage dealt and "
            f"{analytics.total_healing_done} HP healed."
        ),
        "mvp": mvp,
        "key_moments": extract_key_moments(reports),
        "tactical_summary": {
            "positioning": analysis.positioning_score,
            "resource_use": analysis.resource_management,
            "target_priority": analysis.target_prioritization,
            "teamwork": analysis.teamwork_score,
        },
        "outcome_factors": determine_outcome_factors(analytics, reports),
    }
