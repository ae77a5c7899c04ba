"""
Scoring model for individual combatants.

Performance rating, highlights, and the key moments and outcome factors that
feed the combat summary. All thresholds come from `core.tables`.
"""

from core import tables
from core.constants import CombatantType, PerformanceRating
from models.analytics import CombatAnalytics, CombatantAnalytics, CombatantReport


def performance_score(stats: CombatantAnalytics) -> int:
    """
    Heuristic point score of a combatant.

    Args:
        stats (CombatantAnalytics): The combatant's statistics.

    Returns:
        int: Points for accuracy, survival, impact, crits and healing.

    """
    score = 0

    hit_rate = stats.hit_rate
    if hit_rate is not None:
        for threshold, points in tables.HIT_RATE_POINTS:
            if hit_rate > threshold:
                score += points
                break

    if stats.final_hp > 0:
        score += tables.SURVIVAL_POINTS
        if stats.damage_taken == 0:
            score += tables.UNTOUCHED_POINTS

    if stats.damage_dealt > stats.damage_taken * tables.IMPACT_RATIO:
        score += tables.IMPACT_POINTS

    if stats.critical_hits > 0:
        score += tables.CRITICAL_POINTS

    if stats.healing_done > 0:
        score += tables.HEALING_POINTS

    return score


def rating_for_score(score: int) -> PerformanceRating:
    """Buckets a point score into a performance rating."""
    for minimum, rating in tables.PERFORMANCE_TIERS:
        if score >= minimum:
            return rating
    return tables.FALLBACK_RATING


def rate_performance(stats: CombatantAnalytics) -> PerformanceRating:
    return rating_for_score(performance_score(stats))


def generate_highlights(stats: CombatantAnalytics) -> list[str]:
    """
    Human-readable highlights of a combatant's performance.

    Args:
        stats (CombatantAnalytics): The combatant's statistics.

    Returns:
        list[str]: The highlights, possibly empty.

    """
    highlights: list[str] = []

    hit_rate = stats.hit_rate
    if hit_rate is not None and hit_rate > tables.HIGHLIGHT_HIT_RATE:
        highlights.append(f"Exceptional accuracy: {hit_rate * 100:.0f}% hit rate")

    if stats.critical_hits > tables.HIGHLIGHT_CRITICAL_HITS:
        highlights.append(f"Scored {stats.critical_hits} critical hits")

    if stats.damage_dealt > tables.HIGHLIGHT_DAMAGE_DEALT:
        highlights.append(f"Dealt {stats.damage_dealt} total damage")

    if stats.healing_done > tables.HIGHLIGHT_HEALING_DONE:
        highlights.append(f"Healed {stats.healing_done} HP to allies")

    if (
        stats.damage_taken == 0
        and stats.rounds_survived > tables.HIGHLIGHT_UNTOUCHED_ROUNDS
    ):
        highlights.append("Avoided all damage")

    if (
        stats.saves_made > stats.saves_failed
        and stats.saves_made > tables.HIGHLIGHT_SAVES_MADE
    ):
        highlights.append("Strong saving throws")

    return highlights


def build_report(stats: CombatantAnalytics) -> CombatantReport:
    """Pairs a combatant's statistics with their rating and highlights."""
    return CombatantReport(
        analytics=stats,
        performance_rating=rate_performance(stats),
        highlights=generate_highlights(stats),
    )


def extract_key_moments(reports: list[CombatantReport]) -> list[str]:
    """Standout performances worth retelling in the combat summary."""
    moments: list[str] = []
    for report in reports:
        stats = report.analytics
        if stats.critical_hits > tables.KEY_MOMENT_CRITICAL_HITS:
            moments.append(
                f"{stats.combatant_name} landed {stats.critical_hits} critical hits"
            )
        if stats.healing_done > tables.KEY_MOMENT_HEALING_DONE:
            moments.append(
                f"{stats.combatant_name} provided crucial healing "
                f"({stats.healing_done} HP)"
            )
        if (
            stats.damage_taken == 0
            and stats.attacks_made > tables.KEY_MOMENT_FLAWLESS_ATTACKS
        ):
            moments.append(
                f"{stats.combatant_name} fought flawlessly without taking damage"
            )
    return moments


def determine_outcome_factors(
    analytics: CombatAnalytics, reports: list[CombatantReport]
) -> list[str]:
    """
    Factors that decided the combat.

    Args:
        analytics (CombatAnalytics): The combat totals.
        reports (list[CombatantReport]): The combatant reports.

    Returns:
        list[str]: The factors, possibly empty.

    """
    factors: list[str] = []

    total_crits = sum(report.analytics.critical_hits for report in reports)
    total_healing = sum(report.analytics.healing_done for report in reports)
    survivors = sum(
        1
        for report in reports
        if report.analytics.final_hp > 0
        and report.analytics.combatant_type == CombatantType.CHARACTER
    )

    if total_crits > tables.OUTCOME_FACTOR_CRITICAL_HITS:
        factors.append("Multiple critical hits turned the tide of battle")

    if total_healing > analytics.total_damage_dealt // tables.OUTCOME_FACTOR_HEALING_SHARE:
        factors.append("Effective healing kept the party in fighting shape")

    if analytics.combat_duration <= tables.OUTCOME_FACTOR_SWIFT_ROUNDS:
        factors.append("Swift tactical execution ended combat quickly")

    # Only counts characters, so any NPC on the roster rules this out.
    if survivors == len(reports):
        factors.append("Excellent teamwork ensured no casualties")

    return factors
