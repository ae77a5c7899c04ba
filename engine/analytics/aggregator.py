"""
Combat analytics aggregator.

Turns the action log of a finished combat into persisted analytics: combat
totals, per-combatant statistics with ratings and highlights, a tactical
analysis, recommendations and a summary patched onto the analytics record.
"""

import uuid
from datetime import datetime, timezone

from catchery import log_debug, log_info, log_warning

from core.constants import ActionOutcome, ActionType
from core.error_handling import AnalyticsError
from models.analytics import (
    CombatActionLog,
    CombatAnalytics,
    CombatAnalyticsReport,
    CombatantAnalytics,
)
from models.combatant import Combat
from storage.repository import CombatRepository

from analytics.combatant_stats import calculate_combatant_analytics
from analytics.scoring import build_report
from analytics.summary import generate_combat_summary, generate_recommendations
from analytics.tactics import analyze_tactics


def calculate_combat_analytics(
    combat: Combat, session_id: uuid.UUID, actions: list[CombatActionLog]
) -> CombatAnalytics:
    """
    Aggregates the totals of a finished combat.

    Args:
        combat (Combat): The finished combat.
        session_id (uuid.UUID): The session it belongs to.
        actions (list[CombatActionLog]): Its action log, in order.

    Returns:
        CombatAnalytics: Totals, killing blows and MVP, without summary.

    """
    total_damage = 0
    total_healing = 0
    killing_blows: list[dict] = []
    damage_by_actor: dict[str, int] = {}

    for action in actions:
        if action.action_type.deals_damage:
            total_damage += action.damage_dealt
            damage_by_actor[action.actor_id] = (
                damage_by_actor.get(action.actor_id, 0) + action.damage_dealt
            )
        elif action.action_type == ActionType.HEAL:
            total_healing += action.damage_dealt

        if action.outcome == ActionOutcome.KILLING_BLOW:
            killing_blows.append(
                {
                    "dealer_id": action.actor_id,
                    "target_id": action.target_id,
                    "damage": action.damage_dealt,
                }
            )

    # Strictly greater, so ties keep the first actor seen.
    mvp_id, mvp_damage = "", 0
    for actor_id, damage in damage_by_actor.items():
        if damage > mvp_damage:
            mvp_id, mvp_damage = actor_id, damage

    mvp_type = ""
    if mvp_id:
        mvp = combat.get_combatant(mvp_id)
        if mvp is not None:
            mvp_type = str(mvp.type)

    return CombatAnalytics(
        combat_id=combat.id,
        game_session_id=session_id,
        combat_duration=combat.round,
        total_damage_dealt=total_damage,
        total_healing_done=total_healing,
        killing_blows=killing_blows,
        mvp_id=mvp_id,
        mvp_type=mvp_type,
    )


class CombatAnalyticsService:
    """Builds and stores the analytics of finished combats."""

    def __init__(self, repository: CombatRepository) -> None:
        self.repository = repository

    def track_combat_action(self, action: CombatActionLog) -> None:
        """
        Appends an action to the combat's log.

        Raises:
            AnalyticsError: If the action cannot be stored.

        """
        try:
            self.repository.create_combat_action(action)
        except Exception as e:
            raise AnalyticsError(
                "failed to track combat action", {"action_id": str(action.id)}
            ) from e

    def finalize_combat_analytics(
        self,
        combat: Combat,
        session_id: uuid.UUID,
        actions: list[CombatActionLog] | None = None,
    ) -> CombatAnalyticsReport:
        """
        Produces and persists the analytics of a finished combat.

        Args:
            combat (Combat): The finished combat.
            session_id (uuid.UUID): The session it belongs to.
            actions (list[CombatActionLog] | None): The action log, in order.
                Read from the repository if omitted.

        Returns:
            CombatAnalyticsReport: The analytics, combatant reports sorted by
                damage dealt, the tactical analysis and the recommendations.

        Raises:
            AnalyticsError: If the log cannot be read, or the analytics or a
                combatant record cannot be stored.

        """
        context = {"combat_id": str(combat.id), "session_id": str(session_id)}

        if actions is None:
            try:
                actions = self.repository.get_combat_actions(combat.id)
            except Exception as e:
                raise AnalyticsError("failed to get combat actions", context) from e

        analytics = calculate_combat_analytics(combat, session_id, actions)
        try:
            self.repository.create_combat_analytics(analytics)
        except Exception as e:
            raise AnalyticsError("failed to save combat analytics", context) from e

        stats = calculate_combatant_analytics(analytics.id, combat, actions)
        reports = sorted(
            (build_report(s) for s in stats),
            key=lambda report: report.analytics.damage_dealt,
            reverse=True,
        )
        for report in reports:
            try:
                self.repository.create_combatant_analytics(report.analytics)
            except Exception as e:
                raise AnalyticsError(
                    "failed to save combatant analytics",
                    {**context, "combatant_id": report.analytics.combatant_id},
                ) from e

        analysis = analyze_tactics(combat, actions, stats)
        recommendations = generate_recommendations(combat, reports, analysis)

        patch = {
            "combat_summary": generate_combat_summary(analytics, reports, analysis),
            "tactical_rating": analysis.overall_score,
            "updated_at": datetime.now(timezone.utc),
        }
        try:
            self.repository.update_combat_analytics(analytics.id, patch)
        except Exception as e:
            log_warning(
                f"Failed to update combat analytics summary: {e}",
                {**context, "analytics_id": str(analytics.id)},
            )
        else:
            analytics = analytics.model_copy(update=patch)
            log_debug("Combat analytics summary stored", context)

        log_info(
            f"Finalized analytics for combat {combat.name or combat.id}",
            {**context, "actions": len(actions), "combatants": len(reports)},
        )
        return CombatAnalyticsReport(
            analytics=analytics,
            combatant_reports=reports,
            tactical_analysis=analysis,
            recommendations=recommendations,
        )

    def get_combat_analytics(self, combat_id: uuid.UUID) -> CombatAnalytics | None:
        return self.repository.get_combat_analytics(combat_id)

    def get_combatant_analytics(
        self, analytics_id: uuid.UUID
    ) -> list[CombatantAnalytics]:
        return self.repository.get_combatant_analytics(analytics_id)

    def get_combat_analytics_by_session(
        self, session_id: uuid.UUID
    ) -> list[CombatAnalytics]:
        return self.repository.get_combat_analytics_by_session(session_id)
