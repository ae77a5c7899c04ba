"""
In-memory repository for the combat engine.

Keeps every record in dictionaries. Records are copied on the way in and on
the way out, so callers can never mutate what is stored.
"""

import uuid
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any

from catchery import log_debug

from core.error_handling import StorageError
from models.analytics import CombatActionLog, CombatAnalytics, CombatantAnalytics
from models.initiative import SmartInitiativeRule
from models.resolution import AutoCombatResolution


class InMemoryCombatRepository:
    """Dictionary-backed implementation of `CombatRepository`."""

    def __init__(self) -> None:
        """Initialize the repository with empty collections."""
        self.analytics: dict[uuid.UUID, CombatAnalytics] = {}
        self.combatant_analytics: dict[uuid.UUID, list[CombatantAnalytics]] = (
            defaultdict(list)
        )
        self.resolutions: dict[uuid.UUID, AutoCombatResolution] = {}
        self.initiative_rules: dict[tuple[uuid.UUID, str], SmartInitiativeRule] = {}
        self.actions: dict[uuid.UUID, list[CombatActionLog]] = defaultdict(list)

    # ---- Combat analytics ----

    def create_combat_analytics(self, analytics: CombatAnalytics) -> None:
        if analytics.id in self.analytics:
            raise StorageError(
                f"combat analytics {analytics.id} already exists",
                {"analytics_id": str(analytics.id)},
            )
        self.analytics[analytics.id] = analytics.model_copy(deep=True)
        log_debug(
            "Stored combat analytics",
            {"analytics_id": str(analytics.id), "combat_id": str(analytics.combat_id)},
        )

    def get_combat_analytics(self, combat_id: uuid.UUID) -> CombatAnalytics | None:
        for analytics in self.analytics.values():
            if analytics.combat_id == combat_id:
                return analytics.model_copy(deep=True)
        return None

    def get_combat_analytics_by_session(
        self, session_id: uuid.UUID
    ) -> list[CombatAnalytics]:
        return [
            analytics.model_copy(deep=True)
            for analytics in self.analytics.values()
            if analytics.game_session_id == session_id
        ]

    def update_combat_analytics(
        self, analytics_id: uuid.UUID, updates: dict[str, Any]
    ) -> None:
        current = self.analytics.get(analytics_id)
        if current is None:
            raise StorageError(
                f"combat analytics {analytics_id} not found",
                {"analytics_id": str(analytics_id)},
            )
        unknown = set(updates) - set(CombatAnalytics.model_fields)
        if unknown:
            raise StorageError(
                f"unknown combat analytics fields: {sorted(unknown)}",
                {"analytics_id": str(analytics_id)},
            )
        data = current.model_dump()
        data["updated_at"] = datetime.now(timezone.utc)
        data.update(updates)
        self.analytics[analytics_id] = CombatAnalytics.model_validate(data)

    # ---- Combatant analytics ----

    def create_combatant_analytics(self, analytics: CombatantAnalytics) -> None:
        self.combatant_analytics[analytics.combat_analytics_id].append(
            analytics.model_copy(deep=True)
        )

    def get_combatant_analytics(
        self, analytics_id: uuid.UUID
    ) -> list[CombatantAnalytics]:
        return [
            analytics.model_copy(deep=True)
            for analytics in self.combatant_analytics.get(analytics_id, [])
        ]

    # ---- Auto resolutions ----

    def create_auto_combat_resolution(self, resolution: AutoCombatResolution) -> None:
        if resolution.id in self.resolutions:
            raise StorageError(
                f"auto resolution {resolution.id} already exists",
                {"resolution_id": str(resolution.id)},
            )
        # Frozen, but the loot and resource payloads are still mutable.
        self.resolutions[resolution.id] = resolution.model_copy(deep=True)

    def get_auto_combat_resolution(
        self, resolution_id: uuid.UUID
    ) -> AutoCombatResolution | None:
        resolution = self.resolutions.get(resolution_id)
        return resolution.model_copy(deep=True) if resolution else None

    def get_auto_combat_resolutions_by_session(
        self, session_id: uuid.UUID
    ) -> list[AutoCombatResolution]:
        return [
            resolution.model_copy(deep=True)
            for resolution in self.resolutions.values()
            if resolution.game_session_id == session_id
        ]

    # ---- Initiative rules ----

    def create_or_update_initiative_rule(self, rule: SmartInitiativeRule) -> None:
        key = (rule.game_session_id, rule.entity_id)
        self.initiative_rules[key] = rule.model_copy(deep=True)

    def get_initiative_rule(
        self, session_id: uuid.UUID, entity_id: str
    ) -> SmartInitiativeRule | None:
        rule = self.initiative_rules.get((session_id, entity_id))
        return rule.model_copy(deep=True) if rule else None

    def get_initiative_rules_by_session(
        self, session_id: uuid.UUID
    ) -> list[SmartInitiativeRule]:
        return [
            rule.model_copy(deep=True)
            for (rule_session, _), rule in self.initiative_rules.items()
            if rule_session == session_id
        ]

    # ---- Action log ----

    def create_combat_action(self, action: CombatActionLog) -> None:
        if action.combat_id is None:
            raise StorageError(
                "combat action has no combat_id", {"action_id": str(action.id)}
            )
        self.actions[action.combat_id].append(action.model_copy(deep=True))

    def get_combat_actions(self, combat_id: uuid.UUID) -> list[CombatActionLog]:
        return [
            action.model_copy(deep=True) for action in self.actions.get(combat_id, [])
        ]

    def get_combat_actions_by_round(
        self, combat_id: uuid.UUID, round_number: int
    ) -> list[CombatActionLog]:
        return [
            action
            for action in self.get_combat_actions(combat_id)
            if action.round_number == round_number
        ]
