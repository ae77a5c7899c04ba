"""
Storage contract of the combat engine.

The engine never talks to a database itself. It reads and writes its records
through a repository satisfying `CombatRepository`; failures are reported by
raising `StorageError`.
"""

import uuid
from typing import Any, Protocol

from models.analytics import CombatActionLog, CombatAnalytics, CombatantAnalytics
from models.initiative import SmartInitiativeRule
from models.resolution import AutoCombatResolution


class CombatRepository(Protocol):
    """Persistence operations used by the combat engine."""

    # ---- Combat analytics ----

    def create_combat_analytics(self, analytics: CombatAnalytics) -> None: ...

    def get_combat_analytics(self, combat_id: uuid.UUID) -> CombatAnalytics | None: ...

    def get_combat_analytics_by_session(
        self, session_id: uuid.UUID
    ) -> list[CombatAnalytics]: ...

    def update_combat_analytics(
        self, analytics_id: uuid.UUID, updates: dict[str, Any]
    ) -> None:
        """Apply a partial update.

        `updated_at` is refreshed unless the update carries its own.

        Raises:
            StorageError: If the record does not exist or cannot be written.
        """
        ...

    # ---- Combatant analytics ----

    def create_combatant_analytics(self, analytics: CombatantAnalytics) -> None: ...

    def get_combatant_analytics(
        self, analytics_id: uuid.UUID
    ) -> list[CombatantAnalytics]: ...

    # ---- Auto resolutions ----

    def create_auto_combat_resolution(self, resolution: AutoCombatResolution) -> None: ...

    def get_auto_combat_resolution(
        self, resolution_id: uuid.UUID
    ) -> AutoCombatResolution | None: ...

    def get_auto_combat_resolutions_by_session(
        self, session_id: uuid.UUID
    ) -> list[AutoCombatResolution]: ...

    # ---- Initiative rules ----

    def create_or_update_initiative_rule(self, rule: SmartInitiativeRule) -> None: ...

    def get_initiative_rule(
        self, session_id: uuid.UUID, entity_id: str
    ) -> SmartInitiativeRule | None:
        """Return the rule, or None when the combatant has none."""
        ...

    def get_initiative_rules_by_session(
        self, session_id: uuid.UUID
    ) -> list[SmartInitiativeRule]: ...

    # ---- Action log ----

    def create_combat_action(self, action: CombatActionLog) -> None: ...

    def get_combat_actions(self, combat_id: uuid.UUID) -> list[CombatActionLog]: ...

    def get_combat_actions_by_round(
        self, combat_id: uuid.UUID, round_number: int
    ) -> list[CombatActionLog]: ...
