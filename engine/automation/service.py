"""
Combat automation service.

Single entry point used by the encounter orchestrator for everything that
runs instead of a detailed combat: auto-resolving encounters, rolling
initiative, and managing the session's initiative house rules.
"""

import random
import uuid
from datetime import datetime, timezone

from catchery import log_info

from core.config import EngineConfig
from core.dice_parser import DiceRoller, StandardDiceRoller
from core.error_handling import StorageError
from models.combatant import PartyCharacter
from models.initiative import InitiativeCombatant, InitiativeEntry, SmartInitiativeRule
from models.resolution import AutoCombatResolution, AutoResolveRequest
from storage.repository import CombatRepository

from automation.initiative import InitiativeCalculator
from automation.outcome_simulator import OutcomeSimulator


class CombatAutomationService:
    """Manages auto-resolution and initiative for game sessions."""

    def __init__(
        self,
        repository: CombatRepository,
        dice: DiceRoller | None = None,
        rng: random.Random | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            repository (CombatRepository): Where records are stored.
            dice (DiceRoller | None): The dice primitive. A standard roller
                seeded from the configuration if omitted.
            rng (random.Random | None): The jitter generator. Seeded from the
                configuration if omitted.
            config (EngineConfig | None): Engine settings.

        """
        self.config = config or EngineConfig()
        self.repository = repository
        self.dice: DiceRoller = dice or StandardDiceRoller(self.config.make_rng(0))
        self.rng: random.Random = rng or self.config.make_rng(1)
        self.simulator = OutcomeSimulator(
            repository,
            self.dice,
            self.rng,
            resolution_type=self.config.resolution_type,
        )
        self.initiative = InitiativeCalculator(repository, self.dice)

    def auto_resolve_combat(
        self,
        session_id: uuid.UUID,
        characters: list[PartyCharacter],
        request: AutoResolveRequest,
    ) -> AutoCombatResolution:
        """Quick resolution of a minor encounter, see `OutcomeSimulator`."""
        return self.simulator.auto_resolve(session_id, characters, request)

    def smart_initiative(
        self,
        session_id: uuid.UUID,
        combatants: list[InitiativeCombatant],
    ) -> list[InitiativeEntry]:
        """Rolls and orders initiative, see `InitiativeCalculator`."""
        return self.initiative.smart_initiative(session_id, combatants)

    def set_initiative_rule(self, rule: SmartInitiativeRule) -> SmartInitiativeRule:
        """
        Creates or updates an initiative rule.

        Args:
            rule (SmartInitiativeRule): The rule to store.

        Returns:
            SmartInitiativeRule: The stored rule, with a fresh `updated_at`.

        Raises:
            StorageError: If the rule cannot be stored.

        """
        stored = rule.model_copy(update={"updated_at": datetime.now(timezone.utc)})
        self.repository.create_or_update_initiative_rule(stored)
        log_info(
            f"Initiative rule set for {rule.entity_id}",
            {"session_id": str(rule.game_session_id), "entity_id": rule.entity_id},
        )
        return stored

    def get_initiative_rules(self, session_id: uuid.UUID) -> list[SmartInitiativeRule]:
        """Every initiative rule of a session."""
        return self.repository.get_initiative_rules_by_session(session_id)

    def get_auto_resolution(self, resolution_id: uuid.UUID) -> AutoCombatResolution:
        """
        Retrieves a single auto-resolution.

        Raises:
            StorageError: If there is no such resolution.

        """
        resolution = self.repository.get_auto_combat_resolution(resolution_id)
        if resolution is None:
            raise StorageError(
                f"auto resolution {resolution_id} not found",
                {"resolution_id": str(resolution_id)},
            )
        return resolution

    def get_auto_resolutions_by_session(
        self, session_id: uuid.UUID
    ) -> list[AutoCombatResolution]:
        """Every auto-resolution of a session."""
        return self.repository.get_auto_combat_resolutions_by_session(session_id)
