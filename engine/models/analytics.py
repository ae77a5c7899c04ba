"""
Combat analytics models for the combat engine.

The action log is written by the turn-by-turn combat subsystem; everything
else in this module is produced by the analytics aggregator.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, field_validator

from core.constants import ActionOutcome, ActionType, CombatantType, PerformanceRating
from core.documents import Document, parse_document


def _now() -> datetime:
    return datetime.now(timezone.utc)


class CombatActionLog(BaseModel):
    """A single action taken during a detailed combat."""

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        description="Identifier of the log entry",
    )
    combat_id: uuid.UUID | None = Field(
        default=None,
        description="Combat the action belongs to",
    )
    round_number: int = Field(
        default=1,
        ge=0,
        description="Round in which the action was taken",
    )
    turn_number: int = Field(
        default=0,
        ge=0,
        description="Turn in which the action was taken",
    )
    actor_id: str = Field(
        description="Combatant taking the action",
    )
    actor_type: CombatantType = Field(
        default=CombatantType.CHARACTER,
        description="Type of the acting combatant",
    )
    action_type: ActionType = Field(
        description="Kind of action",
    )
    target_id: str | None = Field(
        default=None,
        description="Combatant targeted by the action, if any",
    )
    target_type: CombatantType | None = Field(
        default=None,
        description="Type of the targeted combatant, if any",
    )
    outcome: ActionOutcome | None = Field(
        default=None,
        description="Outcome tag of the action",
    )
    damage_dealt: int = Field(
        default=0,
        ge=0,
        description="Damage dealt, or healing done for heal actions",
    )
    conditions_applied: list[str] = Field(
        default_factory=list,
        description="Conditions applied to the target",
    )
    resources_used: Document | None = Field(
        default=None,
        description="Opaque resource payload (spell_level, spell_slots_remaining, ...)",
    )
    position_data: Document | None = Field(
        default=None,
        description="Opaque position payload (used_cover, high_ground, ...)",
    )
    roll_results: Document | None = Field(
        default=None,
        description="Opaque dice payload",
    )
    timestamp: datetime = Field(
        default_factory=_now,
        description="When the action was logged",
    )

    @field_validator("resources_used", "position_data", "roll_results", mode="before")
    @classmethod
    def _parse_payload(cls, value: Any) -> Any:
        """Payloads may arrive as JSON text; unparseable text reads as empty."""
        return None if value is None else parse_document(value)


class CombatAnalytics(BaseModel):
    """Aggregate statistics of a finished combat.

    Written twice: once with the totals, then patched with the summary and the
    overall tactical rating.
    """

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        description="Identifier of the analytics record",
    )
    combat_id: uuid.UUID = Field(
        description="Combat the analytics describe",
    )
    game_session_id: uuid.UUID = Field(
        description="Session the combat belongs to",
    )
    combat_duration: int = Field(
        default=0,
        ge=0,
        description="Duration of the combat, in rounds",
    )
    total_damage_dealt: int = Field(
        default=0,
        ge=0,
        description="Damage dealt by attacks and spells",
    )
    total_healing_done: int = Field(
        default=0,
        ge=0,
        description="Healing done by heal actions",
    )
    killing_blows: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Every killing blow: dealer_id, target_id, damage",
    )
    combat_summary: Document | None = Field(
        default=None,
        description="Generated summary, patched after creation",
    )
    mvp_id: str = Field(
        default="",
        description="Combatant who dealt the most damage",
    )
    mvp_type: str = Field(
        default="",
        description="Type of the MVP, empty if not on the roster",
    )
    tactical_rating: int = Field(
        default=0,
        description="Mean of the tactical sub-scores, patched after creation",
    )
    created_at: datetime = Field(
        default_factory=_now,
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        default_factory=_now,
        description="Last update timestamp",
    )


class CombatantAnalytics(BaseModel):
    """Performance of a single combatant in a finished combat."""

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        description="Identifier of the record",
    )
    combat_analytics_id: uuid.UUID = Field(
        description="Analytics record this one belongs to",
    )
    combatant_id: str = Field(
        description="Identifier of the combatant",
    )
    combatant_type: CombatantType = Field(
        description="Type of the combatant",
    )
    combatant_name: str = Field(
        description="Display name of the combatant",
    )
    damage_dealt: int = 0
    damage_taken: int = 0
    healing_done: int = 0
    healing_received: int = 0
    attacks_made: int = 0
    attacks_hit: int = 0
    attacks_missed: int = 0
    critical_hits: int = 0
    critical_misses: int = 0
    saves_made: int = 0
    saves_failed: int = 0
    rounds_survived: int = 0
    final_hp: int = 0
    conditions_suffered: list[str] = Field(
        default_factory=list,
        description="Conditions applied to the combatant, in order",
    )
    abilities_used: list[str] = Field(
        default_factory=list,
        description="Action types of the spells and abilities used, in order",
    )
    created_at: datetime = Field(
        default_factory=_now,
        description="Creation timestamp",
    )

    @property
    def hit_rate(self) -> float | None:
        """Fraction of attacks that hit, None if no attack was made."""
        if self.attacks_made <= 0:
            return None
        return self.attacks_hit / self.attacks_made


class TacticalAnalysis(BaseModel):
    """Four tactical sub-scores of a finished combat, each in [1, 10]."""

    positioning_score: int = Field(ge=1, le=10)
    resource_management: int = Field(ge=1, le=10)
    target_prioritization: int = Field(ge=1, le=10)
    teamwork_score: int = Field(ge=1, le=10)
    missed_opportunities: list[str] = Field(default_factory=list)

    @property
    def overall_score(self) -> int:
        """Integer mean of the four sub-scores."""
        return (
            self.positioning_score
            + self.resource_management
            + self.target_prioritization
            + self.teamwork_score
        ) // 4


class CombatantReport(BaseModel):
    """A combatant's statistics together with their rating and highlights."""

    analytics: CombatantAnalytics
    performance_rating: PerformanceRating
    highlights: list[str] = Field(default_factory=list)


class CombatAnalyticsReport(BaseModel):
    """Everything the aggregator produces for a finished combat."""

    analytics: CombatAnalytics
    combatant_reports: list[CombatantReport] = Field(default_factory=list)
    tactical_analysis: TacticalAnalysis
    recommendations: list[str] = Field(default_factory=list)
