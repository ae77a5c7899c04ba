"""
Auto-resolution models for the combat engine.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from core.constants import OutcomeTier
from models.combatant import EnemyInfo


class AutoResolveRequest(BaseModel):
    """What the table asks for when it skips an encounter."""

    encounter_difficulty: str = Field(
        description="Difficulty label (trivial, easy, medium, hard, deadly)",
    )
    enemy_types: list[EnemyInfo] = Field(
        default_factory=list,
        description="The enemy groups fought",
    )
    terrain_type: str = Field(
        default="",
        description="Optional terrain label, adds flavor to the narrative",
    )
    use_resources: bool = Field(
        default=False,
        description="Whether spell slots, hit dice and consumables are tracked",
    )


class AutoCombatResolution(BaseModel):
    """The statistical outcome of an auto-resolved encounter.

    Created once by the outcome simulator, persisted, and never changed.
    """

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        description="Identifier of the resolution",
    )
    game_session_id: uuid.UUID = Field(
        description="Session the encounter belongs to",
    )
    encounter_difficulty: str = Field(
        description="Difficulty label of the encounter",
    )
    party_composition: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Snapshot of the party",
    )
    enemy_composition: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Snapshot of the enemy groups",
    )
    resolution_type: str = Field(
        default="quick",
        description="How the encounter was resolved",
    )
    outcome: OutcomeTier = Field(
        description="Outcome tier of the encounter",
    )
    rounds_simulated: int = Field(
        ge=0,
        description="Number of rounds the encounter is deemed to have lasted",
    )
    party_resources_used: dict[str, Any] = Field(
        default_factory=dict,
        description="HP lost and, if tracked, spell slots, hit dice and consumables",
    )
    loot_generated: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Currency and items found",
    )
    experience_awarded: int = Field(
        ge=0,
        description="Experience awarded to the party",
    )
    narrative_summary: str = Field(
        default="",
        description="Short narrative of the encounter",
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp",
    )
