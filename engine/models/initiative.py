"""
Initiative models for the combat engine.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, field_validator

from core.constants import CombatantType
from core.documents import Document, parse_document


class InitiativeCombatant(BaseModel):
    """A combatant that has to roll initiative."""

    id: str = Field(
        description="Identifier of the combatant",
    )
    type: CombatantType = Field(
        description="Whether the combatant is a player character or an NPC",
    )
    name: str = Field(
        description="Display name of the combatant",
    )
    dexterity_modifier: int = Field(
        default=0,
        description="Dexterity modifier of the combatant",
    )


class SmartInitiativeRule(BaseModel):
    """House-rule overrides for one combatant's initiative in one session."""

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        description="Identifier of the rule",
    )
    game_session_id: uuid.UUID = Field(
        description="Session the rule applies to",
    )
    entity_id: str = Field(
        description="Combatant the rule applies to",
    )
    entity_type: CombatantType = Field(
        default=CombatantType.CHARACTER,
        description="Type of the combatant the rule applies to",
    )
    base_initiative_bonus: int = Field(
        default=0,
        description="Flat bonus added to the initiative roll",
    )
    advantage_on_initiative: bool = Field(
        default=False,
        description="Roll two d20 and keep the highest",
    )
    alert_feat: bool = Field(
        default=False,
        description="The Alert feat grants +5 to initiative",
    )
    special_rules: Document = Field(
        default_factory=dict,
        description="Opaque special rules, e.g. {'priority': 1} to force the order",
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last update timestamp",
    )

    @field_validator("special_rules", mode="before")
    @classmethod
    def _parse_special_rules(cls, value: Any) -> Document:
        return parse_document(value)


class InitiativeEntry(BaseModel):
    """One combatant's place in the turn order."""

    id: str = Field(
        description="Identifier of the combatant",
    )
    type: CombatantType = Field(
        description="Type of the combatant",
    )
    name: str = Field(
        description="Display name of the combatant",
    )
    roll: int = Field(
        description="The d20 kept for initiative",
    )
    bonus: int = Field(
        description="Dexterity, rule and feat bonuses",
    )
    initiative: int = Field(
        description="Final initiative value, priority offset included",
    )
