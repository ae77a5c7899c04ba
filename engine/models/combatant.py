"""
Combatant models for the combat engine.

These records are produced outside the engine (by the character and encounter
services) and are only read here.
"""

import uuid
from typing import Any

from pydantic import BaseModel, Field

from core.constants import CombatantType


class Combatant(BaseModel):
    """A participant of a detailed combat, as it stands when combat ends."""

    id: str = Field(
        description="Identifier of the combatant",
    )
    name: str = Field(
        description="Display name of the combatant",
    )
    type: CombatantType = Field(
        description="Whether the combatant is a player character or an NPC",
    )
    hp: int = Field(
        description="Current hit points",
    )
    max_hp: int = Field(
        default=0,
        ge=0,
        description="Maximum hit points",
    )
    dexterity_modifier: int = Field(
        default=0,
        description="Dexterity modifier, used for initiative",
    )

    def is_alive(self) -> bool:
        """Checks if the combatant is still standing."""
        return self.hp > 0


class Combat(BaseModel):
    """A finished detailed combat, fed to the analytics aggregator."""

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        description="Identifier of the combat",
    )
    game_session_id: uuid.UUID | None = Field(
        default=None,
        description="Session the combat belongs to",
    )
    name: str = Field(
        default="",
        description="Name of the encounter",
    )
    round: int = Field(
        default=0,
        ge=0,
        description="Round the combat was in when it ended",
    )
    combatants: list[Combatant] = Field(
        default_factory=list,
        description="Every combatant present at the end of the combat",
    )

    def get_combatant(self, combatant_id: str | None) -> Combatant | None:
        """
        Finds a combatant by id.

        Args:
            combatant_id (str | None): The id to look for.

        Returns:
            Combatant | None: The combatant, or None if it is not on the roster.

        """
        if combatant_id is None:
            return None
        for combatant in self.combatants:
            if combatant.id == combatant_id:
                return combatant
        return None


class PartyCharacter(BaseModel):
    """Snapshot of a party member handed to the outcome simulator."""

    id: str = Field(
        description="Identifier of the character",
    )
    name: str = Field(
        description="Name of the character",
    )
    character_class: str = Field(
        default="",
        description="Class of the character",
    )
    level: int = Field(
        default=1,
        ge=1,
        description="Character level",
    )
    max_hit_points: int = Field(
        default=0,
        ge=0,
        description="Maximum hit points",
    )

    def snapshot(self) -> dict[str, Any]:
        """Returns the party-composition entry stored with a resolution."""
        return {
            "id": self.id,
            "name": self.name,
            "class": self.character_class,
            "level": self.level,
            "hp": self.max_hit_points,
        }


class EnemyInfo(BaseModel):
    """One group of identical enemies in an auto-resolved encounter."""

    name: str = Field(
        description="Name of the enemy",
    )
    cr: str = Field(
        description="Challenge rating, fractional ('1/8', '1/4', '1/2') or integer",
    )
    count: int = Field(
        default=1,
        ge=0,
        description="Number of enemies in the group",
    )
