"""
Constants and enumerations for the combat engine.

Defines the enumerations shared by the outcome simulator, the initiative
calculator and the analytics aggregator: combatant types, action types,
action outcomes, outcome tiers, encounter difficulties, loot rarities and
performance ratings.
"""

from enum import Enum


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").lower().capitalize()


class CombatantType(NiceEnum):
    """Defines the type of combatant taking part in a combat."""

    CHARACTER = "character"
    NPC = "npc"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this combatant type."""
        return {
            CombatantType.CHARACTER: "👤",
            CombatantType.NPC: "👹",
        }.get(self, "❔")

    @property
    def color(self) -> str:
        """Returns the color string associated with this combatant type."""
        return {
            CombatantType.CHARACTER: "bold blue",
            CombatantType.NPC: "bold red",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies combatant type color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class ActionType(NiceEnum):
    """Defines the type of an action recorded in the combat log."""

    ATTACK = "attack"
    SPELL = "spell"
    HEAL = "heal"
    SAVE = "save"
    ABILITY = "ability"
    MOVE = "move"
    OTHER = "other"

    @property
    def deals_damage(self) -> bool:
        """Attacks and spells are the actions counted as damage."""
        return self in (ActionType.ATTACK, ActionType.SPELL)

    @property
    def is_setup(self) -> bool:
        """Spells and abilities are the actions able to buff or debuff."""
        return self in (ActionType.SPELL, ActionType.ABILITY)


class ActionOutcome(NiceEnum):
    """Defines the outcome tag of an action recorded in the combat log."""

    HIT = "hit"
    MISS = "miss"
    CRITICAL = "critical"
    CRITICAL_MISS = "critical_miss"
    KILLING_BLOW = "killing_blow"
    SUCCESS = "success"
    FAILURE = "failure"
    OVERHEAL = "overheal"


class OutcomeTier(NiceEnum):
    """Defines the result of an auto-resolved encounter."""

    DECISIVE_VICTORY = "decisive_victory"
    VICTORY = "victory"
    COSTLY_VICTORY = "costly_victory"
    RETREAT = "retreat"
    DEFEAT = "defeat"

    @property
    def color(self) -> str:
        """Returns the color string associated with this outcome."""
        return {
            OutcomeTier.DECISIVE_VICTORY: "bold green",
            OutcomeTier.VICTORY: "green",
            OutcomeTier.COSTLY_VICTORY: "yellow",
            OutcomeTier.RETREAT: "bold yellow",
            OutcomeTier.DEFEAT: "bold red",
        }.get(self, "dim white")

    @property
    def colored_name(self) -> str:
        return f"[{self.color}]{self.display_name}[/]"


class Difficulty(NiceEnum):
    """Defines the encounter difficulty labels known to the loot tables."""

    TRIVIAL = "trivial"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    DEADLY = "deadly"

    @classmethod
    def from_label(cls, label: str) -> "Difficulty | None":
        """
        Returns the difficulty matching the label, or None if it is unknown.

        Args:
            label (str): The difficulty label (case-insensitive).

        Returns:
            Difficulty | None: The matching difficulty.

        """
        try:
            return cls(label.strip().lower())
        except ValueError:
            return None


class Rarity(NiceEnum):
    """Defines the rarity of a generated loot item."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    VERY_RARE = "very_rare"
    LEGENDARY = "legendary"


class PerformanceRating(NiceEnum):
    """Defines the performance tier of a single combatant."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"

    @property
    def color(self) -> str:
        """Returns the color string associated with this rating."""
        return {
            PerformanceRating.EXCELLENT: "bold green",
            PerformanceRating.GOOD: "green",
            PerformanceRating.FAIR: "yellow",
            PerformanceRating.POOR: "red",
        }.get(self, "dim white")

    @property
    def colored_name(self) -> str:
        return f"[{self.color}]{self.display_name}[/]"
