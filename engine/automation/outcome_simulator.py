"""
Outcome simulator for the combat engine.

Resolves an encounter the table wants to skip without playing out its turns:
the party and the encounter are each reduced to a strength score, the ratio
between the two picks an outcome tier, and everything else (rounds, resources,
loot, experience, narrative) is drawn from the tables in `core.tables`.
"""

import math
import random
import uuid
from typing import Any

from catchery import log_debug, log_info

from core import tables
from core.constants import Difficulty, OutcomeTier, Rarity
from core.dice_parser import DiceRoller, roll_d20
from core.error_handling import ResolutionError
from models.combatant import EnemyInfo, PartyCharacter
from models.resolution import AutoCombatResolution, AutoResolveRequest
from storage.repository import CombatRepository


# ---- Pure helpers ----


def parse_cr(cr: str) -> float:
    """
    Converts a challenge rating token to a number.

    Args:
        cr (str): The token, "1/8", "1/4", "1/2" or a non-negative integer.

    Returns:
        float: The challenge rating, 0 if the token cannot be parsed.

    """
    if cr in tables.FRACTIONAL_CR:
        return tables.FRACTIONAL_CR[cr]
    token = cr.strip()
    if token.isascii() and token.isdigit():
        return float(int(token))
    return 0.0


def average_party_level(characters: list[PartyCharacter]) -> float:
    """Mean level of the party, 1 for an empty party."""
    if not characters:
        return 1.0
    return sum(character.level for character in characters) / len(characters)


def encounter_cr(enemies: list[EnemyInfo]) -> float:
    """
    Effective challenge rating of an encounter.

    Args:
        enemies (list[EnemyInfo]): The enemy groups.

    Returns:
        float: Summed CR x count, raised when more than one group is fought.

    """
    total = sum(parse_cr(enemy.cr) * enemy.count for enemy in enemies)
    if len(enemies) > 1:
        total *= tables.MULTIPLE_GROUPS_CR_FACTOR
    return total


def determine_outcome(party_strength: float, encounter_strength: float) -> OutcomeTier:
    """
    Picks the outcome tier from the two strength scores.

    Args:
        party_strength (float): Strength of the party.
        encounter_strength (float): Strength of the encounter.

    Returns:
        OutcomeTier: The first tier whose ratio the party exceeds.

    """
    for ratio, outcome in tables.OUTCOME_THRESHOLDS:
        if party_strength > encounter_strength * ratio:
            return outcome
    return tables.FALLBACK_OUTCOME


def calculate_experience(enemies: list[EnemyInfo], party_size: int) -> int:
    """
    Experience awarded for an encounter.

    Args:
        enemies (list[EnemyInfo]): The enemy groups.
        party_size (int): Number of characters sharing the encounter.

    Returns:
        int: The adjusted experience.

    """
    total_xp = 0
    enemy_count = 0
    for enemy in enemies:
        xp = tables.XP_BY_CR.get(enemy.cr)
        if xp is None:
            cr = int(parse_cr(enemy.cr))
            if cr > 10:
                xp = tables.XP_HIGH_CR_BASE + (cr - 10) * tables.XP_HIGH_CR_STEP
            else:
                xp = tables.XP_DEFAULT
        total_xp += xp * enemy.count
        enemy_count += enemy.count

    multiplier = 1.0
    for minimum, value in tables.ENCOUNTER_XP_MULTIPLIERS:
        if enemy_count >= minimum:
            multiplier = value
            break

    if party_size < tables.SMALL_PARTY_SIZE:
        multiplier *= tables.SMALL_PARTY_XP_FACTOR
    elif party_size > tables.LARGE_PARTY_SIZE:
        multiplier *= tables.LARGE_PARTY_XP_FACTOR

    return int(total_xp * multiplier)


# ---- Simulator ----


class OutcomeSimulator:
    """Produces and stores a statistical outcome for a skipped encounter.

    The d20s behind the strength scores come from the dice roller; every
    other random draw (round counts, HP bands, loot, narrative) comes from the
    jitter generator, so both can be seeded independently.
    """

    def __init__(
        self,
        repository: CombatRepository,
        dice: DiceRoller,
        rng: random.Random | None = None,
        resolution_type: str = "quick",
    ) -> None:
        self.repository = repository
        self.dice = dice
        self.rng: random.Random = rng or random.Random()
        self.resolution_type = resolution_type

    def auto_resolve(
        self,
        session_id: uuid.UUID,
        characters: list[PartyCharacter],
        request: AutoResolveRequest,
    ) -> AutoCombatResolution:
        """
        Auto-resolves an encounter and persists the result.

        Args:
            session_id (uuid.UUID): Session the encounter belongs to.
            characters (list[PartyCharacter]): The party.
            request (AutoResolveRequest): The enemies and house settings.

        Returns:
            AutoCombatResolution: The stored resolution.

        Raises:
            ResolutionError: If a die cannot be rolled or the result cannot be saved.

        """
        party_level = average_party_level(characters)
        cr = encounter_cr(request.enemy_types)

        outcome, rounds, resources = self.simulate_combat(
            characters, party_level, cr, request.use_resources
        )
        loot = self.generate_loot(request.encounter_difficulty, request.enemy_types)
        experience = calculate_experience(request.enemy_types, len(characters))
        narrative = self.generate_narrative(outcome, rounds, request.terrain_type)

        resolution = AutoCombatResolution(
            game_session_id=session_id,
            encounter_difficulty=request.encounter_difficulty,
            party_composition=[character.snapshot() for character in characters],
            enemy_composition=[enemy.model_dump() for enemy in request.enemy_types],
            resolution_type=self.resolution_type,
            outcome=outcome,
            rounds_simulated=rounds,
            party_resources_used=resources,
            loot_generated=loot,
            experience_awarded=experience,
            narrative_summary=narrative,
        )

        try:
            self.repository.create_auto_combat_resolution(resolution)
        except Exception as e:
            raise ResolutionError(
                "failed to save combat resolution",
                {"session_id": str(session_id), "resolution_id": str(resolution.id)},
            ) from e

        log_info(
            f"Auto-resolved encounter: {outcome} in {rounds} rounds",
            {
                "session_id": str(session_id),
                "party_level": round(party_level, 2),
                "encounter_cr": round(cr, 3),
                "experience": experience,
            },
        )
        return resolution

    def simulate_combat(
        self,
        characters: list[PartyCharacter],
        party_level: float,
        cr: float,
        use_resources: bool,
    ) -> tuple[OutcomeTier, int, dict[str, Any]]:
        """
        Simulates the encounter as a whole.

        Args:
            characters (list[PartyCharacter]): The party.
            party_level (float): Mean party level.
            cr (float): Effective challenge rating of the encounter.
            use_resources (bool): Whether to track spell slots and the like.

        Returns:
            tuple[OutcomeTier, int, dict[str, Any]]:
                The outcome, the rounds it took and the resources spent.

        """
        try:
            party_roll = roll_d20(self.dice)
            encounter_roll = roll_d20(self.dice)
        except Exception as e:
            raise ResolutionError("failed to roll combat strength") from e

        party_strength = (
            party_level * len(characters) * tables.PARTY_STRENGTH_PER_LEVEL
            + party_roll * tables.STRENGTH_ROLL_WEIGHT
        )
        encounter_strength = (
            cr * tables.ENCOUNTER_STRENGTH_PER_CR
            + encounter_roll * tables.STRENGTH_ROLL_WEIGHT
        )

        outcome = determine_outcome(party_strength, encounter_strength)
        base, spread = tables.ROUNDS_BY_OUTCOME[outcome]
        rounds = base + self.rng.randrange(spread)

        log_debug(
            "Simulated encounter strength",
            {
                "party_strength": party_strength,
                "encounter_strength": encounter_strength,
                "outcome": str(outcome),
            },
        )
        return outcome, rounds, self.spend_resources(
            characters, party_level, outcome, rounds, use_resources
        )

    def spend_resources(
        self,
        characters: list[PartyCharacter],
        party_level: float,
        outcome: OutcomeTier,
        rounds: int,
        use_resources: bool,
    ) -> dict[str, Any]:
        """Draws the HP lost and, if tracked, the other resources spent."""
        low, width = tables.HP_LOSS_BY_OUTCOME[outcome]
        hp_loss = low + self.rng.random() * width
        total_hp = sum(character.max_hit_points for character in characters)

        resources: dict[str, Any] = {"hp_lost": int(total_hp * hp_loss)}
        if not use_resources:
            return resources

        max_slot_level = min(tables.MAX_SPELL_SLOT_LEVEL, math.ceil(party_level / 2))
        chance = tables.SPELL_SLOT_BASE_CHANCE + rounds * tables.SPELL_SLOT_CHANCE_PER_ROUND
        spell_slots_used: dict[int, int] = {}
        for level in range(1, max_slot_level + 1):
            if self.rng.random() < chance:
                spell_slots_used[level] = 1 + self.rng.randrange(
                    tables.SPELL_SLOTS_MAX_PER_LEVEL
                )

        resources["spell_slots_used"] = spell_slots_used
        resources["hit_dice_used"] = rounds // 2
        resources["consumables_used"] = self.rng.randrange(rounds) if rounds > 0 else 0
        return resources

    def generate_loot(
        self, difficulty: str, enemies: list[EnemyInfo]
    ) -> list[dict[str, Any]]:
        """
        Generates the loot of an encounter.

        Args:
            difficulty (str): Difficulty label of the encounter.
            enemies (list[EnemyInfo]): The enemy groups.

        Returns:
            list[dict[str, Any]]: A currency entry, possibly followed by an item.

        """
        level = Difficulty.from_label(difficulty)
        multiplier = tables.GOLD_MULTIPLIER.get(level, tables.DEFAULT_GOLD_MULTIPLIER)

        gold = 0
        for enemy in enemies:
            gold += int(parse_cr(enemy.cr) * multiplier * enemy.count)

        variance = gold // 2
        if variance > 0:
            gold = gold + self.rng.randrange(variance) - gold // 4

        loot: list[dict[str, Any]] = [
            {"type": "currency", "currency": "gp", "amount": gold}
        ]

        if self.rng.random() < tables.ITEM_CHANCE.get(level, 0.0):
            kind = tables.ITEM_KINDS[self.rng.randrange(len(tables.ITEM_KINDS))]
            loot.append(
                {
                    "type": "item",
                    "name": f"Random {kind}",
                    "rarity": str(self.random_rarity(level)),
                }
            )
        return loot

    def random_rarity(self, difficulty: Difficulty | None) -> Rarity:
        """Draws an item rarity from the table of the given difficulty."""
        bands = tables.RARITY_TABLE.get(difficulty)
        if not bands:
            return Rarity.COMMON
        roll = self.rng.random()
        for upper, rarity in bands:
            if roll < upper:
                return rarity
        return bands[-1][1]

    def generate_narrative(self, outcome: OutcomeTier, rounds: int, terrain: str) -> str:
        """
        Composes the narrative blurb of an encounter.

        Args:
            outcome (OutcomeTier): The outcome tier.
            rounds (int): How many rounds the encounter lasted.
            terrain (str): Terrain label, may be empty.

        Returns:
            str: The narrative.

        """
        options = tables.NARRATIVES[outcome]
        narrative = options[self.rng.randrange(len(options))]
        if terrain:
            narrative += tables.TERRAIN_FLAVOR.get(terrain.strip().lower(), "")
        narrative += f" The combat lasted {rounds} rounds."
        return narrative
