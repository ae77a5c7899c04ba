"""
Per-combatant statistics for the analytics aggregator.

Seeds one record per combatant present at the end of the combat, then replays
the action log once. Each action updates its actor through the processor
registered for its action type, and its target through `apply_to_target`.
"""

import uuid
from collections.abc import Callable

from core.constants import ActionOutcome, ActionType
from models.analytics import CombatActionLog, CombatantAnalytics
from models.combatant import Combat

ActionProcessor = Callable[[CombatantAnalytics, CombatActionLog], None]


def process_attack(stats: CombatantAnalytics, action: CombatActionLog) -> None:
    """Counts an attack and its outcome."""
    stats.attacks_made += 1
    if action.outcome in (ActionOutcome.HIT, ActionOutcome.CRITICAL):
        stats.attacks_hit += 1
        if action.outcome == ActionOutcome.CRITICAL:
            stats.critical_hits += 1
    elif action.outcome == ActionOutcome.MISS:
        stats.attacks_missed += 1
    elif action.outcome == ActionOutcome.CRITICAL_MISS:
        stats.attacks_missed += 1
        stats.critical_misses += 1
    stats.damage_dealt += action.damage_dealt


def process_spell(stats: CombatantAnalytics, action: CombatActionLog) -> None:
    """Spells and abilities deal damage and are remembered as used."""
    stats.damage_dealt += action.damage_dealt
    stats.abilities_used.append(str(action.action_type))


def process_heal(stats: CombatantAnalytics, action: CombatActionLog) -> None:
    stats.healing_done += action.damage_dealt


def process_save(stats: CombatantAnalytics, action: CombatActionLog) -> None:
    if action.outcome == ActionOutcome.SUCCESS:
        stats.saves_made += 1
    else:
        stats.saves_failed += 1


ACTION_PROCESSORS: dict[ActionType, ActionProcessor] = {
    ActionType.ATTACK: process_attack,
    ActionType.SPELL: process_spell,
    ActionType.ABILITY: process_spell,
    ActionType.HEAL: process_heal,
    ActionType.SAVE: process_save,
}


def apply_to_target(stats: CombatantAnalytics, action: CombatActionLog) -> None:
    """
    Updates the target of an action.

    Args:
        stats (CombatantAnalytics): The target's record.
        action (CombatActionLog): The action.

    """
    if action.action_type.deals_damage:
        stats.damage_taken += action.damage_dealt
    elif action.action_type == ActionType.HEAL:
        stats.healing_received += action.damage_dealt
    if action.conditions_applied:
        stats.conditions_suffered.extend(action.conditions_applied)


def defeat_round(combatant_id: str, actions: list[CombatActionLog]) -> int | None:
    """Round of the first killing blow landed on the combatant, if any."""
    for action in actions:
        if (
            action.target_id == combatant_id
            and action.outcome == ActionOutcome.KILLING_BLOW
        ):
            return action.round_number
    return None


def seed_combatant_stats(
    analytics_id: uuid.UUID, combat: Combat, actions: list[CombatActionLog]
) -> dict[str, CombatantAnalytics]:
    """
    Creates an empty record for every combatant of the combat.

    Combatants still standing survived every round; a fallen combatant
    survived until the round of the killing blow that dropped them.
    """
    stats_by_id: dict[str, CombatantAnalytics] = {}
    for combatant in combat.combatants:
        rounds_survived = combat.round
        if not combatant.is_alive():
            fallen_at = defeat_round(combatant.id, actions)
            if fallen_at is not None:
                rounds_survived = fallen_at
        stats_by_id[combatant.id] = CombatantAnalytics(
            combat_analytics_id=analytics_id,
            combatant_id=combatant.id,
            combatant_type=combatant.type,
            combatant_name=combatant.name,
            final_hp=combatant.hp,
            rounds_survived=rounds_survived,
        )
    return stats_by_id


def calculate_combatant_analytics(
    analytics_id: uuid.UUID, combat: Combat, actions: list[CombatActionLog]
) -> list[CombatantAnalytics]:
    """
    Builds the statistics of every combatant of a finished combat.

    Args:
        analytics_id (uuid.UUID): The combat analytics record they belong to.
        combat (Combat): The finished combat.
        actions (list[CombatActionLog]): Its full action log, in order.

    Returns:
        list[CombatantAnalytics]: One record per combatant, in roster order.
            Actors and targets missing from the roster are ignored.

    """
    stats_by_id = seed_combatant_stats(analytics_id, combat, actions)

    for action in actions:
        actor = stats_by_id.get(action.actor_id)
        processor = ACTION_PROCESSORS.get(action.action_type)
        if actor is not None and processor is not None:
            processor(actor, action)

        if action.target_id is not None:
            target = stats_by_id.get(action.target_id)
            if target is not None:
                apply_to_target(target, action)

    return list(stats_by_id.values())
