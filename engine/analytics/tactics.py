"""
Tactical analysis of a finished combat.

Four independent sub-scores (positioning, resource management, target
prioritization, teamwork) start at a base score, move with what the action
log shows, and are clamped to [1, 10]. Missed opportunities are listed
alongside.
"""

from collections import Counter

from core import tables
from core.constants import ActionOutcome, ActionType, CombatantType
from core.documents import doc_bool, doc_mapping, doc_number
from models.analytics import (
    CombatActionLog,
    CombatantAnalytics,
    TacticalAnalysis,
)
from models.combatant import Combat


def clamp_score(score: int) -> int:
    """Clamps a sub-score to the tactical range."""
    return max(tables.TACTICAL_MIN_SCORE, min(tables.TACTICAL_MAX_SCORE, score))


def _stepped_points(count: int, steps: list[tuple[int, int]]) -> int:
    for limit, points in steps:
        if count > limit:
            return points
    return 0


def analyze_positioning(actions: list[CombatActionLog]) -> int:
    """Rewards repeated use of cover and of high ground."""
    cover_uses = sum(1 for a in actions if doc_bool(a.position_data, "used_cover"))
    high_ground = sum(1 for a in actions if doc_bool(a.position_data, "high_ground"))

    score = tables.TACTICAL_BASE_SCORE
    score += _stepped_points(cover_uses, tables.COVER_POINTS)
    score += _stepped_points(high_ground, tables.HIGH_GROUND_POINTS)
    return clamp_score(score)


def analyze_resource_use(actions: list[CombatActionLog]) -> int:
    """
    Scores how well spell slots and healing were spent.

    A high-level spell doing little damage is wasted, a spell doing more than
    ten times its level in damage is efficient, and a large heal tagged as
    overheal is wasted healing.
    """
    wasted_spells = 0
    wasted_healing = 0
    efficient_uses = 0

    for action in actions:
        spell_level = doc_number(action.resources_used, "spell_level")
        if spell_level is not None:
            if (
                spell_level >= tables.HIGH_LEVEL_SPELL
                and action.damage_dealt < tables.LOW_DAMAGE_FOR_HIGH_LEVEL
            ):
                wasted_spells += 1
            elif action.damage_dealt > int(spell_level) * tables.EFFICIENT_DAMAGE_PER_LEVEL:
                efficient_uses += 1

        if (
            action.action_type == ActionType.HEAL
            and action.damage_dealt > tables.OVERHEAL_AMOUNT
            and action.outcome == ActionOutcome.OVERHEAL
        ):
            wasted_healing += 1

    score = tables.TACTICAL_BASE_SCORE
    if wasted_spells > tables.WASTED_SPELLS_LIMIT:
        score -= tables.WASTED_SPELLS_PENALTY
    if wasted_healing > tables.OVERHEAL_LIMIT:
        score -= tables.OVERHEAL_PENALTY
    if efficient_uses > tables.EFFICIENT_USE_LIMIT:
        score += tables.EFFICIENT_USE_POINTS
    return clamp_score(score)


def analyze_targeting(actions: list[CombatActionLog], combat: Combat) -> int:
    """Rewards NPCs taken down by attacks early in the fight."""
    early_kills = 0
    for action in actions:
        if (
            action.action_type != ActionType.ATTACK
            or action.outcome != ActionOutcome.KILLING_BLOW
        ):
            continue
        target = combat.get_combatant(action.target_id)
        if (
            target is not None
            and target.type == CombatantType.NPC
            and action.round_number < tables.PRIORITY_KILL_ROUND
        ):
            early_kills += 1

    score = tables.TACTICAL_BASE_SCORE + min(tables.PRIORITY_KILL_MAX_POINTS, early_kills)
    return clamp_score(score)


def analyze_teamwork(
    actions: list[CombatActionLog], stats: list[CombatantAnalytics]
) -> int:
    """
    Scores coordination: focused attacks, timely heals and setup actions.

    Args:
        actions (list[CombatActionLog]): The action log, in order.
        stats (list[CombatantAnalytics]): Statistics of every combatant.

    Returns:
        int: The teamwork sub-score.

    """
    stats_by_id = {s.combatant_id: s for s in stats}
    combo_attacks = 0
    timely_heals = 0
    setup_actions = 0

    previous: CombatActionLog | None = None
    for action in actions:
        if (
            action.action_type == ActionType.ATTACK
            and previous is not None
            and previous.action_type == ActionType.ATTACK
            and previous.round_number == action.round_number
            and action.target_id is not None
            and previous.target_id == action.target_id
        ):
            combo_attacks += 1

        if action.action_type == ActionType.HEAL and action.target_id is not None:
            target = stats_by_id.get(action.target_id)
            if target is not None and target.damage_taken > target.final_hp:
                timely_heals += 1

        if action.action_type.is_setup and action.conditions_applied:
            setup_actions += 1

        previous = action

    score = tables.TACTICAL_BASE_SCORE
    if combo_attacks > tables.COMBO_ATTACK_LIMIT:
        score += tables.COMBO_ATTACK_POINTS
    if timely_heals > tables.TIMELY_HEAL_LIMIT:
        score += tables.TIMELY_HEAL_POINTS
    if setup_actions > tables.SETUP_ACTION_LIMIT:
        score += tables.SETUP_ACTION_POINTS
    return clamp_score(score)


def _has_unused_high_level_slots(action: CombatActionLog) -> bool:
    slots = doc_mapping(action.resources_used, "spell_slots_remaining")
    for level, remaining in slots.items():
        try:
            slot_level = int(level)
        except (TypeError, ValueError):
            continue
        if isinstance(remaining, bool) or not isinstance(remaining, (int, float)):
            continue
        if slot_level >= tables.HIGH_LEVEL_SPELL and remaining > 0:
            return True
    return False


def find_missed_opportunities(
    actions: list[CombatActionLog], combat: Combat
) -> list[str]:
    """
    Lists tactical opportunities the party let slip.

    Args:
        actions (list[CombatActionLog]): The action log.
        combat (Combat): The finished combat.

    Returns:
        list[str]: The missed opportunities, possibly empty.

    """
    opportunities: list[str] = []

    # Rounds where a single-target attack was made while enemies crowded in.
    npc_actions = Counter(
        a.round_number for a in actions if a.actor_type == CombatantType.NPC
    )
    targeted_rounds = {
        a.round_number
        for a in actions
        if a.action_type == ActionType.ATTACK and a.target_id is not None
    }
    aoe_rounds = sum(
        1 for r in targeted_rounds if npc_actions[r] >= tables.AOE_ENEMY_ACTIONS
    )
    if aoe_rounds > tables.AOE_ROUNDS_LIMIT:
        opportunities.append(tables.MISSED_AOE)

    if any(
        _has_unused_high_level_slots(a)
        for a in actions
        if a.round_number == combat.round
    ):
        opportunities.append(tables.MISSED_HIGH_LEVEL_SLOTS)

    return opportunities


def analyze_tactics(
    combat: Combat,
    actions: list[CombatActionLog],
    stats: list[CombatantAnalytics],
) -> TacticalAnalysis:
    """Runs every tactical heuristic over a finished combat."""
    return TacticalAnalysis(
        positioning_score=analyze_positioning(actions),
        resource_management=analyze_resource_use(actions),
        target_prioritization=analyze_targeting(actions, combat),
        teamwork_score=analyze_teamwork(actions, stats),
        missed_opportunities=find_missed_opportunities(actions, combat),
    )
