"""
Tests for per-combatant statistics.
"""

import random
import uuid

import pytest
from analytics.combatant_stats import calculate_combatant_analytics
from analytics.scoring import performance_score
from core.constants import ActionOutcome, ActionType, CombatantType
from models.analytics import CombatActionLog
from models.combatant import Combat, Combatant


@pytest.fixture
def combat():
    return Combat(
        name="Test",
        round=4,
        combatants=[
            Combatant(id="pc-1", name="Aria", type=CombatantType.CHARACTER, hp=20, max_hp=30),
            Combatant(id="pc-2", name="Brom", type=CombatantType.CHARACTER, hp=0, max_hp=25),
            Combatant(id="npc-1", name="Orc", type=CombatantType.NPC, hp=0, max_hp=15),
        ],
    )


def action(actor, action_type, target=None, outcome=None, amount=0, round_number=1, **kwargs):
    return CombatActionLog(
        actor_id=actor,
        action_type=action_type,
        target_id=target,
        outcome=outcome,
        damage_dealt=amount,
        round_number=round_number,
        **kwargs,
    )


def by_id(stats):
    return {s.combatant_id: s for s in stats}


def test_ten_attacks(combat):
    outcomes = (
        [ActionOutcome.HIT] * 5 + [ActionOutcome.CRITICAL] * 3 + [ActionOutcome.MISS] * 2
    )
    actions = [action("pc-2", ActionType.ATTACK, "npc-1", o) for o in outcomes]

    stats = by_id(calculate_combatant_analytics(uuid.uuid4(), combat, actions))["pc-2"]

    assert stats.attacks_made == 10
    assert stats.attacks_hit == 8
    assert stats.attacks_missed == 2
    assert stats.critical_hits == 3
    assert stats.hit_rate == pytest.approx(0.8)
    # Hit rate +3, one or more crits +1; no survival, impact or healing points.
    assert performance_score(stats) == 4


def test_critical_miss_counts_as_miss(combat):
    actions = [action("pc-1", ActionType.ATTACK, "npc-1", ActionOutcome.CRITICAL_MISS)]
    stats = by_id(calculate_combatant_analytics(uuid.uuid4(), combat, actions))["pc-1"]
    assert stats.attacks_missed == 1
    assert stats.critical_misses == 1
    assert stats.attacks_hit == 0


def test_other_attack_outcomes_only_count_as_made(combat):
    actions = [
        action("pc-1", ActionType.ATTACK, "npc-1", ActionOutcome.KILLING_BLOW, 9),
        action("pc-1", ActionType.ATTACK, "npc-1", None, 3),
    ]
    stats = by_id(calculate_combatant_analytics(uuid.uuid4(), combat, actions))
    assert stats["pc-1"].attacks_made == 2
    assert stats["pc-1"].attacks_hit == 0
    assert stats["pc-1"].attacks_missed == 0
    assert stats["pc-1"].damage_dealt == 12
    assert stats["npc-1"].damage_taken == 12


def test_hit_and_miss_never_exceed_attacks_made(combat):
    rng = random.Random(8)
    outcomes = list(ActionOutcome) + [None]
    actions = [
        action("pc-1", ActionType.ATTACK, "npc-1", rng.choice(outcomes), rng.randint(0, 12))
        for _ in range(300)
    ]
    stats = by_id(calculate_combatant_analytics(uuid.uuid4(), combat, actions))["pc-1"]
    assert stats.attacks_hit + stats.attacks_missed <= stats.attacks_made
    assert stats.attacks_made == 300


def test_spells_heals_and_saves(combat):
    actions = [
        action("pc-1", ActionType.SPELL, "npc-1", ActionOutcome.HIT, 14, conditions_applied=["burning"]),
        action("pc-1", ActionType.ABILITY, "npc-1", None, 4),
        action("pc-2", ActionType.HEAL, "pc-1", ActionOutcome.SUCCESS, 8),
        action("pc-2", ActionType.SAVE, outcome=ActionOutcome.SUCCESS),
        action("pc-2", ActionType.SAVE, outcome=ActionOutcome.FAILURE),
        action("pc-2", ActionType.SAVE),
    ]
    stats = by_id(calculate_combatant_analytics(uuid.uuid4(), combat, actions))

    assert stats["pc-1"].damage_dealt == 18
    assert stats["pc-1"].abilities_used == ["spell", "ability"]
    assert stats["pc-1"].healing_received == 8
    assert stats["pc-2"].healing_done == 8
    assert stats["pc-2"].saves_made == 1
    assert stats["pc-2"].saves_failed == 2
    # Abilities are not counted as damage taken by the target.
    assert stats["npc-1"].damage_taken == 14
    assert stats["npc-1"].conditions_suffered == ["burning"]


def test_rounds_survived(combat):
    actions = [
        action("npc-1", ActionType.ATTACK, "pc-2", ActionOutcome.KILLING_BLOW, 12, round_number=2),
        action("npc-1", ActionType.ATTACK, "pc-2", ActionOutcome.KILLING_BLOW, 5, round_number=3),
    ]
    stats = by_id(calculate_combatant_analytics(uuid.uuid4(), combat, actions))
    assert stats["pc-1"].rounds_survived == 4
    assert stats["pc-2"].rounds_survived == 2
    # Fallen without a logged killing blow.
    assert stats["npc-1"].rounds_survived == 4


def test_unknown_combatants_are_ignored(combat):
    actions = [action("ghost", ActionType.ATTACK, "phantom", ActionOutcome.HIT, 30)]
    stats = calculate_combatant_analytics(uuid.uuid4(), combat, actions)
    assert [s.combatant_id for s in stats] == ["pc-1", "pc-2", "npc-1"]
    assert all(s.damage_dealt == 0 and s.damage_taken == 0 for s in stats)


def test_records_seeded_from_roster(combat):
    analytics_id = uuid.uuid4()
    stats = by_id(calculate_combatant_analytics(analytics_id, combat, []))
    assert stats["pc-1"].final_hp == 20
    assert stats["npc-1"].combatant_type == CombatantType.NPC
    assert stats["pc-1"].hit_rate is None
    assert all(s.combat_analytics_id == analytics_id for s in stats.values())
