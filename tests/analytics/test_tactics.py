"""
Tests for the tactical analysis heuristics.
"""

import uuid

import pytest
from analytics.tactics import (
    analyze_positioning,
    analyze_resource_use,
    analyze_tactics,
    analyze_targeting,
    analyze_teamwork,
    clamp_score,
    find_missed_opportunities,
)
from core import tables
from core.constants import ActionOutcome, ActionType, CombatantType
from models.analytics import CombatActionLog, CombatantAnalytics
from models.combatant import Combat, Combatant


@pytest.fixture
def combat():
    return Combat(
        round=5,
        combatants=[
            Combatant(id="pc-1", name="Aria", type=CombatantType.CHARACTER, hp=10),
            Combatant(id="pc-2", name="Brom", type=CombatantType.CHARACTER, hp=3),
            Combatant(id="npc-1", name="Orc", type=CombatantType.NPC, hp=0),
            Combatant(id="npc-2", name="Goblin", type=CombatantType.NPC, hp=0),
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


@pytest.mark.parametrize("score, expected", [(-7, 1), (0, 1), (1, 1), (5, 5), (10, 10), (14, 10)])
def test_clamp_score(score, expected):
    assert clamp_score(score) == expected


# ---- Positioning ----


@pytest.mark.parametrize(
    "cover, high_ground, expected",
    [(0, 0, 5), (3, 0, 6), (6, 0, 7), (0, 2, 6), (0, 4, 7), (6, 4, 9)],
)
def test_positioning(cover, high_ground, expected):
    actions = [
        action("pc-1", ActionType.MOVE, position_data={"used_cover": True})
        for _ in range(cover)
    ] + [
        action("pc-1", ActionType.MOVE, position_data={"high_ground": True})
        for _ in range(high_ground)
    ]
    assert analyze_positioning(actions) == expected


def test_positioning_ignores_non_boolean_flags():
    actions = [
        action("pc-1", ActionType.MOVE, position_data={"used_cover": "yes"})
        for _ in range(10)
    ]
    assert analyze_positioning(actions) == 5


def test_positioning_reads_json_payloads():
    actions = [
        action("pc-1", ActionType.MOVE, position_data='{"used_cover": true}')
        for _ in range(3)
    ] + [action("pc-1", ActionType.MOVE, position_data="{broken")]
    assert actions[0].position_data == {"used_cover": True}
    assert actions[-1].position_data == {}
    assert analyze_positioning(actions) == 6


# ---- Resource management ----


def test_wasted_high_level_spells():
    actions = [
        action("pc-1", ActionType.SPELL, "npc-1", amount=5, resources_used={"spell_level": 3})
        for _ in range(3)
    ]
    assert analyze_resource_use(actions) == 3


def test_efficient_spells():
    actions = [
        action("pc-1", ActionType.SPELL, "npc-1", amount=25, resources_used={"spell_level": 2})
        for _ in range(6)
    ]
    assert analyze_resource_use(actions) == 7


def test_overheal():
    actions = [
        action("pc-2", ActionType.HEAL, "pc-1", ActionOutcome.OVERHEAL, 21)
        for _ in range(4)
    ]
    assert analyze_resource_use(actions) == 4
    # Twenty or less is not an overheal.
    small = [
        action("pc-2", ActionType.HEAL, "pc-1", ActionOutcome.OVERHEAL, 20)
        for _ in range(4)
    ]
    assert analyze_resource_use(small) == 5


def test_non_numeric_spell_level_is_ignored():
    actions = [
        action("pc-1", ActionType.SPELL, "npc-1", amount=1, resources_used={"spell_level": "9"})
        for _ in range(5)
    ]
    assert analyze_resource_use(actions) == 5


# ---- Target prioritization ----


def test_targeting_counts_early_npc_kills(combat):
    actions = [
        action("pc-1", ActionType.ATTACK, "npc-1", ActionOutcome.KILLING_BLOW, 8, round_number=2),
        action("pc-1", ActionType.ATTACK, "npc-2", ActionOutcome.KILLING_BLOW, 8, round_number=4),
        # Too late.
        action("pc-1", ActionType.ATTACK, "npc-2", ActionOutcome.KILLING_BLOW, 8, round_number=5),
        # Not an NPC.
        action("npc-1", ActionType.ATTACK, "pc-2", ActionOutcome.KILLING_BLOW, 8, round_number=1),
        # Not an attack.
        action("pc-1", ActionType.SPELL, "npc-1", ActionOutcome.KILLING_BLOW, 8, round_number=1),
        # Not on the roster.
        action("pc-1", ActionType.ATTACK, "npc-9", ActionOutcome.KILLING_BLOW, 8, round_number=1),
    ]
    assert analyze_targeting(actions, combat) == 7


def test_targeting_bonus_is_capped(combat):
    actions = [
        action("pc-1", ActionType.ATTACK, "npc-1", ActionOutcome.KILLING_BLOW, 8)
        for _ in range(10)
    ]
    assert analyze_targeting(actions, combat) == 8


# ---- Teamwork ----


@pytest.fixture
def stats():
    analytics_id = uuid.uuid4()
    return [
        CombatantAnalytics(
            combat_analytics_id=analytics_id,
            combatant_id="pc-1",
            combatant_type=CombatantType.CHARACTER,
            combatant_name="Aria",
            damage_taken=30,
            final_hp=10,
        ),
        CombatantAnalytics(
            combat_analytics_id=analytics_id,
            combatant_id="pc-2",
            combatant_type=CombatantType.CHARACTER,
            combatant_name="Brom",
            damage_taken=0,
            final_hp=20,
        ),
    ]


def test_combo_attacks(stats):
    actions = [
        action("pc-1" if i % 2 else "pc-2", ActionType.ATTACK, "npc-1", ActionOutcome.HIT, 5)
        for i in range(7)
    ]
    # Six attacks directly follow an attack on the same target.
    assert analyze_teamwork(actions, stats) == 7


def test_combo_requires_same_round_and_target(stats):
    actions = []
    for i in range(7):
        actions.append(action("pc-1", ActionType.ATTACK, "npc-1", round_number=i))
        actions.append(action("pc-2", ActionType.ATTACK, "npc-2", round_number=i))
    assert analyze_teamwork(actions, stats) == 5


def test_timely_heals(stats):
    actions = [action("pc-2", ActionType.HEAL, "pc-1", amount=5) for _ in range(4)]
    assert analyze_teamwork(actions, stats) == 6
    healthy = [action("pc-1", ActionType.HEAL, "pc-2", amount=5) for _ in range(4)]
    assert analyze_teamwork(healthy, stats) == 5


def test_setup_actions(stats):
    actions = [
        action("pc-1", ActionType.ABILITY, "npc-1", conditions_applied=["prone"])
        for _ in range(5)
    ]
    assert analyze_teamwork(actions, stats) == 7


# ---- Missed opportunities ----


def crowded_round(round_number):
    return [
        action("pc-1", ActionType.ATTACK, "npc-1", round_number=round_number),
        *[
            action("npc-1", ActionType.ATTACK, "pc-1", round_number=round_number, actor_type=CombatantType.NPC)
            for _ in range(3)
        ],
    ]


def test_missed_area_of_effect(combat):
    actions = [a for r in range(1, 5) for a in crowded_round(r)]
    assert find_missed_opportunities(actions, combat) == [tables.MISSED_AOE]
    three_rounds = [a for r in range(1, 4) for a in crowded_round(r)]
    assert find_missed_opportunities(three_rounds, combat) == []


def test_unused_high_level_slots(combat):
    final = action(
        "pc-1",
        ActionType.OTHER,
        round_number=5,
        resources_used={"spell_slots_remaining": {"3": 1, "1": 2}},
    )
    assert find_missed_opportunities([final], combat) == [tables.MISSED_HIGH_LEVEL_SLOTS]


@pytest.mark.parametrize(
    "slots, round_number",
    [
        ({"3": 0, "1": 2}, 5),
        ({"2": 3}, 5),
        ({"4": 1}, 4),
        ({"high": 1}, 5),
    ],
)
def test_no_unused_high_level_slots(combat, slots, round_number):
    entry = action(
        "pc-1",
        ActionType.OTHER,
        round_number=round_number,
        resources_used={"spell_slots_remaining": slots},
    )
    assert find_missed_opportunities([entry], combat) == []


# ---- Whole analysis ----


def test_scores_stay_in_range_for_extreme_logs(combat, stats):
    wasteful = [
        action("pc-1", ActionType.SPELL, "npc-1", amount=0, resources_used={"spell_level": 9})
        for _ in range(50)
    ] + [
        action("pc-2", ActionType.HEAL, "pc-1", ActionOutcome.OVERHEAL, 50)
        for _ in range(50)
    ]
    analysis = analyze_tactics(combat, wasteful, stats)
    assert analysis.resource_management == 2

    stellar = [
        action(
            "pc-1",
            ActionType.ATTACK,
            "npc-1",
            ActionOutcome.KILLING_BLOW,
            90,
            resources_used={"spell_level": 1},
            position_data={"used_cover": True, "high_ground": True},
        )
        for _ in range(50)
    ]
    analysis = analyze_tactics(combat, stellar, stats)
    for score in (
        analysis.positioning_score,
        analysis.resource_management,
        analysis.target_prioritization,
        analysis.teamwork_score,
    ):
        assert 1 <= score <= 10
    assert analysis.positioning_score == 9
    assert analysis.overall_score == (9 + 7 + 8 + 7) // 4


def test_empty_log_is_neutral(combat):
    analysis = analyze_tactics(combat, [], [])
    assert analysis.overall_score == 5
    assert analysis.missed_opportunities == []
