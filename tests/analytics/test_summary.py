"""
Tests for recommendations and the combat summary.
"""

import uuid

import pytest
from analytics.scoring import build_report
from analytics.summary import generate_combat_summary, generate_recommendations
from core import tables
from core.constants import CombatantType
from models.analytics import CombatAnalytics, CombatantAnalytics, TacticalAnalysis
from models.combatant import Combat


def analysis(positioning=5, resources=5, targeting=5, teamwork=5):
    return TacticalAnalysis(
        positioning_score=positioning,
        resource_management=resources,
        target_prioritization=targeting,
        teamwork_score=teamwork,
    )


def report(final_hp=0, **kwargs):
    return build_report(
        CombatantAnalytics(
            combat_analytics_id=uuid.uuid4(),
            combatant_id=kwargs.pop("combatant_id", "pc-1"),
            combatant_type=CombatantType.CHARACTER,
            combatant_name=kwargs.pop("combatant_name", "Aria"),
            final_hp=final_hp,
            **kwargs,
        )
    )


def good_report():
    # Untouched survivor: 4 points, fair.
    return report(final_hp=10)


def test_no_recommendations_for_a_solid_fight():
    combat = Combat(round=5)
    assert generate_recommendations(combat, [good_report()], analysis()) == []


def test_low_scores_each_add_advice():
    combat = Combat(round=5)
    advice = generate_recommendations(
        combat, [good_report()], analysis(positioning=4, resources=1, targeting=3, teamwork=2)
    )
    assert advice == [
        tables.ADVICE_POSITIONING,
        tables.ADVICE_RESOURCES,
        tables.ADVICE_TARGETING,
        tables.ADVICE_TEAMWORK,
    ]


@pytest.mark.parametrize(
    "poor, good, expected",
    [
        (1, 2, False),  # 1 > 3 // 3 is false
        (2, 1, True),
        (1, 0, True),
        (2, 4, False),
        (0, 0, False),
    ],
)
def test_struggling_players(poor, good, expected):
    reports = [report() for _ in range(poor)] + [good_report() for _ in range(good)]
    advice = generate_recommendations(Combat(round=5), reports, analysis())
    assert (tables.ADVICE_STRUGGLING in advice) == expected


@pytest.mark.parametrize(
    "rounds, expected",
    [
        (2, [tables.ADVICE_SHORT_COMBAT]),
        (3, []),
        (10, []),
        (11, [tables.ADVICE_LONG_COMBAT]),
    ],
)
def test_pacing(rounds, expected):
    assert generate_recommendations(Combat(round=rounds), [], analysis()) == expected


def test_combat_summary():
    analytics = CombatAnalytics(
        combat_id=uuid.uuid4(),
        game_session_id=uuid.uuid4(),
        combat_duration=4,
        total_damage_dealt=120,
        total_healing_done=15,
        mvp_id="pc-1",
        mvp_type="character",
    )
    reports = [report(final_hp=8, critical_hits=3)]
    summary = generate_combat_summary(
        analytics, reports, analysis(positioning=6, resources=4, targeting=8, teamwork=5)
    )

    assert summary["overview"] == (
        "Combat lasted 4 rounds with 120 total damage dealt and 15 HP healed."
    )
    assert summary["mvp"] == {
        "id": "pc-1",
        "type": "character",
        "reason": "Highest damage dealer",
    }
    assert summary["key_moments"] == ["Aria landed 3 critical hits"]
    assert summary["tactical_summary"] == {
        "positioning": 6,
        "resource_use": 4,
        "target_priority": 8,
        "teamwork": 5,
    }
    assert summary["outcome_factors"] == ["Excellent teamwork ensured no casualties"]
