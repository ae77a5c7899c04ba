"""
Tests for the in-memory repository.
"""

import uuid

import pytest
from core.constants import ActionType, OutcomeTier
from core.error_handling import StorageError
from models.analytics import CombatActionLog, CombatAnalytics, CombatantAnalytics
from models.initiative import SmartInitiativeRule
from models.resolution import AutoCombatResolution
from storage import InMemoryCombatRepository


@pytest.fixture
def repo():
    return InMemoryCombatRepository()


@pytest.fixture
def session_id():
    return uuid.uuid4()


@pytest.fixture
def analytics(session_id):
    return CombatAnalytics(combat_id=uuid.uuid4(), game_session_id=session_id)


def test_combat_analytics_round_trip(repo, analytics, session_id):
    repo.create_combat_analytics(analytics)
    stored = repo.get_combat_analytics(analytics.combat_id)
    assert stored == analytics
    assert stored is not analytics
    assert repo.get_combat_analytics_by_session(session_id) == [analytics]
    assert repo.get_combat_analytics(uuid.uuid4()) is None


def test_duplicate_analytics_rejected(repo, analytics):
    repo.create_combat_analytics(analytics)
    with pytest.raises(StorageError):
        repo.create_combat_analytics(analytics)


def test_update_combat_analytics(repo, analytics):
    repo.create_combat_analytics(analytics)
    repo.update_combat_analytics(
        analytics.id, {"tactical_rating": 7, "combat_summary": {"overview": "x"}}
    )
    stored = repo.get_combat_analytics(analytics.combat_id)
    assert stored.tactical_rating == 7
    assert stored.combat_summary == {"overview": "x"}
    assert stored.updated_at >= analytics.updated_at


def test_update_unknown_analytics_raises(repo):
    with pytest.raises(StorageError):
        repo.update_combat_analytics(uuid.uuid4(), {"tactical_rating": 7})


def test_update_unknown_field_raises(repo, analytics):
    repo.create_combat_analytics(analytics)
    with pytest.raises(StorageError):
        repo.update_combat_analytics(analytics.id, {"bogus": 1})


def test_stored_records_cannot_be_mutated(repo, analytics):
    repo.create_combat_analytics(analytics)
    analytics.killing_blows.append({"dealer_id": "a"})
    assert repo.get_combat_analytics(analytics.combat_id).killing_blows == []


def test_combatant_analytics(repo, analytics):
    record = CombatantAnalytics(
        combat_analytics_id=analytics.id,
        combatant_id="pc-1",
        combatant_type="character",
        combatant_name="Aria",
    )
    repo.create_combatant_analytics(record)
    assert repo.get_combatant_analytics(analytics.id) == [record]
    assert repo.get_combatant_analytics(uuid.uuid4()) == []


def test_auto_resolutions(repo, session_id):
    resolution = AutoCombatResolution(
        game_session_id=session_id,
        encounter_difficulty="easy",
        resolution_type="quick",
        outcome=OutcomeTier.VICTORY,
        rounds_simulated=3,
        experience_awarded=100,
        narrative_summary="Done.",
    )
    repo.create_auto_combat_resolution(resolution)
    assert repo.get_auto_combat_resolution(resolution.id) == resolution
    assert repo.get_auto_combat_resolutions_by_session(session_id) == [resolution]
    assert repo.get_auto_combat_resolutions_by_session(uuid.uuid4()) == []
    with pytest.raises(StorageError):
        repo.create_auto_combat_resolution(resolution)


def test_stored_resolutions_cannot_be_mutated(repo, session_id):
    resolution = AutoCombatResolution(
        game_session_id=session_id,
        encounter_difficulty="medium",
        resolution_type="quick",
        outcome=OutcomeTier.VICTORY,
        rounds_simulated=4,
        experience_awarded=150,
        loot_generated=[{"type": "currency", "amount": 20}],
        narrative_summary="Done.",
    )
    repo.create_auto_combat_resolution(resolution)
    resolution.loot_generated[0]["amount"] = 999999

    fetched = repo.get_auto_combat_resolution(resolution.id)
    assert fetched.loot_generated[0]["amount"] == 20
    fetched.loot_generated.append({"type": "item"})
    assert len(repo.get_auto_combat_resolutions_by_session(session_id)[0].loot_generated) == 1


def test_initiative_rules_are_upserted(repo, session_id):
    repo.create_or_update_initiative_rule(
        SmartInitiativeRule(game_session_id=session_id, entity_id="pc-1")
    )
    repo.create_or_update_initiative_rule(
        SmartInitiativeRule(game_session_id=session_id, entity_id="pc-1", alert_feat=True)
    )
    assert repo.get_initiative_rule(session_id, "pc-1").alert_feat
    assert repo.get_initiative_rule(session_id, "pc-2") is None
    assert len(repo.get_initiative_rules_by_session(session_id)) == 1


def test_action_log(repo):
    combat_id = uuid.uuid4()
    for round_number in (1, 1, 2):
        repo.create_combat_action(
            CombatActionLog(
                combat_id=combat_id,
                round_number=round_number,
                actor_id="pc-1",
                action_type=ActionType.ATTACK,
            )
        )
    assert len(repo.get_combat_actions(combat_id)) == 3
    assert len(repo.get_combat_actions_by_round(combat_id, 1)) == 2
    assert repo.get_combat_actions(uuid.uuid4()) == []


def test_action_without_combat_rejected(repo):
    with pytest.raises(StorageError):
        repo.create_combat_action(
            CombatActionLog(actor_id="pc-1", action_type=ActionType.ATTACK)
        )
