"""
Tests for the combat automation service.
"""

import uuid

import pytest
from automation import CombatAutomationService
from core.config import EngineConfig
from core.constants import CombatantType
from core.error_handling import StorageError
from models.combatant import EnemyInfo, PartyCharacter
from models.initiative import InitiativeCombatant, SmartInitiativeRule
from models.resolution import AutoResolveRequest
from storage import InMemoryCombatRepository


@pytest.fixture
def repo():
    return InMemoryCombatRepository()


@pytest.fixture
def service(repo):
    return CombatAutomationService(repo, config=EngineConfig(seed=99, resolution_type="auto"))


@pytest.fixture
def party():
    return [
        PartyCharacter(id="pc-1", name="Aria", character_class="fighter", level=3, max_hit_points=28),
        PartyCharacter(id="pc-2", name="Brom", character_class="cleric", level=3, max_hit_points=24),
    ]


@pytest.fixture
def request_():
    return AutoResolveRequest(
        encounter_difficulty="medium",
        enemy_types=[EnemyInfo(name="Wolf", cr="1/4", count=3)],
        terrain_type="open",
        use_resources=True,
    )


def test_auto_resolve_is_stored(service, party, request_):
    session_id = uuid.uuid4()
    resolution = service.auto_resolve_combat(session_id, party, request_)
    assert resolution.resolution_type == "auto"
    assert service.get_auto_resolution(resolution.id) == resolution
    assert service.get_auto_resolutions_by_session(session_id) == [resolution]


def test_seeded_services_agree(party, request_):
    session_id = uuid.uuid4()
    config = EngineConfig(seed=5)
    first = CombatAutomationService(InMemoryCombatRepository(), config=config)
    second = CombatAutomationService(InMemoryCombatRepository(), config=config)
    a = first.auto_resolve_combat(session_id, party, request_)
    b = second.auto_resolve_combat(session_id, party, request_)
    assert a.outcome == b.outcome
    assert a.rounds_simulated == b.rounds_simulated
    assert a.loot_generated == b.loot_generated
    assert a.narrative_summary == b.narrative_summary


def test_missing_resolution_raises(service):
    with pytest.raises(StorageError):
        service.get_auto_resolution(uuid.uuid4())


def test_set_initiative_rule_stamps_update(service):
    session_id = uuid.uuid4()
    rule = SmartInitiativeRule(game_session_id=session_id, entity_id="pc-1", alert_feat=True)
    stored = service.set_initiative_rule(rule)
    assert stored.updated_at >= rule.updated_at
    assert service.get_initiative_rules(session_id) == [stored]


def test_rules_apply_to_initiative(service):
    session_id = uuid.uuid4()
    service.set_initiative_rule(
        SmartInitiativeRule(
            game_session_id=session_id,
            entity_id="pc-1",
            special_rules={"priority": 1},
        )
    )
    entries = service.smart_initiative(
        session_id,
        [
            InitiativeCombatant(id="pc-2", type=CombatantType.CHARACTER, name="Brom", dexterity_modifier=3),
            InitiativeCombatant(id="pc-1", type=CombatantType.CHARACTER, name="Aria"),
        ],
    )
    assert entries[0].id == "pc-1"
    assert entries[0].initiative > 100
