"""
Main entry point for the Combat Resolution & Analytics Engine demo.

This script loads a scenario from the data directory, then runs the three
engine components against an in-memory repository:
- Auto-resolves a minor encounter the party chose to skip
- Rolls initiative for a detailed combat under the session's house rules
- Replays the detailed combat's action log and prints its analytics
"""

import json
import sys
import uuid
from pathlib import Path
from typing import Any

from analytics import CombatAnalyticsService
from automation import CombatAutomationService
from core.config import EngineConfig, load_config
from core.logging import setup_logging
from core.utils import cprint, crule
from models import (
    AutoResolveRequest,
    Combat,
    CombatActionLog,
    InitiativeCombatant,
    PartyCharacter,
    SmartInitiativeRule,
)
from storage import InMemoryCombatRepository
from ui import print_analytics_report, print_initiative_order, print_resolution

# Get the path to the project root.
root_dir = Path(__file__).resolve().parent.parent


def load_scenario(path: Path) -> dict[str, Any]:
    """
    Loads a demo scenario.

    Args:
        path (Path): The scenario file.

    Returns:
        dict[str, Any]: The raw scenario.

    Raises:
        ValueError: If the file is missing or is not a JSON object.

    """
    if not path.is_file():
        raise ValueError(f"Scenario not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"File {path} raised an error: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Expected object in {path}, got {type(data).__name__}")
    return data


def run(config: EngineConfig, scenario: dict[str, Any]) -> None:
    """Runs every engine component over a loaded scenario."""
    repository = InMemoryCombatRepository()
    automation = CombatAutomationService(repository, config=config)
    analytics = CombatAnalyticsService(repository)

    session_id = uuid.UUID(scenario["session_id"])
    party = [PartyCharacter(**c) for c in scenario["party"]]

    # =========================================================================
    crule("Auto-Resolution", style="bold green")

    for raw in scenario.get("encounters", []):
        request = AutoResolveRequest(**raw)
        resolution = automation.auto_resolve_combat(session_id, party, request)
        print_resolution(resolution)

    # =========================================================================
    crule("Initiative", style="bold green")

    for raw in scenario.get("initiative_rules", []):
        automation.set_initiative_rule(
            SmartInitiativeRule(game_session_id=session_id, **raw)
        )
    combat = Combat(game_session_id=session_id, **scenario["combat"])
    roster = [
        InitiativeCombatant(
            id=c.id,
            type=c.type,
            name=c.name,
            dexterity_modifier=c.dexterity_modifier,
        )
        for c in combat.combatants
    ]
    print_initiative_order(automation.smart_initiative(session_id, roster))

    # =========================================================================
    crule("Analytics", style="bold green")

    for raw in scenario.get("actions", []):
        analytics.track_combat_action(CombatActionLog(combat_id=combat.id, **raw))
    report = analytics.finalize_combat_analytics(combat, session_id)
    print_analytics_report(report)


def main() -> int:
    config = load_config(root_dir / "data" / "config.json")
    setup_logging(config.log_level)
    data_dir = config.data_dir
    if not data_dir.is_absolute():
        data_dir = root_dir / data_dir

    crule("Combat Engine", style="bold green")
    cprint(
        "Auto-resolves minor encounters, rolls initiative under house rules "
        "and analyses finished combats.\n",
        style="bold blue",
    )

    scenario = load_scenario(data_dir / "scenario.json")
    run(config, scenario)

    crule("Done", style="bold green", characters="=")
    return 0


if __name__ == "__main__":
    sys.exit(main())
