"""
Module for printing resolutions, initiative orders and analytics reports in a
formatted way.
"""

from rich.padding import Padding
from rich.table import Table

from core.utils import cprint, crule, make_bar
from models.analytics import CombatAnalyticsReport, CombatantReport, TacticalAnalysis
from models.initiative import InitiativeEntry
from models.resolution import AutoCombatResolution


def resolution_table(resolution: AutoCombatResolution) -> Table:
    """
    Builds the loot and resources table of an auto-resolution.

    Args:
        resolution (AutoCombatResolution): The resolution to display.

    Returns:
        Table: One row per loot entry, followed by the resources spent.

    """
    table = Table(title="Spoils & Costs", pad_edge=False)
    table.add_column("Kind", style="cyan")
    table.add_column("Detail", style="bold")
    table.add_column("Amount", justify="right")
    for loot in resolution.loot_generated:
        if loot.get("type") == "currency":
            table.add_row("Gold", "coins", f"[yellow]{loot.get('amount', 0)}[/]")
        else:
            table.add_row(
                "Item",
                f"{loot.get('name', 'item')} ({loot.get('rarity', 'common')})",
                "1",
            )
    table.add_row()
    resources = resolution.party_resources_used
    table.add_row("Resources", "HP lost", f"[red]{resources.get('hp_lost', 0)}[/]")
    for level, count in sorted(resources.get("spell_slots_used", {}).items()):
        table.add_row("Resources", f"level {level} slots", str(count))
    table.add_row("Resources", "hit dice", str(resources.get("hit_dice_used", 0)))
    table.add_row("Resources", "consumables", str(resources.get("consumables_used", 0)))
    return table


def print_resolution(resolution: AutoCombatResolution) -> None:
    """Prints an auto-resolved encounter."""
    crule(f"Auto-resolved: {resolution.encounter_difficulty}", style="bold blue")
    cprint(
        Padding(
            f"Outcome {resolution.outcome.colored_name} after "
            f"[bold]{resolution.rounds_simulated}[/] rounds, "
            f"[green]{resolution.experience_awarded}[/] XP",
            (0, 2),
        )
    )
    cprint(Padding(f'[italic]"{resolution.narrative_summary}"[/]', (0, 2)))
    cprint(resolution_table(resolution))


def initiative_table(entries: list[InitiativeEntry]) -> Table:
    table = Table(title="Initiative", pad_edge=False)
    table.add_column("#", style="cyan", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Roll", justify="right")
    table.add_column("Bonus", justify="right")
    table.add_column("Total", justify="right", style="green")
    for i, entry in enumerate(entries, start=1):
        table.add_row(
            str(i),
            entry.type.colorize(f"{entry.type.emoji} {entry.name}"),
            str(entry.roll),
            f"{entry.bonus:+d}",
            str(entry.initiative),
        )
    return table


def print_initiative_order(entries: list[InitiativeEntry]) -> None:
    """Prints an initiative order, highest first."""
    cprint(initiative_table(entries))


def combatant_table(reports: list[CombatantReport]) -> Table:
    """
    Builds the per-combatant table of an analytics report.

    Args:
        reports (list[CombatantReport]): The reports, in display order.

    Returns:
        Table: One row per combatant.

    """
    table = Table(title="Combatants", pad_edge=False)
    table.add_column("Name", style="bold")
    table.add_column("Rating")
    table.add_column("Dealt", justify="right")
    table.add_column("Taken", justify="right")
    table.add_column("Healed", justify="right")
    table.add_column("Hits", justify="right")
    table.add_column("HP", justify="right")
    for report in reports:
        stats = report.analytics
        hits = f"{stats.attacks_hit}/{stats.attacks_made}" if stats.attacks_made else "-"
        table.add_row(
            stats.combatant_type.colorize(stats.combatant_name),
            report.performance_rating.colored_name,
            str(stats.damage_dealt),
            str(stats.damage_taken),
            str(stats.healing_done),
            hits,
            str(stats.final_hp),
        )
    return table


def print_tactical_analysis(analysis: TacticalAnalysis) -> None:
    scores = [
        ("Positioning", analysis.positioning_score),
        ("Resources", analysis.resource_management),
        ("Targeting", analysis.target_prioritization),
        ("Teamwork", analysis.teamwork_score),
    ]
    for label, score in scores:
        cprint(Padding(f"{label:<12} {make_bar(score, 10, color='cyan')} {score}", (0, 2)))
    for missed in analysis.missed_opportunities:
        cprint(Padding(f"[yellow]Missed:[/] {missed}", (0, 2)))


def print_analytics_report(report: CombatAnalyticsReport) -> None:
    """
    Prints the analytics of a finished combat.

    Args:
        report (CombatAnalyticsReport): The report to display.

    """
    analytics = report.analytics
    crule("Combat Analytics", style="bold blue")
    summary = analytics.combat_summary or {}
    if "overview" in summary:
        cprint(Padding(summary["overview"], (0, 2)))
    else:
        cprint(
            Padding(
                f"{analytics.combat_duration} rounds, "
                f"{analytics.total_damage_dealt} damage, "
                f"{analytics.total_healing_done} healing",
                (0, 2),
            )
        )
    if analytics.mvp_id:
        cprint(Padding(f"MVP: [bold yellow]{analytics.mvp_id}[/]", (0, 2)))

    cprint(combatant_table(report.combatant_reports))
    for combatant in report.combatant_reports:
        for highlight in combatant.highlights:
            cprint(
                Padding(
                    f"{combatant.analytics.combatant_name}: [italic]{highlight}[/]",
                    (0, 2),
                )
            )

    crule("Tactics", style="dim")
    print_tactical_analysis(report.tactical_analysis)
    if report.recommendations:
        crule("Recommendations", style="dim")
        for recommendation in report.recommendations:
            cprint(Padding(f"- {recommendation}", (0, 2)))
