"""
User interface module for the combat engine.

Console renderers for auto-resolutions, initiative orders and analytics
reports.
"""

from .report import (
    combatant_table,
    initiative_table,
    print_analytics_report,
    print_initiative_order,
    print_resolution,
    print_tactical_analysis,
    resolution_table,
)

__all__ = [
    "combatant_table",
    "initiative_table",
    "print_analytics_report",
    "print_initiative_order",
    "print_resolution",
    "print_tactical_analysis",
    "resolution_table",
]
