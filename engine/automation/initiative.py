"""
Initiative calculator for the combat engine.

Rolls initiative for a roster, honouring per-combatant house rules stored for
the session (flat bonus, Alert feat, advantage, forced priority), and orders
the results for the turn order.
"""

import uuid

from catchery import log_debug

from core import tables
from core.dice_parser import DiceRoller, roll_d20
from core.documents import doc_number
from core.error_handling import InitiativeError
from models.initiative import InitiativeCombatant, InitiativeEntry, SmartInitiativeRule
from storage.repository import CombatRepository


def initiative_bonus(
    combatant: InitiativeCombatant, rule: SmartInitiativeRule | None
) -> int:
    """
    Computes the initiative bonus of a combatant.

    Args:
        combatant (InitiativeCombatant): The combatant.
        rule (SmartInitiativeRule | None): Their house rule, if any.

    Returns:
        int: Dexterity modifier, plus the rule bonus and the Alert feat.

    """
    bonus = combatant.dexterity_modifier
    if rule is not None:
        bonus += rule.base_initiative_bonus
        if rule.alert_feat:
            bonus += tables.ALERT_FEAT_BONUS
    return bonus


def priority_offset(rule: SmartInitiativeRule | None) -> int:
    """
    Offset forced by a `priority` special rule.

    A priority of 1 adds 100 to the total, enough to go before any natural
    result; a negative priority sends the combatant to the back.
    """
    if rule is None:
        return 0
    priority = doc_number(rule.special_rules, "priority")
    if priority is None:
        return 0
    return int(priority * tables.PRIORITY_SCALE)


def sort_initiative_entries(entries: list[InitiativeEntry]) -> None:
    """
    Sorts the entries by initiative, highest first, in place.

    Exchange sort: each slot is compared with every later one and swapped
    whenever the later one is strictly higher. Equal totals are never swapped
    here, but earlier swaps can still move them around.
    """
    for i in range(len(entries)):
        for j in range(i + 1, len(entries)):
            if entries[j].initiative > entries[i].initiative:
                entries[i], entries[j] = entries[j], entries[i]


def resolve_ties(entries: list[InitiativeEntry]) -> None:
    """
    Breaks initiative ties by bonus, in place.

    Single pass over adjacent pairs: a pair with equal totals is swapped when
    the second one has the higher bonus. A three-way tie is therefore not
    guaranteed to end up fully ordered by bonus.
    """
    for i in range(len(entries) - 1):
        if entries[i].initiative == entries[i + 1].initiative:
            if entries[i + 1].bonus > entries[i].bonus:
                entries[i], entries[i + 1] = entries[i + 1], entries[i]


class InitiativeCalculator:
    """Rolls and orders initiative under the session's house rules."""

    def __init__(self, repository: CombatRepository, dice: DiceRoller) -> None:
        self.repository = repository
        self.dice = dice

    def smart_initiative(
        self,
        session_id: uuid.UUID,
        combatants: list[InitiativeCombatant],
    ) -> list[InitiativeEntry]:
        """
        Rolls initiative for every combatant and returns the turn order.

        Args:
            session_id (uuid.UUID): Session whose rules apply.
            combatants (list[InitiativeCombatant]): The roster.

        Returns:
            list[InitiativeEntry]: The entries, highest initiative first.

        Raises:
            InitiativeError: If a rule cannot be read or a die cannot be rolled.
                Nothing is returned in that case.

        """
        entries: list[InitiativeEntry] = []
        for combatant in combatants:
            try:
                rule = self.repository.get_initiative_rule(session_id, combatant.id)
            except Exception as e:
                raise InitiativeError(
                    "failed to load initiative rule",
                    {"session_id": str(session_id), "combatant_id": combatant.id},
                ) from e

            bonus = initiative_bonus(combatant, rule)
            roll = self.roll(combatant, rule)
            total = roll + bonus + priority_offset(rule)

            entries.append(
                InitiativeEntry(
                    id=combatant.id,
                    type=combatant.type,
                    name=combatant.name,
                    roll=roll,
                    bonus=bonus,
                    initiative=total,
                )
            )

        sort_initiative_entries(entries)
        resolve_ties(entries)

        log_debug(
            "Rolled initiative",
            {
                "session_id": str(session_id),
                "order": ", ".join(f"{e.name}={e.initiative}" for e in entries),
            },
        )
        return entries

    def roll(
        self, combatant: InitiativeCombatant, rule: SmartInitiativeRule | None
    ) -> int:
        """
        Rolls the initiative die, with advantage if the rule grants it.

        Raises:
            InitiativeError: If the dice roller fails.

        """
        try:
            if rule is not None and rule.advantage_on_initiative:
                first = roll_d20(self.dice)
                second = roll_d20(self.dice)
                return max(first, second)
            return roll_d20(self.dice)
        except Exception as e:
            raise InitiativeError(
                "failed to roll initiative", {"combatant_id": combatant.id}
            ) from e
