"""
Dice module for the combat engine.

Provides the dice primitive consumed by the outcome simulator and the
initiative calculator: a `DiceRoller` protocol with a single `roll(notation)`
operation, and a standard implementation backed by an injectable
`random.Random` so rolls can be reproduced.
"""

import random
import re
from typing import Any, Protocol

from catchery import log_warning
from pydantic import BaseModel, Field

from core.error_handling import DiceRollError

DICE_PATTERN = re.compile(r"^(\d*)[dD](\d+)([+-]\d+)?$")

MAX_DICE = 100
MAX_SIDES = 1000


class RollResult(BaseModel):
    """Class to hold the result of a dice roll."""

    notation: str = Field(
        description="The notation that was rolled (e.g., '1d20')",
    )
    total: int = Field(
        description="Total roll result, modifier included",
    )
    rolls: list[int] = Field(
        default_factory=list,
        description="List of individual dice rolls",
    )
    modifier: int = Field(
        default=0,
        description="Flat modifier added to the dice",
    )

    def model_post_init(self, _: Any) -> None:
        """Validates fields after model initialization."""
        if self.total != sum(self.rolls) + self.modifier:
            raise ValueError("total must equal the sum of the rolls plus the modifier")


class DiceRoller(Protocol):
    """Anything able to roll a dice notation."""

    def roll(self, notation: str) -> RollResult:
        """Roll the notation.

        Args:
            notation (str): The dice notation, e.g. "1d20".

        Returns:
            RollResult: The total and the individual dice.

        Raises:
            DiceRollError: If the notation cannot be rolled.
        """
        ...


class StandardDiceRoller:
    """Rolls `NdS[+/-M]` notations with a private random generator."""

    def __init__(self, rng: random.Random | None = None) -> None:
        """
        Initialize the roller.

        Args:
            rng (random.Random | None):
                The generator to draw from. A fresh unseeded one if omitted.

        """
        self.rng: random.Random = rng or random.Random()

    def roll(self, notation: str) -> RollResult:
        """
        Rolls a dice notation like "1d20", "2d6+3" or "d8-1".

        Args:
            notation (str): The notation to roll.

        Returns:
            RollResult: The total and the individual dice.

        Raises:
            DiceRollError: If the notation is malformed or out of limits.

        """
        term = (notation or "").strip().upper()
        match = DICE_PATTERN.match(term)
        if not match:
            log_warning(
                f"Invalid dice string format: '{notation}'",
                {"notation": notation},
            )
            raise DiceRollError(
                f"invalid dice notation '{notation}'", {"notation": notation}
            )

        num_str, sides_str, modifier_str = match.groups()
        num = int(num_str) if num_str else 1
        sides = int(sides_str)
        modifier = int(modifier_str) if modifier_str else 0

        if num <= 0 or num > MAX_DICE:
            log_warning(
                f"Number of dice out of range: {num} (limit: {MAX_DICE})",
                {"notation": notation, "num": num, "sides": sides},
            )
            raise DiceRollError(f"invalid dice count: {num}", {"notation": notation})

        if sides <= 0 or sides > MAX_SIDES:
            log_warning(
                f"Number of sides out of range: {sides} (limit: {MAX_SIDES})",
                {"notation": notation, "num": num, "sides": sides},
            )
            raise DiceRollError(f"invalid dice sides: {sides}", {"notation": notation})

        rolls = [self.rng.randint(1, sides) for _ in range(num)]
        return RollResult(
            notation=term,
            total=sum(rolls) + modifier,
            rolls=rolls,
            modifier=modifier,
        )


def roll_d20(roller: DiceRoller) -> int:
    """
    Rolls a single d20 with the given roller.

    Args:
        roller (DiceRoller): The roller to use.

    Returns:
        int: The value of the die.

    """
    return roller.roll("1d20").total
