from dicedist.distribution import Distribution
from dicedist.errors import (
    DiceRollError,
    DivideByZeroError,
    EnumerationLimitError,
    KeepTooFewError,
    NegativeCountError,
)
from dicedist.roll_parser import parse

__all__ = [
    "Distribution",
    "DiceRollError",
    "DivideByZeroError",
    "EnumerationLimitError",
    "KeepTooFewError",
    "NegativeCountError",
    "parse",
]
