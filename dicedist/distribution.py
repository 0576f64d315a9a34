"""Exact discrete distributions over the integers, and the operators on them.

Probabilities are never stored as floats. A distribution keeps an integer
occurrence count for every value in a contiguous range; the probability of a
value is its count divided by the total of all counts.
"""

import fractions
import functools
import itertools
import logging
import operator
import typing

from .errors import (
    DivideByZeroError,
    EnumerationLimitError,
    KeepTooFewError,
    NegativeCountError,
)

logger = logging.getLogger(__name__)


class Distribution:
    """A computed distribution for a bounded dice expression.

    Index ``i`` of the stored counts holds the number of occurrences of
    ``offset + i``. Instances are immutable; operators return new ones.
    """

    __slots__ = ("_occurrence_by_value", "_offset", "_total")

    def __init__(self, occurrence_by_value: typing.Iterable[int], offset: int) -> None:
        self._occurrence_by_value: typing.Tuple[int, ...] = tuple(occurrence_by_value)
        self._offset = offset
        self._total = sum(self._occurrence_by_value)

    @classmethod
    def die(cls, size: int) -> "Distribution":
        """Uniform distribution on ``[1, size]``."""
        if size < 1:
            raise ValueError("a die needs at least one face, got %s" % size)
        return cls([1] * size, 1)

    @classmethod
    def modifier(cls, value: int) -> "Distribution":
        """Distribution that produces ``value`` with probability 1."""
        return cls([1], value)

    def probability(self, value: int) -> fractions.Fraction:
        index = value - self._offset
        if self._total != 0 and 0 <= index < len(self._occurrence_by_value):
            return fractions.Fraction(self._occurrence_by_value[index], self._total)
        return fractions.Fraction(0, 1)

    def probability_f64(self, value: int) -> float:
        return float(self.probability(value))

    def total(self) -> int:
        """The number of possible rolls, i.e. the denominator of every probability."""
        return self._total

    def occurrences(self) -> "Occurrences":
        """(value, occurrences) pairs with nonzero occurrence, ascending by value."""
        return Occurrences(self)

    def probability_table(self) -> typing.Dict[int, fractions.Fraction]:
        return {
            value: fractions.Fraction(occurrences, self._total)
            for value, occurrences in self.occurrences()
        }

    def min(self) -> int:
        return self._offset

    def max(self) -> int:
        # inclusive
        return self._offset + len(self._occurrence_by_value) - 1

    def mean(self) -> float:
        # The exact numerators can get huge; sum per-value floats instead.
        return sum(value * self.probability_f64(value) for value, _ in self.occurrences())

    def clean(self) -> "Distribution":
        """Drop leading and trailing zero entries."""
        counts = self._occurrence_by_value
        start = 0
        while start < len(counts) and counts[start] == 0:
            start += 1
        end = len(counts)
        while end > start and counts[end - 1] == 0:
            end -= 1
        if start == 0 and end == len(counts):
            return self
        return Distribution(counts[start:end], self._offset + start)

    def __add__(self, other: "Distribution") -> "Distribution":
        if not isinstance(other, Distribution):
            return NotImplemented

        result = _Builder()
        for value1, occurrences1 in self.occurrences():
            for value2, occurrences2 in other.occurrences():
                # One way of rolling value1 + value2: this roll of self, that
                # roll of other.
                result.add_occurrences(value1 + value2, occurrences1 * occurrences2)
        distribution = result.build()

        assert distribution.total() == self.total() * other.total(), distribution
        return distribution

    def __neg__(self) -> "Distribution":
        return Distribution(reversed(self._occurrence_by_value), -self.max())

    def __mul__(self, other: "Distribution") -> "Distribution":
        if not isinstance(other, Distribution):
            return NotImplemented
        return product(self, other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Distribution):
            return NotImplemented
        return (
            self._offset == other._offset
            and self._occurrence_by_value == other._occurrence_by_value
        )

    def __hash__(self) -> int:
        return hash((self._offset, self._occurrence_by_value))

    def __repr__(self) -> str:
        return "Distribution(%s, total=%s)" % (list(self.occurrences()), self._total)


class Occurrences:
    """Restartable view of a distribution's nonzero (value, occurrences) pairs."""

    def __init__(self, distribution: Distribution) -> None:
        self.distribution = distribution

    def __iter__(self) -> typing.Iterator[typing.Tuple[int, int]]:
        offset = self.distribution._offset
        for index, occurrences in enumerate(self.distribution._occurrence_by_value):
            if occurrences != 0:
                yield offset + index, occurrences


class _Builder:
    """Mutable accumulator used while an operator computes its result."""

    def __init__(self) -> None:
        self.occurrence_by_value: typing.List[int] = []
        self.offset = 0

    def add_occurrences(self, value: int, occurrences: int) -> None:
        if not self.occurrence_by_value:
            self.occurrence_by_value.append(0)
            self.offset = value
        elif value < self.offset:
            self.occurrence_by_value[:0] = [0] * (self.offset - value)
            self.offset = value

        index = value - self.offset
        if index >= len(self.occurrence_by_value):
            self.occurrence_by_value.extend(
                [0] * (index + 1 - len(self.occurrence_by_value))
            )
        self.occurrence_by_value[index] += occurrences

    def build(self) -> Distribution:
        return Distribution(self.occurrence_by_value, self.offset)


def sum_distributions(distributions: typing.Iterable[Distribution]) -> Distribution:
    """Distribution of the sum of independent distributions; 0 if there are none."""
    return functools.reduce(operator.add, distributions, Distribution.modifier(0))


def product(a: Distribution, b: Distribution) -> Distribution:
    result = _Builder()
    for (value1, occurrences1), (value2, occurrences2) in itertools.product(
        a.occurrences(), b.occurrences()
    ):
        result.add_occurrences(value1 * value2, occurrences1 * occurrences2)
    return result.build()


def floor(expression: typing.Any, a: Distribution, b: Distribution) -> Distribution:
    """Floor division of ``a`` by ``b``.

    Raises DivideByZeroError, tagged with ``expression``, when ``b`` can be 0.
    """
    if b.probability(0) != 0:
        raise DivideByZeroError(str(expression))

    result = _Builder()
    for (value1, occurrences1), (value2, occurrences2) in itertools.product(
        a.occurrences(), b.occurrences()
    ):
        result.add_occurrences(value1 // value2, occurrences1 * occurrences2)
    return result.build()


def comparison(
    a: Distribution, op: typing.Callable[[int, int], bool], b: Distribution
) -> Distribution:
    """Distribution of ``op(a, b)`` as 0 (false) or 1 (true).

    A comparison that is always false or always true is returned as a
    modifier.
    """
    result = _Builder()
    for (value1, occurrences1), (value2, occurrences2) in itertools.product(
        a.occurrences(), b.occurrences()
    ):
        result.add_occurrences(1 if op(value1, value2) else 0, occurrences1 * occurrences2)
    distribution = result.build()

    if distribution.probability(0) == 1:
        return Distribution.modifier(0)
    elif distribution.probability(1) == 1:
        return Distribution.modifier(1)
    else:
        return distribution


def _count_combinations(faces: int, count: Distribution, limit: int) -> int:
    """``Σ faces ** n`` over the occurring counts ``n``, or ``limit + 1`` once
    the sum passes ``limit``."""
    combinations = 0
    for n, _ in count.occurrences():
        power = 1
        for _ in range(n):
            power *= faces
            if power > limit or power <= 1:
                break
        combinations += power
        if combinations > limit:
            return limit + 1
    return combinations


def repeat(
    expression: typing.Any,
    count: Distribution,
    value: Distribution,
    ranker,
    max_combinations: typing.Optional[int] = None,
) -> Distribution:
    """Roll ``count`` copies of ``value`` and total the dice ``ranker`` keeps.

    ``ranker`` needs a ``count`` of dice it keeps and a ``keep(values)``
    method returning the kept values.

    Every combination of dice is enumerated, so the cost grows as ``k ** n``
    for ``k`` distinct faces and ``n`` dice. If that number of combinations
    is above ``max_combinations``, EnumerationLimitError is raised instead.

    With a random ``count`` the result's total is
    ``count.total() * value.total() ** count.max()``.
    """
    if count.min() < 0:
        raise NegativeCountError(str(expression))
    if count.min() < ranker.count:
        raise KeepTooFewError(str(expression))

    faces = list(value.occurrences())
    if max_combinations is not None:
        combinations = _count_combinations(len(faces), count, max_combinations)
        if combinations > max_combinations:
            raise EnumerationLimitError(str(expression), max_combinations)
        logger.debug("'%s' enumerates %s combinations", expression, combinations)

    # n dice have value.total() ** n possible rolls. Scale every count up to
    # the largest one so that all outcomes share one denominator.
    most_dice = count.max()
    result = _Builder()
    for n, count_occurrences in count.occurrences():
        scale = count_occurrences * value.total() ** (most_dice - n)
        for dice in itertools.product(faces, repeat=n):
            # The dropped dice still count towards how often this roll happens.
            occurrences = scale
            for _, face_occurrences in dice:
                occurrences *= face_occurrences
            kept = ranker.keep([face for face, _ in dice])
            result.add_occurrences(sum(kept), occurrences)
    return result.build()
