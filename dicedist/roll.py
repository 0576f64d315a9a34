import enum
import logging
import operator
import typing

import dicedist.distribution as dist
from dicedist.distribution import Distribution

logger = logging.getLogger(__name__)

DEFAULT_MAX_COMBINATIONS = 10_000_000

# How tightly each kind of node binds when rendered, weakest first.
_COMPARISON = 0
_SUM = 1
_PRODUCT = 2
_NEGATED = 3
_ATOM = 4


def _wrap(expression: "Expression", precedence: int) -> str:
    if expression.precedence < precedence:
        return "(%s)" % expression
    return str(expression)


class Expression:
    precedence = _ATOM

    def distribution(
        self, max_combinations: typing.Optional[int] = DEFAULT_MAX_COMBINATIONS
    ) -> Distribution:
        """Compute the exact distribution of this expression.

        ``max_combinations`` bounds how many dice combinations a single
        repetition may enumerate; ``None`` removes the bound.
        """
        logger.debug("computing distribution of '%s'", self)
        return self.distribution_impl(max_combinations).clean()

    def distribution_impl(self, max_combinations: typing.Optional[int]) -> Distribution:
        raise NotImplementedError


class Modifier(Expression):
    def __init__(self, value: int) -> None:
        self.value = value

    @property
    def precedence(self) -> int:
        return _ATOM if self.value >= 0 else _NEGATED

    def distribution_impl(self, max_combinations: typing.Optional[int]) -> Distribution:
        return Distribution.modifier(self.value)

    def __repr__(self) -> str:
        return str(self.value)


class Die(Expression):
    def __init__(self, faces: int) -> None:
        self.faces = faces

    def distribution_impl(self, max_combinations: typing.Optional[int]) -> Distribution:
        return Distribution.die(self.faces)

    def __repr__(self) -> str:
        return "d%s" % self.faces


class Negated(Expression):
    precedence = _NEGATED

    def __init__(self, expression: Expression) -> None:
        self.expression = expression

    def distribution_impl(self, max_combinations: typing.Optional[int]) -> Distribution:
        return -self.expression.distribution_impl(max_combinations)

    def __repr__(self) -> str:
        return "-%s" % _wrap(self.expression, _NEGATED)


class Ranker:
    """Which of the rolled dice a repetition keeps."""

    count = 0

    def keep(self, values: typing.List[int]) -> typing.List[int]:
        raise NotImplementedError


class All(Ranker):
    def keep(self, values: typing.List[int]) -> typing.List[int]:
        return values

    def __repr__(self) -> str:
        return ""


class Highest(Ranker):
    def __init__(self, count: int = 1) -> None:
        self.count = count

    def keep(self, values: typing.List[int]) -> typing.List[int]:
        return sorted(values, reverse=True)[: self.count]

    def __repr__(self) -> str:
        return "kh" if self.count == 1 else "kh%s" % self.count


class Lowest(Ranker):
    def __init__(self, count: int = 1) -> None:
        self.count = count

    def keep(self, values: typing.List[int]) -> typing.List[int]:
        return sorted(values)[: self.count]

    def __repr__(self) -> str:
        return "kl" if self.count == 1 else "kl%s" % self.count


class Repeated(Expression):
    """Roll ``count`` copies of ``value`` and add up the ones ``ranker`` keeps."""

    def __init__(
        self, count: Expression, value: Expression, ranker: typing.Optional[Ranker] = None
    ) -> None:
        self.count = count
        self.value = value
        self.ranker = All() if ranker is None else ranker

    def distribution_impl(self, max_combinations: typing.Optional[int]) -> Distribution:
        return dist.repeat(
            self,
            self.count.distribution_impl(max_combinations),
            self.value.distribution_impl(max_combinations),
            self.ranker,
            max_combinations,
        )

    def __repr__(self) -> str:
        if isinstance(self.count, Modifier) and self.count.value >= 0:
            count = str(self.count)
        else:
            count = "(%s)" % self.count
        if isinstance(self.value, Die):
            value = str(self.value)
        else:
            value = "(%s)" % self.value
        return "%s%s%r" % (count, value, self.ranker)


class Product(Expression):
    precedence = _PRODUCT

    def __init__(self, lhs: Expression, rhs: Expression) -> None:
        self.lhs = lhs
        self.rhs = rhs

    def distribution_impl(self, max_combinations: typing.Optional[int]) -> Distribution:
        return dist.product(
            self.lhs.distribution_impl(max_combinations),
            self.rhs.distribution_impl(max_combinations),
        )

    def __repr__(self) -> str:
        return "%s * %s" % (_wrap(self.lhs, _PRODUCT), _wrap(self.rhs, _NEGATED))


class Floor(Expression):
    """Floor division."""

    precedence = _PRODUCT

    def __init__(self, lhs: Expression, rhs: Expression) -> None:
        self.lhs = lhs
        self.rhs = rhs

    def distribution_impl(self, max_combinations: typing.Optional[int]) -> Distribution:
        return dist.floor(
            self,
            self.lhs.distribution_impl(max_combinations),
            self.rhs.distribution_impl(max_combinations),
        )

    def __repr__(self) -> str:
        return "%s /_ %s" % (_wrap(self.lhs, _PRODUCT), _wrap(self.rhs, _NEGATED))


class Sum(Expression):
    precedence = _SUM

    def __init__(self, *terms: Expression) -> None:
        self.terms = tuple(terms)

    def distribution_impl(self, max_combinations: typing.Optional[int]) -> Distribution:
        return dist.sum_distributions(
            term.distribution_impl(max_combinations) for term in self.terms
        )

    def __repr__(self) -> str:
        if len(self.terms) == 0:
            return "0"

        result = _wrap(self.terms[0], _PRODUCT)
        for term in self.terms[1:]:
            if isinstance(term, Negated):
                result += " - %s" % _wrap(term.expression, _PRODUCT)
            else:
                result += " + %s" % _wrap(term, _PRODUCT)
        return result


class ComparisonOp(enum.Enum):
    GT = ">"
    GE = ">="
    EQ = "=="
    LE = "<="
    LT = "<"

    def __call__(self, lhs: int, rhs: int) -> bool:
        return _COMPARISON_FUNCTIONS[self](lhs, rhs)

    def __str__(self) -> str:
        return self.value


_COMPARISON_FUNCTIONS: typing.Dict[ComparisonOp, typing.Callable[[int, int], bool]] = {
    ComparisonOp.GT: operator.gt,
    ComparisonOp.GE: operator.ge,
    ComparisonOp.EQ: operator.eq,
    ComparisonOp.LE: operator.le,
    ComparisonOp.LT: operator.lt,
}


class Comparison(Expression):
    """1 when the comparison holds, 0 when it does not."""

    precedence = _COMPARISON

    def __init__(self, lhs: Expression, op: ComparisonOp, rhs: Expression) -> None:
        self.lhs = lhs
        self.op = op
        self.rhs = rhs

    def distribution_impl(self, max_combinations: typing.Optional[int]) -> Distribution:
        return dist.comparison(
            self.lhs.distribution_impl(max_combinations),
            self.op,
            self.rhs.distribution_impl(max_combinations),
        )

    def __repr__(self) -> str:
        return "%s %s %s" % (_wrap(self.lhs, _SUM), self.op, _wrap(self.rhs, _SUM))
