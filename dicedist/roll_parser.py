import os
import typing

import lark

import dicedist.roll as roll
from dicedist.errors import DiceRollError


def _terms(expression: roll.Expression) -> typing.Tuple[roll.Expression, ...]:
    if isinstance(expression, roll.Sum):
        return expression.terms
    return (expression,)


# Largest literals the parser accepts.
MAX_FACES = 100_000
MAX_DICE = 10_000
MAX_MODIFIER = 10 ** 18


def _int(token: lark.Token, limit: int, what: str) -> int:
    # int() refuses digit strings past a few thousand characters, so check
    # the length first.
    if len(token.lstrip("0")) > len(str(limit)) or int(token) > limit:
        raise DiceRollError("%s %s is more than the maximum of %s" % (what, token, limit))
    return int(token)


def _count(token: typing.Optional[lark.Token]) -> int:
    return 1 if token is None else _int(token, MAX_DICE, "keep count")


def _die(faces: lark.Token) -> roll.Die:
    size = _int(faces, MAX_FACES, "die size")
    if size < 1:
        raise DiceRollError("attempted to roll a die with %s faces" % faces)
    return roll.Die(size)


def _roll_count(count: roll.Expression) -> roll.Expression:
    if isinstance(count, roll.Modifier) and count.value > MAX_DICE:
        raise DiceRollError(
            "roll count %s is more than the maximum of %s" % (count.value, MAX_DICE)
        )
    return count


@lark.v_args(inline=True)
class _RollParser(lark.Transformer):
    neg = roll.Negated
    product = roll.Product
    floor = roll.Floor
    highest = lambda self, n: roll.Highest(_count(n))
    lowest = lambda self, n: roll.Lowest(_count(n))

    def modifier(self, value: lark.Token):
        return roll.Modifier(_int(value, MAX_MODIFIER, "number"))

    def die(self, faces: lark.Token):
        return _die(faces)

    def dice(self, count, faces: lark.Token, ranker):
        return roll.Repeated(_roll_count(count), _die(faces), ranker)

    def repeated(self, count, value, ranker):
        return roll.Repeated(_roll_count(count), value, ranker)

    def add(self, lhs, rhs):
        return roll.Sum(*_terms(lhs), rhs)

    def sub(self, lhs, rhs):
        return roll.Sum(*_terms(lhs), roll.Negated(rhs))

    def comparison(self, lhs, op: lark.Token, rhs):
        return roll.Comparison(lhs, roll.ComparisonOp(str(op)), rhs)


_grammar_file = os.path.join(os.path.dirname(__file__), "roll.lark")
with open(_grammar_file) as _f:
    _grammar = lark.Lark(_f, parser="lalr", maybe_placeholders=True)


def parse(text: str) -> roll.Expression:
    try:
        return _RollParser().transform(_grammar.parse(text))
    except lark.exceptions.VisitError as e:
        raise e.orig_exc
    except lark.exceptions.UnexpectedInput as e:
        raise DiceRollError("syntax error in '%s':\n%s" % (text, e))
