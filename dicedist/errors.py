class DiceRollError(ValueError):
    pass


class ExpressionError(DiceRollError):
    """An error raised while evaluating a particular subexpression.

    ``expression`` holds the dice notation of the offending subexpression.
    """

    message = "'%s' cannot be evaluated"

    def __init__(self, expression: str) -> None:
        super().__init__(self.message % expression)
        self.expression = expression


class NegativeCountError(ExpressionError):
    message = "Roll count of '%s' can be negative"


class KeepTooFewError(ExpressionError):
    message = "'%s' keeps more dice than it can roll"


class DivideByZeroError(ExpressionError):
    message = "Divisor of '%s' can be zero"


class EnumerationLimitError(ExpressionError):
    message = "'%s' has too many combinations to enumerate"

    def __init__(self, expression: str, limit: int) -> None:
        super().__init__(expression)
        self.args = ("%s (more than %s)" % (self.args[0], limit),)
        self.limit = limit
