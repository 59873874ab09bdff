from typing import Optional


class BitcalcError(Exception):
    """Base class for errors reported to the user for a single line.

    Like a runtime error value, every error carries a short `kind` name and a
    human-readable `message`.
    """
    kind = 'Error'

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class ExpressionSyntaxError(BitcalcError):
    """Malformed input line; names the offending token and its column."""
    kind = 'SyntaxError'

    def __init__(self, message: str, token: Optional[str] = None, column: Optional[int] = None):
        super().__init__(message)
        self.token = token
        self.column = column


class UndefinedVariableError(BitcalcError):
    kind = 'UndefinedVariableError'

    def __init__(self, name: str):
        super().__init__(f"variable '{name}' is not defined")
        self.name = name


class DivisionByZeroError(BitcalcError):
    kind = 'DivisionByZeroError'

    def __init__(self, message: str = 'division by zero'):
        super().__init__(message)


class InvalidShiftError(BitcalcError):
    kind = 'InvalidShiftError'

    def __init__(self, amount: int):
        super().__init__(f"cannot shift by a negative amount ({amount})")
        self.amount = amount


class NestingTooDeepError(BitcalcError):
    kind = 'NestingTooDeepError'

    def __init__(self, message: str = 'expression nested too deeply'):
        super().__init__(message)
