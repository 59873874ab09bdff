# bitcalc package
# This package provides a parser and evaluator for fixed-width integer
# arithmetic and bitwise expressions, plus an interactive calculator.
from .config import CalcConfig
from .environment import Environment
from .errors import (
    BitcalcError, ExpressionSyntaxError, UndefinedVariableError, NestingTooDeepError,
    DivisionByZeroError, InvalidShiftError,
)
from .interpreter import Interpreter, Session, evaluate_statement, run_line
from .parser import parse_statement
from .types import format_binary, format_result

__all__ = [
    'CalcConfig',
    'Environment',
    'BitcalcError',
    'ExpressionSyntaxError',
    'UndefinedVariableError',
    'DivisionByZeroError',
    'InvalidShiftError',
    'NestingTooDeepError',
    'Interpreter',
    'Session',
    'evaluate_statement',
    'run_line',
    'parse_statement',
    'format_binary',
    'format_result',
]
