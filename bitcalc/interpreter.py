"""Evaluator for bitcalc statements.

The `Interpreter` walks a parsed `Statement` against an explicitly passed
`Environment` and produces a fixed-width word. All arithmetic is done on
Python integers and then masked to the configured width, so overflow wraps
silently the same way on every platform.

A `Session` ties one Environment to a parser and an interpreter sharing a
single configuration. It is what the REPL and the command line drive, one
line at a time.
"""

from __future__ import annotations

from typing import Optional, TextIO

from .ast import (
    Binding, BinaryOp, Evaluation, Expression, Literal, Statement, UnaryOp, Variable,
)
from .config import CalcConfig
from .environment import Environment
from .errors import DivisionByZeroError, InvalidShiftError, NestingTooDeepError
from .parser import Parser
from .types import format_result, to_signed


class Interpreter:
    """Evaluates statements for one word width.

    The interpreter holds no variable state of its own; every call receives
    the environment to read and, for bindings, to update.
    """
    def __init__(self, config: Optional[CalcConfig] = None, debug_level: int = 0,
                 debug_file: str = 'debug.txt'):
        self.config = config or CalcConfig()
        self.debug_level = debug_level
        self.debug_fp: Optional[TextIO] = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def wrap(self, value: int) -> int:
        return value & self.config.mask

    def execute(self, statement: Statement, env: Environment) -> int:
        if isinstance(statement, Binding):
            value = self.evaluate(statement.expr, env)
            # only reached when the whole expression evaluated
            env.set(statement.name, value)
            self.debug(f"let {statement.name} = {value}")
            return value
        if isinstance(statement, Evaluation):
            value = self.evaluate(statement.expr, env)
            self.debug(f"{statement} => {value}")
            return value
        raise TypeError(f"execute: unexpected statement type {type(statement).__name__}")

    def evaluate(self, node: Expression, env: Environment) -> int:
        if isinstance(node, Literal):
            return self.wrap(node.value)
        if isinstance(node, Variable):
            value = env.get(node.name)
            if self.debug_level >= 3:
                self.debug(f"lookup {node.name} -> {value}")
            return value
        if isinstance(node, UnaryOp):
            operand = self.evaluate(node.operand, env)
            result = self.apply_unary_op(node.op, operand)
            if self.debug_level >= 2:
                self.debug(f"{node.op}{operand} = {result}")
            return result
        if isinstance(node, BinaryOp):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            result = self.apply_binary_op(node.op, left, right)
            if self.debug_level >= 2:
                self.debug(f"{left} {node.op} {right} = {result}")
            return result
        raise TypeError(f"evaluate: unexpected node type {type(node).__name__}")

    def apply_unary_op(self, op: str, value: int) -> int:
        if op == '-':
            return self.wrap(-value)
        if op == '!':
            return self.wrap(~value)
        raise ValueError(f"unknown unary operator {op}")

    def apply_binary_op(self, op: str, a: int, b: int) -> int:
        width = self.config.width
        if op == '+':
            return self.wrap(a + b)
        if op == '-':
            return self.wrap(a - b)
        if op == '*':
            return self.wrap(a * b)
        if op == '/':
            if b == 0:
                raise DivisionByZeroError()
            # operands are unsigned words, so this truncates toward zero
            return self.wrap(a // b)
        if op == '&':
            return a & b
        if op == '|':
            return a | b
        if op == '^':
            return a ^ b
        if op in ('<<', '>>'):
            amount = to_signed(b, width)
            if amount < 0:
                raise InvalidShiftError(amount)
            amount %= width
            if op == '<<':
                return self.wrap(a << amount)
            return a >> amount
        raise ValueError(f"unknown binary operator {op}")


def evaluate_statement(statement: Statement, env: Environment,
                       config: Optional[CalcConfig] = None) -> int:
    """Evaluate one statement against `env`, returning the resulting word.

    A `Binding` stores its value in `env` only if the expression evaluates
    without error.
    """
    return Interpreter(config).execute(statement, env)


class Session:
    """One interactive session: a configuration, a parser and an environment."""

    def __init__(self, config: Optional[CalcConfig] = None, debug_level: int = 0,
                 debug_file: str = 'debug.txt'):
        self.config = config or CalcConfig()
        self.env = Environment()
        self.parser = Parser(self.config)
        self.interpreter = Interpreter(self.config, debug_level=debug_level, debug_file=debug_file)

    def run_line(self, line: str) -> int:
        """Parse and evaluate one line. Errors leave the environment unchanged."""
        try:
            statement = self.parser.parse(line)
            return self.interpreter.execute(statement, self.env)
        except RecursionError:
            raise NestingTooDeepError() from None

    def render(self, value: int) -> str:
        return format_result(value, self.config.width)

    def show_ast(self, line: str) -> str:
        try:
            return str(self.parser.parse(line))
        except RecursionError:
            raise NestingTooDeepError() from None

    def close(self):
        self.interpreter.close()

    def __enter__(self) -> 'Session':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def run_line(line: str, env: Optional[Environment] = None,
             config: Optional[CalcConfig] = None) -> int:
    """Convenience function to parse and evaluate a single line."""
    if env is None:
        env = Environment()
    statement = Parser(config).parse(line)
    return evaluate_statement(statement, env, config)
