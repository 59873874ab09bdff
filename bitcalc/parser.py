"""Parser for bitcalc input lines.

Each line is either a binding (``let x = <expression>``) or a bare
expression. The line is fed into a Lark LALR parser whose grammar is
generated from the configured precedence preset: every tier of binary
operators becomes one left-recursive rule, loosest first, so the same
builder serves both the ``standard`` and the ``c`` orderings. The parse
tree is then transformed into the AST defined in `bitcalc.ast`.

Lark's own exceptions never escape this module; they are converted into
`ExpressionSyntaxError` carrying the offending token and its column.

The `parse_statement` function is the public entry point.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

from lark import Lark, v_args
from lark.visitors import Transformer_NonRecursive
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken

from .ast import Binding, BinaryOp, Evaluation, Literal, Statement, UnaryOp, Variable
from .config import CalcConfig
from .errors import ExpressionSyntaxError


# Rule alias used for each binary operator in the generated grammar
OPERATOR_RULES = {
    '+': 'add',
    '-': 'sub',
    '*': 'mul',
    '/': 'div',
    '&': 'bit_and',
    '|': 'bit_or',
    '^': 'bit_xor',
    '<<': 'shl',
    '>>': 'shr',
}


GRAMMAR_HEADER = r"""
    start: binding | evaluation

    binding: "let" NAME "=" expression
    evaluation: expression

    ?expression: tier_0
"""

GRAMMAR_FOOTER = r"""
    ?unary: primary
          | "!" unary -> bit_not
          | "~" unary -> bit_not
          | "-" unary -> neg

    ?primary: NUMBER -> number
            | NAME -> variable
            | "(" expression ")"

    NUMBER: /[0-9]+/
    NAME: /(?!let\b)[A-Za-z_][A-Za-z0-9_]*/

    %import common.WS
    %ignore WS
"""


def build_grammar(tiers: Iterable[Tuple[str, ...]]) -> str:
    """Generate the Lark grammar for the given binary operator tiers.

    `tiers` lists operator groups from loosest to tightest binding. The
    tightest tier takes unary expressions as operands.
    """
    tiers = list(tiers)
    rules = []
    for level, ops in enumerate(tiers):
        rule = f"tier_{level}"
        operand = f"tier_{level + 1}" if level + 1 < len(tiers) else "unary"
        alternatives = [operand]
        for op in ops:
            alternatives.append(f'{rule} "{op}" {operand} -> {OPERATOR_RULES[op]}')
        rules.append(f"    ?{rule}: " + "\n        | ".join(alternatives))
    return GRAMMAR_HEADER + "\n".join(rules) + "\n" + GRAMMAR_FOOTER


_PARSERS: Dict[str, Lark] = {}


def get_lark(precedence: str) -> Lark:
    """Return the (cached) Lark parser for a precedence preset."""
    if precedence not in _PARSERS:
        tiers = CalcConfig(precedence=precedence).tiers
        _PARSERS[precedence] = Lark(build_grammar(tiers), parser='lalr')
    return _PARSERS[precedence]


def _binary(op: str):
    def build(self, left, right):
        return BinaryOp(op=op, left=left, right=right)
    return build


@v_args(inline=True)
class ASTTransformer(Transformer_NonRecursive):
    """Transforms the raw parse tree into a `Statement`."""

    def start(self, statement):
        return statement

    def binding(self, name, expr):
        return Binding(name=str(name), expr=expr)

    def evaluation(self, expr):
        return Evaluation(expr=expr)

    add = _binary('+')
    sub = _binary('-')
    mul = _binary('*')
    div = _binary('/')
    bit_and = _binary('&')
    bit_or = _binary('|')
    bit_xor = _binary('^')
    shl = _binary('<<')
    shr = _binary('>>')

    def bit_not(self, operand):
        # `~` and `!` both land here
        return UnaryOp(op='!', operand=operand)

    def neg(self, operand):
        return UnaryOp(op='-', operand=operand)

    def number(self, token):
        return Literal(int(token))

    def variable(self, token):
        return Variable(str(token))


class Parser:
    """Parses single lines using the grammar of one configuration."""

    def __init__(self, config: Optional[CalcConfig] = None):
        self.config = config or CalcConfig()
        self._lark = get_lark(self.config.precedence)
        self._transformer = ASTTransformer()

    def parse(self, line: str) -> Statement:
        if not line.strip():
            raise ExpressionSyntaxError('empty expression at column 1', token=None, column=1)
        try:
            tree = self._lark.parse(line)
        except UnexpectedInput as e:
            raise self._syntax_error(line, e) from None
        return self._transformer.transform(tree)

    def _describe(self, terminal: str) -> str:
        if terminal == '$END':
            return 'end of input'
        pattern = self._lark.get_terminal(terminal).pattern
        if pattern.type == 'str':
            return repr(pattern.value)
        return terminal.lower()

    def _expecting(self, expected) -> str:
        if not expected:
            return ''
        names = sorted(self._describe(name) for name in expected)
        return ', expected one of: ' + ' '.join(names)

    def _syntax_error(self, line: str, err: UnexpectedInput) -> ExpressionSyntaxError:
        if isinstance(err, UnexpectedCharacters):
            return ExpressionSyntaxError(
                f"unrecognized character {err.char!r} at column {err.column}",
                token=err.char, column=err.column)
        if isinstance(err, UnexpectedToken) and err.token.type != '$END':
            token = err.token
            return ExpressionSyntaxError(
                f"unexpected token {token.value!r} at column {token.column}"
                + self._expecting(err.expected),
                token=str(token.value), column=token.column)
        column = len(line.rstrip()) + 1
        expected = getattr(err, 'expected', None)
        return ExpressionSyntaxError(
            f"unexpected end of input at column {column}" + self._expecting(expected),
            token=None, column=column)


def parse_statement(line: str, config: Optional[CalcConfig] = None) -> Statement:
    """Parse one line of input into a `Binding` or an `Evaluation`.

    Raises `ExpressionSyntaxError` on malformed input.
    """
    return Parser(config).parse(line)
