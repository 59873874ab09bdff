"""CLI entry point for bitcalc.

Usage:
    python -m bitcalc [-v|-vv|-vvv] [--width N] [--precedence {standard,c}]
    python -m bitcalc [options] -e EXPR [-e EXPR ...]
    python -m bitcalc [options] <statements_file>

Options:
  -v              Increase debug verbosity (can be repeated)
  --width N       Word width in bits (default 16)
  --precedence P  Operator precedence preset (default 'standard')
  --show-ast      Print the parsed tree of each statement before its result
  -e EXPR         Evaluate EXPR; may be repeated, all share one session

Without -e or a file, an interactive session is started. A statements file
holds one statement per line; blank lines and lines starting with '#' are
skipped. Debug information is written to `debug.txt` in the current
directory when verbosity is greater than zero.
"""

import argparse
import sys
from pathlib import Path
from typing import Iterable

from .config import CalcConfig, MIN_WIDTH, MAX_WIDTH, PRECEDENCE_PRESETS, DEFAULT_PRECEDENCE
from .errors import BitcalcError
from .interpreter import Session
from .repl import run_repl
from .types import DEFAULT_WIDTH


def width_arg(text: str) -> int:
    try:
        width = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid width {text!r}")
    if not MIN_WIDTH <= width <= MAX_WIDTH:
        raise argparse.ArgumentTypeError(f"width must be between {MIN_WIDTH} and {MAX_WIDTH}")
    return width


def run_batch(session: Session, lines: Iterable[str], show_ast: bool = False) -> int:
    """Evaluate lines in order, printing each result. Stops at the first error."""
    for line in lines:
        try:
            if show_ast:
                print(session.show_ast(line))
            value = session.run_line(line)
        except BitcalcError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(session.render(value))
    return 0


def read_statements(path: Path) -> list[str]:
    with open(path, 'r', encoding='utf-8') as f:
        lines = [line.strip() for line in f]
    return [line for line in lines if line and not line.startswith('#')]


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Fixed-width binary calculator")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--width', type=width_arg, default=DEFAULT_WIDTH, help='word width in bits')
    parser.add_argument('--precedence', choices=sorted(PRECEDENCE_PRESETS), default=DEFAULT_PRECEDENCE,
                        help='operator precedence preset')
    parser.add_argument('--show-ast', action='store_true', help='print the parsed tree of each statement')
    parser.add_argument('-e', '--eval', dest='exprs', action='append', metavar='EXPR',
                        help='evaluate EXPR (can be repeated)')
    parser.add_argument('file', nargs='?', help='file of statements, one per line')
    args = parser.parse_args(argv)

    config = CalcConfig(width=args.width, precedence=args.precedence)

    if args.exprs and args.file:
        parser.error('use either -e or a statements file, not both')

    lines = None
    if args.file:
        path = Path(args.file)
        if not path.is_file():
            print(f"Error: file {path} not found", file=sys.stderr)
            sys.exit(1)
        lines = read_statements(path)
    elif args.exprs:
        lines = args.exprs

    with Session(config, debug_level=args.v) as session:
        if lines is None:
            run_repl(session, show_ast=args.show_ast)
            return
        status = run_batch(session, lines, show_ast=args.show_ast)
    if status:
        sys.exit(status)


if __name__ == '__main__':
    main()
