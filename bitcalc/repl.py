"""Interactive loop for bitcalc.

Reads one line at a time, evaluates it in a `Session` and prints the result
in binary and decimal. Errors are reported and the loop carries on with the
next line.
"""

from __future__ import annotations

import sys
from typing import Callable, Optional, TextIO

from .errors import BitcalcError
from .interpreter import Session


PROMPT = '$ '
EXIT_COMMAND = 'exit'


def banner(session: Session) -> str:
    return (
        "Welcome to the bitshift calculator.\n"
        f"Numbers are displayed as {session.config.width}-bit unsigned integers.\n"
        "Assign to variables like so: 'let x = 15'.\n"
        f"Type '{EXIT_COMMAND}' when you're done."
    )


def handle_command(session: Session, line: str) -> str:
    """Run one REPL command (a line starting with ':') and return its output."""
    command, _, rest = line[1:].partition(' ')
    if command == 'ast':
        return session.show_ast(rest)
    if command == 'vars':
        return '\n'.join(f"{name} = {session.render(value)}" for name, value in session.env.items())
    return f"Error: unknown command ':{command}'"


def run_repl(session: Session, input_fn: Optional[Callable[[str], str]] = None,
             output: Optional[TextIO] = None, show_ast: bool = False) -> None:
    if input_fn is None:
        input_fn = input
    if output is None:
        output = sys.stdout
    print(banner(session), file=output)
    while True:
        try:
            line = input_fn(PROMPT)
        except EOFError:
            print(file=output)
            break
        except KeyboardInterrupt:
            print("Keyboard Interrupt", file=output)
            continue

        line = line.strip()
        if not line:
            continue
        if line == EXIT_COMMAND:
            break

        try:
            if line.startswith(':'):
                text = handle_command(session, line)
                if text:
                    print(text, file=output)
                continue
            if show_ast:
                print(session.show_ast(line), file=output)
            value = session.run_line(line)
            print(session.render(value), file=output)
        except BitcalcError as e:
            print(f"Error: {e}", file=output)
