"""Tree-walking interpreter for minix language. Executes a Program statement by statement against an Environment,
writing one line to its output sink per print statement.

Names used as print arguments are looked up when the print statement runs, so using a variable before its let
statement is a runtime error rather than a parse error.
"""

import sys

from minix.lang.error import MinixRuntimeError
from minix.lang.syntax import Let, Print

PLACEHOLDER = "{}"


class Environment(dict):
    """Variable storage for one run: name -> string value, last write wins."""

    def lookup(self, name):
        """Returns value bound to name, raising a MinixRuntimeError if there is none."""
        try:
            return self[name]
        except KeyError:
            raise MinixRuntimeError(f"Undefined variable: {name}") from None

    def display(self):
        """Bindings in the order they were first made, one per line."""
        return "\n".join(f"{name} = {value!r}" for name, value in self.items())


def render(fmt, args, env):
    """Replaces each placeholder in fmt, left to right, with the value of the next name in args."""
    pieces = []
    remaining = iter(args)

    pos = fmt.find(PLACEHOLDER)
    while pos != -1:
        pieces.append(fmt[:pos])

        name = next(remaining, None)
        if name is None:
            raise MinixRuntimeError("missing arguments for placeholders")
        pieces.append(env.lookup(name))

        fmt = fmt[pos + len(PLACEHOLDER):]
        pos = fmt.find(PLACEHOLDER)

    pieces.append(fmt)

    if next(remaining, None) is not None:
        raise MinixRuntimeError("too many arguments for placeholders")
    return "".join(pieces)


class Interpreter:
    """Executes Programs. env (an Environment) and out are injected so that a session can keep bindings across several
    runs, and so that output can be captured.
    """

    def __init__(self, env=None, out=None):
        self.env = Environment() if env is None else env
        self.out = sys.stdout if out is None else out
        self.lines = []  # lines printed by the most recent run

    def run(self, program):
        """Executes program's statements in order. Stops at (and raises) the first MinixRuntimeError, after which
        self.env keeps whatever the statements before it bound.
        """
        self.lines = []
        for stmt in program:
            try:
                self.execute(stmt)
            except MinixRuntimeError as error:
                raise error.locate(stmt.pos, stmt.end)
        return self.lines

    def execute(self, stmt):
        if isinstance(stmt, Let):
            self.env[stmt.name] = stmt.value
        elif isinstance(stmt, Print):
            self.emit(render(stmt.format, stmt.args, self.env))
        else:
            raise MinixRuntimeError(f"cannot execute {stmt!r}", internal=True)

    def emit(self, line):
        """Writes line to self.out as a single unit."""
        self.out.write(line + "\n")
        self.lines.append(line)
