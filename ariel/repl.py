"""ReplSession: incremental evaluation for interactive use.

Also provides the line loop started by ``ariel`` with no program file.
"""

from __future__ import annotations

import sys
from typing import IO, Optional

from .environment import Environment
from .errors import ArielSyntaxError
from .interpreter import Interpreter
from .parser import parse_program
from .types import Value


PROMPT = "ariel>> "

WELCOME = (
    "Welcome to the Ariel programming language.\n"
    "Type \"help\" for more information. Type \"exit\" or \"quit\" to leave."
)

HELP = """\
Enter Ariel statements; declarations persist for the whole session.
  int x = 2;             declare a variable
  x * 21;                evaluate an expression and show its value
  println("hi");         call a built-in (println, print, rand)
  exit | quit            leave the session"""


class ReplSession:
    """Stateful session that keeps one top-level environment across calls.

    Usage::

        session = ReplSession()
        session.eval("int x = 20;")
        session.eval("x + 1;")   # -> IntVal(21)
    """

    def __init__(self, interpreter: Optional[Interpreter] = None) -> None:
        self.interpreter = interpreter or Interpreter()
        self.env = Environment()

    def eval(self, text: str) -> Optional[Value]:
        """Parse and evaluate *text*; return its value or None for nothing.

        Syntax errors propagate as `ArielSyntaxError`.
        """
        return self.interpreter.run(parse_program(text), self.env)

    def reset(self) -> None:
        self.env = Environment()


def process_line(session: ReplSession, line: str, dest: IO[str]) -> bool:
    """Process one input line.  Returns False when the session should end."""
    line = line.strip()
    if not line:
        return True
    if line in ("exit", "quit"):
        return False
    if line == "help":
        print(HELP, file=dest)
        return True
    try:
        result = session.eval(line)
    except ArielSyntaxError as e:
        print(f"error: {e}", file=dest)
        return True
    if result is not None:
        print(result.inspect(), file=dest)
    return True


def repl(stdin: IO[str] = None, stdout: IO[str] = None,
         session: Optional[ReplSession] = None) -> None:
    """Run the interactive loop until exit/quit or end of input."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    session = session or ReplSession(Interpreter(out=stdout))

    print(WELCOME, file=stdout)
    while True:
        stdout.write(PROMPT)
        stdout.flush()
        line = stdin.readline()
        if not line:
            print(file=stdout)
            break
        if not process_line(session, line, stdout):
            break
