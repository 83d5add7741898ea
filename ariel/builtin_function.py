import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, IO, List, Optional

from ariel.errors import new_error, TOO_MANY_ARGUMENTS
from ariel.types import BUILTIN, IntVal, Value, render


@dataclass
class BuiltinFunction(Value):
    """A host callable reachable from Ariel code by a reserved name.

    `fn` receives the evaluated argument list and returns a value or
    None for nothing. Built-ins check their own arguments.
    """
    name: str
    fn: Callable[[List[Any]], Optional[Value]]

    type_tag = BUILTIN

    def inspect(self) -> str:
        return 'builtin'

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"


def standard_builtins(rng: random.Random, out: Optional[IO[str]] = None) -> Dict[str, BuiltinFunction]:
    """Build the fixed built-in table.

    `out` receives print/println output; None means whatever sys.stdout is
    at the time of the call.
    """
    def builtin_println(args: List[Any]) -> None:
        print(''.join(render(a) for a in args), file=out)

    def builtin_print(args: List[Any]) -> None:
        print(''.join(render(a) for a in args), end='', file=out)

    def builtin_rand(args: List[Any]) -> Value:
        if len(args) != 0:
            return new_error(TOO_MANY_ARGUMENTS, 'too many arguments to rand()')
        return IntVal(rng.getrandbits(63))

    return {
        'println': BuiltinFunction('println', builtin_println),
        'print': BuiltinFunction('print', builtin_print),
        'rand': BuiltinFunction('rand', builtin_rand),
    }
