"""Runtime values for Ariel.

Every value the interpreter produces is one of the tagged dataclasses in
this module. The tag (``type_tag``) is what declarations, operators and
calls check against; ``inspect`` gives the text shown to the user by
``print``/``println`` and by the REPL.

A Python ``None`` stands for "nothing": the result of declarations,
assignments, void calls and loops that never ran. It has no tag of its
own; ``type_name`` reports it as ``void`` in messages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .ast import Block, Param
    from .environment import Environment


ERROR = 'error'
CHAR = 'char'
INT = 'int'
FLOAT = 'float'
STRING = 'string'
BOOL = 'bool'
ARRAY = 'array'
RETURN = 'return'
FUNCDECL = 'funcdecl'
BUILTIN = 'builtin'
VOID = 'void'

SCALAR_TYPES = (CHAR, INT, FLOAT, STRING, BOOL)

# Declared array type -> element type tag.
ARRAY_TYPES: Dict[str, str] = {t + 'arr': t for t in SCALAR_TYPES}


class Value:
    """Base class of all runtime values."""
    type_tag: ClassVar[str] = ''

    def inspect(self) -> str:
        raise NotImplementedError


@dataclass
class ErrorVal(Value):
    """An evaluation failure.

    Errors travel as ordinary return values: every composite evaluation
    checks for one after each sub-step and hands it back unchanged.
    ``name`` is the error kind (see ``errors``), ``message`` the text.
    """
    type_tag: ClassVar[str] = ERROR
    name: str
    message: str

    def inspect(self) -> str:
        return f"error: {self.message}"


@dataclass(frozen=True)
class CharVal(Value):
    type_tag: ClassVar[str] = CHAR
    value: str

    def inspect(self) -> str:
        return self.value


@dataclass(frozen=True)
class IntVal(Value):
    type_tag: ClassVar[str] = INT
    value: int

    def inspect(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class FloatVal(Value):
    type_tag: ClassVar[str] = FLOAT
    value: float

    def inspect(self) -> str:
        return f"{self.value:f}"


@dataclass(frozen=True)
class StringVal(Value):
    type_tag: ClassVar[str] = STRING
    value: str

    def inspect(self) -> str:
        return self.value


@dataclass(frozen=True)
class BoolVal(Value):
    type_tag: ClassVar[str] = BOOL
    value: bool

    def inspect(self) -> str:
        return 'true' if self.value else 'false'


@dataclass
class ArrayVal(Value):
    """An Ariel array.

    ``elem_type`` is the element type tag fixed by the declaration the
    array is bound to (array literals carry the tag of their elements when
    those agree, and an empty tag otherwise). ``elements`` is the only
    mutable storage in the value model; index assignment updates it in
    place.
    """
    type_tag: ClassVar[str] = ARRAY
    elem_type: str
    elements: List[Any] = field(default_factory=list)

    def inspect(self) -> str:
        if not self.elements:
            return '{}'
        return '{ ' + ', '.join(render(e) for e in self.elements) + ' }'

    def copy(self) -> 'ArrayVal':
        return ArrayVal(self.elem_type, list(self.elements))


@dataclass
class ReturnVal(Value):
    """Signal wrapping the value of a ``return`` statement."""
    type_tag: ClassVar[str] = RETURN
    value: Optional[Value]

    def inspect(self) -> str:
        return render(self.value)


@dataclass
class FunctionVal(Value):
    """A user-defined function.

    ``env`` is the environment the declaration ran in. Calls do not read
    it: a call starts from an empty environment holding the parameters
    and the caller's function bindings.
    """
    type_tag: ClassVar[str] = FUNCDECL
    return_type: str
    name: str
    params: List['Param']
    body: 'Block'
    env: 'Environment' = field(repr=False, compare=False)

    def inspect(self) -> str:
        return 'function'


def type_name(value: Optional[Value]) -> str:
    """Return the tag of a runtime value, ``void`` for nothing."""
    if value is None:
        return VOID
    return value.type_tag


def render(value: Optional[Value]) -> str:
    """Display text of a value; nothing renders as the empty string."""
    if value is None:
        return ''
    return value.inspect()


def zero_value(tag: str) -> Value:
    """The value an uninitialized scalar declaration of type `tag` gets."""
    if tag == CHAR:
        return CharVal('')
    if tag == INT:
        return IntVal(0)
    if tag == FLOAT:
        return FloatVal(0.0)
    if tag == STRING:
        return StringVal('')
    if tag == BOOL:
        return BoolVal(False)
    raise ValueError(f"no zero value for type {tag}")


def is_homogeneous(elements: List[Optional[Value]]) -> bool:
    if not elements:
        return True
    first = type_name(elements[0])
    return all(type_name(e) == first for e in elements)


def element_type_of(elements: List[Optional[Value]]) -> str:
    """Element tag an array literal gets before it is bound to a declaration."""
    if elements and is_homogeneous(elements):
        return type_name(elements[0])
    return ''


def copy_value(value: Optional[Value]) -> Optional[Value]:
    """Copy arrays so that bindings never share element storage."""
    if isinstance(value, ArrayVal):
        return value.copy()
    return value
