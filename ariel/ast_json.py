"""JSON serialization/deserialization for the Ariel AST.

This module converts between Ariel AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Every node becomes an
object with a ``"type"`` key naming its class and one key per dataclass
field, so external front ends can hand the interpreter a program
without going through the parser.
"""

from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, Union

from .ast import NODE_TYPES, Program


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None or isinstance(node, (int, float, str, bool)):
        return node
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]

    # Node types
    if is_dataclass(node) and type(node).__name__ in NODE_TYPES:
        obj: Dict[str, Any] = {"type": type(node).__name__}
        for f in fields(node):
            obj[f.name] = ast_to_obj(getattr(node, f.name))
        return obj

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None or isinstance(obj, (int, float, str, bool)):
        return obj
    if isinstance(obj, list):
        return [ast_from_obj(o) for o in obj]
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    cls = NODE_TYPES.get(t)
    if cls is None:
        raise ValueError(f"Unknown AST node type: {t}")
    kwargs = {}
    for f in fields(cls):
        if f.name in obj:
            kwargs[f.name] = ast_from_obj(obj[f.name])
    try:
        return cls(**kwargs)
    except TypeError as e:
        raise TypeError(f"Malformed {t} node: {e}") from None


def load_program(path: Union[str, Path]) -> Program:
    """Read a program previously written by `dump_program`."""
    with open(path, 'r', encoding='utf-8') as f:
        program = ast_from_obj(json.load(f))
    if not isinstance(program, Program):
        raise TypeError(f"{path} does not hold a Program")
    return program


def dump_program(program: Program, path: Union[str, Path]) -> None:
    with open(path, 'w', encoding='utf-8') as out:
        json.dump(ast_to_obj(program), out, ensure_ascii=False, indent=2)
