import json
from pathlib import Path

import pytest

from ariel.ast import IntCon, Param, Program, ExprStmt
from ariel.ast_json import ast_from_obj, ast_to_obj, dump_program, load_program
from ariel.interpreter import Interpreter
from ariel.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_node_object_shape():
    assert ast_to_obj(IntCon(3)) == {"type": "IntCon", "value": 3}
    assert ast_to_obj(Param('int', 'xs', True)) == {
        "type": "Param", "type_name": "int", "name": "xs", "array": True,
    }


def test_example_program_survives_json():
    with open(EXAMPLES / 'program_4.ariel', 'r', encoding='utf-8') as f:
        program = parse_program(f.read())
    text = json.dumps(ast_to_obj(program))
    assert ast_from_obj(json.loads(text)) == program


def test_unknown_node_type():
    with pytest.raises(ValueError):
        ast_from_obj({"type": "Lambda"})


def test_malformed_input():
    with pytest.raises(TypeError):
        ast_from_obj(("not", "a", "node"))
    with pytest.raises(TypeError):
        ast_from_obj({"type": "IntCon"})
    with pytest.raises(TypeError):
        ast_to_obj(object())


def test_dump_and_load_program(tmp_path, capsys):
    program = parse_program('println("from json");')
    path = tmp_path / 'program.ast.json'
    dump_program(program, path)
    loaded = load_program(path)
    assert loaded == program
    Interpreter().run(loaded)
    assert capsys.readouterr().out == 'from json\n'


def test_load_program_requires_program(tmp_path):
    path = tmp_path / 'stmt.json'
    path.write_text(json.dumps(ast_to_obj(ExprStmt(IntCon(1)))), encoding='utf-8')
    with pytest.raises(TypeError):
        load_program(path)
    assert isinstance(ast_from_obj(ast_to_obj(Program([]))), Program)
