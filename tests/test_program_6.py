from pathlib import Path

from ariel.errors import DIVIDE_BY_ZERO
from ariel.interpreter import parse_program, Interpreter
from ariel.types import ErrorVal

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_6(capsys):
    with open(EXAMPLES / 'program_6.ariel', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    result = interp.run(ast)
    out = capsys.readouterr().out.strip()
    assert out == 'before'
    assert isinstance(result, ErrorVal)
    assert result.name == DIVIDE_BY_ZERO
    assert result.inspect() == 'error: divide by zero error'
    assert 'y' not in interp.global_env
