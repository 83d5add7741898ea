from pathlib import Path

from ariel.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_3(capsys):
    with open(EXAMPLES / 'program_3.ariel', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    result = interp.run(ast)
    out = capsys.readouterr().out
    assert out == '0 1 1 2 3 5 8 13 21 34 \n'
    assert result is None
