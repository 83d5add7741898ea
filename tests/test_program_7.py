from pathlib import Path

from ariel.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_7(capsys):
    with open(EXAMPLES / 'program_7.ariel', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['{ 1, 2, 3 } { 99, 2, 3 }', '{ 1, 2, 3 }', '3', 'false']
