from pathlib import Path

from ariel.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_2(capsys):
    with open(EXAMPLES / 'program_2.ariel', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['3', '1', '-3', '-1', '3.000000', '56', '3 15 6']
