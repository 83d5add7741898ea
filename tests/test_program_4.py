from pathlib import Path

from ariel.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_4(capsys):
    with open(EXAMPLES / 'program_4.ariel', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.strip().splitlines()
    assert out == [
        '{ 3, 1, 4, 1, 5 }',
        '14',
        '{ 10, 3, 4, 1, 5 }',
        '{ 0, 0, 0 }',
    ]
