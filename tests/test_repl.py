import io

import pytest

from ariel.errors import ArielSyntaxError
from ariel.repl import PROMPT, ReplSession, process_line, repl
from ariel.types import IntVal, StringVal


def test_definitions_return_none():
    session = ReplSession()
    assert session.eval('int x = 2;') is None


def test_state_persists_across_evals():
    session = ReplSession()
    session.eval('int x = 20;')
    session.eval('int twice(int n) { return n * 2; }')
    assert session.eval('twice(x) + 2;') == IntVal(42)


def test_block_locals_do_not_leak_between_lines():
    session = ReplSession()
    session.eval('string s = "a"; { s += "b"; string t = "c"; }')
    assert session.eval('s;') == StringVal('ab')
    assert session.eval('t;').name == 'UndeclaredIdentifier'


def test_reset_clears_state():
    session = ReplSession()
    session.eval('int x = 1;')
    session.reset()
    assert session.eval('x;').name == 'UndeclaredIdentifier'


def test_syntax_errors_raise():
    with pytest.raises(ArielSyntaxError):
        ReplSession().eval('int = 3;')


def test_process_line_commands():
    session = ReplSession()
    dest = io.StringIO()
    assert process_line(session, '   ', dest)
    assert process_line(session, 'help', dest)
    assert 'exit' in dest.getvalue()
    assert not process_line(session, 'quit', dest)
    assert not process_line(session, 'exit', dest)


def test_process_line_prints_results_and_errors():
    session = ReplSession()
    dest = io.StringIO()
    process_line(session, 'int x = 3;', dest)
    process_line(session, 'x * 4;', dest)
    process_line(session, 'x / 0;', dest)
    process_line(session, 'x +;', dest)
    lines = dest.getvalue().splitlines()
    assert lines[0] == '12'
    assert lines[1] == 'error: divide by zero error'
    assert lines[2].startswith('error: syntax error')


def test_repl_loop():
    stdin = io.StringIO('int x = 4;\nprintln("x is ", x);\nx * 2;\nquit\nx;\n')
    stdout = io.StringIO()
    repl(stdin, stdout)
    out = stdout.getvalue()
    assert out.startswith('Welcome to the Ariel programming language.')
    assert 'x is 4\n' in out
    assert PROMPT + '8\n' in out
    assert out.endswith(PROMPT)


def test_repl_ends_at_eof():
    stdout = io.StringIO()
    repl(io.StringIO('1 + 1;\n'), stdout)
    assert stdout.getvalue().endswith(PROMPT + '2\n' + PROMPT + '\n')
