from ariel.ast import Block
from ariel.environment import Environment
from ariel.types import FunctionVal, IntVal


def make_function(name):
    return FunctionVal('int', name, [], Block(), Environment())


def test_get_and_set():
    env = Environment()
    assert env.get('x') is None
    assert 'x' not in env
    env.set('x', IntVal(1))
    assert env.get('x') == IntVal(1)
    assert 'x' in env
    assert len(env) == 1


def test_snapshot_is_independent():
    env = Environment({'x': IntVal(1)})
    scope = env.snapshot()
    scope.set('x', IntVal(2))
    scope.set('y', IntVal(3))
    assert env.get('x') == IntVal(1)
    assert 'y' not in env


def test_merge_from_keeps_only_existing_names():
    env = Environment({'x': IntVal(1)})
    scope = env.snapshot()
    scope.set('x', IntVal(2))
    scope.set('y', IntVal(3))
    env.merge_from(scope)
    assert env.get('x') == IntVal(2)
    assert list(env) == ['x']


def test_import_functions_skips_variables():
    caller = Environment({'x': IntVal(1), 'f': make_function('f')})
    callee = Environment()
    callee.import_functions(caller)
    assert 'f' in callee
    assert 'x' not in callee
