import pytest

from ariel.ast import Block
from ariel.environment import Environment
from ariel.types import (
    ArrayVal, BoolVal, CharVal, ErrorVal, FloatVal, FunctionVal, IntVal,
    ReturnVal, StringVal, copy_value, element_type_of, is_homogeneous,
    render, type_name, zero_value,
)


def test_display_forms():
    assert IntVal(-3).inspect() == '-3'
    assert FloatVal(3.0).inspect() == '3.000000'
    assert FloatVal(0.1).inspect() == '0.100000'
    assert StringVal('hi').inspect() == 'hi'
    assert CharVal('c').inspect() == 'c'
    assert BoolVal(True).inspect() == 'true'
    assert BoolVal(False).inspect() == 'false'
    assert ErrorVal('DivideByZero', 'divide by zero error').inspect() == 'error: divide by zero error'
    assert FunctionVal('int', 'f', [], Block(), Environment()).inspect() == 'function'


def test_array_display():
    assert ArrayVal('int', []).inspect() == '{}'
    assert ArrayVal('int', [IntVal(1), IntVal(2)]).inspect() == '{ 1, 2 }'
    assert ArrayVal('string', [StringVal('a')]).inspect() == '{ a }'


def test_nothing_renders_empty():
    assert render(None) == ''
    assert type_name(None) == 'void'
    assert render(ReturnVal(IntVal(4))) == '4'


def test_type_tags():
    assert type_name(IntVal(1)) == 'int'
    assert type_name(ArrayVal('int', [])) == 'array'
    assert type_name(ReturnVal(None)) == 'return'
    assert type_name(ErrorVal('X', 'y')) == 'error'


@pytest.mark.parametrize('tag, expected', [
    ('char', CharVal('')),
    ('int', IntVal(0)),
    ('float', FloatVal(0.0)),
    ('string', StringVal('')),
    ('bool', BoolVal(False)),
])
def test_zero_values(tag, expected):
    assert zero_value(tag) == expected


def test_zero_value_of_unknown_type():
    with pytest.raises(ValueError):
        zero_value('array')


def test_homogeneity():
    assert is_homogeneous([])
    assert is_homogeneous([IntVal(1), IntVal(2)])
    assert not is_homogeneous([IntVal(1), FloatVal(2.0)])
    assert element_type_of([CharVal('a')]) == 'char'
    assert element_type_of([IntVal(1), StringVal('a')]) == ''
    assert element_type_of([]) == ''


def test_copy_value_separates_arrays():
    original = ArrayVal('int', [IntVal(1)])
    copied = copy_value(original)
    copied.elements[0] = IntVal(2)
    assert original.elements == [IntVal(1)]
    assert copy_value(IntVal(5)) == IntVal(5)
