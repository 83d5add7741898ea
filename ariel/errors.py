from typing import Any, Optional

from ariel.types import ErrorVal


DUPLICATE_DECLARATION = 'DuplicateDeclaration'
TYPE_MISMATCH = 'TypeMismatch'
UNKNOWN_TYPE = 'UnknownType'
INVALID_ARRAY_SIZE = 'InvalidArraySize'
HETEROGENEOUS_ARRAY = 'HeterogeneousArray'
ILLEGAL_ELEMENT_TYPE = 'IllegalElementType'
NON_BOOLEAN_CONDITION = 'NonBooleanCondition'
ILLEGAL_OPERATION = 'IllegalOperation'
ILLEGAL_OPERATOR = 'IllegalOperator'
ILLEGAL_ASSIGNMENT = 'IllegalAssignment'
DIVIDE_BY_ZERO = 'DivideByZero'
INDEX_OUT_OF_BOUNDS = 'IndexOutOfBounds'
ILLEGAL_INDEX = 'IllegalIndex'
NOT_AN_ARRAY = 'NotAnArray'
NOT_CALLABLE = 'NotCallable'
TOO_MANY_ARGUMENTS = 'TooManyArguments'
NOT_ENOUGH_ARGUMENTS = 'NotEnoughArguments'
MISMATCHED_ARGUMENT_TYPE = 'MismatchedArgumentType'
NON_ARRAY_PASSED_AS_ARRAY = 'NonArrayPassedAsArray'
UNDECLARED_IDENTIFIER = 'UndeclaredIdentifier'
STACK_OVERFLOW = 'StackOverflow'


def new_error(name: str, message: str) -> ErrorVal:
    return ErrorVal(name, message)


def is_error(value: Any) -> bool:
    return isinstance(value, ErrorVal)


class ArielSyntaxError(Exception):
    """Raised by the parser front end for source text it cannot parse."""
    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        if line is not None:
            message = f"{message} at {line}:{column}"
        super().__init__(message)
        self.line = line
        self.column = column
