"""Interpreter for the Ariel language.

The interpreter is a direct recursive evaluator over the AST in
``ariel.ast``. ``Interpreter.evaluate(node, env)`` dispatches on the node
type and returns a runtime value from ``ariel.types``, ``None`` for
nothing, or one of the two signal values:

* ``ErrorVal`` -- a failure. Every composite form checks each
  sub-evaluation and returns an error unchanged as soon as it sees one.
* ``ReturnVal`` -- a ``return`` statement unwinding to the nearest
  enclosing loop or function call (or to the program). A loop that sees
  one stops and yields the returned value as its own result.

No Python exception is used to unwind Ariel code.
"""

from __future__ import annotations

import random
import sys
from typing import Any, IO, List, Optional, Tuple, Union

from .ast import (
    Node, Program, FuncDecl, VarDecl, Block, While, For, IfElse, Return,
    ExprStmt, PrefixExpr, InfixExpr, Assign, AssignExpr, Call, Identifier,
    CharCon, IntCon, FloatCon, StringCon, BoolCon, ArrayLit, IndexExpr,
    AssignIndexExpr, AssignExprIndexExpr,
)
from .builtin_function import BuiltinFunction, standard_builtins
from .environment import Environment
from .errors import (
    new_error, is_error,
    DUPLICATE_DECLARATION, TYPE_MISMATCH, UNKNOWN_TYPE, INVALID_ARRAY_SIZE,
    HETEROGENEOUS_ARRAY, ILLEGAL_ELEMENT_TYPE, NON_BOOLEAN_CONDITION,
    ILLEGAL_OPERATOR, ILLEGAL_ASSIGNMENT, INDEX_OUT_OF_BOUNDS, ILLEGAL_INDEX,
    NOT_AN_ARRAY, NOT_CALLABLE, TOO_MANY_ARGUMENTS, NOT_ENOUGH_ARGUMENTS,
    MISMATCHED_ARGUMENT_TYPE, NON_ARRAY_PASSED_AS_ARRAY, UNDECLARED_IDENTIFIER,
    STACK_OVERFLOW,
)
from .operators import COMPOUND_OPS, apply_infix, apply_prefix
from .parser import parse_program
from .types import (
    Value, ErrorVal, CharVal, IntVal, FloatVal, StringVal, BoolVal, ArrayVal,
    ReturnVal, FunctionVal, ARRAY_TYPES, SCALAR_TYPES,
    copy_value, element_type_of, is_homogeneous, render, type_name, zero_value,
)


# Compound assignment is defined for these targets only.
_COMPOUND_TARGETS = (IntVal, FloatVal, StringVal)

# Host frame budget while a program runs; one Ariel call takes about ten.
MAX_RECURSION_DEPTH = 16000


class Interpreter:
    """Core interpreter that executes an Ariel AST."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt',
                 seed: Optional[int] = None, out: Optional[IO[str]] = None):
        self.global_env = Environment()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None
        self.rng = random.Random(seed)
        self.builtins = standard_builtins(self.rng, out)

    def __enter__(self) -> 'Interpreter':
        return self

    def __exit__(self, *exc_info):
        self.close()

    def debug(self, msg: str):
        if self.debug_level > 0 and self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Optional[Value]:
        """Evaluate a program against `env` (the interpreter's global
        environment by default) and return its result value."""
        if env is None:
            env = self.global_env
        previous_limit = sys.getrecursionlimit()
        sys.setrecursionlimit(max(previous_limit, MAX_RECURSION_DEPTH))
        try:
            result = self.evaluate(program, env)
        except RecursionError:
            result = new_error(STACK_OVERFLOW, 'maximum call depth exceeded')
        finally:
            sys.setrecursionlimit(previous_limit)
        if is_error(result):
            self.debug(f"runtime error: {result.name}: {result.message}")
        elif self.debug_level >= 1:
            self.debug(f"program result: {type_name(result)} {render(result)}")
        return result

    def evaluate(self, node: Optional[Node], env: Environment) -> Any:
        # Statements
        if isinstance(node, Program):
            return self.eval_program(node, env)
        if isinstance(node, FuncDecl):
            return self.eval_func_decl(node, env)
        if isinstance(node, VarDecl):
            return self.eval_var_decl(node, env)
        if isinstance(node, Block):
            return self.eval_block(node, env)
        if isinstance(node, While):
            return self.eval_while(node, env)
        if isinstance(node, For):
            return self.eval_for(node, env)
        if isinstance(node, IfElse):
            return self.eval_if_else(node, env)
        if isinstance(node, Return):
            return self.eval_return(node, env)
        if isinstance(node, ExprStmt):
            return self.evaluate(node.expression, env)
        # Expressions
        if isinstance(node, PrefixExpr):
            right = self.evaluate(node.right, env)
            if is_error(right):
                return right
            return apply_prefix(node.op, right)
        if isinstance(node, InfixExpr):
            left = self.evaluate(node.left, env)
            if is_error(left):
                return left
            right = self.evaluate(node.right, env)
            if is_error(right):
                return right
            return apply_infix(node.op, left, right)
        if isinstance(node, Assign):
            return self.eval_assign(node, env)
        if isinstance(node, AssignExpr):
            return self.eval_assign_expr(node, env)
        if isinstance(node, IndexExpr):
            return self.eval_index(node, env)
        if isinstance(node, AssignIndexExpr):
            return self.eval_assign_index(node.name, node.index, '=', node.value, env)
        if isinstance(node, AssignExprIndexExpr):
            return self.eval_assign_index(node.name, node.index, node.op, node.value, env)
        if isinstance(node, Call):
            return self.eval_call(node, env)
        if isinstance(node, ArrayLit):
            elements = self.eval_expressions(node.elements, env)
            if is_error(elements):
                return elements
            return ArrayVal(element_type_of(elements), elements)
        if isinstance(node, Identifier):
            return self.eval_identifier(node.name, env)
        # Literals
        if isinstance(node, CharCon):
            return CharVal(node.value)
        if isinstance(node, IntCon):
            return IntVal(node.value)
        if isinstance(node, FloatCon):
            return FloatVal(node.value)
        if isinstance(node, StringCon):
            return StringVal(node.value)
        if isinstance(node, BoolCon):
            return BoolVal(node.value)
        return None

    ###########################################################################
    # Statements
    ###########################################################################

    def eval_program(self, program: Program, env: Environment) -> Optional[Value]:
        result = None
        for stmt in program.statements:
            result = self.evaluate(stmt, env)
            if isinstance(result, ReturnVal):
                return result.value
            if isinstance(result, ErrorVal):
                return result
        return result

    def eval_func_decl(self, node: FuncDecl, env: Environment) -> Optional[Value]:
        if node.name in env:
            return new_error(DUPLICATE_DECLARATION, f"{node.name} already declared")
        env.set(node.name, FunctionVal(node.return_type, node.name, node.params, node.body, env))
        if self.debug_level >= 2:
            self.debug(f"define function {node.return_type} {node.name}")
        return None

    def eval_var_decl(self, node: VarDecl, env: Environment) -> Optional[Value]:
        if node.name in env:
            return new_error(DUPLICATE_DECLARATION, f"{node.name} already declared")
        if node.initialized:
            value = self.evaluate(node.value, env)
            if is_error(value):
                return value
            value = self.check_initializer(node, value)
        else:
            value = self.default_value(node, env)
        if is_error(value):
            return value
        env.set(node.name, value)
        if self.debug_level >= 2:
            self.debug(f"declare {node.type_name} {node.name} = {render(value)}")
        return None

    def check_initializer(self, node: VarDecl, value: Optional[Value]) -> Value:
        """Type check the value of an initialized declaration.

        Scalars must carry exactly the declared tag. Arrays must be
        homogeneous with the declared element type and are stored as a
        fresh copy tagged with that element type.
        """
        if node.type_name in SCALAR_TYPES:
            if type_name(value) != node.type_name:
                return new_error(TYPE_MISMATCH, f"mismatched types: {node.type_name} "
                                                f"{node.name} = {type_name(value)}")
            return value
        if node.type_name in ARRAY_TYPES:
            return self.coerce_array(ARRAY_TYPES[node.type_name], node.name, value)
        return new_error(UNKNOWN_TYPE, f"invalid declaration type: {node.type_name} "
                                       f"{node.name} = {type_name(value)}")

    def coerce_array(self, elem_type: str, name: str, value: Optional[Value]) -> Value:
        if not isinstance(value, ArrayVal):
            return new_error(TYPE_MISMATCH, f"mismatched types: {elem_type}arr "
                                            f"{name} = {type_name(value)}")
        if not is_homogeneous(value.elements):
            return new_error(HETEROGENEOUS_ARRAY, f"heterogeneous array typings: {name}")
        if value.elements and type_name(value.elements[0]) != elem_type:
            return new_error(ILLEGAL_ELEMENT_TYPE, f"illegal type in {elem_type} array: "
                                                   f"{type_name(value.elements[0])}")
        return ArrayVal(elem_type, list(value.elements))

    def default_value(self, node: VarDecl, env: Environment) -> Value:
        if node.type_name in SCALAR_TYPES:
            return zero_value(node.type_name)
        if node.type_name in ARRAY_TYPES:
            elem_type = ARRAY_TYPES[node.type_name]
            size = self.evaluate(node.value, env)
            if is_error(size):
                return size
            if not isinstance(size, IntVal):
                return new_error(INVALID_ARRAY_SIZE, "array size must be integer")
            if size.value < 0:
                return new_error(INVALID_ARRAY_SIZE, f"array size must not be negative: {size.value}")
            return ArrayVal(elem_type, [zero_value(elem_type) for _ in range(size.value)])
        return new_error(UNKNOWN_TYPE, f"invalid declaration type: {node.type_name} {node.name}")

    def eval_block(self, node: Block, env: Environment) -> Optional[Value]:
        result = None
        scope = env.snapshot()
        for stmt in node.statements:
            result = self.evaluate(stmt, scope)
            if isinstance(result, (ReturnVal, ErrorVal)):
                return result
        env.merge_from(scope)
        if self.debug_level >= 3:
            dropped = [name for name in scope if name not in env]
            if dropped:
                self.debug(f"block exit drops {', '.join(dropped)}")
        return result

    def eval_condition(self, expr: Optional[Node], env: Environment, keyword: str) -> Value:
        cond = self.evaluate(expr, env)
        if is_error(cond):
            return cond
        if not isinstance(cond, BoolVal):
            return new_error(NON_BOOLEAN_CONDITION,
                             f"improper {keyword} condition type: {type_name(cond)}")
        if self.debug_level >= 3:
            self.debug(f"{keyword} condition -> {render(cond)}")
        return cond

    def eval_while(self, node: While, env: Environment) -> Optional[Value]:
        result = None
        cond = self.eval_condition(node.condition, env, 'while')
        if is_error(cond):
            return cond
        while cond.value:
            result = self.evaluate(node.body, env)
            if isinstance(result, ReturnVal):
                return result.value
            if isinstance(result, ErrorVal):
                return result
            cond = self.eval_condition(node.condition, env, 'while')
            if is_error(cond):
                return cond
        return result

    def eval_for(self, node: For, env: Environment) -> Optional[Value]:
        # init, condition, body and increment all share one scope
        result = None
        scope = env.snapshot()
        if node.init is not None:
            init = self.evaluate(node.init, scope)
            if is_error(init):
                return init
        cond = self.eval_condition(node.condition, scope, 'for')
        if is_error(cond):
            return cond
        while cond.value:
            result = self.evaluate(node.body, scope)
            if isinstance(result, ReturnVal):
                return result.value
            if isinstance(result, ErrorVal):
                return result
            increment = self.evaluate(node.increment, scope)
            if is_error(increment):
                return increment
            cond = self.eval_condition(node.condition, scope, 'for')
            if is_error(cond):
                return cond
        env.merge_from(scope)
        return result

    def eval_if_else(self, node: IfElse, env: Environment) -> Optional[Value]:
        cond = self.eval_condition(node.condition, env, 'if')
        if is_error(cond):
            return cond
        if cond.value:
            return self.evaluate(node.consequence, env)
        if node.alternative is not None:
            return self.evaluate(node.alternative, env)
        return None

    def eval_return(self, node: Return, env: Environment) -> Optional[Value]:
        if node.value is None:
            return None
        value = self.evaluate(node.value, env)
        if is_error(value):
            return value
        return ReturnVal(value)

    ###########################################################################
    # Identifiers and assignment
    ###########################################################################

    def eval_identifier(self, name: str, env: Environment) -> Value:
        value = env.get(name)
        if value is not None:
            return value
        builtin = self.builtins.get(name)
        if builtin is not None:
            return builtin
        return new_error(UNDECLARED_IDENTIFIER, f"identifier {name} undeclared")

    def lookup_declared(self, name: str, env: Environment) -> Value:
        value = env.get(name)
        if value is None:
            return new_error(UNDECLARED_IDENTIFIER, f"identifier {name} undeclared")
        return value

    def eval_assign(self, node: Assign, env: Environment) -> Optional[Value]:
        current = self.lookup_declared(node.name, env)
        if is_error(current):
            return current
        value = self.evaluate(node.value, env)
        if is_error(value):
            return value
        if type_name(current) != type_name(value):
            return new_error(TYPE_MISMATCH, f"assignment type mismatch: "
                                            f"{type_name(current)} and {type_name(value)}")
        if isinstance(current, ArrayVal):
            value = self.coerce_array(current.elem_type, node.name, value)
            if is_error(value):
                return value
        env.set(node.name, value)
        return None

    def eval_assign_expr(self, node: AssignExpr, env: Environment) -> Optional[Value]:
        current = self.lookup_declared(node.name, env)
        if is_error(current):
            return current
        value = self.evaluate(node.value, env)
        if is_error(value):
            return value
        updated = self.compound(node.op, current, value)
        if is_error(updated):
            return updated
        env.set(node.name, updated)
        return None

    def compound(self, op: str, current: Value, value: Optional[Value]) -> Value:
        """Compute `current op= value` through the matching infix operator."""
        if type_name(current) != type_name(value):
            return new_error(TYPE_MISMATCH, f"mismatched types: "
                                            f"{type_name(current)} {op} {type_name(value)}")
        base_op = COMPOUND_OPS.get(op)
        if base_op is None:
            return new_error(ILLEGAL_OPERATOR, f"illegal operator: "
                                               f"{type_name(current)} {op} {type_name(value)}")
        if not isinstance(current, _COMPOUND_TARGETS):
            return new_error(ILLEGAL_ASSIGNMENT, f"illegal assignment: "
                                                 f"{type_name(current)} {op} {type_name(value)}")
        return apply_infix(base_op, current, value)

    ###########################################################################
    # Arrays
    ###########################################################################

    def locate_element(self, name: str, index_node: Node,
                       env: Environment) -> Union[ErrorVal, Tuple[ArrayVal, int]]:
        """Resolve `name[index]` to the array and a checked position."""
        array = self.lookup_declared(name, env)
        if is_error(array):
            return array
        index = self.evaluate(index_node, env)
        if is_error(index):
            return index
        if not isinstance(index, IntVal):
            return new_error(ILLEGAL_INDEX, f"illegal array index: {type_name(index)}")
        if not isinstance(array, ArrayVal):
            return new_error(NOT_AN_ARRAY, f"{name} is not an array")
        idx = index.value
        if idx < 0 or idx >= len(array.elements):
            return new_error(INDEX_OUT_OF_BOUNDS, f"array index out of bounds: {name}[{idx}]")
        return array, idx

    def eval_index(self, node: IndexExpr, env: Environment) -> Value:
        located = self.locate_element(node.name, node.index, env)
        if is_error(located):
            return located
        array, idx = located
        return array.elements[idx]

    def eval_assign_index(self, name: str, index_node: Node, op: str,
                          value_node: Node, env: Environment) -> Optional[Value]:
        located = self.locate_element(name, index_node, env)
        if is_error(located):
            return located
        array, idx = located
        value = self.evaluate(value_node, env)
        if is_error(value):
            return value
        current = array.elements[idx]
        if op == '=':
            if type_name(current) != type_name(value):
                return new_error(TYPE_MISMATCH, f"assignment type mismatch: "
                                                f"{type_name(current)} and {type_name(value)}")
            updated = value
        else:
            updated = self.compound(op, current, value)
            if is_error(updated):
                return updated
        array.elements[idx] = updated
        env.set(name, array)
        return None

    ###########################################################################
    # Calls
    ###########################################################################

    def eval_expressions(self, nodes: List[Node], env: Environment) -> Union[ErrorVal, List[Any]]:
        """Evaluate left to right, stopping at the first error."""
        values = []
        for node in nodes:
            value = self.evaluate(node, env)
            if is_error(value):
                return value
            values.append(value)
        return values

    def eval_call(self, node: Call, env: Environment) -> Optional[Value]:
        function = env.get(node.name)
        if function is None:
            function = self.builtins.get(node.name)
        if not isinstance(function, (FunctionVal, BuiltinFunction)):
            return new_error(NOT_CALLABLE, f"{node.name} is not a declared or built-in function")
        args = self.eval_expressions(node.arguments, env)
        if is_error(args):
            return args
        if isinstance(function, BuiltinFunction):
            return function.fn(args)
        return self.call_function(function, args, env)

    def check_arguments(self, function: FunctionVal, args: List[Any]) -> Optional[ErrorVal]:
        params = function.params
        if len(args) > len(params):
            return new_error(TOO_MANY_ARGUMENTS, f"too many arguments supplied to {function.name}()")
        if len(args) < len(params):
            return new_error(NOT_ENOUGH_ARGUMENTS, f"not enough arguments supplied to {function.name}()")
        for position, (param, arg) in enumerate(zip(params, args), start=1):
            if param.array or isinstance(arg, ArrayVal):
                if not param.array:
                    return new_error(NON_ARRAY_PASSED_AS_ARRAY,
                                     f"passed array as non-array parameter {position}")
                if not isinstance(arg, ArrayVal):
                    return new_error(NON_ARRAY_PASSED_AS_ARRAY, "passed non-array as array parameter")
                if arg.elem_type != param.type_name:
                    return new_error(MISMATCHED_ARGUMENT_TYPE,
                                     f"mismatched types for argument {position}")
            elif type_name(arg) != param.type_name:
                return new_error(MISMATCHED_ARGUMENT_TYPE, f"mismatched types for argument {position}")
        return None

    def call_function(self, function: FunctionVal, args: List[Any], env: Environment) -> Optional[Value]:
        failure = self.check_arguments(function, args)
        if failure is not None:
            return failure
        call_env = Environment()
        call_env.import_functions(env)
        for param, arg in zip(function.params, args):
            call_env.set(param.name, copy_value(arg))
        if self.debug_level >= 2:
            self.debug(f"call {function.name}({', '.join(render(a) for a in args)})")
        result = self.evaluate(function.body, call_env)
        if isinstance(result, ErrorVal):
            return result
        if isinstance(result, ReturnVal):
            return result.value
        return None


def evaluate(node: Node, env: Environment) -> Any:
    """Evaluate `node` against `env` with a default interpreter."""
    return Interpreter().evaluate(node, env)


def run_program(source: str, debug_level: int = 0) -> Optional[Value]:
    """Convenience function to parse and run an Ariel program from source."""
    with Interpreter(debug_level=debug_level) as interpreter:
        return interpreter.run(parse_program(source))
