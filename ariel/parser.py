"""Parser for the Ariel language.

Ariel source is parsed by a Lark LALR parser configured with the grammar
below, and the parse tree is turned into the AST of ``ariel.ast`` by
``ASTTransformer``. The interpreter only ever sees the AST, so this
module is one front end among possible others (see ``ast_json``).

The `parse_program` function is the public entry point and returns a
`Program` AST node representing the entire source text.
"""

from __future__ import annotations

import ast as py_ast

from lark import Lark, Transformer, Token, v_args
from lark.exceptions import UnexpectedInput, VisitError

from .ast import (
    Program, Param, FuncDecl, VarDecl, Block, While, For, IfElse, Return,
    ExprStmt, PrefixExpr, InfixExpr, Assign, AssignExpr, Call, Identifier,
    CharCon, IntCon, FloatCon, StringCon, BoolCon, ArrayLit, IndexExpr,
    AssignIndexExpr, AssignExprIndexExpr, Node,
)
from .errors import ArielSyntaxError
from .operators import INT64_MAX
from .types import ARRAY_TYPES


ARIEL_GRAMMAR = r"""
    start: statement*

    // Statements
    ?statement: func_decl
              | var_decl
              | block
              | if_stmt
              | while_stmt
              | for_stmt
              | return_stmt
              | expr_stmt

    func_decl: type_name IDENT "(" [params] ")" block
    params: param ("," param)*
    param: type_name IDENT

    ?var_decl: type_name IDENT ASSIGN_OP rvalue ";"   -> var_init
             | type_name IDENT "[" expr "]" ";"       -> var_sized
             | type_name IDENT ";"                    -> var_zero

    block: "{" statement* "}"

    if_stmt: "if" "(" expr ")" block [else_branch]
    ?else_branch: "else" block
                | "else" if_stmt
    while_stmt: "while" "(" expr ")" block
    for_stmt: "for" "(" [for_init] ";" expr ";" [expr] ")" block
    ?for_init: type_name IDENT ASSIGN_OP rvalue     -> for_decl
             | expr

    return_stmt: "return" [rvalue] ";"
    expr_stmt: expr ";"

    !type_name: "char" | "int" | "float" | "string" | "bool"
              | "chararr" | "intarr" | "floatarr" | "stringarr" | "boolarr"
              | "void"

    // Values that can be stored or passed, including array literals
    ?rvalue: expr
           | array_lit
    array_lit: "{" [args] "}"
    args: rvalue ("," rvalue)*

    // Expressions with precedence
    ?expr: assign
         | logic_or
    assign: IDENT ASSIGN_OP rvalue
          | IDENT "[" expr "]" ASSIGN_OP rvalue         -> assign_index

    ?logic_or: logic_and (OR_OP logic_and)*
    ?logic_and: bit_or (AND_OP bit_or)*
    ?bit_or: bit_xor (BOR_OP bit_xor)*
    ?bit_xor: bit_and (BXOR_OP bit_and)*
    ?bit_and: equality (BAND_OP equality)*
    ?equality: relation (EQ_OP relation)*
    ?relation: shift (REL_OP shift)*
    ?shift: sum (SHIFT_OP sum)*
    ?sum: product (ADD_OP product)*
    ?product: unary (MUL_OP unary)*
    ?unary: PREFIX_OP unary                             -> prefix
          | primary

    ?primary: INT_LIT                                   -> int_lit
            | FLOAT_LIT                                 -> float_lit
            | STRING_LIT                                -> string_lit
            | CHAR_LIT                                  -> char_lit
            | "true"                                    -> true_lit
            | "false"                                   -> false_lit
            | IDENT                                     -> ident
            | IDENT "[" expr "]"                        -> index
            | IDENT "(" [args] ")"                      -> call
            | "(" expr ")"

    // Tokens
    ASSIGN_OP: /(<<|>>|[-+*\/%&^|])?=(?!=)/
    OR_OP: "||"
    AND_OP: "&&"
    BOR_OP: /\|(?![|=])/
    BXOR_OP: /\^(?!=)/
    BAND_OP: /&(?![&=])/
    EQ_OP: /==|!=/
    REL_OP: /<=|>=|<(?![<=])|>(?![>=])/
    SHIFT_OP: /<<(?!=)|>>(?!=)/
    ADD_OP: /[-+](?!=)/
    MUL_OP: /[*\/%](?!=)/
    PREFIX_OP: /!(?!=)|~|[-+](?!=)/

    FLOAT_LIT.2: /\d+\.\d+/
    INT_LIT: /\d+/
    STRING_LIT: /"(\\.|[^"\\\n])*"/
    CHAR_LIT: /'(\\.|[^'\\\n])?'/

    %import common.CNAME -> IDENT
    %import common.WS
    %ignore WS

    // Comments
    LINE_COMMENT: /\/\/[^\n]*/
    %ignore LINE_COMMENT
    BLOCK_COMMENT: /\/\*[\s\S]*?\*\//
    %ignore BLOCK_COMMENT
"""


ARIEL_PARSER = Lark(
    ARIEL_GRAMMAR,
    parser='lalr',
    lexer='contextual',
    propagate_positions=True,
    maybe_placeholders=True,
)


def _param(type_name: str, name: str) -> Param:
    if type_name in ARRAY_TYPES:
        return Param(ARRAY_TYPES[type_name], name, array=True)
    return Param(type_name, name)


def _fold(items) -> Node:
    # items pattern: operand (OP operand)*, folded left-associatively
    left = items[0]
    for i in range(1, len(items), 2):
        left = InfixExpr(left=left, op=str(items[i]), right=items[i + 1])
    return left


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    def start(self, items):
        return Program(statements=list(items))

    # Declarations
    def type_name(self, items):
        return str(items[0])

    def func_decl(self, items):
        return_type, name, params, body = items
        return FuncDecl(return_type=return_type, name=str(name), params=params or [], body=body)

    def params(self, items):
        return list(items)

    def param(self, items):
        return _param(items[0], str(items[1]))

    def var_init(self, items):
        type_name, name, op, value = items
        if op != "=":
            raise ArielSyntaxError(f"unexpected {op} in declaration of {name}", op.line, op.column)
        return VarDecl(type_name=type_name, name=str(name), value=value, initialized=True)

    def var_sized(self, items):
        return VarDecl(type_name=items[0], name=str(items[1]), value=items[2], initialized=False)

    def var_zero(self, items):
        return VarDecl(type_name=items[0], name=str(items[1]), value=None, initialized=False)

    # Statements
    def block(self, items):
        return Block(statements=list(items))

    def if_stmt(self, items):
        condition, consequence, alternative = items
        return IfElse(condition=condition, consequence=consequence, alternative=alternative)

    def while_stmt(self, items):
        return While(condition=items[0], body=items[1])

    def for_stmt(self, items):
        init, condition, increment, body = items
        return For(init=init, condition=condition, increment=increment, body=body)

    def for_decl(self, items):
        return self.var_init(items)

    def return_stmt(self, items):
        return Return(value=items[0])

    def expr_stmt(self, items):
        return ExprStmt(expression=items[0])

    # Expressions
    def assign(self, items):
        name, op, value = str(items[0]), str(items[1]), items[2]
        if op == '=':
            return Assign(name=name, value=value)
        return AssignExpr(name=name, op=op, value=value)

    def assign_index(self, items):
        name, index, op, value = str(items[0]), items[1], str(items[2]), items[3]
        if op == '=':
            return AssignIndexExpr(name=name, index=index, value=value)
        return AssignExprIndexExpr(name=name, index=index, op=op, value=value)

    logic_or = logic_and = bit_or = bit_xor = bit_and = staticmethod(_fold)
    equality = relation = shift = sum = product = staticmethod(_fold)

    def prefix(self, items):
        return PrefixExpr(op=str(items[0]), right=items[1])

    def array_lit(self, items):
        return ArrayLit(elements=items[0] or [])

    def args(self, items):
        return list(items)

    def ident(self, items):
        return Identifier(name=str(items[0]))

    def index(self, items):
        return IndexExpr(name=str(items[0]), index=items[1])

    def call(self, items):
        return Call(name=str(items[0]), arguments=items[1] or [])

    # Literals
    @v_args(inline=True)
    def int_lit(self, token: Token):
        value = int(token)
        if value > INT64_MAX:
            raise ArielSyntaxError(f"integer literal out of range: {token}", token.line, token.column)
        return IntCon(value)

    @v_args(inline=True)
    def float_lit(self, token: Token):
        return FloatCon(float(token))

    @v_args(inline=True)
    def string_lit(self, token: Token):
        # Use Python ast.literal_eval to unescape
        return StringCon(py_ast.literal_eval(str(token)))

    @v_args(inline=True)
    def char_lit(self, token: Token):
        return CharCon(py_ast.literal_eval(str(token)))

    def true_lit(self, items):
        return BoolCon(True)

    def false_lit(self, items):
        return BoolCon(False)


def parse_program(source: str) -> Program:
    """Parse Ariel source code into an AST Program.

    Syntax errors are raised as `ArielSyntaxError`.
    """
    try:
        tree = ARIEL_PARSER.parse(source)
    except UnexpectedInput as e:
        found = getattr(e, "token", None) or getattr(e, "char", None)
        message = f"syntax error: unexpected {found!r}" if found else "syntax error: unexpected end of input"
        raise ArielSyntaxError(message, e.line, e.column) from e
    try:
        return ASTTransformer().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, ArielSyntaxError):
            raise e.orig_exc from None
        raise
