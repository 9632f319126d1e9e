"""
Statement lowering: renders parsed function bodies as Python fragments.

Operators become calls of their mangled names, so a module that defines an
operator overrides the prelude's version of it. That holds inside the
override too: `define +(a, b) { return a + b; }` lowers to a `_plus` that
calls itself, so an override has to be written in terms of other operators
or functions.
"""

import logging
from typing import List

import origami.origami_ast as ast
from origami.errors import CompileError
from origami.mangler import mangle

logger = logging.getLogger(__name__)

def lower_function(definition: ast.FunctionDefinition) -> ast.FunctionDeclaration:
    body = [lower_statement(stmt) for stmt in definition.body]
    logger.debug(f"Lowered {definition.name} to {len(body)} statements")
    return ast.FunctionDeclaration(
        definition.name,
        list(definition.params),
        body,
        location=definition.location,
    )

def lower_statement(stmt: ast.Statement) -> str:
    if isinstance(stmt, ast.LetStatement):
        return f"{stmt.name} = {lower_expression(stmt.value)}"
    if isinstance(stmt, ast.ReturnStatement):
        return f"return {lower_expression(stmt.value)}"
    if isinstance(stmt, ast.ExpressionStatement):
        return lower_expression(stmt.expression)
    raise CompileError(
        message=f"Cannot lower statement {type(stmt).__name__}",
        error_type="LoweringError",
        location=stmt.location,
        node=stmt,
    )

def lower_expression(expr: ast.Expression) -> str:
    if isinstance(expr, ast.Literal):
        return repr(expr.value)
    if isinstance(expr, ast.Variable):
        return expr.name
    if isinstance(expr, ast.FieldAccess):
        return f"{lower_expression(expr.target)}.{expr.field_name}"
    if isinstance(expr, ast.FunctionCall):
        return f"{lower_expression(expr.function)}({_arguments(expr.arguments)})"
    if isinstance(expr, ast.BinaryOperation):
        return f"{mangle(expr.operator)}({_arguments([expr.left, expr.right])})"
    if isinstance(expr, ast.UnaryOperation):
        return f"{mangle(expr.operator)}({lower_expression(expr.operand)})"
    if isinstance(expr, ast.Conditional):
        condition = lower_expression(expr.condition)
        then_branch = lower_expression(expr.then_branch)
        else_branch = lower_expression(expr.else_branch)
        return f"({then_branch} if {condition} else {else_branch})"
    raise CompileError(
        message=f"Cannot lower expression {type(expr).__name__}",
        error_type="LoweringError",
        location=expr.location,
        node=expr,
    )

def _arguments(args: List[ast.Expression]) -> str:
    return ", ".join(lower_expression(arg) for arg in args)
