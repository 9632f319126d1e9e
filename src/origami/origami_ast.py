"""
Syntax tree for Origami programs.

Declarations are what the code generators consume. `FunctionDefinition` is the
parser's view of a function, with structured statements; lowering turns it
into a `FunctionDeclaration` whose body is already rendered target code.
"""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from origami.errors import SourceLocation


@dataclass
class Node:
    location: Optional[SourceLocation] = field(default=None, kw_only=True, compare=False, repr=False)


# Expressions

@dataclass
class Expression(Node):
    pass

@dataclass
class Literal(Expression):
    value: Union[int, float, str, bool, None]

@dataclass
class Variable(Expression):
    name: str

@dataclass
class FieldAccess(Expression):
    target: Expression
    field_name: str

@dataclass
class FunctionCall(Expression):
    function: Expression
    arguments: List[Expression]

@dataclass
class BinaryOperation(Expression):
    operator: str  # an operator token, e.g. '+' or 'and'
    left: Expression
    right: Expression

@dataclass
class UnaryOperation(Expression):
    operator: str
    operand: Expression

@dataclass
class Conditional(Expression):
    condition: Expression
    then_branch: Expression
    else_branch: Expression


# Statements

@dataclass
class Statement(Node):
    pass

@dataclass
class LetStatement(Statement):
    name: str
    value: Expression

@dataclass
class ReturnStatement(Statement):
    value: Expression

@dataclass
class ExpressionStatement(Statement):
    expression: Expression


# Declarations

@dataclass
class Declaration(Node):
    pass

@dataclass
class CaseDeclaration(Node):
    """One alternative of a sum type: a tag and its ordered field names"""
    tag: str
    fields: List[str] = field(default_factory=list)

@dataclass
class SumTypeDeclaration(Declaration):
    id: str
    cases: List[CaseDeclaration]

    @property
    def tags(self) -> List[str]:
        return [case.tag for case in self.cases]

@dataclass
class FunctionDeclaration(Declaration):
    """A function whose body statements are rendered target code"""
    name: str
    params: List[str]
    body: List[str]

@dataclass
class FunctionDefinition(Declaration):
    """A function as written, with statement nodes still to be lowered"""
    name: str
    params: List[str]
    body: List[Statement]

@dataclass
class ImportDeclaration(Declaration):
    names: List[str]
    source: str

@dataclass
class Program(Node):
    declarations: List[Declaration]
    source_file: str = "<string>"


def to_json_obj(node: Any) -> Any:
    """Plain data view of a tree, for dumping"""
    if isinstance(node, Node):
        obj = {"kind": type(node).__name__}
        for f in dataclasses.fields(node):
            if f.name == "location":
                continue
            obj[f.name] = to_json_obj(getattr(node, f.name))
        return obj
    if isinstance(node, list):
        return [to_json_obj(item) for item in node]
    return node

def dump_ast_json(program: Program) -> str:
    """Pretty JSON for --dump-ast and golden tests."""
    return json.dumps(to_json_obj(program), indent=2)
