"""
Definition checks run before any text is emitted.

The generators copy names verbatim into Python source, so anything that is
not a usable Python name, or that would be bound twice, has to be rejected
here with the name of the declaration that caused it.
"""

import keyword
import logging
from typing import Dict, Iterable, List, Optional, Set

import origami.origami_ast as ast
from origami.errors import DefinitionError
from origami.lexer import Lexer
from origami.mangler import is_operator, mangle

logger = logging.getLogger(__name__)

ORIGAMI_KEYWORDS = frozenset(Lexer.reserved)

# Builtins the generated classes refer to by name
GENERATED_CODE_BUILTINS = frozenset({"staticmethod"})

class DefinitionValidator:
    def __init__(self, reserved: Iterable[str] = ()):
        # Names the runtime prelude binds; top-level declarations may not rebind them
        self.reserved = frozenset(reserved)

    def check(self, node) -> None:
        """Check any declaration, or a whole Program"""
        method = getattr(self, f"check_{type(node).__name__}", None)
        if method is None:
            raise DefinitionError(
                message=f"Cannot generate code for {type(node).__name__}",
                location=getattr(node, 'location', None),
                node=node,
            )
        method(node)

    def check_Program(self, program: ast.Program) -> None:
        bound: Dict[str, str] = {}
        for decl in program.declarations:
            self.check(decl)
            for name, owner in self._top_level_bindings(decl):
                if name in bound:
                    raise DefinitionError(
                        message=f"'{name}' is already defined by {bound[name]}",
                        location=decl.location,
                        node=decl,
                        declaration=owner,
                        notes=["Sum types, their tags, functions and imports share one namespace"],
                    )
                bound[name] = owner
        logger.debug(f"Validated {len(program.declarations)} declarations in {program.source_file}")

    def _top_level_bindings(self, decl):
        if isinstance(decl, ast.SumTypeDeclaration):
            yield decl.id, decl.id
            for tag in decl.tags:
                yield tag, decl.id
        elif isinstance(decl, (ast.FunctionDeclaration, ast.FunctionDefinition)):
            yield mangle(decl.name), decl.name
        elif isinstance(decl, ast.ImportDeclaration):
            for name in decl.names:
                yield mangle(name), f'import from "{decl.source}"'

    def check_SumTypeDeclaration(self, decl: ast.SumTypeDeclaration) -> None:
        self._check_name(decl.id, "sum type name", decl.id, decl, top_level=True)
        if not decl.cases:
            self._fail("declares no cases", decl.id, decl)
        seen: Set[str] = set()
        for case in decl.cases:
            self._check_name(case.tag, "tag", decl.id, decl, top_level=True)
            if case.tag == decl.id:
                self._fail(f"uses its own name as the tag '{case.tag}'", decl.id, decl)
            if case.tag in seen:
                self._fail(f"declares the tag '{case.tag}' twice", decl.id, decl)
            seen.add(case.tag)
            if case.tag in case.fields:
                self._fail(f"uses the tag '{case.tag}' as one of its own fields", decl.id, decl)
            self._check_unique(case.fields, f"{case.tag} field", decl.id, decl)

    def check_FunctionDeclaration(self, decl: ast.FunctionDeclaration) -> None:
        if not is_operator(decl.name):
            self._check_name(decl.name, "function name", decl.name, decl, top_level=True)
        self._check_unique(decl.params, "parameter", decl.name, decl)

    def check_FunctionDefinition(self, decl: ast.FunctionDefinition) -> None:
        self.check_FunctionDeclaration(decl)
        for stmt in decl.body:
            if isinstance(stmt, ast.LetStatement):
                self._check_name(stmt.name, "local name", decl.name, decl)
                self._check_expression(stmt.value, decl)
            elif isinstance(stmt, ast.ReturnStatement):
                self._check_expression(stmt.value, decl)
            elif isinstance(stmt, ast.ExpressionStatement):
                self._check_expression(stmt.expression, decl)

    def check_ImportDeclaration(self, decl: ast.ImportDeclaration) -> None:
        for name in decl.names:
            if not is_operator(name):
                self._check_name(name, "imported name", decl.source, decl, top_level=True)

    def _check_expression(self, expr, decl) -> None:
        if isinstance(expr, ast.Variable):
            if keyword.iskeyword(expr.name):
                self._fail(f"refers to '{expr.name}', which is a Python keyword", decl.name, decl)
        elif isinstance(expr, ast.FieldAccess):
            self._check_name(expr.field_name, "field name", decl.name, decl)
            self._check_expression(expr.target, decl)
        elif isinstance(expr, ast.FunctionCall):
            self._check_expression(expr.function, decl)
            for arg in expr.arguments:
                self._check_expression(arg, decl)
        elif isinstance(expr, ast.BinaryOperation):
            self._check_expression(expr.left, decl)
            self._check_expression(expr.right, decl)
        elif isinstance(expr, ast.UnaryOperation):
            self._check_expression(expr.operand, decl)
        elif isinstance(expr, ast.Conditional):
            self._check_expression(expr.condition, decl)
            self._check_expression(expr.then_branch, decl)
            self._check_expression(expr.else_branch, decl)

    def _check_unique(self, names: List[str], what: str, owner: str, decl) -> None:
        seen: Set[str] = set()
        for name in names:
            self._check_name(name, what, owner, decl)
            if name in seen:
                self._fail(f"declares the {what} '{name}' twice", owner, decl)
            seen.add(name)

    def _check_name(self, name: str, what: str, owner: str, decl, top_level: bool = False) -> None:
        problem: Optional[str] = None
        if not isinstance(name, str) or not name.isidentifier():
            problem = "is not a valid identifier"
        elif keyword.iskeyword(name):
            problem = "is a Python keyword"
        elif name in ORIGAMI_KEYWORDS:
            problem = "is an Origami keyword"
        elif name.startswith("_"):
            problem = "starts with '_', which is reserved for generated names"
        elif top_level and name in GENERATED_CODE_BUILTINS:
            problem = "is a builtin the generated code relies on"
        elif top_level and name in self.reserved:
            problem = "is bound by the runtime prelude"
        if problem:
            self._fail(f"uses the {what} '{name}', which {problem}", owner, decl)

    def _fail(self, message: str, owner: str, decl) -> None:
        raise DefinitionError(
            message=f"{owner} {message}",
            location=getattr(decl, 'location', None),
            node=decl,
            declaration=owner,
        )
