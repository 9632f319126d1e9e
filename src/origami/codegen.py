"""
Code Generator for Origami.
Translates sum types and functions into Python source text, either as one
script or as a module-shaped Python syntax tree for the interop transform.
"""

import ast as pyast
import logging
import textwrap
from typing import Iterable, List

import origami.origami_ast as ast
from origami.errors import DefinitionError, ScriptModeError
from origami.interop import OrigamiExport, OrigamiImport
from origami.lowering import lower_function
from origami.mangler import mangle
from origami.validation import DefinitionValidator

logger = logging.getLogger(__name__)

INDENT = "    "

class CodeGenerator:
    def __init__(self, reserved: Iterable[str] = ()):
        self.validator = DefinitionValidator(reserved)

    def log(self, msg):
        logger.debug(msg)

    # Single declarations

    def generate_union(self, decl: ast.SumTypeDeclaration) -> str:
        """Base class with one factory per case, then one frozen dataclass per case"""
        self.validator.check(decl)
        return self.gen_SumTypeDeclaration(decl)

    def generate_function(self, decl: ast.FunctionDeclaration) -> str:
        self.validator.check(decl)
        return self.gen_FunctionDeclaration(decl)

    def gen_SumTypeDeclaration(self, decl: ast.SumTypeDeclaration) -> str:
        self.log(f"Generating sum type {decl.id} with tags {decl.tags}")
        tag_domain = ", ".join(repr(tag) for tag in decl.tags)
        base = [
            f"class {decl.id}:",
            f"{INDENT}_type = {decl.id!r}",
            f"{INDENT}_tags = {tuple(decl.tags)!r}",
            f"{INDENT}_tag: Literal[{tag_domain}]",
        ]
        for case in decl.cases:
            args = ", ".join(case.fields)
            base += [
                "",
                f"{INDENT}@staticmethod",
                f"{INDENT}def {case.tag}({args}):",
                f"{INDENT}{INDENT}return {case.tag}({args})",
            ]

        variants = []
        for case in decl.cases:
            lines = [
                "@dataclass(frozen=True)",
                f"class {case.tag}:",
                f"{INDENT}_type: ClassVar[str] = {decl.id!r}",
                f"{INDENT}_tag: ClassVar[Literal[{case.tag!r}]] = {case.tag!r}",
            ]
            lines += [f"{INDENT}{name}: Any" for name in case.fields]
            variants.append("\n".join(lines))

        return "\n\n\n".join(["\n".join(base)] + variants) + "\n"

    def gen_FunctionDeclaration(self, decl: ast.FunctionDeclaration) -> str:
        name = mangle(decl.name)
        self.log(f"Generating function {decl.name} as {name}")
        lines = [f"def {name}({', '.join(decl.params)}):"]
        for stmt in decl.body:
            lines.append(textwrap.indent(stmt, INDENT))
        if not decl.body:
            lines.append(f"{INDENT}pass")
        return "\n".join(lines) + "\n"

    def gen_FunctionDefinition(self, decl: ast.FunctionDefinition) -> str:
        return self.gen_FunctionDeclaration(lower_function(decl))

    # Whole programs

    def generate(self, program: ast.Program) -> str:
        """Script mode: the program as top-level Python statements"""
        self.validator.check(program)
        chunks = []
        for decl in program.declarations:
            if isinstance(decl, ast.ImportDeclaration):
                raise ScriptModeError(
                    message=f'Cannot import from "{decl.source}" in a script',
                    location=decl.location,
                    node=decl,
                    notes=["Compile with module mode to use imports"],
                )
            code = self._generate_declaration(decl)
            self._parse_fragment(code, decl)
            chunks.append(code)
        self.log(f"Generated {len(chunks)} declarations for {program.source_file}")
        return "\n\n".join(chunks)

    def generate_module(self, program: ast.Program) -> pyast.Module:
        """Module mode: a Python syntax tree still holding Origami imports and exports"""
        self.validator.check(program)
        body: List[pyast.stmt] = []
        exports: List[str] = []
        for decl in program.declarations:
            if isinstance(decl, ast.ImportDeclaration):
                body.append(OrigamiImport(names=[mangle(name) for name in decl.names], source=decl.source))
                continue
            body.extend(self._parse_fragment(self._generate_declaration(decl), decl))
            if isinstance(decl, ast.SumTypeDeclaration):
                exports.append(decl.id)
            else:
                exports.append(mangle(decl.name))
        body.append(OrigamiExport(names=exports))
        self.log(f"Generated module for {program.source_file} exporting {exports}")
        return pyast.Module(body=body, type_ignores=[])

    def _generate_declaration(self, decl) -> str:
        method = getattr(self, f"gen_{type(decl).__name__}")
        return method(decl)

    def _parse_fragment(self, code: str, decl) -> List[pyast.stmt]:
        try:
            return pyast.parse(code).body
        except SyntaxError as e:
            name = getattr(decl, 'name', None) or getattr(decl, 'id', None)
            raise DefinitionError(
                message=f"{name} does not generate valid Python: {e.msg}",
                location=decl.location,
                node=decl,
                declaration=name,
                context=code,
            ) from e
