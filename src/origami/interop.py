"""
Module interoperability transforms.

Module-mode code generation leaves Origami's own import/export constructs in
the Python syntax tree as `OrigamiImport` and `OrigamiExport` nodes. A
transform rewrites them into the host's convention; the only host here is
Python's import system, handled by the "python-import" transform.
"""

import ast
import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple, Type

from origami.errors import TransformError

logger = logging.getLogger(__name__)

DEFAULT_PLUGINS = ("python-import",)

_SEGMENT = re.compile(r'[A-Za-z][A-Za-z0-9_]*\Z')

class OrigamiImport(ast.stmt):
    """import <names> from "<source>" """
    _fields = ('names', 'source')

class OrigamiExport(ast.stmt):
    """The names a module makes available to importers"""
    _fields = ('names',)

@dataclass
class TransformResult:
    code: str
    tree: ast.Module

def module_reference(source: str) -> Tuple[str, int]:
    """Map an Origami import path to a Python module name and relative level

    "shapes" -> ("shapes", 0), "geometry/shapes" -> ("geometry.shapes", 0),
    "./shapes" -> ("shapes", 1), "../shapes" -> ("shapes", 2).
    """
    path = source
    level = 0
    if path.startswith("./"):
        level = 1
        path = path[2:]
    while path.startswith("../"):
        level = max(level, 1) + 1
        path = path[3:]
    segments = path.split("/")
    for segment in segments:
        if not _SEGMENT.match(segment):
            raise TransformError(
                message=f'Cannot import from "{source}": "{segment}" is not a module name',
                notes=["Paths look like \"name\", \"dir/name\", \"./name\" or \"../name\""],
            )
    return ".".join(segments), level

class PythonImportTransformer(ast.NodeTransformer):
    """Rewrite Origami imports and exports as Python imports and __all__"""

    def visit_OrigamiImport(self, node: OrigamiImport) -> ast.ImportFrom:
        module, level = module_reference(node.source)
        logger.debug(f"import {node.names} from {node.source!r} -> level {level} {module}")
        replacement = ast.ImportFrom(
            module=module,
            names=[ast.alias(name=name) for name in node.names],
            level=level,
        )
        return ast.copy_location(replacement, node)

    def visit_OrigamiExport(self, node: OrigamiExport) -> ast.Assign:
        replacement = ast.Assign(
            targets=[ast.Name(id='__all__', ctx=ast.Store())],
            value=ast.List(elts=[ast.Constant(value=name) for name in node.names], ctx=ast.Load()),
        )
        return ast.copy_location(replacement, node)

TRANSFORMS: Dict[str, Type[ast.NodeTransformer]] = {
    "python-import": PythonImportTransformer,
}

def transform(tree: ast.Module, plugins: Sequence[str] = DEFAULT_PLUGINS) -> TransformResult:
    """Apply the named transforms in order and render the result"""
    for name in plugins:
        if name not in TRANSFORMS:
            raise TransformError(
                message=f"Unknown module transform '{name}'",
                notes=[f"Available transforms: {', '.join(sorted(TRANSFORMS))}"],
            )
        tree = TRANSFORMS[name]().visit(tree)

    leftover = _origami_nodes(tree)
    if leftover:
        raise TransformError(
            message=f"{len(leftover)} import/export constructs were not rewritten",
            notes=[f"Transforms applied: {', '.join(plugins) or 'none'}"],
        )

    ast.fix_missing_locations(tree)
    return TransformResult(code=ast.unparse(tree), tree=tree)

def _origami_nodes(tree: ast.AST) -> List[ast.AST]:
    return [node for node in ast.walk(tree) if isinstance(node, (OrigamiImport, OrigamiExport))]
