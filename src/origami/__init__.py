"""Origami: compiles sum types and functions to Python.

Modules:
- lexer, parser: PLY front end producing origami_ast.Program
- lowering: function bodies to Python statement fragments
- validation: definition checks (DefinitionError)
- mangler: operator names to identifiers
- codegen: sum type and function generators, script and module output
- interop: rewrites Origami imports/exports for the host
- prelude: the runtime prelude resource
- origami: CompileOptions, OrigamiCompiler and the command line
- loader: importing .origami files
"""

from origami.errors import (CompileError, ParseError, DefinitionError,
                            TransformError, ScriptModeError, SourceLocation)
from origami.mangler import mangle, OPERATOR_NAMES
from origami.origami import (CompileOptions, OrigamiCompiler, parse, compile,
                             compile_to_host_module)
from origami.loader import register_loader, unregister_loader

__all__ = [
    "CompileError",
    "ParseError",
    "DefinitionError",
    "TransformError",
    "ScriptModeError",
    "SourceLocation",
    "mangle",
    "OPERATOR_NAMES",
    "CompileOptions",
    "OrigamiCompiler",
    "parse",
    "compile",
    "compile_to_host_module",
    "register_loader",
    "unregister_loader",
]
