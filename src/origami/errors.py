from dataclasses import dataclass, field
from typing import List, Optional, Any

@dataclass
class SourceLocation:
    """Location in source code"""
    file: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"

@dataclass(eq=False)
class CompileError(Exception):
    """Detailed compile error with source location and context"""
    message: str
    error_type: str = "CompilationError"  # e.g. "ParseError", "DefinitionError", "TransformError"
    location: Optional[SourceLocation] = None
    node: Optional[Any] = None  # AST node if available
    context: Optional[str] = None
    notes: List[str] = field(default_factory=list)  # Additional notes/hints
    traceback: Optional[str] = None  # For internal errors, full Python traceback

    def __str__(self) -> str:
        parts = []

        loc = str(self.location) if self.location else "unknown location"
        parts.append(f"{self.error_type} at {loc}: {self.message}")

        if self.context:
            parts.append("\nContext:")
            parts.append(self.context)

        if self.notes:
            parts.append("\nNotes:")
            parts.extend(f"  - {note}" for note in self.notes)

        if self.traceback:
            parts.append("\nPython traceback:")
            parts.append(self.traceback)

        return "\n".join(parts)

    @classmethod
    def from_exception(cls, e: Exception, location: Optional[SourceLocation] = None) -> 'CompileError':
        """Create a CompileError from a Python exception with full traceback"""
        import traceback
        tb = "".join(traceback.format_exception(type(e), e, e.__traceback__))
        return cls(
            message=str(e),
            error_type="InternalError",
            location=location,
            traceback=tb,
            notes=["This may be a compiler bug - please report it"]
        )

@dataclass(eq=False)
class ParseError(CompileError):
    """Malformed Origami source text"""
    error_type: str = "ParseError"

@dataclass(eq=False)
class DefinitionError(CompileError):
    """A declaration that would generate invalid or wrong target code"""
    error_type: str = "DefinitionError"
    declaration: Optional[str] = None  # name of the offending declaration

@dataclass(eq=False)
class TransformError(CompileError):
    """The module interop transform rejected the generated module"""
    error_type: str = "TransformError"

@dataclass(eq=False)
class ScriptModeError(CompileError):
    """Source uses a construct that only module mode can compile"""
    error_type: str = "ScriptModeError"

def get_source_context(source: str, line: int, column: int = 0, context_lines: int = 2) -> Optional[str]:
    """Render the lines around a location, with a caret under the column"""
    lines = source.splitlines()
    if not 1 <= line <= len(lines):
        return None

    start = max(0, line - context_lines - 1)
    end = min(len(lines), line + context_lines)

    context = []
    for i in range(start, end):
        line_num = i + 1
        prefix = '> ' if line_num == line else '  '
        context.append(f"{prefix}{line_num:4d} | {lines[i].rstrip()}")
        if line_num == line and column > 0:
            context.append(" " * (column + 8) + "^")

    return '\n'.join(context)
