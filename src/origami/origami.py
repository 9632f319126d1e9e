from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union, List
import argparse
import ast as pyast
import functools
import logging
import sys
import traceback

from origami.errors import CompileError, SourceLocation
from origami.parser import Parser
from origami.codegen import CodeGenerator
from origami.interop import DEFAULT_PLUGINS, transform
from origami.prelude import Prelude
import origami.origami_ast as ast

logger = logging.getLogger(__name__)

MODES = ("script", "module")

@dataclass
class CompileOptions:
    """Compilation options for Origami"""
    mode: str = "script"  # "script" or "module"
    plugins: Sequence[str] = DEFAULT_PLUGINS  # interop transforms for module mode
    output: Optional[str] = None
    dump_ast: bool = False
    dump_ir: bool = False
    run: bool = False
    debug: bool = False

    def __post_init__(self):
        if self.mode not in MODES:
            raise ValueError(f"Unknown compilation mode {self.mode!r}, expected one of {MODES}")

class OrigamiCompiler:
    """Main compiler interface for Origami"""

    def __init__(self, options: CompileOptions = None, prelude: Prelude = None):
        self.options = options or CompileOptions()
        self.prelude = prelude or Prelude.default()
        self.parser = Parser()
        self.code_gen = CodeGenerator(reserved=self.prelude.bindings)

    def parse(self, source: str, source_path: str = "<string>") -> ast.Program:
        program = self.parser.parse(source, file_path=source_path)
        if self.options.dump_ast:
            print(ast.dump_ast_json(program))
        return program

    def compile(self, source: str, source_path: str = "<string>") -> str:
        """Script mode: prelude plus top-level definitions, ready for exec"""
        logger.debug(f"Compiling {source_path} as a script")
        program = self.parse(source, source_path)
        code = self.code_gen.generate(program)
        if self.options.dump_ir:
            print(code)
        return self.prelude.prepend_to(code)

    def compile_to_host_module(self, source: str, source_path: str = "<string>") -> str:
        """Module mode: prelude plus a Python module with real imports and __all__"""
        logger.debug(f"Compiling {source_path} as a module with {list(self.options.plugins)}")
        program = self.parse(source, source_path)
        tree = self.code_gen.generate_module(program)
        if self.options.dump_ir:
            print(pyast.dump(tree, indent=2))
        result = transform(tree, self.options.plugins)
        return self.prelude.prepend_to(result.code)

    def compile_file(self, filepath: Union[str, Path]) -> str:
        """Compile an Origami source file in the configured mode"""
        path = Path(filepath)
        source = path.read_text(encoding="utf-8")
        if self.options.mode == "module":
            return self.compile_to_host_module(source, str(path))
        return self.compile(source, str(path))

@functools.lru_cache(maxsize=None)
def default_compiler() -> OrigamiCompiler:
    """The process-wide compiler behind the module-level functions"""
    return OrigamiCompiler()

def parse(source: str, source_path: str = "<string>") -> ast.Program:
    return default_compiler().parse(source, source_path)

def compile(source: str, source_path: str = "<string>") -> str:
    return default_compiler().compile(source, source_path)

def compile_to_host_module(source: str, source_path: str = "<string>") -> str:
    return default_compiler().compile_to_host_module(source, source_path)

def output_path(source: Path, output: Optional[str], many: bool) -> Path:
    if output is None:
        return source.with_suffix(".py")
    if many:
        return Path(output) / source.with_suffix(".py").name
    return Path(output)

def run_script(code: str, source_path: str):
    """Execute script-mode output; calls main() when the program defines one"""
    namespace = {"__name__": "__main__", "__file__": source_path}
    exec(code, namespace)
    entry = namespace.get("main")
    if callable(entry):
        return entry()
    return None

def main(argv: Optional[List[str]] = None):
    """CLI entry point"""
    parser = argparse.ArgumentParser(prog="origami", description="Origami compiler")
    parser.add_argument('files', nargs='+', help='Source files to compile')
    parser.add_argument('--mode', choices=MODES, default='script',
                        help='Compile to a script for exec or to an importable module (default: script)')
    parser.add_argument('--output', '-o',
                        help='Output file, or directory when compiling several files')
    parser.add_argument('--dump-ast', action='store_true', help='Dump the parsed program')
    parser.add_argument('--dump-ir', action='store_true', help='Dump generated code before the prelude is added')
    parser.add_argument('--run', action='store_true', help='Execute the compiled script (script mode only)')
    parser.add_argument('--debug', '-g', action='store_true', help='Debug logging')

    args = parser.parse_args(argv)

    if args.run and args.mode != 'script':
        parser.error("--run needs --mode script")

    options = CompileOptions(
        mode=args.mode,
        output=args.output,
        dump_ast=args.dump_ast,
        dump_ir=args.dump_ir,
        run=args.run,
        debug=args.debug,
    )

    logging.basicConfig(
        level=logging.DEBUG if options.debug else logging.WARNING,
        format='%(name)s - %(levelname)s - %(message)s',
    )

    compiler = OrigamiCompiler(options)
    many = len(args.files) > 1

    current = None
    try:
        for file in args.files:
            current = file
            code = compiler.compile_file(file)
            if options.run:
                try:
                    result = run_script(code, file)
                except Exception:
                    traceback.print_exc()
                    sys.exit(1)
                if result is not None:
                    print(result)
                continue
            target = output_path(Path(file), options.output, many)
            target.parent.mkdir(parents=True, exist_ok=True)
            try:
                target.write_text(code, encoding="utf-8")
            except OSError as e:
                raise CompileError(
                    message=f"Failed to write output file {target}: {e}",
                    error_type="IOError",
                    notes=[f"Make sure you have write permissions for {target.parent}"]
                ) from e
            logger.info(f"Wrote {target}")

    except CompileError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        # Unexpected error - convert to CompileError with full traceback
        error = CompileError.from_exception(e, location=SourceLocation(str(current), 1, 1))
        print("Internal Compiler Error:", file=sys.stderr)
        print(str(error), file=sys.stderr)
        sys.exit(1)

if __name__ == "__main__":
    main()
