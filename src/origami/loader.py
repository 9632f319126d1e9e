"""
Importing .origami files through Python's import system.

Nothing is installed on import of this module. A host opts in either by
calling `register_loader()`, which puts one `OrigamiFinder` on
`sys.meta_path`, or by placing its own `OrigamiFinder` wherever it resolves
modules. The finder goes just ahead of the path finder, which would otherwise
take a directory holding only `__init__.origami` for a namespace package; in
the same directory `name.origami` therefore wins over `name.py`.
"""

import importlib
import importlib.abc
import importlib.machinery
import importlib.util
import logging
import sys
from pathlib import Path
from typing import Optional

from origami.origami import OrigamiCompiler, default_compiler

logger = logging.getLogger(__name__)

SUFFIX = ".origami"

class OrigamiLoader(importlib.machinery.SourceFileLoader):
    """Compiles an Origami file in module mode, then hands the Python text to the host compiler"""

    def __init__(self, fullname: str, path: str, compiler: Optional[OrigamiCompiler] = None):
        super().__init__(fullname, path)
        self.compiler = compiler

    def source_to_code(self, data, path, **kwargs):
        compiler = self.compiler or default_compiler()
        source = importlib.util.decode_source(data)
        logger.debug(f"Compiling {path} for import as {self.name}")
        python_source = compiler.compile_to_host_module(source, str(path))
        return super().source_to_code(python_source, path, **kwargs)

    def path_stats(self, path):
        # Output also depends on the prelude, which file stats cannot see; never use bytecode caches.
        raise OSError(f"{path} is not cached")

class OrigamiFinder(importlib.abc.MetaPathFinder):
    def __init__(self, compiler: Optional[OrigamiCompiler] = None):
        self.compiler = compiler

    def find_spec(self, fullname, path, target=None):
        name = fullname.rpartition(".")[2]
        for entry in (sys.path if path is None else path):
            if not isinstance(entry, str):
                continue
            base = Path(entry or ".")

            package_dir = base / name
            init_file = package_dir / f"__init__{SUFFIX}"
            if init_file.is_file():
                logger.debug(f"Found package {fullname} at {init_file}")
                return importlib.util.spec_from_file_location(
                    fullname,
                    str(init_file),
                    loader=OrigamiLoader(fullname, str(init_file), self.compiler),
                    submodule_search_locations=[str(package_dir)],
                )

            module_file = base / f"{name}{SUFFIX}"
            if module_file.is_file():
                logger.debug(f"Found module {fullname} at {module_file}")
                return importlib.util.spec_from_file_location(
                    fullname,
                    str(module_file),
                    loader=OrigamiLoader(fullname, str(module_file), self.compiler),
                )
        return None

def register_loader(compiler: Optional[OrigamiCompiler] = None) -> OrigamiFinder:
    """Make .origami files importable; calling it again changes nothing"""
    for finder in sys.meta_path:
        if isinstance(finder, OrigamiFinder):
            return finder
    finder = OrigamiFinder(compiler)
    position = len(sys.meta_path)
    for index, existing in enumerate(sys.meta_path):
        if existing is importlib.machinery.PathFinder:
            position = index
            break
    sys.meta_path.insert(position, finder)
    importlib.invalidate_caches()
    logger.debug("Registered the Origami import finder")
    return finder

def unregister_loader() -> None:
    sys.meta_path[:] = [finder for finder in sys.meta_path if not isinstance(finder, OrigamiFinder)]
