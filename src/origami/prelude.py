"""
The runtime prelude: shared support code placed ahead of every compiled unit.

A `Prelude` is read once and never changes afterwards. Pipelines receive one
explicitly; `Prelude.default()` is the single instance used when none is given,
so an edited prelude file only takes effect in a new process.
"""

import ast
import functools
import logging
from dataclasses import dataclass
from importlib import resources

logger = logging.getLogger(__name__)

PRELUDE_PACKAGE = "origami.runtimes"
PRELUDE_RESOURCE = "prelude.py"

@dataclass(frozen=True)
class Prelude:
    text: str
    source: str = "<prelude>"

    @classmethod
    def load(cls, package: str = PRELUDE_PACKAGE, resource: str = PRELUDE_RESOURCE) -> 'Prelude':
        text = resources.files(package).joinpath(resource).read_text(encoding="utf-8")
        logger.debug(f"Loaded prelude {package}/{resource} ({len(text)} characters)")
        return cls(text, source=f"{package}/{resource}")

    @staticmethod
    def default() -> 'Prelude':
        return _default_prelude()

    @functools.cached_property
    def bindings(self) -> frozenset:
        """Public top-level names bound by the prelude"""
        names = set()
        for node in ast.parse(self.text, filename=self.source).body:
            if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)):
                names.add(node.name)
            elif isinstance(node, (ast.Import, ast.ImportFrom)):
                for alias in node.names:
                    names.add((alias.asname or alias.name).split(".")[0])
            elif isinstance(node, ast.Assign):
                for target in node.targets:
                    if isinstance(target, ast.Name):
                        names.add(target.id)
        return frozenset(name for name in names if not name.startswith("_"))

    def prepend_to(self, code: str) -> str:
        return f"{self.text}\n{code}"

@functools.lru_cache(maxsize=None)
def _default_prelude() -> Prelude:
    return Prelude.load()
