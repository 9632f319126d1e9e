"""
Operator name mangling.

Origami lets functions be named by operator tokens. Python identifiers cannot
spell those, so every operator maps to a fixed name starting with an
underscore, which Origami identifiers never do.
"""

from types import MappingProxyType
from typing import Mapping

OPERATOR_NAMES: Mapping[str, str] = MappingProxyType({
    '===': '_equals',
    '=/=': '_not_equals',
    '>': '_gt',
    '<': '_lt',
    '>=': '_gte',
    '<=': '_lte',
    '+': '_plus',
    '-': '_minus',
    '*': '_mul',
    '/': '_div',
    'or': '_or',
    'and': '_and',
    'not': '_not',
})

def mangle(name: str) -> str:
    """Identifier-safe name for `name`; anything that is not an operator comes back unchanged"""
    return OPERATOR_NAMES.get(name, name)

def is_operator(name: str) -> bool:
    return name in OPERATOR_NAMES
