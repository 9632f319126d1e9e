# Origami runtime prelude.
#
# Prepended to every compiled script and module. Generated sum types rely on
# the imports below; operators in Origami code call the underscore functions,
# and a module that defines an operator replaces the matching one.

from dataclasses import dataclass
from typing import Any, ClassVar, Literal


def tag_of(value):
    return value._tag


def _equals(a, b):
    return a == b


def _not_equals(a, b):
    return not _equals(a, b)


def _gt(a, b):
    return a > b


def _lt(a, b):
    return a < b


def _gte(a, b):
    return a >= b


def _lte(a, b):
    return a <= b


def _plus(a, b):
    return a + b


def _minus(a, b):
    return a - b


def _mul(a, b):
    return a * b


def _div(a, b):
    return a / b


# Both operands are evaluated before the call; use if/then/else to short-circuit.
def _or(a, b):
    return a or b


def _and(a, b):
    return a and b


def _not(a):
    return not a
