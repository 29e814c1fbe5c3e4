"""Small builder for Pact s-expressions.

Arguments are rendered as JSON literals unless they are nested expressions
or symbols, so caller data can never change the shape of the expression.
"""

from __future__ import annotations

import json
import re
from typing import Any

from .errors import InvalidArgument, TypeMismatch

_IDENT_RE = re.compile(r"^[A-Za-z%#+\-_&$@<>=^?*!|/~][A-Za-z0-9%#+\-_&$@<>=^?*!|/~.]*$")


def _check_ident(name: Any, what: str) -> str:
    if not isinstance(name, str):
        raise TypeMismatch(f"{what} must be a string: {name!r}")
    if not _IDENT_RE.match(name):
        raise InvalidArgument(f"{what} is not a Pact identifier: {name!r}")
    return name


class Symbol:
    """A bare identifier argument, rendered without quotes (e.g. a table name)."""

    def __init__(self, name: str):
        self.name = _check_ident(name, "symbol")

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Symbol({self.name!r})"


class Exp:
    """An application ``(name arg ...)``."""

    def __init__(self, name: str, *args: Any):
        self.name = _check_ident(name, "pgmName")
        self.args = args

    @staticmethod
    def _render(arg: Any) -> str:
        if isinstance(arg, (Exp, Symbol)):
            return str(arg)
        try:
            return json.dumps(arg, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise InvalidArgument(f"argument is not a JSON value: {arg!r}") from e

    def __str__(self) -> str:
        return "(" + " ".join([self.name, *(self._render(a) for a in self.args)]) + ")"

    def __repr__(self) -> str:
        return f"Exp({self.name!r}, {', '.join(map(repr, self.args))})"


def mk_exp(pgm_name: str, *args: Any) -> str:
    """Render ``(pgm_name arg ...)`` as Pact code."""
    return str(Exp(pgm_name, *args))
