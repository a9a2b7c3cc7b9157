"""Checks for user-supplied SQL expressions spliced into DDL.

Column DEFAULT clauses are the one place where end users provide raw SQL.
They are accepted only when they parse as a single scalar expression.
"""

from typing import Optional

import sqlglot
from sqlglot import exp
from sqlglot.errors import ParseError

# Node types that turn a scalar default into something else.
_BLOCKED_NODE_TYPES = (
    exp.Query,
    exp.Subquery,
    exp.Create,
    exp.Drop,
    exp.Insert,
    exp.Update,
    exp.Delete,
    exp.Command,
    exp.Column,
)


def default_expression_error(expression: str, dialect: str = "postgres") -> Optional[str]:
    """Return an error message when the DEFAULT expression is unsafe, else None."""
    text = (expression or "").strip()
    if not text:
        return None
    if ";" in text:
        return f"default value '{expression}' must not contain statement separators"
    if "--" in text or "/*" in text:
        return f"default value '{expression}' must not contain comments"

    try:
        statements = sqlglot.parse(text, read=dialect)
    except ParseError:
        return f"default value '{expression}' is not a valid SQL expression"

    statements = [statement for statement in statements if statement is not None]
    if len(statements) != 1:
        return f"default value '{expression}' must be a single expression"

    if statements[0].find(*_BLOCKED_NODE_TYPES) is not None:
        return f"default value '{expression}' must be a constant or function call"
    return None
