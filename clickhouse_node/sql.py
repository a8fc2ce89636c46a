# Copyright 2025-present DatusAI, Inc.
# Licensed under the Apache License, Version 2.0.
# See http://www.apache.org/licenses/LICENSE-2.0 for details.

"""Textual guards applied to query text before it reaches ClickHouse.

Both checks are plain string tests, not a SQL parser: a read-only prefix can
still hide a second statement behind a comment or a semicolon, and the LIMIT
append produces invalid SQL after a trailing semicolon or comment.
"""

from .exceptions import ValidationError

READ_ONLY_PREFIXES = ("SELECT", "SHOW", "DESCRIBE", "DESC")
READ_ONLY_MESSAGE = "Only SELECT, SHOW, and DESCRIBE queries are allowed in read-only mode"


def is_read_only(sql: str) -> bool:
    return sql.strip().upper().startswith(READ_ONLY_PREFIXES)


def ensure_read_only(sql: str) -> str:
    """Return ``sql`` unchanged, or raise ``ValidationError`` if it is not a read-only statement."""
    if not is_read_only(sql):
        raise ValidationError(READ_ONLY_MESSAGE)
    return sql


def apply_max_results(sql: str, max_results: int) -> str:
    """Append ``LIMIT max_results`` unless disabled (0) or the text already mentions LIMIT."""
    if max_results > 0 and "LIMIT" not in sql.upper():
        return f"{sql} LIMIT {max_results}"
    return sql


def prepare_query(sql: str, read_only: bool = False, max_results: int = 0) -> str:
    if read_only:
        ensure_read_only(sql)
    return apply_max_results(sql, max_results)
