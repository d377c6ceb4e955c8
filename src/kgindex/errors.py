from __future__ import annotations

from typing import Any, Optional


class IndexInputError(Exception):
    """Fatal problem with the dump being indexed.

    The transform is deterministic, so these are never retried; the input has
    to be fixed instead.
    """

    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


def malformed_row(line_no: int, reason: str, line: str) -> IndexInputError:
    preview = line if len(line) <= 200 else line[:200] + "..."
    return IndexInputError("MALFORMED_ROW", f"Line {line_no}: {reason}", {"line": line_no, "text": preview})
