"""Exception taxonomy for the parsing and numeric pipeline.

Every raised error derives from :class:`CrunchError` and from the builtin
exception a caller would naturally catch (``ValueError`` or ``LookupError``).
Per-row mismatches found while parsing are recovered locally; they are
recorded as :class:`RowError` entries on the parsed table and reported through
:class:`RaggedRowWarning`, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


class CrunchError(Exception):
    """Base class for all errors raised by the package."""


class ParseError(CrunchError, ValueError):
    """The CSV text is empty or structurally malformed."""

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)


class ColumnNotFound(CrunchError, LookupError):
    """A requested column name is not among the table headers."""

    def __init__(self, column: str, available: Sequence[str] = ()):
        self.column = column
        self.available = tuple(available)
        super().__init__(
            f"Column {column!r} not found; available columns: "
            f"{', '.join(repr(h) for h in self.available) or '(none)'}"
        )

    def __str__(self) -> str:
        # LookupError would otherwise repr() the message.
        return str(self.args[0])


class EmptyInputError(CrunchError, ValueError):
    """A computation was requested over zero values."""


class LengthMismatchError(CrunchError, ValueError):
    """Paired sequences handed to the regression have different lengths."""

    def __init__(self, x_len: int, y_len: int):
        self.x_len = x_len
        self.y_len = y_len
        super().__init__(
            f"X and Y must have the same length (got {x_len} and {y_len})."
        )


class DegenerateInputError(CrunchError, ValueError):
    """Zero-variance input leaves the fit parameters undefined."""


class RaggedRowWarning(UserWarning):
    """Some data rows had a cell count different from the header."""


@dataclass(frozen=True)
class RowError:
    """Record of a data row whose cell count did not match the header.

    Attributes:
        line: 1-based line number in the source text where the row starts.
        expected: Number of header cells.
        found: Number of cells in the row.
        action: ``"padded"``, ``"truncated"`` or ``"skipped"``.
    """

    line: int
    expected: int
    found: int
    action: str

    def to_dict(self) -> dict:
        return {
            "line": self.line,
            "expected": self.expected,
            "found": self.found,
            "action": self.action,
        }
