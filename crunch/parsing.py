"""
Tokenizes raw CSV text into a rectangular :class:`~crunch.schema.Table`.
"""

# Algorithm summary: a single left-to-right pass over the text with a small
# state machine (field start, unquoted, quoted, after closing quote). Record
# breaks are \n, \r\n or a lone \r outside quotes. Blank lines are dropped,
# the first remaining record becomes the header, and every data row is forced
# to the header width by the configured mismatch policy.

from __future__ import annotations

import logging
import warnings
from typing import List, Tuple

from .errors import ParseError, RaggedRowWarning, RowError
from .schema import Table

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = ","
DEFAULT_QUOTECHAR = '"'
MISMATCH_POLICIES = ("pad", "skip")
DEFAULT_MISMATCH_POLICY = "pad"

_FIELD_START = 0
_UNQUOTED = 1
_QUOTED = 2
_AFTER_QUOTE = 3

# (source line, cells, is_blank)
_Record = Tuple[int, List[str], bool]


def _finish_cell(buf: List[str], quoted: bool) -> str:
    value = "".join(buf)
    return value if quoted else value.strip()


def split_records(text: str, delimiter: str, quotechar: str) -> List[_Record]:
    """Split CSV text into records of cells, honouring quoted fields.

    Args:
        text (str): Raw CSV text.
        delimiter (str): Single-character cell separator.
        quotechar (str): Single-character quote; doubled inside a quoted field
            it stands for one literal quote.

    Returns:
        list[tuple[int, list[str], bool]]: For each record, the 1-based line
        it starts on, its cells, and whether it is a blank line.

    Raises:
        ParseError: If a quoted field is never closed, or a closing quote is
            followed by something other than whitespace, the delimiter, or a
            line break.
    """
    records: List[_Record] = []
    cells: List[str] = []
    buf: List[str] = []
    quoted = False
    state = _FIELD_START
    line = 1
    record_line = 1
    n = len(text)
    i = 0

    while i < n:
        ch = text[i]

        if state == _QUOTED:
            if ch == quotechar:
                if i + 1 < n and text[i + 1] == quotechar:
                    buf.append(quotechar)
                    i += 2
                    continue
                state = _AFTER_QUOTE
            else:
                if ch == "\n" or (ch == "\r" and not (i + 1 < n and text[i + 1] == "\n")):
                    line += 1
                buf.append(ch)
            i += 1
            continue

        if ch == "\r" or ch == "\n":
            if ch == "\r" and i + 1 < n and text[i + 1] == "\n":
                i += 1
            cells.append(_finish_cell(buf, quoted))
            blank = len(cells) == 1 and not quoted and cells[0] == ""
            records.append((record_line, cells, blank))
            cells, buf, quoted, state = [], [], False, _FIELD_START
            line += 1
            record_line = line
            i += 1
            continue

        if ch == delimiter:
            cells.append(_finish_cell(buf, quoted))
            buf, quoted, state = [], False, _FIELD_START
            i += 1
            continue

        if state == _FIELD_START:
            if ch == quotechar:
                # Whitespace before an opening quote is not part of the cell.
                buf, quoted, state = [], True, _QUOTED
            else:
                buf.append(ch)
                if not ch.isspace():
                    state = _UNQUOTED
        elif state == _UNQUOTED:
            buf.append(ch)
        elif not ch.isspace():
            raise ParseError(
                f"Unexpected character {ch!r} after closing quote", line=line
            )
        i += 1

    if state == _QUOTED:
        raise ParseError("Unterminated quoted field", line=record_line)
    if cells or buf or quoted:
        cells.append(_finish_cell(buf, quoted))
        blank = len(cells) == 1 and not quoted and cells[0] == ""
        records.append((record_line, cells, blank))

    return records


def _validate_options(delimiter: str, quotechar: str, on_mismatch: str) -> None:
    if on_mismatch not in MISMATCH_POLICIES:
        raise ValueError(
            f"on_mismatch must be one of {MISMATCH_POLICIES}, got {on_mismatch!r}"
        )
    if len(delimiter) != 1 or len(quotechar) != 1:
        raise ValueError("delimiter and quotechar must be single characters")
    if delimiter == quotechar or delimiter in "\r\n" or quotechar in "\r\n":
        raise ValueError("delimiter and quotechar must differ and not be line breaks")


def parse(
    csv_text: str,
    *,
    delimiter: str = DEFAULT_DELIMITER,
    quotechar: str = DEFAULT_QUOTECHAR,
    on_mismatch: str = DEFAULT_MISMATCH_POLICY,
    warn_stacklevel: int = 2,
) -> Table:
    """Parse CSV text into a header row plus rectangular data rows.

    The first non-blank line is the header. Blank lines anywhere are ignored.
    Unquoted cells are stripped of surrounding whitespace; quoted cells keep
    their content verbatim, including delimiters and line breaks.

    A header with no data rows is a valid, empty table.

    Rows whose cell count differs from the header are never allowed to shift
    columns. With ``on_mismatch="pad"`` (the default) short rows are padded
    with empty cells and long rows truncated; with ``"skip"`` the row is
    dropped. Each such row is recorded in :attr:`Table.row_errors` and a single
    :class:`~crunch.errors.RaggedRowWarning` summarises them.

    Args:
        csv_text (str): Raw CSV text.
        delimiter (str, optional): Cell separator. Defaults to ``","``.
        quotechar (str, optional): Quote character. Defaults to ``'"'``.
        on_mismatch (str, optional): ``"pad"`` or ``"skip"``.
        warn_stacklevel (int, optional): ``stacklevel`` for the ragged-row
            warning. Wrappers that call ``parse`` raise it by one per frame
            so the warning names the line in the caller's code.

    Returns:
        Table: Parsed headers and rows in source order.

    Raises:
        ParseError: If the text is empty or blank, or quoting is malformed.
        ValueError: If the options are invalid.
    """
    _validate_options(delimiter, quotechar, on_mismatch)
    if csv_text is None or not str(csv_text).strip():
        raise ParseError("CSV text is empty")

    text = str(csv_text)
    if text.startswith("\ufeff"):
        text = text[1:]

    records = [rec for rec in split_records(text, delimiter, quotechar) if not rec[2]]
    if not records:
        raise ParseError("CSV text contains no header row")

    _, header_cells, _ = records[0]
    headers = tuple(header_cells)
    expected = len(headers)

    rows = []
    row_errors = []
    for line_no, cells, _ in records[1:]:
        found = len(cells)
        if found == expected:
            rows.append(tuple(cells))
            continue
        if on_mismatch == "skip":
            row_errors.append(RowError(line_no, expected, found, "skipped"))
            continue
        if found < expected:
            cells = cells + [""] * (expected - found)
            action = "padded"
        else:
            cells = cells[:expected]
            action = "truncated"
        row_errors.append(RowError(line_no, expected, found, action))
        rows.append(tuple(cells))

    if row_errors:
        lines = ", ".join(str(err.line) for err in row_errors[:10])
        if len(row_errors) > 10:
            lines += ", ..."
        verb = "skipped" if on_mismatch == "skip" else "padded/truncated"
        warnings.warn(
            f"{len(row_errors)} data row(s) did not have {expected} cells and "
            f"were {verb} (lines {lines}).",
            RaggedRowWarning,
            stacklevel=warn_stacklevel,
        )

    logger.debug(
        "Parsed %d data rows x %d columns (%d ragged rows)",
        len(rows),
        expected,
        len(row_errors),
    )
    return Table(headers=headers, rows=tuple(rows), row_errors=tuple(row_errors))
