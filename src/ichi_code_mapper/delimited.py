"""
Parsers for externally supplied code/description tables.

The dictionary only needs ``(code, description)`` pairs, so the text format
lives behind :class:`DelimitedTextParser`. Two implementations ship:

- :class:`LenientCommaParser`: one record per line, fields split on a literal
  delimiter. There is no quoting or escaping, so a description containing the
  delimiter is cut at the first occurrence.
- :class:`QuotedCsvParser`: standard CSV double-quote rules, for files whose
  descriptions contain commas.

Both turn fields into records through :func:`record_from_fields`, so they
skip exactly the same malformed records.
"""

import csv
import io
import re
from abc import ABC, abstractmethod
from typing import Iterator, Optional, Sequence, Tuple
import logging

logger = logging.getLogger(__name__)

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")

_BOM = "\ufeff"


def record_from_fields(fields: Sequence[str]) -> Optional[Tuple[str, str]]:
    """
    Turn the fields of one record into a trimmed ``(code, description)`` pair.

    Fields beyond the second are ignored; an empty description is kept.

    Returns:
        The pair, or None when there are fewer than two fields or the code
        is empty after trimming.
    """
    if len(fields) < 2:
        return None

    code = fields[0].strip()
    if not code:
        return None

    return code, fields[1].strip()


def parse_delimited_line(line: str, delimiter: str = ",") -> Optional[Tuple[str, str]]:
    """
    Parse one record into a ``(code, description)`` pair.

    Examples:
        >>> parse_delimited_line(" AAA.AA.AA , Some description ")
        ('AAA.AA.AA', 'Some description')

        >>> parse_delimited_line("only-one-field") is None
        True
    """
    return record_from_fields(line.split(delimiter))


class DelimitedTextParser(ABC):
    """Turns raw table text into ``(code, description)`` pairs."""

    @abstractmethod
    def parse(self, text: str) -> Iterator[Tuple[str, str]]:
        """Yield records in file order, silently skipping malformed ones."""


class LenientCommaParser(DelimitedTextParser):
    """Line and delimiter split, no header handling, no quoting."""

    def __init__(self, delimiter: str = ","):
        self.delimiter = delimiter

    def parse(self, text: str) -> Iterator[Tuple[str, str]]:
        if not isinstance(text, str) or not text:
            return

        if text.startswith(_BOM):
            text = text[len(_BOM):]

        for line_no, line in enumerate(_LINE_BREAK_RE.split(text), start=1):
            if not line.strip():
                continue
            record = parse_delimited_line(line, self.delimiter)
            if record is None:
                logger.debug(f"Skipping malformed line {line_no}: {line!r}")
                continue
            yield record

    def __repr__(self) -> str:
        return f"LenientCommaParser(delimiter={self.delimiter!r})"


class QuotedCsvParser(DelimitedTextParser):
    """
    CSV with standard double-quote rules.

    Rows are tokenized with ``csv.reader`` so each row keeps its own field
    count; a short row is skipped on its own and never affects its
    neighbours.
    """

    def __init__(self, delimiter: str = ","):
        self.delimiter = delimiter

    def parse(self, text: str) -> Iterator[Tuple[str, str]]:
        if not isinstance(text, str) or not text.strip():
            return

        if text.startswith(_BOM):
            text = text[len(_BOM):]

        reader = csv.reader(io.StringIO(text, newline=""), delimiter=self.delimiter)
        try:
            for row in reader:
                if not any(field.strip() for field in row):
                    continue
                record = record_from_fields(row)
                if record is None:
                    logger.debug(f"Skipping malformed row at line {reader.line_num}: {row!r}")
                    continue
                yield record
        except csv.Error as e:
            logger.debug(f"Stopped reading table text at line {reader.line_num}: {e}")

    def __repr__(self) -> str:
        return f"QuotedCsvParser(delimiter={self.delimiter!r})"


PARSERS = {
    "lenient": LenientCommaParser,
    "quoted": QuotedCsvParser,
}


def get_parser(name: str = "lenient", delimiter: str = ",") -> DelimitedTextParser:
    """Build a parser by its configuration name."""
    try:
        parser_cls = PARSERS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown parser '{name}'. Available parsers: {sorted(PARSERS)}"
        )
    return parser_cls(delimiter=delimiter)
