"""
Utility functions for exporting and auditing the dictionary.
"""

import json
import pandas as pd
from typing import Iterable, List
import logging

from .types import DictionaryEntry

logger = logging.getLogger(__name__)


def entries_to_dataframe(entries: Iterable[DictionaryEntry]) -> pd.DataFrame:
    """
    Tabulate dictionary entries.

    Returns:
        DataFrame with ``code`` and ``description`` columns
    """
    return pd.DataFrame(
        [entry.to_dict() for entry in entries],
        columns=["code", "description"]
    )


def render_seed_snippet(entries: Iterable[DictionaryEntry], indent: str = "    ") -> str:
    """
    Render entries as list items for ``seed.ICHI_SEED_ENTRIES``.

    Each entry becomes one line such as
    ``{"code": "XA01", "description": "Laterality: left"},``; quotes and
    backslashes are escaped, non-ASCII text is kept as is.

    Args:
        entries: Entries to render, usually ``dictionary.export_all()``
        indent: Prefix for every line

    Returns:
        The snippet, one entry per line
    """
    lines = [
        f'{indent}{{"code": {json.dumps(entry.code, ensure_ascii=False)}, '
        f'"description": {json.dumps(entry.description, ensure_ascii=False)}}},'
        for entry in entries
    ]
    logger.info(f"Rendered {len(lines)} seed entries")
    return "\n".join(lines)


def export_dictionary_to_csv(
    dictionary,
    output_path: str,
    encoding: str = "utf-8"
):
    """
    Export a dictionary to CSV file.

    The file has a ``code,description`` header and standard CSV quoting,
    so read it back with the quoted parser or ``IchiDictionary.from_file``.

    Args:
        dictionary: IchiDictionary instance
        output_path: Path for output CSV file
        encoding: File encoding
    """
    df = entries_to_dataframe(dictionary.export_all())
    df.to_csv(output_path, index=False, encoding=encoding)
    logger.info(f"Exported {len(df)} entries to {output_path}")


def find_missing_codes(codes: Iterable[str], dictionary) -> List[str]:
    """
    Find codes that have no dictionary entry.

    Args:
        codes: Codes to check, duplicates are reported once
        dictionary: IchiDictionary instance

    Returns:
        Missing codes in first-seen order
    """
    seen = set()
    missing = []
    for code in codes:
        code = str(code).strip()
        if not code or code in seen:
            continue
        seen.add(code)
        if not dictionary.code_exists(code):
            missing.append(code)

    logger.info(f"Found {len(missing)} missing codes out of {len(seen)} unique codes")
    return missing
