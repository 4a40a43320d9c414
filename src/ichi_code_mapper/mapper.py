"""
Core IchiDictionary class mapping ICHI code components to descriptions.

Supports:
- Seeding from the built-in entry list (``seed.ICHI_SEED_ENTRIES``)
- Merging externally supplied delimited text (last write wins)
- Exact-match lookup with boundary whitespace ignored
- Snapshot export for back-up and seed regeneration
"""

import threading
import pandas as pd
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union
import logging

from .delimited import DelimitedTextParser, LenientCommaParser
from .seed import ICHI_SEED_ENTRIES
from .types import DictionaryEntry

logger = logging.getLogger(__name__)

NOT_FOUND_PLACEHOLDER = "(no dictionary entry)"

EntryLike = Union[DictionaryEntry, Tuple[str, str], Dict[str, str]]


def _as_pair(entry: EntryLike) -> Tuple[str, str]:
    if isinstance(entry, DictionaryEntry):
        return entry.code, entry.description
    if isinstance(entry, dict):
        return entry["code"], entry["description"]
    code, description = entry
    return code, description


class IchiDictionary:
    """
    A growing code -> description table shared by every decode request.

    Usage:
        dictionary = IchiDictionary()
        dictionary.initialize()

        # Merge a user supplied table
        imported = dictionary.merge_from_delimited_text("XA01,Left\\nXA02,Right")

        # Exact lookup, None on a miss
        desc = dictionary.lookup("XA01")

        # Lookup with the display placeholder on a miss
        desc = dictionary.get_description("ZZZ.ZZ.ZZ")

    All reads and writes go through one re-entrant lock, so a single instance
    may be shared across threads of a concurrent host.
    """

    def __init__(
        self,
        mapping_dict: Optional[Dict[str, str]] = None,
        name: str = "ICHI",
        parser: Optional[DelimitedTextParser] = None,
        seed_entries: Optional[Iterable[EntryLike]] = None
    ):
        """
        Initialize the dictionary.

        Args:
            mapping_dict: Optional starting code -> description mapping
            name: Name of this dictionary, used in logs
            parser: Parser for ``merge_from_delimited_text`` (default: lenient comma split)
            seed_entries: Entries applied by ``initialize`` (default: built-in seed)
        """
        self.mapping: Dict[str, str] = {}
        self.name = name
        self.parser = parser or LenientCommaParser()
        self.seed_entries = list(
            ICHI_SEED_ENTRIES if seed_entries is None else seed_entries
        )
        self._lock = threading.RLock()
        self._initialized = False
        self._stats = {"lookups": 0, "hits": 0, "misses": 0}

        if mapping_dict:
            self.merge_entries(mapping_dict.items())

    @classmethod
    def from_dataframe(
        cls,
        df: pd.DataFrame,
        code_column: str = "code",
        description_column: str = "description",
        name: str = "DataFrameDictionary",
        **kwargs
    ) -> "IchiDictionary":
        """
        Create a dictionary from a pandas DataFrame (no seeding).

        Args:
            df: DataFrame containing code-description rows
            code_column: Name of code column
            description_column: Name of description column
            name: Name for this dictionary

        Returns:
            IchiDictionary instance
        """
        dictionary = cls(name=name, **kwargs)
        dictionary.merge_dataframe(
            df,
            code_column=code_column,
            description_column=description_column
        )
        return dictionary

    @classmethod
    def from_file(
        cls,
        file_path: Union[str, Path],
        code_column: str = "code",
        description_column: str = "description",
        delimiter: str = ",",
        encoding: str = "utf-8",
        name: Optional[str] = None,
        **read_csv_kwargs
    ) -> "IchiDictionary":
        """
        Load a dictionary from a CSV/TXT file with a header row.

        Args:
            file_path: Path to the table
            code_column: Name of the column containing codes
            description_column: Name of the column containing descriptions
            delimiter: File delimiter (default: ',')
            encoding: File encoding (default: 'utf-8')
            name: Name for this dictionary (defaults to filename)
            **read_csv_kwargs: Additional arguments for pd.read_csv

        Returns:
            IchiDictionary instance
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"Dictionary file not found: {file_path}")

        df = pd.read_csv(
            file_path,
            delimiter=delimiter,
            encoding=encoding,
            dtype=str,
            **read_csv_kwargs
        )

        logger.info(f"Read {len(df)} rows from {file_path.name}")

        return cls.from_dataframe(
            df,
            code_column=code_column,
            description_column=description_column,
            name=name or file_path.stem
        )

    def initialize(self) -> int:
        """
        Populate the dictionary from the built-in seed entries.

        Expected once per process. Calling it again re-applies the seed, so
        built-in descriptions overwrite runtime ones for the same codes.

        Returns:
            Number of codes held afterwards
        """
        with self._lock:
            if self._initialized:
                logger.warning(f"{self.name} dictionary already initialized; re-applying seed")
            self.merge_entries(self.seed_entries)
            self._initialized = True
            size = len(self.mapping)

        logger.info(f"Initialized {self.name} dictionary with {size} codes")
        return size

    @property
    def initialized(self) -> bool:
        return self._initialized

    def merge_entries(self, entries: Iterable[EntryLike]) -> int:
        """
        Insert or overwrite entries, last write wins.

        Codes and descriptions are trimmed; entries with an empty code are
        skipped.

        Returns:
            Number of entries inserted
        """
        batch = []
        for entry in entries:
            code, description = _as_pair(entry)
            code = str(code).strip()
            if not code:
                continue
            batch.append((code, str(description).strip()))

        with self._lock:
            for code, description in batch:
                self.mapping[code] = description

        return len(batch)

    def merge_from_delimited_text(self, text: str) -> int:
        """
        Merge records from delimited table text.

        Every non-empty line is a record (no header skipping). Malformed lines
        are skipped and not counted; empty or unreadable text imports nothing.

        Args:
            text: Decoded table contents

        Returns:
            Number of records parsed and inserted
        """
        records = list(self.parser.parse(text))
        imported = self.merge_entries(records)
        logger.info(
            f"Merged {imported} records into {self.name} dictionary "
            f"({len(self)} codes total)"
        )
        return imported

    def merge_dataframe(
        self,
        df: pd.DataFrame,
        code_column: str = "code",
        description_column: str = "description"
    ) -> int:
        """
        Merge rows of a DataFrame, last write wins.

        Returns:
            Number of rows inserted
        """
        if code_column not in df.columns or description_column not in df.columns:
            raise ValueError(
                f"Columns {code_column} and {description_column} must exist in DataFrame. "
                f"Available columns: {df.columns.tolist()}"
            )

        df = df[[code_column, description_column]].dropna()
        return self.merge_entries(
            zip(df[code_column].astype(str), df[description_column].astype(str))
        )

    def lookup(self, code: str) -> Optional[str]:
        """
        Exact-match lookup after trimming surrounding whitespace.

        Returns:
            The description, or None when the code is not held
        """
        lookup_code = str(code).strip()

        with self._lock:
            self._stats["lookups"] += 1
            description = self.mapping.get(lookup_code)
            if description is None:
                self._stats["misses"] += 1
            else:
                self._stats["hits"] += 1

        if description is None:
            logger.debug(f"Code not found: {lookup_code}")
        return description

    def get_description(
        self,
        code: str,
        default: str = NOT_FOUND_PLACEHOLDER
    ) -> str:
        """Lookup returning ``default`` instead of None on a miss."""
        description = self.lookup(code)
        return default if description is None else description

    def get_descriptions(
        self,
        codes: List[str],
        default: str = NOT_FOUND_PLACEHOLDER
    ) -> List[str]:
        """Batch lookup, order preserved."""
        return [self.get_description(code, default=default) for code in codes]

    def code_exists(self, code: str) -> bool:
        """Check if a code exists without touching statistics."""
        with self._lock:
            return str(code).strip() in self.mapping

    def get_codes(self) -> List[str]:
        """Get all held codes in insertion order."""
        with self._lock:
            return list(self.mapping.keys())

    def size(self) -> int:
        """Number of distinct codes held."""
        with self._lock:
            return len(self.mapping)

    def export_all(self) -> List[DictionaryEntry]:
        """Snapshot of every entry in insertion order."""
        with self._lock:
            return [
                DictionaryEntry(code=code, description=description)
                for code, description in self.mapping.items()
            ]

    def get_stats(self) -> Dict:
        """Get lookup statistics."""
        with self._lock:
            stats = self._stats.copy()
            stats["total_codes"] = len(self.mapping)
        if stats["lookups"] > 0:
            stats["hit_rate"] = stats["hits"] / stats["lookups"]
        else:
            stats["hit_rate"] = 0.0
        return stats

    def reset_stats(self):
        """Reset lookup statistics."""
        with self._lock:
            self._stats = {"lookups": 0, "hits": 0, "misses": 0}

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, code) -> bool:
        return self.code_exists(code)

    def __repr__(self) -> str:
        return (
            f"IchiDictionary(name='{self.name}', "
            f"total_codes={len(self)}, "
            f"parser={self.parser!r})"
        )

    def __getitem__(self, code: str) -> str:
        """Allow dict-like access: dictionary[code]"""
        return self.get_description(code)
