"""
Process-wide dictionary lifetime.

The decoder is normally run against one dictionary that is seeded at start-up
and grows for the rest of the process. Hosts that want isolation (tests,
multi-tenant servers) construct their own :class:`IchiDictionary` instead.
"""

from pathlib import Path
from typing import Iterable, Optional, Union
import threading
import logging

from .mapper import IchiDictionary

logger = logging.getLogger(__name__)


# Global dictionary instance (optional convenience)
_global_dictionary: Optional[IchiDictionary] = None
_global_lock = threading.Lock()


def get_global_dictionary() -> IchiDictionary:
    """Get or create the initialized global dictionary."""
    global _global_dictionary
    with _global_lock:
        if _global_dictionary is None:
            dictionary = IchiDictionary()
            dictionary.initialize()
            _global_dictionary = dictionary
        return _global_dictionary


def reset_global_dictionary():
    """Forget the global dictionary; the next access re-seeds a fresh one."""
    global _global_dictionary
    with _global_lock:
        _global_dictionary = None


def init_ichi_dictionary(
    csv_paths: Optional[Iterable[Union[str, Path]]] = None,
    dictionary: Optional[IchiDictionary] = None,
    encoding: str = "utf-8"
) -> IchiDictionary:
    """
    Convenience function to seed a dictionary and merge table files into it.

    Reading and decoding the files happens here; the dictionary only ever
    sees text.

    Args:
        csv_paths: Paths of code/description tables to merge, in order
        dictionary: IchiDictionary to use (creates and seeds a new one if None)
        encoding: File encoding

    Returns:
        The seeded dictionary with all tables merged
    """
    if dictionary is None:
        dictionary = IchiDictionary()
    if not dictionary.initialized:
        dictionary.initialize()

    for path in csv_paths or []:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Dictionary file not found: {path}")
        imported = dictionary.merge_from_delimited_text(
            path.read_text(encoding=encoding)
        )
        logger.info(f"Loaded {imported} codes from {path.name}")

    return dictionary
