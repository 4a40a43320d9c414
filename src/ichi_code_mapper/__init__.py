"""
ICHI Code Mapper

Decodes International Classification of Health Interventions (ICHI) codes into
human-readable descriptions:
- Splits combined input ("AAA.AA.ZZ & XA01") or separate stem/extension slots
  into stem and extension components
- Looks each component up in a code-to-description dictionary seeded from
  built-in data and extendable from CSV text at runtime

Data source: WHO International Classification of Health Interventions
https://www.who.int/standards/classifications/international-classification-of-health-interventions
"""

from .mapper import IchiDictionary, NOT_FOUND_PLACEHOLDER
from .decoder import CodeDecomposer, CodeInputError, EmptyCodeInputError
from .registry import get_global_dictionary, init_ichi_dictionary
from .types import (
    CombinedInput,
    DecodedResult,
    DictionaryEntry,
    SearchMode,
    SeparateInput,
)

__version__ = "0.1.0"

__all__ = [
    "IchiDictionary",
    "NOT_FOUND_PLACEHOLDER",
    "CodeDecomposer",
    "CodeInputError",
    "EmptyCodeInputError",
    "get_global_dictionary",
    "init_ichi_dictionary",
    "CombinedInput",
    "DecodedResult",
    "DictionaryEntry",
    "SearchMode",
    "SeparateInput",
]
