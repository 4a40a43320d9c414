"""
Value types shared by the dictionary and the code decomposer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Any


@dataclass(frozen=True)
class DictionaryEntry:
    """A single code with its display description."""

    code: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return {"code": self.code, "description": self.description}


@dataclass
class DecodedResult:
    """
    Outcome of one decode request.

    ``ai_interpretation`` is reserved for a narrative summary produced
    outside this package; the decomposer always leaves it empty.
    """

    full_code: str
    stem_results: List[DictionaryEntry] = field(default_factory=list)
    extension_results: List[DictionaryEntry] = field(default_factory=list)
    ai_interpretation: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to the camelCase shape used by display clients."""
        payload = {
            "fullCode": self.full_code,
            "stemResults": [e.to_dict() for e in self.stem_results],
            "extensionResults": [e.to_dict() for e in self.extension_results],
        }
        if self.ai_interpretation is not None:
            payload["aiInterpretation"] = self.ai_interpretation
        return payload


class SearchMode(str, Enum):
    COMBINED = "COMBINED"
    SEPARATE = "SEPARATE"


@dataclass(frozen=True)
class CombinedInput:
    """A single ampersand-joined code string, e.g. ``"A01.1 & B02"``."""

    text: str
    mode = SearchMode.COMBINED


@dataclass(frozen=True)
class SeparateInput:
    """Stem and extension slots filled in individually by the caller."""

    stems: Sequence[str] = ()
    extensions: Sequence[str] = ()
    mode = SearchMode.SEPARATE
