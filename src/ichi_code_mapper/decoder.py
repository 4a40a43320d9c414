"""
Decomposition of ICHI code input into stem and extension components.

Two input shapes are accepted:
- Combined: one string joined by ampersands, e.g. ``"AAA.AA.ZZ & XA01"``.
  Tokens containing a period are stems, all others are extensions.
- Separate: stem and extension slots filled in by the caller. The slot a
  token was typed into decides its group, whatever its content.

Each token is resolved against an :class:`IchiDictionary`; misses carry the
not-found placeholder as their description.
"""

from typing import Iterable, List, Optional, Sequence, Tuple, Union
import logging

from .mapper import IchiDictionary, NOT_FOUND_PLACEHOLDER
from .types import CombinedInput, DecodedResult, DictionaryEntry, SeparateInput

logger = logging.getLogger(__name__)

COMBINED_SEPARATOR = "&"
FULL_CODE_JOINER = " & "
STEM_MARKER = "."


class CodeInputError(ValueError):
    """Decode request the user has to correct."""


class EmptyCodeInputError(CodeInputError):
    """No stem or extension code was supplied."""

    def __init__(self, message: str = "Enter at least one code."):
        super().__init__(message)


def split_combined_code(text: str, separator: str = COMBINED_SEPARATOR) -> List[str]:
    """
    Split a combined code string into trimmed, non-empty tokens.

    Examples:
        >>> split_combined_code("AAA.AA.ZZ & XA01")
        ['AAA.AA.ZZ', 'XA01']

        >>> split_combined_code(" & ")
        []
    """
    if not isinstance(text, str):
        return []
    return [part.strip() for part in text.split(separator) if part.strip()]


def is_stem_code(token: str, stem_marker: str = STEM_MARKER) -> bool:
    """A token is a stem code when it contains the stem marker."""
    return stem_marker in token


def classify_tokens(
    tokens: Iterable[str],
    stem_marker: str = STEM_MARKER
) -> Tuple[List[str], List[str]]:
    """
    Partition tokens into ``(stems, extensions)``, keeping input order.
    """
    stems, extensions = [], []
    for token in tokens:
        if is_stem_code(token, stem_marker):
            stems.append(token)
        else:
            extensions.append(token)
    return stems, extensions


def compact_slots(slots: Optional[Sequence[str]]) -> List[str]:
    """Drop blank slots and trim the rest."""
    if not slots:
        return []
    return [slot.strip() for slot in slots if slot and slot.strip()]


class CodeDecomposer:
    """
    Turns user code input into a :class:`DecodedResult`.

    Usage:
        decomposer = CodeDecomposer(dictionary)

        result = decomposer.decode(CombinedInput("AAA.AA.ZZ & XA01"))
        result = decomposer.decode(SeparateInput(["AAA.AA.ZZ"], ["XA01"]))
    """

    def __init__(
        self,
        dictionary: IchiDictionary,
        placeholder: str = NOT_FOUND_PLACEHOLDER,
        joiner: str = FULL_CODE_JOINER,
        separator: str = COMBINED_SEPARATOR,
        stem_marker: str = STEM_MARKER
    ):
        self.dictionary = dictionary
        self.placeholder = placeholder
        self.joiner = joiner
        self.separator = separator
        self.stem_marker = stem_marker

    def decode(self, code_input: Union[CombinedInput, SeparateInput]) -> DecodedResult:
        """
        Decode one request.

        Raises:
            EmptyCodeInputError: if neither group holds a token
            CodeInputError: if the input is of an unsupported shape
        """
        if isinstance(code_input, CombinedInput):
            tokens = split_combined_code(code_input.text, self.separator)
            stems, extensions = classify_tokens(tokens, self.stem_marker)
            full_code = code_input.text
        elif isinstance(code_input, SeparateInput):
            stems = compact_slots(code_input.stems)
            extensions = compact_slots(code_input.extensions)
            full_code = self.joiner.join(stems + extensions)
        else:
            raise CodeInputError(
                f"Unsupported input type: {type(code_input).__name__}"
            )

        if not stems and not extensions:
            raise EmptyCodeInputError()

        logger.debug(
            f"Decoding {code_input.mode.value} input: "
            f"{len(stems)} stem(s), {len(extensions)} extension(s)"
        )

        return DecodedResult(
            full_code=full_code,
            stem_results=self._resolve(stems),
            extension_results=self._resolve(extensions),
        )

    def decode_combined(self, text: str) -> DecodedResult:
        return self.decode(CombinedInput(text))

    def decode_separate(
        self,
        stems: Sequence[str] = (),
        extensions: Sequence[str] = ()
    ) -> DecodedResult:
        return self.decode(SeparateInput(tuple(stems), tuple(extensions)))

    def _resolve(self, tokens: List[str]) -> List[DictionaryEntry]:
        return [
            DictionaryEntry(
                code=token,
                description=self.dictionary.get_description(token, default=self.placeholder),
            )
            for token in tokens
        ]

    def __repr__(self) -> str:
        return f"CodeDecomposer(dictionary={self.dictionary!r})"
