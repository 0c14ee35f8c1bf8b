"""Value types exchanged between the checker and the annotation engine."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class ErrorSpan:
    """
    A misspelling reported by the checker.

    Offsets are expressed in the plain-text projection that was sent to the
    checker, and are only meaningful against that projection.

    Attributes:
        word: The offending word as it appears in the text
        text_offset: Start offset in the projected text
        text_length: Length of the word in the projected text

    Examples:
        >>> span = ErrorSpan(word="Teh", text_offset=0, text_length=3)
        >>> span.text_end
        3
    """

    word: str
    text_offset: int
    text_length: int

    def __post_init__(self) -> None:
        if not isinstance(self.text_offset, int) or self.text_offset < 0:
            raise ValueError("text_offset must be a non-negative integer")
        if not isinstance(self.text_length, int) or self.text_length <= 0:
            raise ValueError("text_length must be a positive integer")

    @property
    def text_end(self) -> int:
        return self.text_offset + self.text_length

    def to_dict(self) -> Dict[str, Any]:
        return {"word": self.word, "index": self.text_offset, "length": self.text_length}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ErrorSpan":
        """Build a span from the ``{word, index, length}`` wire shape."""
        return cls(word=data["word"], text_offset=data["index"], text_length=data["length"])


@dataclass(frozen=True)
class ResolvedAnnotation:
    """
    An error span expressed in current document coordinates.

    Attributes:
        document_start: First document position covered by the marker
        document_end: Position just past the marked word
        word: The word reported by the checker, for the suggestions UI
    """

    document_start: int
    document_end: int
    word: str

    def __post_init__(self) -> None:
        if self.document_start < 0:
            raise ValueError("document_start must be non-negative")
        if self.document_end <= self.document_start:
            raise ValueError("document_end must be greater than document_start")

    @property
    def length(self) -> int:
        return self.document_end - self.document_start

    def contains_position(self, position: int) -> bool:
        return self.document_start <= position < self.document_end

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.document_start,
            "to": self.document_end,
            "word": self.word,
        }
