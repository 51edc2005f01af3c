"""Data structures for OCR output and extracted card details."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple


@dataclass(frozen=True)
class OcrLine:
    """A single line of recognised text."""

    text: str


@dataclass(frozen=True)
class OcrBlock:
    """An ordered group of lines, as reported by the OCR engine."""

    lines: Tuple[OcrLine, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class OcrResult:
    """Structured OCR output: ordered blocks of ordered lines."""

    blocks: Tuple[OcrBlock, ...] = field(default_factory=tuple)

    def lines(self) -> List[str]:
        """Flatten to line strings, block order then line order."""
        return [line.text for block in self.blocks for line in block.lines]

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "OcrResult":
        return cls(blocks=(OcrBlock(lines=tuple(OcrLine(text) for text in lines)),))


@dataclass(frozen=True)
class CardNetwork:
    """Card network label and the icon identifier shown next to it."""

    name: str
    icon: str


@dataclass(frozen=True)
class ExtractedCard:
    """Card fields read from a single OCR pass."""

    card_number: str
    expiry_date: str
    card_type: str
    card_icon: str

    def as_tuple(self) -> Tuple[str, str, str, str]:
        return (self.card_number, self.expiry_date, self.card_type, self.card_icon)
