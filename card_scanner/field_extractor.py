"""Card field extraction from OCR text lines.

The scan is a heuristic over untyped OCR strings: every line is tested for
expiry-date candidates and for a full card-number match, and a result is only
reported once both fields have been found in the same OCR pass. Callers are
expected to keep feeding new frames until that happens.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from .card_networks import get_card_type, is_card_number_valid
from .ocr_types import ExtractedCard, OcrResult

logger = logging.getLogger(__name__)

CardDetailsCallback = Callable[[str, str, str, str], None]

DATE_TOKEN_LENGTH = 5


def normalize_line(text: Optional[str]) -> str:
    """Return ``text`` trimmed, or an empty string for ``None``."""
    if text is None:
        return ""
    return text.strip()


def collect_date_candidates(line: str) -> List[str]:
    """Return the 5-character, slash-bearing tokens in a normalised line."""
    if "/" not in line:
        return []
    if len(line) == DATE_TOKEN_LENGTH:
        return [line]
    if len(line) > DATE_TOKEN_LENGTH:
        return [
            token
            for token in line.split(" ")
            if len(token) == DATE_TOKEN_LENGTH and "/" in token
        ]
    return []


def _year_of(candidate: str) -> int:
    try:
        return int(candidate[-2:])
    except ValueError:
        return 0


def get_expiry_date(candidates: Sequence[str]) -> str:
    """Pick the expiry date with the highest two-digit year.

    Ties go to the first candidate in scan order. A maximum year of ``0`` is
    treated as "no date", so ``xx/00`` can never be selected.
    """
    if not candidates:
        return ""
    max_year = max(_year_of(candidate) for candidate in candidates)
    if max_year == 0:
        return ""
    for candidate in candidates:
        if _year_of(candidate) == max_year:
            return candidate
    return ""


def scan_lines(lines: Iterable[Optional[str]]) -> Tuple[str, List[str]]:
    """Scan OCR lines for a card number and expiry-date candidates.

    Returns:
        The last card number matched (spaces stripped, or ``""``) and all date
        candidates in scan order.
    """
    card_number = ""
    candidates: List[str] = []
    for raw in lines:
        line = normalize_line(raw)
        candidates.extend(collect_date_candidates(line))
        if is_card_number_valid(line):
            card_number = line.replace(" ", "")
    return card_number, candidates


def extract_card_details(ocr_result: Optional[OcrResult]) -> Optional[ExtractedCard]:
    """Return the card read from ``ocr_result`` or ``None`` if the scan is inconclusive."""
    if ocr_result is None:
        return None

    card_number, candidates = scan_lines(ocr_result.lines())
    expiry_date = get_expiry_date(candidates)
    if not card_number or not expiry_date:
        logger.debug(
            "Scan inconclusive: card number %s, %d date candidates",
            "found" if card_number else "missing",
            len(candidates),
        )
        return None

    network = get_card_type(card_number)
    return ExtractedCard(
        card_number=card_number,
        expiry_date=expiry_date,
        card_type=network.name,
        card_icon=network.icon,
    )


def set_values_from_ocr_result(
    ocr_result: Optional[OcrResult], card_details: CardDetailsCallback
) -> None:
    """Invoke ``card_details`` with the extracted fields, only on a full match."""
    card = extract_card_details(ocr_result)
    if card is not None:
        card_details(*card.as_tuple())
