"""End-to-end scanning: image -> preprocessing -> OCR -> card fields."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

import numpy as np
from PIL import Image

from .config import ScannerSettings
from .field_extractor import CardDetailsCallback, extract_card_details
from .image_io import image_from_bgr_frame, load_rgb_image
from .image_preprocess import preprocess_for_ocr, scale_image
from .ocr_engine import recognize_text
from .ocr_types import ExtractedCard, OcrResult

logger = logging.getLogger(__name__)

Recognizer = Callable[[Image.Image], OcrResult]


def _resolve(settings: Optional[ScannerSettings], recognizer: Optional[Recognizer]):
    if settings is None:
        settings = ScannerSettings.from_env()
    if recognizer is None:
        lang, config = settings.ocr_lang, settings.ocr_config

        def _recognize(img: Image.Image) -> OcrResult:
            return recognize_text(img, lang=lang, config=config)

        recognizer = _recognize

    return settings, recognizer


def prepare_image(image: Image.Image, settings: Optional[ScannerSettings] = None) -> Image.Image:
    """Scale and grayscale/contrast ``image`` ready for OCR."""
    if settings is None:
        settings = ScannerSettings.from_env()
    scaled = scale_image(image, settings.max_dimension)
    return preprocess_for_ocr(scaled, settings.contrast)


def scan_image(
    image: Image.Image,
    *,
    settings: Optional[ScannerSettings] = None,
    recognizer: Optional[Recognizer] = None,
) -> Optional[ExtractedCard]:
    """Run the full pipeline on a decoded image.

    Returns ``None`` when the frame does not yield both a card number and an
    expiry date.
    """
    settings, recognizer = _resolve(settings, recognizer)
    prepared = prepare_image(image, settings)
    return extract_card_details(recognizer(prepared))


def scan_image_bytes(
    image_bytes: bytes,
    *,
    settings: Optional[ScannerSettings] = None,
    recognizer: Optional[Recognizer] = None,
) -> Optional[ExtractedCard]:
    """Decode ``image_bytes`` and scan it. Undecodable bytes raise ``ValueError``."""
    image = load_rgb_image(image_bytes)
    return scan_image(image, settings=settings, recognizer=recognizer)


def scan_frame(
    frame: np.ndarray,
    *,
    settings: Optional[ScannerSettings] = None,
    recognizer: Optional[Recognizer] = None,
) -> Optional[ExtractedCard]:
    """Scan an OpenCV BGR frame."""
    return scan_image(image_from_bgr_frame(frame), settings=settings, recognizer=recognizer)


def scan_frames(
    frames: Iterable[Image.Image],
    *,
    on_card_details: Optional[CardDetailsCallback] = None,
    settings: Optional[ScannerSettings] = None,
    recognizer: Optional[Recognizer] = None,
) -> Optional[ExtractedCard]:
    """Scan successive frames until one yields a complete card.

    ``on_card_details`` is called once, with ``(card_number, expiry_date,
    card_type, card_icon)``, for the first complete match. Frames after that
    match are not consumed.
    """
    settings, recognizer = _resolve(settings, recognizer)
    for idx, frame in enumerate(frames, 1):
        card = scan_image(frame, settings=settings, recognizer=recognizer)
        if card is None:
            logger.debug("scan_frames: frame %d inconclusive", idx)
            continue
        logger.info("Card detected on frame %d (%s)", idx, card.card_type)
        if on_card_details is not None:
            on_card_details(*card.as_tuple())
        return card

    logger.info("No card details detected in any frame")
    return None
