"""Environment-driven settings for the scanning pipeline."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .image_preprocess import DEFAULT_CONTRAST, DEFAULT_MAX_DIMENSION

logger = logging.getLogger(__name__)

MAX_DIMENSION_ENV = "CARD_SCANNER_MAX_DIMENSION"
CONTRAST_ENV = "CARD_SCANNER_CONTRAST"
OCR_LANG_ENV = "CARD_SCANNER_OCR_LANG"
OCR_CONFIG_ENV = "CARD_SCANNER_OCR_CONFIG"


def _resolve_positive_int(name: str, value: Optional[str], default: int) -> int:
    if not value or not value.strip():
        return default
    try:
        parsed = int(value.strip())
    except ValueError:
        logger.warning("Invalid %s '%s'; defaulting to %s", name, value, default)
        return default
    if parsed <= 0:
        logger.warning("%s must be positive, got %s; defaulting to %s", name, parsed, default)
        return default
    return parsed


def _resolve_positive_float(name: str, value: Optional[str], default: float) -> float:
    if not value or not value.strip():
        return default
    try:
        parsed = float(value.strip())
    except ValueError:
        logger.warning("Invalid %s '%s'; defaulting to %s", name, value, default)
        return default
    if parsed <= 0:
        logger.warning("%s must be positive, got %s; defaulting to %s", name, parsed, default)
        return default
    return parsed


@dataclass(frozen=True)
class ScannerSettings:
    """Tunables for preprocessing and OCR."""

    max_dimension: int = DEFAULT_MAX_DIMENSION
    contrast: float = DEFAULT_CONTRAST
    ocr_lang: str = "eng"
    ocr_config: str = ""

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ScannerSettings":
        """Build settings from ``CARD_SCANNER_*`` environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            max_dimension=_resolve_positive_int(
                MAX_DIMENSION_ENV, env.get(MAX_DIMENSION_ENV), DEFAULT_MAX_DIMENSION
            ),
            contrast=_resolve_positive_float(
                CONTRAST_ENV, env.get(CONTRAST_ENV), DEFAULT_CONTRAST
            ),
            ocr_lang=(env.get(OCR_LANG_ENV) or "eng").strip() or "eng",
            ocr_config=env.get(OCR_CONFIG_ENV, ""),
        )
