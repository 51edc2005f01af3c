"""Payment-card field extraction from OCR text.

This package exposes the field extractor, the image preprocessing used
before OCR, and the pipeline that ties them to Tesseract.
"""

from .card_networks import get_card_type, is_card_number_valid  # noqa: F401
from .config import ScannerSettings  # noqa: F401
from .field_extractor import (  # noqa: F401
    extract_card_details,
    get_expiry_date,
    set_values_from_ocr_result,
)
from .image_preprocess import adjust_contrast, preprocess_for_ocr, scale_image  # noqa: F401
from .ocr_types import CardNetwork, ExtractedCard, OcrBlock, OcrLine, OcrResult  # noqa: F401
from .scanner import scan_frame, scan_frames, scan_image, scan_image_bytes  # noqa: F401
