"""Tesseract adapter that turns an image into an :class:`OcrResult`."""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Sequence, Tuple

from PIL import Image

from .ocr_types import OcrBlock, OcrLine, OcrResult

try:
    import pytesseract
except ImportError:
    pytesseract = None  # type: ignore

logger = logging.getLogger(__name__)

LineKey = Tuple[int, int, int]  # (block_num, par_num, line_num)


def ocr_result_from_tesseract_data(data: Mapping[str, Sequence]) -> OcrResult:
    """Group word-level ``image_to_data`` output into blocks and lines.

    Words are joined with single spaces in the order Tesseract reports them.
    Lines are keyed by paragraph and line number inside each block, so a
    block with several paragraphs keeps them as separate lines.
    """
    texts = data.get("text") or []
    block_nums = data.get("block_num") or []
    par_nums = data.get("par_num") or []
    line_nums = data.get("line_num") or []

    block_order: List[int] = []
    lines_by_block: Dict[int, Dict[LineKey, List[str]]] = {}
    for idx, raw in enumerate(texts):
        word = str(raw).strip() if raw is not None else ""
        if not word:
            continue
        block = int(block_nums[idx])
        key = (block, int(par_nums[idx]), int(line_nums[idx]))
        if block not in lines_by_block:
            block_order.append(block)
            lines_by_block[block] = {}
        lines_by_block[block].setdefault(key, []).append(word)

    blocks = tuple(
        OcrBlock(
            lines=tuple(
                OcrLine(" ".join(words)) for words in lines_by_block[block].values()
            )
        )
        for block in block_order
    )
    return OcrResult(blocks=blocks)


def recognize_text(image: Image.Image, *, lang: str = "eng", config: str = "") -> OcrResult:
    """Run Tesseract on ``image`` and return its text grouped by block and line."""
    if pytesseract is None:
        logger.warning("pytesseract is not installed; returning an empty OCR result")
        return OcrResult()

    data = pytesseract.image_to_data(
        image, lang=lang, config=config, output_type=pytesseract.Output.DICT
    )
    result = ocr_result_from_tesseract_data(data)
    logger.debug("recognize_text: %d blocks, %d lines", len(result.blocks), len(result.lines()))
    return result
