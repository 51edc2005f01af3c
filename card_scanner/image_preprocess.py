"""Image preprocessing to improve OCR accuracy on card photos."""

from __future__ import annotations

import logging
from typing import Sequence, Tuple

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

DEFAULT_MAX_DIMENSION = 640
DEFAULT_CONTRAST = 1.5

# Rec. 709 luminance weights.
_LUMA_R = 0.213
_LUMA_G = 0.715
_LUMA_B = 0.072


def _scaled_size(width: int, height: int, max_dimension: int) -> Tuple[int, int]:
    if height > width:
        return int(max_dimension * float(width) / float(height)), max_dimension
    if width > height:
        return max_dimension, int(max_dimension * float(height) / float(width))
    return max_dimension, max_dimension


def scale_image(image: Image.Image, max_dimension: int = DEFAULT_MAX_DIMENSION) -> Image.Image:
    """Resize ``image`` so its longer side equals ``max_dimension``.

    The shorter side keeps the aspect ratio (truncated to whole pixels). On any
    failure the original image is returned unchanged.
    """
    try:
        width, height = image.size
        new_size = _scaled_size(width, height, max_dimension)
        return image.resize(new_size, resample=Image.Resampling.NEAREST)
    except Exception as exc:
        logger.error("Scale image is unsuccessful, try to resize it: %s", exc)
        return image


def saturation_matrix(saturation: float) -> Tuple[float, ...]:
    """Return a 4x5 RGBA colour matrix that scales colour saturation."""
    inv = 1.0 - saturation
    r = _LUMA_R * inv
    g = _LUMA_G * inv
    b = _LUMA_B * inv
    return (
        r + saturation, g, b, 0.0, 0.0,
        r, g + saturation, b, 0.0, 0.0,
        r, g, b + saturation, 0.0, 0.0,
        0.0, 0.0, 0.0, 1.0, 0.0,
    )


def contrast_matrix(contrast: float) -> Tuple[float, ...]:
    """Return a 4x5 RGBA colour matrix that scales RGB uniformly by ``contrast``."""
    return (
        contrast, 0.0, 0.0, 0.0, 0.0,
        0.0, contrast, 0.0, 0.0, 0.0,
        0.0, 0.0, contrast, 0.0, 0.0,
        0.0, 0.0, 0.0, 1.0, 0.0,
    )


def apply_color_matrix(image: Image.Image, matrix: Sequence[float]) -> Image.Image:
    """Apply a row-major 4x5 RGBA colour matrix and return a new image.

    The fifth column is an additive offset on the 0..255 scale. Images with an
    alpha band come back as RGBA, everything else as RGB.
    """
    if len(matrix) != 20:
        raise ValueError(f"Colour matrix must have 20 entries, got {len(matrix)}")

    has_alpha = "A" in image.getbands()
    pixels = np.asarray(image.convert("RGBA"), dtype=np.float32)
    cm = np.asarray(matrix, dtype=np.float32).reshape(4, 5)

    transformed = pixels @ cm[:, :4].T + cm[:, 4]
    out = np.clip(np.rint(transformed), 0, 255).astype(np.uint8)

    result = Image.fromarray(out)
    if not has_alpha:
        result = result.convert("RGB")
    return result


def adjust_contrast(image: Image.Image, contrast: float) -> Image.Image:
    return apply_color_matrix(image, contrast_matrix(contrast))


def preprocess_for_ocr(image: Image.Image, contrast: float = DEFAULT_CONTRAST) -> Image.Image:
    """Grayscale ``image`` and boost its contrast for OCR."""
    grayscale = apply_color_matrix(image, saturation_matrix(0.0))
    return adjust_contrast(grayscale, contrast)
