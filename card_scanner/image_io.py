"""Image decoding helpers for the scanning pipeline."""

from __future__ import annotations

from io import BytesIO
from typing import cast

import cv2
import numpy as np
from PIL import Image


def load_rgb_image(image_bytes: bytes) -> Image.Image:
    """Decode image bytes into an RGB PIL Image."""
    try:
        img = cast(Image.Image, Image.open(BytesIO(image_bytes)))
        img.load()
    except Exception as exc:
        raise ValueError("Invalid image bytes") from exc

    if img.mode != "RGB":
        img = img.convert("RGB")
    return img


def image_from_bgr_frame(frame: np.ndarray) -> Image.Image:
    """Convert an OpenCV frame (BGR, BGRA or grayscale) into an RGB PIL Image."""
    if frame is None or frame.size == 0:
        raise ValueError("Empty frame")

    if frame.ndim == 2:
        rgb = cv2.cvtColor(frame, cv2.COLOR_GRAY2RGB)
    elif frame.shape[2] == 4:
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGRA2RGB)
    else:
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
    return Image.fromarray(rgb)
