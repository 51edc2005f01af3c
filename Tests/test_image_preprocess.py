import logging

import pytest
from PIL import Image

from card_scanner import image_preprocess
from card_scanner.image_preprocess import (
    adjust_contrast,
    apply_color_matrix,
    contrast_matrix,
    preprocess_for_ocr,
    saturation_matrix,
    scale_image,
)


@pytest.mark.parametrize(
    "size, expected",
    [
        ((1000, 500), (640, 320)),
        ((500, 1000), (320, 640)),
        ((800, 800), (640, 640)),
        ((1000, 333), (640, 213)),  # truncated, not rounded
        ((320, 160), (640, 320)),  # smaller images are scaled up
    ],
)
def test_scale_image_bounds_longest_side(size, expected):
    img = Image.new("RGB", size, color="white")
    scaled = scale_image(img)
    assert scaled.size == expected
    assert img.size == size


def test_scale_image_custom_max_dimension():
    img = Image.new("RGB", (300, 600))
    assert scale_image(img, max_dimension=100).size == (50, 100)


def test_scale_image_returns_original_on_failure(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
):
    img = Image.new("RGB", (1000, 500))

    def _failing_resize(self, *args, **kwargs):
        raise MemoryError("allocation failed")

    monkeypatch.setattr(Image.Image, "resize", _failing_resize)
    with caplog.at_level(logging.ERROR, logger=image_preprocess.__name__):
        result = scale_image(img)

    assert result is img
    assert result.size == (1000, 500)
    assert any("Scale image is unsuccessful" in r.getMessage() for r in caplog.records)


def test_scale_image_returns_non_image_input_unchanged():
    sentinel = object()
    assert scale_image(sentinel) is sentinel  # type: ignore[arg-type]


def test_saturation_matrix_identity_at_one():
    img = Image.new("RGB", (2, 2), color=(10, 200, 30))
    out = apply_color_matrix(img, saturation_matrix(1.0))
    assert out.getpixel((0, 0)) == (10, 200, 30)


def test_apply_color_matrix_rejects_bad_shape():
    with pytest.raises(ValueError):
        apply_color_matrix(Image.new("RGB", (1, 1)), (1.0, 0.0, 0.0))


def test_adjust_contrast_clamps_and_keeps_alpha():
    img = Image.new("RGBA", (2, 2), color=(40, 100, 200, 90))
    out = adjust_contrast(img, 1.5)
    assert out.mode == "RGBA"
    assert out.getpixel((1, 1)) == (60, 150, 255, 90)


def test_contrast_matrix_scales_rgb_only():
    cm = contrast_matrix(2.0)
    assert cm[0] == cm[6] == cm[12] == 2.0
    assert cm[18] == 1.0
    assert cm[4] == cm[9] == cm[14] == cm[19] == 0.0


def test_preprocess_for_ocr_grayscale_and_contrast():
    img = Image.new("RGB", (4, 3), color=(255, 0, 0))

    out = preprocess_for_ocr(img)

    assert out is not img
    assert out.mode == "RGB"
    assert out.size == (4, 3)
    # 0.213 * 255 -> 54, then * 1.5
    assert out.getpixel((0, 0)) == (81, 81, 81)
    assert img.getpixel((0, 0)) == (255, 0, 0)


def test_preprocess_for_ocr_white_stays_white():
    out = preprocess_for_ocr(Image.new("RGB", (2, 2), color="white"))
    assert out.getpixel((0, 0)) == (255, 255, 255)


def test_preprocess_for_ocr_preserves_alpha():
    img = Image.new("RGBA", (2, 2), color=(255, 0, 0, 128))
    out = preprocess_for_ocr(img)
    assert out.mode == "RGBA"
    assert out.getpixel((0, 0)) == (81, 81, 81, 128)


def test_preprocess_for_ocr_accepts_grayscale_input():
    out = preprocess_for_ocr(Image.new("L", (3, 3), color=100))
    assert out.mode == "RGB"
    assert out.getpixel((0, 0)) == (150, 150, 150)
