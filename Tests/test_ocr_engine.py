import logging
from types import SimpleNamespace

import pytest
from PIL import Image

from card_scanner import ocr_engine
from card_scanner.ocr_engine import ocr_result_from_tesseract_data, recognize_text
from card_scanner.ocr_types import OcrResult


def _tesseract_data():
    # level: 1 page, 2 block, 3 paragraph, 4 line, 5 word
    return {
        "level": [1, 2, 3, 4, 5, 5, 4, 5, 2, 3, 4, 5, 5],
        "block_num": [0, 1, 1, 1, 1, 1, 1, 1, 2, 2, 2, 2, 2],
        "par_num": [0, 0, 1, 1, 1, 1, 1, 1, 0, 1, 1, 1, 1],
        "line_num": [0, 0, 0, 1, 1, 1, 2, 2, 0, 0, 1, 1, 1],
        "word_num": [0, 0, 0, 0, 1, 2, 0, 1, 0, 0, 0, 1, 2],
        "conf": ["-1", "-1", "-1", "-1", "91", "90", "-1", "88", "-1", "-1", "-1", "95", "93"],
        "text": ["", "", "", "", "4532", "0151", "", "08/25", "", "", " ", "JOHN", "DOE"],
    }


def test_ocr_result_from_tesseract_data_groups_blocks_and_lines():
    result = ocr_result_from_tesseract_data(_tesseract_data())

    assert len(result.blocks) == 2
    assert [line.text for line in result.blocks[0].lines] == ["4532 0151", "08/25"]
    assert [line.text for line in result.blocks[1].lines] == ["JOHN DOE"]
    assert result.lines() == ["4532 0151", "08/25", "JOHN DOE"]


def test_ocr_result_from_tesseract_data_empty():
    assert ocr_result_from_tesseract_data({}) == OcrResult()


def test_recognize_text_without_pytesseract(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
):
    monkeypatch.setattr(ocr_engine, "pytesseract", None)
    with caplog.at_level(logging.WARNING, logger=ocr_engine.__name__):
        result = recognize_text(Image.new("RGB", (10, 10)))

    assert result == OcrResult()
    assert any("pytesseract is not installed" in r.getMessage() for r in caplog.records)


def test_recognize_text_passes_options_to_tesseract(monkeypatch: pytest.MonkeyPatch):
    calls = []

    def _image_to_data(image, lang, config, output_type):
        calls.append((image.size, lang, config, output_type))
        return _tesseract_data()

    stub = SimpleNamespace(
        image_to_data=_image_to_data, Output=SimpleNamespace(DICT="dict")
    )
    monkeypatch.setattr(ocr_engine, "pytesseract", stub)

    result = recognize_text(Image.new("RGB", (8, 6)), lang="eng+kor", config="--psm 6")

    assert calls == [((8, 6), "eng+kor", "--psm 6", "dict")]
    assert result.lines()[0] == "4532 0151"
