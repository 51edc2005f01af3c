"""Utility to test the card scanning pipeline locally.

This script reads an image file from disk, runs preprocessing, OCR and
field extraction, and prints the card details it finds. To invoke it, run::

    python scan_local.py --input /path/to/card.jpg

Pass ``--save-preprocessed out.png`` to also write the image that was handed
to the OCR engine. The script is intended solely for local experimentation.
"""
import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from card_scanner import ScannerSettings
from card_scanner.image_io import load_rgb_image
from card_scanner.scanner import prepare_image, scan_image


def main() -> None:
    parser = argparse.ArgumentParser(description="Scan a payment card image locally")
    parser.add_argument("--input", required=True, help="Path to input image")
    parser.add_argument(
        "--max-dimension", type=int, default=None, help="Longest side after scaling"
    )
    parser.add_argument(
        "--save-preprocessed", default=None, help="Write the OCR input image here"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = ScannerSettings.from_env()
    if args.max_dimension:
        settings = replace(settings, max_dimension=args.max_dimension)

    input_path = Path(args.input)
    try:
        image = load_rgb_image(input_path.read_bytes())
    except (OSError, ValueError) as exc:
        print(f"Could not read {input_path}: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.save_preprocessed:
        out_path = Path(args.save_preprocessed)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        prepare_image(image, settings).save(out_path)
        print(f"Saved {out_path}")

    card = scan_image(image, settings=settings)
    if card is None:
        print("No card details detected.")
        return
    print(f"Card number : {card.card_number}")
    print(f"Expiry date : {card.expiry_date}")
    print(f"Card type   : {card.card_type} ({card.card_icon})")


if __name__ == "__main__":
    main()
