#!/usr/bin/env python
"""
Parse OCR text of a recipe card and print the recipe draft as JSON.

Reads FILE, or stdin when no file is given:

    python scripts/parse_ocr_text.py card.txt --indent 2
"""
import argparse
import logging
import sys

from stook_recipes.app.core.config import get_settings
from stook_recipes.app.services.ocr_recipe_parser import OcrTextValidationError, parse

logging.basicConfig(level=get_settings().log_level.upper())
logger = logging.getLogger("parse_ocr_text")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Parse OCR recipe text into a recipe draft.")
    parser.add_argument("file", nargs="?", type=argparse.FileType("r", encoding="utf-8"), default=sys.stdin)
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")
    args = parser.parse_args(argv)

    if args.file is sys.stdin:
        raw_text = sys.stdin.read()
    else:
        with args.file as handle:
            raw_text = handle.read()

    try:
        recipe = parse(raw_text)
    except OcrTextValidationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(recipe.model_dump_json(by_alias=True, indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
