#!/usr/bin/env python3
"""
MRZ Text Parsing Script

Runs the line sanitizer and the TD3 quick parser on recognized OCR text.

Usage:
    python scripts/parse_mrz_text.py recognized.txt
    tesseract passport.png - | python scripts/parse_mrz_text.py
    python scripts/parse_mrz_text.py recognized.txt --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.mrz import find_quick_result, sanitize_lines


def parse_text(text: str) -> dict:
    """
    Sanitize recognized text and extract the quick MRZ fields.

    Args:
        text: Recognized text, one OCR line per text line

    Returns:
        Dictionary with the sanitized lines and the quick result (or None)
    """
    lines = sanitize_lines(text) or []
    result = find_quick_result([line.replace(" ", "") for line in text.split("\n")])
    return {
        "sanitized_lines": lines,
        "quick_result": result.to_dict() if result else None,
    }


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Extract passport number and dates from recognized MRZ text"
    )
    parser.add_argument(
        "input",
        type=Path,
        nargs="?",
        help="Text file with recognized lines (default: read stdin)",
    )
    parser.add_argument("--json", action="store_true", help="Print result as JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.input is not None:
        if not args.input.exists():
            print(f"Input file not found: {args.input}", file=sys.stderr)
            return 2
        text = args.input.read_text(encoding="utf-8")
    else:
        text = sys.stdin.read()

    parsed = parse_text(text)

    if args.json:
        print(json.dumps(parsed, indent=2))
    else:
        print("Sanitized lines:")
        for line in parsed["sanitized_lines"]:
            print(f"  {line}")
        print()
        quick = parsed["quick_result"]
        if quick is None:
            print("✗ No valid TD3 second line found")
        else:
            print(f"✓ Passport number: {quick['passport_number']}")
            print(f"  Birth date:      {quick['birth_date']}")
            print(f"  Expiry date:     {quick['expiry_date']}")

    return 0 if parsed["quick_result"] is not None else 1


if __name__ == "__main__":
    sys.exit(main())
