# foia_intel/logic/validators.py

"""Secondary validation and masking for detected PII values."""

import re
import logging
from typing import Iterable, Tuple

logger = logging.getLogger(__name__)

MASK = "***"


class ValidationLogic:
    """Utility methods for validation algorithms."""

    # Pre-compiled regex patterns for performance
    NON_DIGIT = re.compile(r"[^0-9]")

    @staticmethod
    def luhn_check(digits: str) -> bool:
        """Performs Modulus 10 (Luhn) checksum validation.

        Args:
            digits: Numeric string to validate

        Returns:
            True if checksum is valid
        """
        if not digits.isdigit():
            return False

        total = 0
        reverse_digits = digits[::-1]

        for i, digit in enumerate(reverse_digits):
            n = int(digit)
            if i % 2 == 1:
                n *= 2
                if n > 9:
                    n -= 9
            total += n

        return total % 10 == 0

    @staticmethod
    def digits_only(text: str) -> str:
        return ValidationLogic.NON_DIGIT.sub("", text)


def validate_credit_card(number: str) -> bool:
    """Checks a card-like number for a plausible length and a valid Luhn checksum.

    Args:
        number: Matched card text, separators allowed

    Returns:
        True if the digits are 13-19 long and pass the Luhn check
    """
    digits = ValidationLogic.digits_only(number)
    if not (13 <= len(digits) <= 19):
        return False
    return ValidationLogic.luhn_check(digits)


def validate_ssn(ssn: str) -> bool:
    """Applies SSN structural rules to a ``DDD-DD-DDDD`` value.

    The area may not be 000, 666 or 900-999; group and serial may not be
    all zeros.
    """
    parts = ssn.split("-")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        return False

    area, group, serial = (int(p) for p in parts)

    if area == 0 or area == 666 or area >= 900:
        return False
    if group == 0 or serial == 0:
        return False

    return True


def mask_value(value: str) -> str:
    """Partially masks a sensitive value for storage.

    Keeps the first and last two characters, e.g. ``***12...89***``.
    """
    return f"***{value[:2]}...{value[-2:]}***"


def mask_window(
    text: str, window_start: int, window_end: int, spans: Iterable[Tuple[int, int]]
) -> str:
    """Returns ``text[window_start:window_end]`` with masked spans.

    Every (start, end) span overlapping the window is replaced by ``***``
    by offset; overlapping or touching spans collapse into one marker.

    Args:
        text: Full source text
        window_start: First character of the window
        window_end: End of the window (exclusive)
        spans: Character ranges to mask, in any order

    Returns:
        The masked window
    """
    pieces = []
    cursor = window_start

    for start, end in sorted(spans):
        start, end = max(start, window_start), min(end, window_end)
        if end <= start or end <= cursor:
            continue
        if start > cursor:
            pieces.append(text[cursor:start])
            pieces.append(MASK)
        elif not pieces or pieces[-1] != MASK:
            pieces.append(MASK)
        cursor = end

    pieces.append(text[cursor:window_end])
    return "".join(pieces)
