# core/random_picker.py
import random
import re
from typing import Optional, Sequence

_DIGITS = re.compile(r"\d+")


def pick(listing: Optional[Sequence[str]], fallback: str) -> str:
    """
    Uniform choice from one snapshot, or `fallback` when it is empty/absent.

    Callers pass the snapshot tuple itself, so length and index are read from
    the same immutable value even if the cache swaps in a new one meanwhile.
    """
    if not listing:
        return fallback
    return random.choice(listing)


def extract_leading_number(filename: str) -> int:
    """First run of decimal digits in `filename` as an int; 0 when there is none."""
    m = _DIGITS.search(filename)
    return int(m.group()) if m else 0
