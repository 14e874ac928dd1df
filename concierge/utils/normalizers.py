"""
Text normalizers used to compare venue names coming from different sources.
Google may return "Dante’s HiFi" or "DANTE'S HIFI" for the same venue; both
must compare equal.
"""

import re
import unicodedata
from typing import Optional

_APOSTROPHES = re.compile(r"['`‘’ʼ´]")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_name(text: Optional[str]) -> str:
    """
    Normalize a venue name for matching.

    Lowercases, decomposes Unicode and drops combining marks, strips
    apostrophes and backticks, collapses every other run of
    non-alphanumerics to a single space and trims.

    >>> normalize_name("Dante’s HiFi")
    'dantes hifi'
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text.lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    stripped = _APOSTROPHES.sub("", stripped)
    return _NON_ALNUM.sub(" ", stripped).strip()
