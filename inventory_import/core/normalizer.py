from __future__ import annotations

import re
import unicodedata

"""Text canonicalization for case/diacritic/punctuation-insensitive matching."""

__all__ = [
    "normalize",
]

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")


def normalize(text: object) -> str:
    """Canonicalize text for header comparison.

    Lower-cases, strips diacritics (NFD + drop combining marks) and removes
    everything except ASCII letters and digits. None and empty input give "".

    >>> normalize("Validáde ")
    'validade'
    >>> normalize("Código de Barras")
    'codigodebarras'
    """
    if text is None:
        return ""
    s = str(text).lower()
    if not s:
        return ""
    decomposed = unicodedata.normalize("NFD", s)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _NON_ALNUM_RE.sub("", stripped).strip()
