"""
Card name normalization.

Turns a raw card name (from the missing-list sheet or from the vision model)
into a comparison key:

1. lowercase
2. strip surrounding whitespace
3. drop variant/rarity qualifiers (ex, gx, vmax, lv.x, alolan, ...)
4. keep only [a-z0-9]
5. undo common OCR digit confusions (0 -> o, 1 -> l, 5 -> s)

The qualifier and confusable tables live in dictionaries/name_tokens.yaml and
are loaded once at import.
"""
import pathlib
import re
from types import MappingProxyType

import yaml


DICT_PATH = pathlib.Path(__file__).resolve().parent / "dictionaries" / "name_tokens.yaml"

_DICT = yaml.safe_load(DICT_PATH.read_text(encoding="utf-8"))

QUALIFIER_TOKENS = frozenset(t.lower() for t in _DICT["qualifiers"])
CONFUSABLES = MappingProxyType({str(k): str(v) for k, v in _DICT["confusables"].items()})


def _token_pattern(token: str) -> str:
    # "lv x" should also catch "lv.x", "lv. x" and "lvx"
    return re.escape(token).replace(r"\ ", r"[.\s]*")


# Longest first so "vmax" is consumed whole before "v" gets a chance.
_QUALIFIER_RE = re.compile(
    r"\s*(?<![a-z0-9])(?:"
    + "|".join(_token_pattern(t) for t in sorted(QUALIFIER_TOKENS, key=len, reverse=True))
    + r")(?![a-z0-9])\s*",
    re.IGNORECASE,
)
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")
_CONFUSABLE_TABLE = str.maketrans(dict(CONFUSABLES))


def normalize_name(raw: str) -> str:
    """
    Normalize a card name into its comparison key.

    Never raises; empty or punctuation-only input gives "".

    >>> normalize_name("Pikachu VMAX")
    'pikachu'
    >>> normalize_name("Mr. Mime")
    'mrmime'
    """
    if not raw:
        return ""
    s = raw.lower().strip()
    s = _QUALIFIER_RE.sub("", s)
    s = _NON_ALNUM_RE.sub("", s)
    return s.translate(_CONFUSABLE_TABLE)
