"""Name canonicalization used by every matcher.

Order matters: parenthesised content is dropped before punctuation so that
"Makati Medical Center (MMC)" becomes "makati medical center" with no
stray bracket remnants.
"""

import re

_PARENTHETICAL = re.compile(r"\s*\([^)]*\)\s*")
_WHITESPACE = re.compile(r"\s+")
_PUNCTUATION = re.compile(r"[.,\-_]")
_WORD = re.compile(r"[a-z0-9]+")


def normalize(raw: str | None) -> str:
    """Lower-case, drop parentheticals and `.,-_`, collapse whitespace."""
    if not raw:
        return ""

    name = raw.lower().strip()
    name = _PARENTHETICAL.sub(" ", name)
    name = _WHITESPACE.sub(" ", name)
    name = _PUNCTUATION.sub(" ", name)
    name = _WHITESPACE.sub(" ", name)
    return name.strip()


def abbreviation(name: str | None) -> str:
    """First token plus the first three characters of the second token.

    "JKS Technology" -> "jks tec". A single-token name is returned as is.
    """
    words = normalize(name).split()
    if not words:
        return ""
    if len(words) == 1:
        return words[0]
    return f"{words[0]} {words[1][:3]}"


def first_words(name: str | None, count: int = 2) -> str:
    return " ".join(normalize(name).split()[:count])


def tokens(name: str | None) -> set[str]:
    """Alphanumeric word tokens of the normalized name, reading `&` as `and`."""
    return set(_WORD.findall(normalize(name).replace("&", " and ")))
