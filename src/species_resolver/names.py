"""
Name normalization for noisy taxonomic strings.

Upstream records mix vernacular names, scientific names with author/year
citations, and placeholders like ``"Turdus sp."``. Everything here is pure;
"could not clean this" is an empty string, never an exception, because it
is the common case rather than an error.

Usage::

    sanitize("Lithobates catesbeianus, (Shaw, 1802)")   # "Lithobates catesbeianus"
    extract_binomial("Passer domesticus (Linnaeus, 1758)")  # "Passer domesticus"
    format_for_display("", "PASSER DOMESTICUS")         # "Passer domesticus"
"""

from __future__ import annotations

import re

from species_resolver.models import SpeciesCandidate
from species_resolver.reference.fallbacks import SCIENTIFIC_TO_COMMON
from species_resolver.reference.taxa import TaxonomicClass, infer_habitat

UNKNOWN_SPECIES = "Unknown Species"

_WHITESPACE = re.compile(r"\s+")
_PARENTHETICAL = re.compile(r"\([^)]*\)")
# ", Author, 1869" / "Author, 1869" / ", 1869" and anything after the year
_CITATION_TAIL = re.compile(
    r"(?:\s+[A-Z][^\s,\d]*(?:\s+(?:&|and|et|ex)\s+[A-Z][^\s,\d]*)*)?"
    r"\s*,\s*(?:[^,\d]+,\s*)?\d{3,4}\b.*$"
)
_DIGITS = re.compile(r"\d")
_CURLY_QUOTES = str.maketrans({"‘": "'", "’": "'", "“": "'", "”": "'"})
_DISALLOWED = re.compile(r"[^\w\s'\-.]|_")
_SHORTHAND = re.compile(r"\b(?:sp|spp|cf|aff|var|subsp|ssp|forma?)\b\.?", re.IGNORECASE)
_EDGE_PUNCTUATION = " ,-."
_PLACEHOLDER = re.compile(r"\b(?:sp|spp|species|unidentified|unknown|indet|gen)\b", re.IGNORECASE)
_NAME_TOKEN = re.compile(r"^[^\W\d_]+(?:-[^\W\d_]+)*$")


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def _strip_citation(text: str) -> str:
    text = _PARENTHETICAL.sub(" ", text)
    return _CITATION_TAIL.sub("", text)


def sanitize(raw: object) -> str:
    """Clean a raw name down to letters, spaces, apostrophes, hyphens and dots.

    Returns ``""`` when fewer than two characters survive. Idempotent.
    """
    if not isinstance(raw, str):
        return ""
    cleaned = _strip_citation(_collapse(raw))
    cleaned = _DIGITS.sub("", cleaned)
    cleaned = cleaned.translate(_CURLY_QUOTES)
    cleaned = _DISALLOWED.sub("", cleaned)
    cleaned = _SHORTHAND.sub(" ", cleaned)
    cleaned = _collapse(cleaned).strip(_EDGE_PUNCTUATION)
    cleaned = _collapse(cleaned)
    if len(cleaned) < 2:
        return ""
    return cleaned


def is_valid_common_name(name: object) -> bool:
    """Reject short strings, digits and placeholder names."""
    if not isinstance(name, str):
        return False
    s = name.strip()
    if len(s) < 3:
        return False
    if _DIGITS.search(s):
        return False
    return not _PLACEHOLDER.search(s)


def extract_binomial(scientific: object) -> str:
    """Return ``"Genus epithet"`` from a scientific name, or ``""``.

    A single word (a genus or higher taxon) is never returned as a binomial.
    """
    if not isinstance(scientific, str):
        return ""
    tokens = [t.strip(",.;:'") for t in _strip_citation(_collapse(scientific)).split()]
    tokens = [t for t in tokens if t]
    if len(tokens) < 2:
        return ""
    genus, epithet = tokens[0], tokens[1]
    if not (_NAME_TOKEN.match(genus) and _NAME_TOKEN.match(epithet)):
        return ""
    # A capitalised second word means a vernacular name like "House Sparrow"
    if epithet[0].isupper() and not (genus.isupper() and epithet.isupper()):
        return ""
    if _PLACEHOLDER.fullmatch(epithet) or _SHORTHAND.fullmatch(epithet):
        return ""
    return f"{genus} {epithet}"


def capitalize_words(text: str) -> str:
    """Title-case each space-separated word (``"blue jay"`` → ``"Blue Jay"``)."""
    return " ".join(w[:1].upper() + w[1:].lower() for w in text.split(" ") if w)


def format_binomial(binomial: str) -> str:
    """``"PASSER DOMESTICUS"`` → ``"Passer domesticus"``."""
    genus, epithet = binomial.split(" ", 1)
    return f"{genus[:1].upper()}{genus[1:].lower()} {epithet.lower()}"


def format_for_display(common_name: str, scientific_name: str) -> str:
    """Pick the best displayable name.

    Order: validated common name (title-cased), ``Genus species``, the
    title-cased scientific token, then the ``Unknown Species`` sentinel.
    """
    cleaned_common = sanitize(common_name)
    if is_valid_common_name(cleaned_common):
        return capitalize_words(cleaned_common)
    binomial = extract_binomial(scientific_name)
    if binomial:
        return format_binomial(binomial)
    token = sanitize(scientific_name)
    if token:
        return capitalize_words(token)
    return UNKNOWN_SPECIES


def build_candidate(
    common_name: str,
    scientific_name: str,
    taxon: TaxonomicClass,
    source: str,
) -> SpeciesCandidate | None:
    """Normalize one raw (common, scientific) pair into a candidate.

    Falls back to the curated scientific→common table when the common name
    is unusable. Returns None when nothing displayable is left.
    """
    binomial = extract_binomial(scientific_name)
    common = sanitize(common_name)
    if not is_valid_common_name(common):
        common = SCIENTIFIC_TO_COMMON.get(format_binomial(binomial), "") if binomial else ""

    display = format_for_display(common, binomial or scientific_name)
    if display == UNKNOWN_SPECIES:
        return None
    is_binomial = bool(binomial) and display == format_binomial(binomial)
    if not is_valid_common_name(display) and not is_binomial:
        return None

    return SpeciesCandidate(
        name=display,
        scientific_name=format_binomial(binomial) if binomial else "",
        type=taxon.singular,
        habitat=infer_habitat(display, taxon.name),
        source=source,
    )
