# plotgrade/aesthetics.py

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

# British spellings rewritten before any comparison
SPELLING_VARIANTS: dict[str, str] = {"colour": "color"}


def canonical_aesthetic(name: str) -> str:
    """Normalize an aesthetic name for comparison.

    Lower-cases and unifies spelling variants, so "Colour", "colour" and
    "color" all become "color". Idempotent.
    """
    key = name.lower()
    for variant, canonical in SPELLING_VARIANTS.items():
        key = key.replace(variant, canonical)
    return key


def canonical_mapping(mapping: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Canonicalize the keys of an aesthetic mapping table.

    Accepts plain dicts and plotnine `aes` objects. None becomes {}.
    """
    if not mapping:
        return {}
    return {canonical_aesthetic(k): v for k, v in mapping.items()}


def canonical_aesthetics(names: str | Iterable[str]) -> set[str]:
    """Canonicalize one aesthetic name or a collection of them."""
    if isinstance(names, str):
        names = [names]
    return {canonical_aesthetic(n) for n in names}
