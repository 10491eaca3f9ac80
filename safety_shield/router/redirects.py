# safety_shield/router/redirects.py
# Purpose: Map dangerous science questions to a safe activity that shows the
# same principle. Only consulted when dangerous_activity was detected.

from __future__ import annotations

from typing import Dict, Optional, Tuple

KEY_SEPARATOR = " + "

# Composite key ("a + b") -> suggestion; every keyword must appear in the query.
SAFE_SCIENCE_REDIRECTS: Dict[str, str] = {
    "pressure + chemicals": (
        "Explore how pressure works safely with a sealed bottle of soda! "
        "Observe what happens when you shake it vs. open it slowly."
    ),
    "fire + chemistry": (
        "Learn about combustion safely with a candle experiment! "
        "Observe how oxygen affects flame size."
    ),
    "electricity + water": (
        "Discover electrical conductivity safely with a battery, LED, and saltwater solution."
    ),
    "explosion + science": (
        'Create a safe "explosion" with baking soda and vinegar in a sealed bag!'
    ),
}

GENERIC_SCIENCE_REDIRECT = (
    "Let's explore this concept safely! I can show you a safe experiment "
    "that demonstrates the same scientific principle."
)


def split_key(key: str) -> Tuple[str, ...]:
    return tuple(k.strip() for k in key.split(KEY_SEPARATOR) if k.strip())


def match_redirect(query: str, table: Dict[str, str] | None = None) -> Optional[str]:
    """First mapping whose keywords are all substrings of the query (case-insensitive)."""
    table = SAFE_SCIENCE_REDIRECTS if table is None else table
    q = (query or "").lower()
    for key, suggestion in table.items():
        keywords = split_key(key)
        if keywords and all(kw.lower() in q for kw in keywords):
            return suggestion
    return None


def resolve_redirect(
    query: str,
    safe_alternative: str | None = None,
    table: Dict[str, str] | None = None,
) -> str:
    """Table match, else the rule's captured alternative, else a generic sentence."""
    return match_redirect(query, table) or safe_alternative or GENERIC_SCIENCE_REDIRECT
