"""
Location and employer name normalization shared by the resolvers.
"""

import re
from typing import Optional

STATE_NAMES = {
    "AL": "Alabama", "AK": "Alaska", "AZ": "Arizona", "AR": "Arkansas",
    "CA": "California", "CO": "Colorado", "CT": "Connecticut", "DE": "Delaware",
    "FL": "Florida", "GA": "Georgia", "HI": "Hawaii", "ID": "Idaho",
    "IL": "Illinois", "IN": "Indiana", "IA": "Iowa", "KS": "Kansas",
    "KY": "Kentucky", "LA": "Louisiana", "ME": "Maine", "MD": "Maryland",
    "MA": "Massachusetts", "MI": "Michigan", "MN": "Minnesota", "MS": "Mississippi",
    "MO": "Missouri", "MT": "Montana", "NE": "Nebraska", "NV": "Nevada",
    "NH": "New Hampshire", "NJ": "New Jersey", "NM": "New Mexico", "NY": "New York",
    "NC": "North Carolina", "ND": "North Dakota", "OH": "Ohio", "OK": "Oklahoma",
    "OR": "Oregon", "PA": "Pennsylvania", "RI": "Rhode Island", "SC": "South Carolina",
    "SD": "South Dakota", "TN": "Tennessee", "TX": "Texas", "UT": "Utah",
    "VT": "Vermont", "VA": "Virginia", "WA": "Washington", "WV": "West Virginia",
    "WI": "Wisconsin", "WY": "Wyoming", "DC": "District of Columbia",
}

STATE_CODES = {name.lower(): code for code, name in STATE_NAMES.items()}

# Abbreviations seen in scraped postings
STATE_ABBREVIATIONS = {
    "calif": "CA", "cal": "CA", "conn": "CT", "del": "DE", "fla": "FL",
    "ill": "IL", "ind": "IN", "kan": "KS", "ken": "KY", "mass": "MA",
    "mich": "MI", "minn": "MN", "miss": "MS", "neb": "NE", "nev": "NV",
    "ore": "OR", "tenn": "TN", "tex": "TX", "wash": "WA", "wva": "WV",
    "wisc": "WI", "wyo": "WY",
}

CITY_PREFIXES = {"st": "St.", "ft": "Ft.", "mt": "Mt."}


def normalize_state(value: Optional[str]) -> Optional[str]:
    """
    Convert a state name or abbreviation to its two-letter code.

    Unrecognized names fall back to their first two letters, uppercased.
    """
    if not value:
        return None

    normalized = value.strip().lower().rstrip(".")
    if not normalized:
        return None
    if len(normalized) == 2:
        return normalized.upper()
    if normalized in STATE_CODES:
        return STATE_CODES[normalized]
    if normalized in STATE_ABBREVIATIONS:
        return STATE_ABBREVIATIONS[normalized]
    return normalized[:2].upper()


def normalize_city(value: Optional[str]) -> Optional[str]:
    """Capitalize each word, expanding St/Ft/Mt to their dotted forms."""
    if not value:
        return None

    words = value.strip().split()
    if not words:
        return None
    return " ".join(
        CITY_PREFIXES.get(word.lower(), word[:1].upper() + word[1:].lower())
        for word in words
    )


def state_full_name(code: str) -> str:
    """Full state name for a two-letter code; unknown codes pass through."""
    return STATE_NAMES.get(code.upper(), code)


def generate_employer_slug(name: Optional[str]) -> Optional[str]:
    """URL-friendly slug, e.g. "Cleveland Clinic" -> "cleveland-clinic"."""
    if not name:
        return None
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-") or None
