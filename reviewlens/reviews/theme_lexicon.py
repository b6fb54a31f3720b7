"""
Theme Category Lexicon (Deterministic)
======================================

Maps free-form theme tags ("coffee quality", "friendly staff", "long wait")
onto a small set of dashboard categories using a keyword table. No NLP:
fast, explainable, reproducible.

Usage:
    categorize_theme("Coffee quality")   # -> "Food & Drink"
    categorize_theme("parking")          # -> "Location & Access"
    categorize_theme("Live jazz")        # -> "Live Jazz" (own category)
"""

import re
from typing import Dict, List, Pattern, Tuple


# =============================================================================
# HOSPITALITY THEME LEXICON
# =============================================================================
# Each category maps to keywords matched case-insensitively inside the theme
# tag. Order matters: the first category with a matching keyword wins.

THEME_CATEGORY_LEXICON: Dict[str, List[str]] = {
    "Service": [
        "service", "staff", "waiter", "waitress", "server", "barista",
        "friendly", "rude", "attentive", "welcoming", "hospitality",
    ],
    "Wait Time": [
        "wait", "slow", "queue", "line", "delay", "speed", "quick", "fast",
    ],
    "Food & Drink": [
        "food", "coffee", "drink", "taste", "flavor", "flavour", "menu",
        "dish", "meal", "breakfast", "lunch", "dinner", "dessert", "pastry",
        "portion", "quality", "fresh",
    ],
    "Value": [
        "price", "value", "expensive", "cheap", "cost", "overpriced", "worth",
    ],
    "Cleanliness": [
        "clean", "dirty", "hygiene", "toilet", "restroom", "bathroom",
    ],
    "Ambiance": [
        "ambiance", "ambience", "atmosphere", "decor", "music", "noise",
        "noisy", "cozy", "cosy", "vibe", "interior", "view", "terrace",
    ],
    "Location & Access": [
        "location", "parking", "access", "accessible", "wheelchair",
        "neighborhood", "neighbourhood",
    ],
}


# Keywords match at the start of a word: "fast" must not hit "breakfast"
_COMPILED_LEXICON: List[Tuple[str, Pattern]] = [
    (category, re.compile(r"\b(?:" + "|".join(re.escape(k) for k in keywords) + ")"))
    for category, keywords in THEME_CATEGORY_LEXICON.items()
]


def normalize_theme(theme: str) -> str:
    """Canonical display form of a theme tag (collapsed spaces, lowercase)."""
    return " ".join(theme.split()).lower()


def categorize_theme(theme: str) -> str:
    """
    Category of a theme tag.

    Tags that match no keyword become their own category (title-cased), so
    business-specific themes still show up on the dashboard.
    """
    normalized = normalize_theme(theme)
    for category, pattern in _COMPILED_LEXICON:
        if pattern.search(normalized):
            return category
    return normalized.title()
