"""
ReviewLens Review Model
=======================

Normalization of raw review rows coming from heterogeneous sources
(camelCase scraper exports, snake_case database rows).

Modules:
    field_accessor: Alias table and tolerant parsers for every review field
    review_models: Immutable Review built from a raw row
    theme_lexicon: Theme tag -> dashboard category mapping
"""

from .review_models import Review, Sentiment, as_reviews
from .theme_lexicon import THEME_CATEGORY_LEXICON, categorize_theme
