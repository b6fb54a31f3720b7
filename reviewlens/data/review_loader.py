"""
Review Loader
=============

Reads a business's reviews from PostgreSQL and hands them to the engine as
raw dict rows. The column names are the scraper export's (camelCase, quoted);
the field accessor resolves them, so no renaming happens here.

Usage:
    from reviewlens.api import db
    from reviewlens.data.review_loader import load_reviews_for_business

    with db.get_connection() as conn:
        rows = load_reviews_for_business(conn, "acme-coffee", limit=2000)
"""

import logging
from typing import Any, Dict, List

logger = logging.getLogger(__name__)

REVIEW_COLUMNS = (
    "id",
    "name",
    "stars",
    "text",
    "publishedatdate",
    '"responseFromOwnerText"',
    "sentiment",
    '"staffMentioned"',
    '"mainThemes"',
    '"originalLanguage"',
)

_SELECT_LIST = ", ".join(REVIEW_COLUMNS)

_LOAD_REVIEWS_SQL = f"""
    SELECT {_SELECT_LIST}
    FROM reviews
    WHERE business_id = %s
    ORDER BY publishedatdate DESC NULLS LAST
    LIMIT %s
"""


def _column_key(column: str) -> str:
    return column.strip('"')


def load_reviews_for_business(conn, business_id: str, limit: int = 5000) -> List[Dict[str, Any]]:
    """
    Load the most recent reviews of one business.

    Args:
        conn: psycopg2 connection
        business_id: Business identifier
        limit: Maximum number of rows

    Returns:
        Raw review rows (newest first), keyed by the export's column names
    """
    cur = conn.cursor()
    try:
        cur.execute(_LOAD_REVIEWS_SQL, (business_id, limit))
        rows = cur.fetchall()
    finally:
        cur.close()

    keys = [_column_key(c) for c in REVIEW_COLUMNS]
    records = [dict(zip(keys, row)) for row in rows]
    logger.info(
        f"Loaded {len(records)} reviews for business {business_id}",
        extra={"business_id": business_id, "review_count": len(records), "stage": "load"},
    )
    return records
