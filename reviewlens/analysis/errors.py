"""Exceptions raised by the analysis engine."""

from typing import Optional


class ReviewLensError(Exception):
    """Base exception for analysis errors."""

    def __init__(self, message: str, business_name: Optional[str] = None):
        self.message = message
        self.business_name = business_name
        super().__init__(self.message)


class NoReviewDataError(ReviewLensError):
    """The review collection handed to the engine is empty."""

    def __init__(self, business_name: Optional[str] = None):
        message = "No reviews provided for analysis"
        if business_name:
            message += f" (business: {business_name})"
        super().__init__(message, business_name=business_name)


class InvalidAnalysisConfigError(ReviewLensError, ValueError):
    """The analysis configuration is inconsistent (e.g. custom period without a range)."""
    pass
