"""Exceptions raised outside the pricing computation itself."""


class PricingError(Exception):
    """Base exception for the batch pricing application"""

    pass


class IngestionError(PricingError, ValueError):
    """Uploaded borrower file is empty, unreadable or incompletely mapped"""

    pass


class MatrixValidationError(PricingError, ValueError):
    """An adjustment matrix override is malformed and was rejected"""

    pass
