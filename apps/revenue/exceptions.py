"""
Domain exceptions for revenue app.

Every exception carries a ``kind`` that views translate into the JSON
error envelope and HTTP status.

Exception Hierarchy:
    RevenueServiceError (base, kind 'internal')
    ├── InvalidSaleError            'invalid-argument'
    ├── ProductNotFoundError        'not-found'
    ├── DuplicateDistributionError  'already-exists'
    └── DistributionFailedError     'internal'
"""


class RevenueServiceError(Exception):
    """Base exception for revenue distribution errors."""

    kind = 'internal'


class InvalidSaleError(RevenueServiceError):
    """Raised when sale input is malformed or out of range."""

    kind = 'invalid-argument'


class ProductNotFoundError(RevenueServiceError):
    """Raised when the sold product does not exist."""

    kind = 'not-found'


class DuplicateDistributionError(RevenueServiceError):
    """Raised when revenue for this product and order was already paid out."""

    kind = 'already-exists'


class DistributionFailedError(RevenueServiceError):
    """
    Raised when the payout batch could not be committed.

    Nothing has been written when this is raised. The original error is
    chained as ``__cause__``.
    """

    kind = 'internal'
