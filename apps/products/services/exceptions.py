"""
Domain-specific exceptions for products app.

These exceptions represent business rule violations and are caught in
views and converted to the JSON error envelope by their ``kind``.
"""


class InvestmentServiceError(Exception):
    """Base exception for all investment service errors."""

    kind = 'internal'


class InvalidInvestmentError(InvestmentServiceError):
    """Raised when the investment amount is missing or not positive."""

    kind = 'invalid-argument'


class InvestorRoleRequiredError(InvestmentServiceError):
    """Raised when a user without the investor role tries to invest."""

    kind = 'permission-denied'


class ProductNotFoundError(InvestmentServiceError):
    """Raised when a product does not exist."""

    kind = 'not-found'


class ProductNotAcceptingInvestmentsError(InvestmentServiceError):
    """Raised when the product is not in a funding state or has no designer."""

    kind = 'failed-precondition'


class WalletNotFoundError(InvestmentServiceError):
    """Raised when the investor has no wallet."""

    kind = 'failed-precondition'


class InsufficientFundsError(InvestmentServiceError):
    """Raised when the wallet balance does not cover the investment."""

    kind = 'failed-precondition'
