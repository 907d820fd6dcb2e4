"""
Products app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and row locks.
"""

from .exceptions import (
    InvestmentServiceError,
    InvalidInvestmentError,
    InvestorRoleRequiredError,
    ProductNotFoundError,
    ProductNotAcceptingInvestmentsError,
    WalletNotFoundError,
    InsufficientFundsError,
)

from .investment_processing import (
    InvestmentReceipt,
    process_investment,
)


__all__ = [
    # Exceptions
    'InvestmentServiceError',
    'InvalidInvestmentError',
    'InvestorRoleRequiredError',
    'ProductNotFoundError',
    'ProductNotAcceptingInvestmentsError',
    'WalletNotFoundError',
    'InsufficientFundsError',

    # Investment processing
    'InvestmentReceipt',
    'process_investment',
]
