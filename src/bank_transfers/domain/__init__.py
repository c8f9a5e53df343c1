"""Domain layer: entities and business errors."""

from bank_transfers.domain.exceptions import (
    AccountNotFoundError,
    BankNotFoundError,
    BankServiceException,
    InsufficientFundsError,
    InvalidAmountError,
    NotFoundError,
)
from bank_transfers.domain.models import Account, Bank

__all__ = [
    "Account",
    "Bank",
    "BankServiceException",
    "NotFoundError",
    "AccountNotFoundError",
    "BankNotFoundError",
    "InsufficientFundsError",
    "InvalidAmountError",
]
