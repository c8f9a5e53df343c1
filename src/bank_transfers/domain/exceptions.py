"""
Domain exceptions for the bank transfers service.

These represent business-rule failures and are independent of HTTP or the
database; the API layer maps them to status codes.
"""

from decimal import Decimal
from typing import Optional


class BankServiceException(Exception):
    """Base exception for all bank service errors."""

    error_code = "bank_error"

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(BankServiceException):
    """Raised when a requested entity does not exist."""

    error_code = "not_found"

    def __init__(self, entity: str, entity_id):
        super().__init__(
            message=f"{entity} not found: {entity_id}",
            details={"entity": entity, "id": entity_id},
        )


class AccountNotFoundError(NotFoundError):
    def __init__(self, account_id):
        super().__init__("Account", account_id)


class BankNotFoundError(NotFoundError):
    def __init__(self, bank_id):
        super().__init__("Bank", bank_id)


class InsufficientFundsError(BankServiceException):
    """Raised when a debit would leave an account with a negative balance."""

    error_code = "insufficient_funds"

    def __init__(self, account_id, balance: Decimal, amount: Decimal):
        super().__init__(
            message=f"Insufficient funds in account {account_id}",
            details={
                "account_id": account_id,
                "balance": str(balance),
                "amount": str(amount),
            },
        )


class InvalidAmountError(BankServiceException):
    """Raised when a monetary amount is negative or otherwise unusable."""

    error_code = "invalid_amount"

    def __init__(self, amount, reason: str = "amount must be positive"):
        super().__init__(
            message=f"Invalid amount {amount}: {reason}",
            details={"amount": str(amount), "reason": reason},
        )
