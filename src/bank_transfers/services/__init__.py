"""Business logic services."""

from bank_transfers.services.account_service import AccountService
from bank_transfers.services.bank_service import BankService

__all__ = ["AccountService", "BankService"]
