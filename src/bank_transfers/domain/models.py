"""Domain entities - internal representation (framework-agnostic)."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from bank_transfers.domain.exceptions import InsufficientFundsError, InvalidAmountError


# Smallest unit the store keeps; balances are Numeric(15, 2)
CENT = Decimal("0.01")


def check_scale(amount: Decimal) -> None:
    """Reject amounts with more than two decimal places."""
    if amount != amount.quantize(CENT):
        raise InvalidAmountError(amount, "amount must have at most two decimal places")


def _check_non_negative(amount: Decimal) -> None:
    if amount < 0:
        raise InvalidAmountError(amount, "amount must not be negative")
    check_scale(amount)


@dataclass
class Account:
    """Account domain entity."""
    id: Optional[int]
    owner: str
    balance: Decimal

    def debit(self, amount: Decimal) -> None:
        """
        Withdraw ``amount`` from the balance.

        Raises InsufficientFundsError and leaves the balance untouched when
        the result would be negative.
        """
        _check_non_negative(amount)
        new_balance = self.balance - amount
        if new_balance < 0:
            raise InsufficientFundsError(self.id, self.balance, amount)
        self.balance = new_balance

    def credit(self, amount: Decimal) -> None:
        """Add ``amount`` to the balance."""
        _check_non_negative(amount)
        self.balance = self.balance + amount


@dataclass
class Bank:
    """Bank domain entity."""
    id: Optional[int]
    name: str
    total_transfers: int = 0

    def record_transfer(self) -> None:
        self.total_transfers += 1
