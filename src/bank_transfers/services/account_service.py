"""Account service - business logic for accounts and transfers."""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from bank_transfers.db.repositories import AccountRepository, BankRepository
from bank_transfers.domain.exceptions import (
    AccountNotFoundError,
    BankNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
)
from bank_transfers.domain.models import Account, check_scale
from bank_transfers.logging_config import get_logger

logger = get_logger("bank_transfers.services.accounts")


class AccountService:
    """
    Service for account management and fund transfers.

    Every public method runs inside its own database transaction, so a
    failure at any step leaves the store exactly as it was.

    Does NOT:
    - Handle HTTP requests (that's the API layer)
    - Build SQL (that's the repository layer)
    """

    def __init__(
        self,
        session: AsyncSession,
        account_repo: Optional[AccountRepository] = None,
        bank_repo: Optional[BankRepository] = None,
    ):
        self.session = session
        self.account_repo = account_repo or AccountRepository(session)
        self.bank_repo = bank_repo or BankRepository(session)

    async def list_accounts(self, owner: Optional[str] = None) -> List[Account]:
        async with self.session.begin():
            if owner is not None:
                return await self.account_repo.find_by_owner(owner)
            return await self.account_repo.find_all()

    async def get_account(self, account_id: int) -> Account:
        async with self.session.begin():
            account = await self.account_repo.find_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    async def create_account(self, owner: str, balance: Decimal) -> Account:
        if balance < 0:
            raise InvalidAmountError(balance, "opening balance must not be negative")
        check_scale(balance)
        async with self.session.begin():
            account = await self.account_repo.save(Account(id=None, owner=owner, balance=balance))
        logger.info("Created account id=%s owner=%s balance=%s", account.id, owner, balance)
        return account

    async def delete_account(self, account_id: int) -> None:
        async with self.session.begin():
            deleted = await self.account_repo.delete(account_id)
        if not deleted:
            raise AccountNotFoundError(account_id)
        logger.info("Deleted account id=%s", account_id)

    async def review_balance(self, account_id: int) -> Decimal:
        return (await self.get_account(account_id)).balance

    async def review_total_transfers(self, bank_id: int) -> int:
        async with self.session.begin():
            bank = await self.bank_repo.find_by_id(bank_id)
        if bank is None:
            raise BankNotFoundError(bank_id)
        return bank.total_transfers

    async def transfer(
        self,
        bank_id: int,
        origin_id: int,
        destination_id: int,
        amount: Decimal,
    ) -> None:
        """
        Move ``amount`` from the origin account to the destination account
        and count the transfer against the bank.

        The three rows are locked, mutated and written in one transaction.
        Any error (unknown id, insufficient funds, store failure) rolls the
        whole transfer back.
        """
        if amount <= 0:
            raise InvalidAmountError(amount)
        check_scale(amount)

        logger.info(
            "Transfer request bank=%s from=%s to=%s amount=%s",
            bank_id,
            origin_id,
            destination_id,
            amount,
        )

        async with self.session.begin():
            accounts = await self.account_repo.find_for_update([origin_id, destination_id])
            origin = accounts.get(origin_id)
            if origin is None:
                raise AccountNotFoundError(origin_id)
            # Same id resolves to the same instance, so a self-transfer nets to zero
            destination = accounts.get(destination_id)
            if destination is None:
                raise AccountNotFoundError(destination_id)

            bank = (await self.bank_repo.find_for_update([bank_id])).get(bank_id)
            if bank is None:
                raise BankNotFoundError(bank_id)

            try:
                origin.debit(amount)
            except InsufficientFundsError:
                logger.warning(
                    "Transfer failed - insufficient funds from=%s balance=%s amount=%s",
                    origin_id,
                    origin.balance,
                    amount,
                )
                raise
            destination.credit(amount)
            bank.record_transfer()

            await self.account_repo.save(origin)
            await self.account_repo.save(destination)
            await self.bank_repo.save(bank)

        logger.info(
            "Transfer success bank=%s from=%s to=%s amount=%s total_transfers=%s",
            bank_id,
            origin_id,
            destination_id,
            amount,
            bank.total_transfers,
        )
