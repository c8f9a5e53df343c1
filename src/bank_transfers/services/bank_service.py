"""Bank service - bank lookup, creation and demo seeding."""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from bank_transfers.db.repositories import AccountRepository, BankRepository
from bank_transfers.domain.exceptions import BankNotFoundError
from bank_transfers.domain.models import Account, Bank
from bank_transfers.logging_config import get_logger

logger = get_logger("bank_transfers.services.banks")

DEMO_BANK_NAME = "National Bank"
DEMO_ACCOUNTS = [
    ("Andres", Decimal("1000.00")),
    ("John", Decimal("2000.00")),
]


class BankService:
    def __init__(
        self,
        session: AsyncSession,
        bank_repo: Optional[BankRepository] = None,
        account_repo: Optional[AccountRepository] = None,
    ):
        self.session = session
        self.bank_repo = bank_repo or BankRepository(session)
        self.account_repo = account_repo or AccountRepository(session)

    async def list_banks(self) -> List[Bank]:
        async with self.session.begin():
            return await self.bank_repo.find_all()

    async def get_bank(self, bank_id: int) -> Bank:
        async with self.session.begin():
            bank = await self.bank_repo.find_by_id(bank_id)
        if bank is None:
            raise BankNotFoundError(bank_id)
        return bank

    async def create_bank(self, name: str) -> Bank:
        async with self.session.begin():
            bank = await self.bank_repo.save(Bank(id=None, name=name, total_transfers=0))
        logger.info("Created bank id=%s name=%s", bank.id, name)
        return bank

    async def seed_demo(self) -> dict:
        """
        Insert a demo bank and demo accounts when the store holds none.

        Safe to call repeatedly; existing data is never touched.
        """
        banks_created = 0
        accounts_created = 0
        async with self.session.begin():
            if not await self.bank_repo.find_all():
                await self.bank_repo.save(Bank(id=None, name=DEMO_BANK_NAME))
                banks_created += 1
            if not await self.account_repo.find_all():
                for owner, balance in DEMO_ACCOUNTS:
                    await self.account_repo.save(Account(id=None, owner=owner, balance=balance))
                    accounts_created += 1

        logger.info("Demo seed complete; banks_created=%s accounts_created=%s", banks_created, accounts_created)
        return {"banks_created": banks_created, "accounts_created": accounts_created}
