"""
Account and bank stores backed by SQLAlchemy.

Repositories are bound to a single AsyncSession and never commit; the
calling service owns the transaction boundary.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, Generic, Iterable, List, Optional, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from bank_transfers.db.models import AccountModel, BankModel
from bank_transfers.domain.models import Account, Bank

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """
    Base repository interface.

    Abstracts data access so services can be tested against any store.
    """

    @abstractmethod
    async def find_by_id(self, id: int) -> Optional[T]:
        """Get entity by ID."""

    @abstractmethod
    async def find_all(self) -> List[T]:
        """List all entities."""

    @abstractmethod
    async def find_for_update(self, ids: Iterable[int]) -> Dict[int, T]:
        """Fetch and row-lock the given entities, keyed by id."""

    @abstractmethod
    async def save(self, entity: T) -> T:
        """Save entity (create or update)."""

    @abstractmethod
    async def delete(self, id: int) -> bool:
        """Delete entity by ID. Returns True if deleted, False if not found."""


class AccountRepository(Repository[Account]):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, id: int) -> Optional[Account]:
        res = await self.session.execute(select(AccountModel).where(AccountModel.id == id))
        row = res.scalars().first()
        return self._to_entity(row) if row else None

    async def find_all(self) -> List[Account]:
        res = await self.session.execute(select(AccountModel).order_by(AccountModel.id))
        return [self._to_entity(r) for r in res.scalars().all()]

    async def find_by_owner(self, owner: str) -> List[Account]:
        stmt = select(AccountModel).where(AccountModel.owner == owner).order_by(AccountModel.id)
        res = await self.session.execute(stmt)
        return [self._to_entity(r) for r in res.scalars().all()]

    async def find_for_update(self, ids: Iterable[int]) -> Dict[int, Account]:
        # Ascending id order keeps lock acquisition consistent across transfers
        stmt = (
            select(AccountModel)
            .where(AccountModel.id.in_(set(ids)))
            .order_by(AccountModel.id)
            .with_for_update()
        )
        res = await self.session.execute(stmt)
        return {r.id: self._to_entity(r) for r in res.scalars().all()}

    async def save(self, account: Account) -> Account:
        if account.id is None:
            row = AccountModel(owner=account.owner, balance=account.balance)
            self.session.add(row)
            await self.session.flush()
            return self._to_entity(row)

        await self.session.execute(
            update(AccountModel)
            .where(AccountModel.id == account.id)
            .values(owner=account.owner, balance=account.balance)
        )
        return account

    async def delete(self, id: int) -> bool:
        res = await self.session.execute(delete(AccountModel).where(AccountModel.id == id))
        return res.rowcount > 0

    @staticmethod
    def _to_entity(row: AccountModel) -> Account:
        return Account(id=row.id, owner=row.owner, balance=Decimal(row.balance))


class BankRepository(Repository[Bank]):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, id: int) -> Optional[Bank]:
        res = await self.session.execute(select(BankModel).where(BankModel.id == id))
        row = res.scalars().first()
        return self._to_entity(row) if row else None

    async def find_all(self) -> List[Bank]:
        res = await self.session.execute(select(BankModel).order_by(BankModel.id))
        return [self._to_entity(r) for r in res.scalars().all()]

    async def find_for_update(self, ids: Iterable[int]) -> Dict[int, Bank]:
        stmt = (
            select(BankModel)
            .where(BankModel.id.in_(set(ids)))
            .order_by(BankModel.id)
            .with_for_update()
        )
        res = await self.session.execute(stmt)
        return {r.id: self._to_entity(r) for r in res.scalars().all()}

    async def save(self, bank: Bank) -> Bank:
        if bank.id is None:
            row = BankModel(name=bank.name, total_transfers=bank.total_transfers)
            self.session.add(row)
            await self.session.flush()
            return self._to_entity(row)

        await self.session.execute(
            update(BankModel)
            .where(BankModel.id == bank.id)
            .values(name=bank.name, total_transfers=bank.total_transfers)
        )
        return bank

    async def delete(self, id: int) -> bool:
        res = await self.session.execute(delete(BankModel).where(BankModel.id == id))
        return res.rowcount > 0

    @staticmethod
    def _to_entity(row: BankModel) -> Bank:
        return Bank(id=row.id, name=row.name, total_transfers=row.total_transfers or 0)
