from typing import AsyncGenerator

from fastapi import Depends

from bank_transfers.db.session import AsyncSessionLocal
from bank_transfers.services.account_service import AccountService
from bank_transfers.services.bank_service import BankService


async def get_db() -> AsyncGenerator:
    """
    Async DB session dependency for FastAPI routes.
    """
    async with AsyncSessionLocal() as session:
        yield session


def get_account_service(db=Depends(get_db)) -> AccountService:
    return AccountService(db)


def get_bank_service(db=Depends(get_db)) -> BankService:
    return BankService(db)
