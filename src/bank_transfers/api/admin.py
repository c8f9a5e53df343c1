import os

from fastapi import APIRouter, Depends, HTTPException

from bank_transfers.logging_config import get_logger
from bank_transfers.services.bank_service import BankService
from .deps import get_bank_service
from .schemas import SeedIn, SeedOut

logger = get_logger("bank_transfers.api.admin")

router = APIRouter(tags=["admin"])


@router.post("/admin/seed", response_model=SeedOut)
async def seed_demo(payload: SeedIn, service: BankService = Depends(get_bank_service)):
    """
    Simple idempotent seeding of a demo bank and demo accounts.
    Protected by SIMPLE_ADMIN_TOKEN in environment.
    """
    expected = os.getenv("SIMPLE_ADMIN_TOKEN", "letmein")
    if payload.token != expected:
        logger.warning("Admin seed unauthorized attempt")
        raise HTTPException(status_code=401, detail="Unauthorized")

    return await service.seed_demo()
