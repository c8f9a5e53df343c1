from typing import List

from fastapi import APIRouter, Depends, status

from bank_transfers.logging_config import get_logger
from bank_transfers.services.account_service import AccountService
from bank_transfers.services.bank_service import BankService
from .deps import get_account_service, get_bank_service
from .schemas import BankIn, BankOut, ErrorResponse, TotalTransfersOut
from .serializers import serialize_bank

logger = get_logger("bank_transfers.api.banks")

router = APIRouter(tags=["banks"])


@router.get("/banks", response_model=List[BankOut])
async def list_banks(service: BankService = Depends(get_bank_service)):
    return [serialize_bank(b) for b in await service.list_banks()]


@router.get("/banks/{bank_id}", response_model=BankOut, responses={404: {"model": ErrorResponse}})
async def get_bank(bank_id: int, service: BankService = Depends(get_bank_service)):
    logger.info("Lookup bank_id=%s", bank_id)
    return serialize_bank(await service.get_bank(bank_id))


@router.get(
    "/banks/{bank_id}/transfers",
    response_model=TotalTransfersOut,
    responses={404: {"model": ErrorResponse}},
)
async def get_total_transfers(bank_id: int, service: AccountService = Depends(get_account_service)):
    """
    Number of transfers processed through this bank.
    """
    total = await service.review_total_transfers(bank_id)
    return TotalTransfersOut(bank_id=bank_id, total_transfers=total)


@router.post("/banks", response_model=BankOut, status_code=status.HTTP_201_CREATED)
async def create_bank(payload: BankIn, service: BankService = Depends(get_bank_service)):
    return serialize_bank(await service.create_bank(payload.name))
