import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from bank_transfers.logging_config import get_logger
from bank_transfers.services.account_service import AccountService
from .deps import get_account_service
from .schemas import AccountIn, AccountOut, BalanceOut, ErrorResponse, TransferIn, TransferOut
from .serializers import serialize_account

logger = get_logger("bank_transfers.api.accounts")

router = APIRouter(tags=["accounts"])

NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get("/accounts", response_model=List[AccountOut])
async def list_accounts(
    owner: Optional[str] = None,
    service: AccountService = Depends(get_account_service),
):
    """
    Return all accounts, optionally only those held by ``owner``.
    """
    logger.info("Listing accounts owner=%s", owner)
    accounts = await service.list_accounts(owner=owner)
    return [serialize_account(a) for a in accounts]


@router.get("/accounts/{account_id}", response_model=AccountOut, responses=NOT_FOUND)
async def get_account(account_id: int, service: AccountService = Depends(get_account_service)):
    """
    Fetch a single account by id.
    """
    logger.info("Lookup account_id=%s", account_id)
    return serialize_account(await service.get_account(account_id))


@router.get("/accounts/{account_id}/balance", response_model=BalanceOut, responses=NOT_FOUND)
async def get_account_balance(account_id: int, service: AccountService = Depends(get_account_service)):
    balance = await service.review_balance(account_id)
    return BalanceOut(account_id=account_id, balance=balance)


@router.post("/accounts", response_model=AccountOut, status_code=status.HTTP_201_CREATED)
async def create_account(
    payload: AccountIn,
    response: Response,
    service: AccountService = Depends(get_account_service),
):
    """
    Open a new account with an optional starting balance.
    """
    account = await service.create_account(payload.owner, payload.balance)
    response.headers["Location"] = f"/api/v1/accounts/{account.id}"
    return serialize_account(account)


@router.post(
    "/accounts/transfer",
    response_model=TransferOut,
    responses={**NOT_FOUND, 409: {"model": ErrorResponse}, 400: {"model": ErrorResponse}},
)
async def transfer(payload: TransferIn, service: AccountService = Depends(get_account_service)):
    """
    Transfer funds between two accounts and count it against the bank.

    Either every change is committed or none is; failures surface through
    the domain exception handlers.
    """
    await service.transfer(
        payload.bank_id,
        payload.account_id_origin,
        payload.account_id_destination,
        payload.amount,
    )
    return TransferOut(
        datetime=dt.datetime.now(),
        status="OK",
        code=status.HTTP_200_OK,
        message="transfer completed",
        transaction=payload,
    )


@router.delete(
    "/accounts/{account_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=NOT_FOUND,
)
async def delete_account(account_id: int, service: AccountService = Depends(get_account_service)):
    await service.delete_account(account_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
