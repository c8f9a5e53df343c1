import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AccountIn(BaseModel):
    owner: str = Field(..., min_length=1, max_length=255, examples=["Andres"])
    balance: Decimal = Field(Decimal("0"), ge=0, max_digits=15, decimal_places=2, examples=["1000.00"])


class AccountOut(BaseModel):
    id: int
    owner: str
    balance: Decimal


class BalanceOut(BaseModel):
    account_id: int
    balance: Decimal


class BankIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["National Bank"])


class BankOut(BaseModel):
    id: int
    name: str
    total_transfers: int


class TotalTransfersOut(BaseModel):
    bank_id: int
    total_transfers: int


class TransferIn(BaseModel):
    """Transfer instruction; field names on the wire are camelCase."""
    model_config = ConfigDict(populate_by_name=True)

    bank_id: int = Field(..., alias="bankId", examples=[1])
    account_id_origin: int = Field(..., alias="accountIdOrigin", examples=[1])
    account_id_destination: int = Field(..., alias="accountIdDestination", examples=[2])
    amount: Decimal = Field(..., gt=0, max_digits=15, decimal_places=2, examples=["500.00"])


class TransferOut(BaseModel):
    datetime: dt.datetime
    status: str
    code: int
    message: str
    transaction: TransferIn


class ErrorResponse(BaseModel):
    """Standard error response."""
    detail: str
    error_code: Optional[str] = None


class SeedIn(BaseModel):
    token: str


class SeedOut(BaseModel):
    banks_created: int
    accounts_created: int
