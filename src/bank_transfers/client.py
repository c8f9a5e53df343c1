"""
Bank Transfers Client
Async HTTP client for the bank transfers REST API
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

import httpx

from bank_transfers.logging_config import get_logger

logger = get_logger("bank_transfers.client")


class BankClientError(Exception):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, status_code: int, detail: str, error_code: Optional[str] = None):
        self.status_code = status_code
        self.detail = detail
        self.error_code = error_code
        super().__init__(f"{status_code}: {detail}")


class BankClient:
    """
    HTTP client for the bank transfers API
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "BankClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        resp = await self.client.request(method, "/api/v1" + path, **kwargs)
        logger.info("Bank API %s %s -> %s", method.upper(), path, resp.status_code)
        if resp.status_code >= 400:
            try:
                body = resp.json()
            except ValueError:
                body = None
            if not isinstance(body, dict):
                body = {"detail": resp.text}
            raise BankClientError(resp.status_code, str(body.get("detail")), body.get("error_code"))
        if resp.status_code == 204:
            return None
        return resp.json()

    async def list_accounts(self, owner: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"owner": owner} if owner is not None else None
        return await self._request("GET", "/accounts", params=params)

    async def get_account(self, account_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/accounts/{account_id}")

    async def get_balance(self, account_id: int) -> Decimal:
        data = await self._request("GET", f"/accounts/{account_id}/balance")
        return Decimal(str(data["balance"]))

    async def create_account(self, owner: str, balance: Decimal = Decimal("0")) -> Dict[str, Any]:
        return await self._request("POST", "/accounts", json={"owner": owner, "balance": str(balance)})

    async def delete_account(self, account_id: int) -> None:
        await self._request("DELETE", f"/accounts/{account_id}")

    async def transfer(
        self,
        bank_id: int,
        origin_id: int,
        destination_id: int,
        amount: Decimal,
    ) -> Dict[str, Any]:
        payload = {
            "bankId": bank_id,
            "accountIdOrigin": origin_id,
            "accountIdDestination": destination_id,
            "amount": str(amount),
        }
        return await self._request("POST", "/accounts/transfer", json=payload)

    async def list_banks(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/banks")

    async def get_bank(self, bank_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/banks/{bank_id}")

    async def create_bank(self, name: str) -> Dict[str, Any]:
        return await self._request("POST", "/banks", json={"name": name})

    async def total_transfers(self, bank_id: int) -> int:
        data = await self._request("GET", f"/banks/{bank_id}/transfers")
        return int(data["total_transfers"])
