from typing import Any, Dict

from bank_transfers.domain.models import Account, Bank


def serialize_account(a: Account) -> Dict[str, Any]:
    return {
        "id": a.id,
        "owner": a.owner,
        "balance": a.balance,
    }


def serialize_bank(b: Bank) -> Dict[str, Any]:
    return {
        "id": b.id,
        "name": b.name,
        "total_transfers": b.total_transfers,
    }
