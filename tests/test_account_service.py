"""Unit tests for AccountService and BankService."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from bank_transfers.domain.exceptions import (
    AccountNotFoundError,
    BankNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
)
from bank_transfers.services.account_service import AccountService
from bank_transfers.services.bank_service import BankService


class TestTransfer:
    """Test the transfer operation end to end against the database."""

    @pytest.mark.asyncio
    async def test_transfer_moves_funds_and_counts(self, db_session, seeded, fetch_state):
        service = AccountService(db_session)

        await service.transfer(seeded["bank"], seeded["origin"], seeded["destination"], Decimal("500"))

        assert await fetch_state() == (Decimal("1500"), Decimal("1500"), 1)
        assert await service.review_balance(seeded["origin"]) == Decimal("1500")
        assert await service.review_total_transfers(seeded["bank"]) == 1

    @pytest.mark.asyncio
    async def test_transfer_insufficient_funds_changes_nothing(self, db_session, seeded, fetch_state):
        service = AccountService(db_session)

        with pytest.raises(InsufficientFundsError):
            await service.transfer(seeded["bank"], seeded["origin"], seeded["destination"], Decimal("2000.01"))

        assert await fetch_state() == (Decimal("2000"), Decimal("1000"), 0)

    @pytest.mark.asyncio
    async def test_transfer_exact_balance_empties_origin(self, db_session, seeded, fetch_state):
        service = AccountService(db_session)

        await service.transfer(seeded["bank"], seeded["origin"], seeded["destination"], Decimal("2000"))

        assert await fetch_state() == (Decimal("0"), Decimal("3000"), 1)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["origin", "destination"])
    async def test_transfer_unknown_account(self, db_session, seeded, fetch_state, missing):
        service = AccountService(db_session)
        ids = dict(seeded)
        ids[missing] = 999

        with pytest.raises(AccountNotFoundError, match="999"):
            await service.transfer(ids["bank"], ids["origin"], ids["destination"], Decimal("100"))

        assert await fetch_state() == (Decimal("2000"), Decimal("1000"), 0)

    @pytest.mark.asyncio
    async def test_transfer_unknown_bank(self, db_session, seeded, fetch_state):
        service = AccountService(db_session)

        with pytest.raises(BankNotFoundError):
            await service.transfer(999, seeded["origin"], seeded["destination"], Decimal("100"))

        assert await fetch_state() == (Decimal("2000"), Decimal("1000"), 0)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5")])
    async def test_transfer_rejects_non_positive_amount(self, db_session, seeded, fetch_state, amount):
        service = AccountService(db_session)

        with pytest.raises(InvalidAmountError):
            await service.transfer(seeded["bank"], seeded["origin"], seeded["destination"], amount)

        assert await fetch_state() == (Decimal("2000"), Decimal("1000"), 0)

    @pytest.mark.asyncio
    async def test_transfer_rejects_sub_cent_amount(self, db_session, seeded, fetch_state):
        service = AccountService(db_session)

        for _ in range(3):
            with pytest.raises(InvalidAmountError):
                await service.transfer(seeded["bank"], seeded["origin"], seeded["destination"], Decimal("0.004"))

        assert await fetch_state() == (Decimal("2000"), Decimal("1000"), 0)

    @pytest.mark.asyncio
    async def test_store_failure_rolls_back_written_accounts(self, db_session, seeded, fetch_state):
        service = AccountService(db_session)
        service.bank_repo.save = AsyncMock(side_effect=RuntimeError("store unavailable"))

        with pytest.raises(RuntimeError, match="store unavailable"):
            await service.transfer(seeded["bank"], seeded["origin"], seeded["destination"], Decimal("500"))

        assert await fetch_state() == (Decimal("2000"), Decimal("1000"), 0)

    @pytest.mark.asyncio
    async def test_repeated_transfer_applies_twice(self, db_session, seeded, fetch_state):
        service = AccountService(db_session)

        for _ in range(2):
            await service.transfer(seeded["bank"], seeded["origin"], seeded["destination"], Decimal("500"))

        assert await fetch_state() == (Decimal("1000"), Decimal("2000"), 2)

    @pytest.mark.asyncio
    async def test_self_transfer_keeps_balance_and_counts(self, db_session, seeded, fetch_state):
        service = AccountService(db_session)

        await service.transfer(seeded["bank"], seeded["origin"], seeded["origin"], Decimal("500"))

        assert await fetch_state() == (Decimal("2000"), Decimal("1000"), 1)

    @pytest.mark.asyncio
    async def test_self_transfer_still_requires_funds(self, db_session, seeded, fetch_state):
        service = AccountService(db_session)

        with pytest.raises(InsufficientFundsError):
            await service.transfer(seeded["bank"], seeded["destination"], seeded["destination"], Decimal("1500"))

        assert await fetch_state() == (Decimal("2000"), Decimal("1000"), 0)


class TestAccountOperations:
    """Test account CRUD-style operations."""

    @pytest.mark.asyncio
    async def test_create_and_get_account(self, db_session):
        service = AccountService(db_session)

        created = await service.create_account("Nophy", Decimal("4000"))
        fetched = await service.get_account(created.id)

        assert fetched.owner == "Nophy"
        assert fetched.balance == Decimal("4000")

    @pytest.mark.asyncio
    async def test_create_account_negative_balance_rejected(self, db_session):
        service = AccountService(db_session)

        with pytest.raises(InvalidAmountError):
            await service.create_account("Nophy", Decimal("-1"))

        assert await service.list_accounts() == []

    @pytest.mark.asyncio
    async def test_create_account_sub_cent_balance_rejected(self, db_session):
        service = AccountService(db_session)

        with pytest.raises(InvalidAmountError):
            await service.create_account("Nophy", Decimal("10.005"))

        assert await service.list_accounts() == []

    @pytest.mark.asyncio
    async def test_get_missing_account(self, db_session):
        service = AccountService(db_session)

        with pytest.raises(AccountNotFoundError):
            await service.get_account(42)

        with pytest.raises(AccountNotFoundError):
            await service.review_balance(42)

    @pytest.mark.asyncio
    async def test_list_accounts_with_owner_filter(self, db_session, seeded):
        service = AccountService(db_session)

        assert len(await service.list_accounts()) == 2
        only = await service.list_accounts(owner="Martin")
        assert [a.id for a in only] == [seeded["origin"]]

    @pytest.mark.asyncio
    async def test_delete_account(self, db_session, seeded):
        service = AccountService(db_session)

        await service.delete_account(seeded["origin"])

        with pytest.raises(AccountNotFoundError):
            await service.get_account(seeded["origin"])
        with pytest.raises(AccountNotFoundError):
            await service.delete_account(seeded["origin"])

    @pytest.mark.asyncio
    async def test_review_total_transfers_missing_bank(self, db_session):
        service = AccountService(db_session)

        with pytest.raises(BankNotFoundError):
            await service.review_total_transfers(7)


class TestBankService:
    """Test bank operations and demo seeding."""

    @pytest.mark.asyncio
    async def test_create_list_get_bank(self, db_session):
        service = BankService(db_session)

        bank = await service.create_bank("Central Bank")

        assert bank.total_transfers == 0
        assert [b.id for b in await service.list_banks()] == [bank.id]
        assert (await service.get_bank(bank.id)).name == "Central Bank"

    @pytest.mark.asyncio
    async def test_get_missing_bank(self, db_session):
        service = BankService(db_session)

        with pytest.raises(BankNotFoundError):
            await service.get_bank(1)

    @pytest.mark.asyncio
    async def test_seed_demo_is_idempotent(self, db_session):
        service = BankService(db_session)

        first = await service.seed_demo()
        second = await service.seed_demo()

        assert first == {"banks_created": 1, "accounts_created": 2}
        assert second == {"banks_created": 0, "accounts_created": 0}
        assert len(await AccountService(db_session).list_accounts()) == 2
