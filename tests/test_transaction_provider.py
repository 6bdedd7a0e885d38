import pytest

from conftest import add_customer, count_rows
from services.customer_service.models import Customer
from shared.config.database import transaction_provider


async def test_commits_on_normal_exit():
    async with transaction_provider.transaction() as db:
        db.add(Customer(name="Committed", email="c@example.com"))

    assert await count_rows(Customer) == 1


async def test_rolls_back_on_exception():
    await add_customer()

    with pytest.raises(ValueError):
        async with transaction_provider.transaction() as db:
            db.add(Customer(name="Discarded", email="d@example.com"))
            await db.flush()
            raise ValueError("abort")

    assert await count_rows(Customer) == 1


async def test_session_is_released_after_use():
    async with transaction_provider.transaction() as db:
        session = db
        assert session.in_transaction()

    assert not session.in_transaction()
