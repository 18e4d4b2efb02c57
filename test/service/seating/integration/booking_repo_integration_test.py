"""
Booking repositories against a real SQLAlchemy session (aiosqlite)
"""

from decimal import Decimal
from typing import List

import pytest

from src.service.seating.domain.entity.booking_entity import Booking
from src.service.seating.domain.enum.booking_status import BookingStatus


async def _book(uow_factory, *, user_id: str, seat_ids: List[str]) -> Booking:
    async with uow_factory() as uow:
        booking = await uow.booking_command_repo.create(
            booking=Booking.create(user_id=user_id, seat_ids=seat_ids, total_price=Decimal('750'))
        )
        await uow.commit()
    return booking


@pytest.mark.integration
class TestBookingRepo:
    @pytest.mark.asyncio
    async def test_create_and_read_back(self, sql_uow_factory) -> None:
        created = await _book(sql_uow_factory, user_id='alice', seat_ids=['3-4', '3-5'])

        async with sql_uow_factory() as uow:
            loaded = await uow.booking_query_repo.get_by_id_and_user(
                booking_id=created.id, user_id='alice'
            )
            foreign = await uow.booking_query_repo.get_by_id_and_user(
                booking_id=created.id, user_id='bob'
            )

        assert loaded is not None
        assert loaded.id == created.id
        assert loaded.seat_ids == ['3-4', '3-5']
        assert loaded.total_price == Decimal('750.00')
        assert loaded.status == BookingStatus.CONFIRMED
        assert foreign is None

    @pytest.mark.asyncio
    async def test_list_confirmed_skips_cancelled_and_foreign(self, sql_uow_factory) -> None:
        kept = await _book(sql_uow_factory, user_id='alice', seat_ids=['0-0'])
        dropped = await _book(sql_uow_factory, user_id='alice', seat_ids=['0-1'])
        await _book(sql_uow_factory, user_id='bob', seat_ids=['0-2'])

        async with sql_uow_factory() as uow:
            booking = await uow.booking_command_repo.get_for_update_by_id_and_user(
                booking_id=dropped.id, user_id='alice'
            )
            assert booking is not None
            await uow.booking_command_repo.update(booking=booking.cancel())
            await uow.commit()

        async with sql_uow_factory() as uow:
            confirmed = await uow.booking_query_repo.list_confirmed_by_user(user_id='alice')

        assert [b.id for b in confirmed] == [kept.id]

    @pytest.mark.asyncio
    async def test_list_by_user_pages_newest_first(self, sql_uow_factory) -> None:
        first = await _book(sql_uow_factory, user_id='alice', seat_ids=['1-0'])
        second = await _book(sql_uow_factory, user_id='alice', seat_ids=['1-1'])
        third = await _book(sql_uow_factory, user_id='alice', seat_ids=['1-2'])

        async with sql_uow_factory() as uow:
            everything, total = await uow.booking_query_repo.list_by_user(user_id='alice')
            page, page_total = await uow.booking_query_repo.list_by_user(
                user_id='alice', limit=1, offset=1
            )
            cancelled, cancelled_total = await uow.booking_query_repo.list_by_user(
                user_id='alice', status=BookingStatus.CANCELLED
            )

        assert [b.id for b in everything] == [third.id, second.id, first.id]
        assert total == 3
        assert [b.id for b in page] == [second.id]
        assert page_total == 3
        assert cancelled == []
        assert cancelled_total == 0

    @pytest.mark.asyncio
    async def test_cancel_all_confirmed_by_user(self, sql_uow_factory) -> None:
        await _book(sql_uow_factory, user_id='alice', seat_ids=['2-0'])
        await _book(sql_uow_factory, user_id='alice', seat_ids=['2-1'])
        await _book(sql_uow_factory, user_id='bob', seat_ids=['2-2'])

        async with sql_uow_factory() as uow:
            count = await uow.booking_command_repo.cancel_all_confirmed_by_user(user_id='alice')
            await uow.commit()

        async with sql_uow_factory() as uow:
            alice_left = await uow.booking_query_repo.list_confirmed_by_user(user_id='alice')
            bob_left = await uow.booking_query_repo.list_confirmed_by_user(user_id='bob')
            _, cancelled_total = await uow.booking_query_repo.list_by_user(
                user_id='alice', status=BookingStatus.CANCELLED
            )

        assert count == 2
        assert alice_left == []
        assert len(bob_left) == 1
        assert cancelled_total == 2

    @pytest.mark.asyncio
    async def test_leaving_without_commit_rolls_back(self, sql_uow_factory) -> None:
        async with sql_uow_factory() as uow:
            booking = await uow.booking_command_repo.create(
                booking=Booking.create(
                    user_id='alice', seat_ids=['5-5'], total_price=Decimal('750')
                )
            )

        async with sql_uow_factory() as uow:
            loaded = await uow.booking_query_repo.get_by_id_and_user(
                booking_id=booking.id, user_id='alice'
            )

        assert loaded is None
