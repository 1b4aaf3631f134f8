from typing import Any, Dict, List
from unittest.mock import MagicMock

import pytest
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession
from taskiq import TaskiqMessage

from househunt.auth.schemas import AuthOut
from househunt.listings import services
from househunt.listings.tasks import increment_house_views
from househunt.tkq import ErrorLoggingMiddleware
from tests.helpers import identity_of


@pytest.mark.anyio
async def test_increment_house_views(
    dbsession: AsyncSession,
    landlord: AuthOut,
    house_payload: Dict[str, Any],
) -> None:
    house = await services.create_house(dbsession, identity_of(landlord), house_payload)

    await increment_house_views(house.id, session=dbsession)
    await dbsession.refresh(house)

    assert house.view_count == 1


@pytest.mark.anyio
async def test_increment_unknown_house_is_a_noop(dbsession: AsyncSession) -> None:
    await increment_house_views(12345, session=dbsession)


def test_failed_task_is_logged() -> None:
    messages: List[str] = []
    sink_id = logger.add(messages.append, level="ERROR")
    message = TaskiqMessage(
        task_id="42",
        task_name="househunt.listings.tasks:increment_house_views",
        labels={},
        args=[7],
        kwargs={},
    )

    try:
        ErrorLoggingMiddleware().on_error(message, MagicMock(), RuntimeError("db down"))
    finally:
        logger.remove(sink_id)

    assert len(messages) == 1
    assert "increment_house_views" in messages[0]
    assert "db down" in messages[0]
