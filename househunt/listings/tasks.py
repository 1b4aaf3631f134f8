from sqlalchemy.ext.asyncio import AsyncSession
from taskiq import TaskiqDepends

from househunt.db.dependencies import get_db_session
from househunt.listings import services
from househunt.tkq import broker


@broker.task
async def increment_house_views(
    house_id: int,
    session: AsyncSession = TaskiqDepends(get_db_session),
) -> None:
    """
    Count one view of a listing.

    Queued by the detail endpoint and never awaited; failures are
    reported by the broker's error logging middleware.
    """
    await services.increment_view_count(session, house_id)
