from typing import Any

import taskiq_fastapi
from loguru import logger
from taskiq import AsyncBroker, InMemoryBroker, TaskiqMessage, TaskiqMiddleware, TaskiqResult
from taskiq_aio_pika import AioPikaBroker

from househunt.settings import settings


class ErrorLoggingMiddleware(TaskiqMiddleware):
    """Reports failed background tasks. Errors never reach the request that queued them."""

    def on_error(
        self,
        message: TaskiqMessage,
        result: TaskiqResult[Any],
        exception: BaseException,
    ) -> None:
        logger.opt(exception=exception).error(
            "Background task {} failed (args={})",
            message.task_name,
            message.args,
        )


broker: AsyncBroker = AioPikaBroker(
    str(settings.rabbit_url),
).with_middlewares(ErrorLoggingMiddleware())

if settings.environment.lower() == "pytest":
    broker = InMemoryBroker().with_middlewares(ErrorLoggingMiddleware())

taskiq_fastapi.init(
    broker,
    "househunt.web.application:get_app",
)
