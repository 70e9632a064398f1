"""
Dependency Injection

FastAPI dependency injection functions for data access and request bodies.
"""

import json
from typing import Any

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from taskapi.database import get_db
from taskapi.exceptions import BadRequestError
from taskapi.logging_config import get_logger
from taskapi.services.task_gateway import TaskGateway

logger = get_logger(__name__)


# ==================== Database ====================


async def get_task_gateway(db: AsyncSession = Depends(get_db)) -> TaskGateway:
    """Dependency to get TaskGateway instance"""
    return TaskGateway(db)


# ==================== Request Body ====================


async def read_json_body(request: Request) -> Any:
    """
    Decode the raw request body as JSON

    An empty body reads as an empty object. The decoded value is returned
    as-is (it may not be an object); shape checks belong to validation.

    Raises:
        BadRequestError: If the body is not valid JSON
    """
    raw = await request.body()
    if not raw.strip():
        return {}

    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Undecodable request body", path=request.url.path, error=str(e))
        raise BadRequestError("Request body is not valid JSON") from e
