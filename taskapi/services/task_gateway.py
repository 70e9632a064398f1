"""Task Gateway - data access for the task table, always scoped to one user"""

from typing import Any, List, Mapping, Optional

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskapi.models.task import Task
from taskapi.services.task_planner import TASK_FIELDS, plan_update

logger = structlog.get_logger()


class TaskGateway:
    """Table gateway for the ``task`` table

    Every query filters by ``user_id``: a task is never visible to, or
    mutable by, anyone but its owner.
    """

    def __init__(self, db: AsyncSession):
        """Initialize TaskGateway

        Args:
            db: Database session
        """
        self.db = db

    async def list_for_user(self, user_id: int) -> List[Task]:
        """List a user's tasks ordered by name

        Args:
            user_id: Owner ID

        Returns:
            List[Task]: The user's tasks
        """
        result = await self.db.execute(
            select(Task)
            .where(Task.user_id == user_id)
            .order_by(Task.name, Task.id)
        )
        return list(result.scalars().all())

    async def get_for_user(self, user_id: int, task_id: int) -> Optional[Task]:
        """Get one of a user's tasks

        Args:
            user_id: Owner ID
            task_id: Task ID

        Returns:
            Optional[Task]: None when absent or owned by someone else
        """
        result = await self.db.execute(
            select(Task)
            .where(Task.id == task_id, Task.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create_for_user(self, user_id: int, data: Mapping[str, Any]) -> int:
        """Create a task owned by a user

        Args:
            user_id: Owner ID
            data: Validated payload with ``name`` and optional ``priority``
                and ``is_completed``

        Returns:
            int: Generated task ID
        """
        priority = data.get("priority")

        task = Task(
            name=data["name"],
            priority=int(priority) if priority is not None else None,
            is_completed=bool(data.get("is_completed", False)),
            user_id=user_id,
        )

        try:
            self.db.add(task)
            await self.db.commit()
            await self.db.refresh(task)
        except Exception as e:
            await self.db.rollback()
            logger.error("Task creation failed", user_id=user_id, error=str(e))
            raise

        logger.info("Task created", task_id=task.id, user_id=user_id)
        return task.id

    async def update_for_user(self, user_id: int, task_id: int, changes: Mapping[str, Any]) -> int:
        """Apply a partial update to one of a user's tasks

        Args:
            user_id: Owner ID
            task_id: Task ID
            changes: Supplied fields only, in request order

        Returns:
            int: Rows affected; 0 when nothing was supplied or nothing matched
        """
        plan = plan_update(changes, TASK_FIELDS)

        if plan.is_empty:
            logger.debug("Empty update plan", task_id=task_id, user_id=user_id)
            return 0

        statement = plan.to_statement(Task.__tablename__, task_id, user_id)

        try:
            result = await self.db.execute(statement)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error("Task update failed", task_id=task_id, user_id=user_id, error=str(e))
            raise

        logger.info(
            "Task updated",
            task_id=task_id,
            user_id=user_id,
            columns=list(plan.column_names),
            rows=result.rowcount,
        )
        return result.rowcount

    async def delete_for_user(self, user_id: int, task_id: int) -> int:
        """Delete one of a user's tasks

        Returns:
            int: Rows affected
        """
        try:
            result = await self.db.execute(
                delete(Task).where(Task.id == task_id, Task.user_id == user_id)
            )
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error("Task deletion failed", task_id=task_id, user_id=user_id, error=str(e))
            raise

        logger.info("Task deleted", task_id=task_id, user_id=user_id, rows=result.rowcount)
        return result.rowcount
