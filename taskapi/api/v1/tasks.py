"""
Tasks API

CRUD endpoints for the authenticated user's tasks. Every operation is scoped
to the user resolved by ``require_user_id``.
"""

from typing import Any, List

from fastapi import APIRouter, Depends, status

from taskapi.auth.dependencies import require_user_id
from taskapi.dependencies import get_task_gateway, read_json_body
from taskapi.exceptions import MethodNotAllowedError, NotFoundError, UnprocessableEntityError
from taskapi.schemas.task import (
    TaskCreateRequest,
    TaskCreatedResponse,
    TaskResponse,
    TaskRowsResponse,
    TaskUpdateRequest,
)
from taskapi.services.task_gateway import TaskGateway
from taskapi.services.task_validation import get_validation_errors

router = APIRouter()

COLLECTION_METHODS = ["GET", "POST"]
ITEM_METHODS = ["GET", "PATCH", "DELETE"]


@router.get(
    "/tasks",
    response_model=List[TaskResponse],
    status_code=status.HTTP_200_OK,
    summary="List Tasks",
    description="Get all tasks of the authenticated user ordered by name"
)
async def list_tasks(
    user_id: int = Depends(require_user_id),
    gateway: TaskGateway = Depends(get_task_gateway),
):
    """List the caller's tasks."""
    tasks = await gateway.list_for_user(user_id)
    return [task.to_dict() for task in tasks]


@router.post(
    "/tasks",
    response_model=TaskCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Task",
    description="Create a task owned by the authenticated user"
)
async def create_task(
    user_id: int = Depends(require_user_id),
    payload: Any = Depends(read_json_body),
    gateway: TaskGateway = Depends(get_task_gateway),
):
    """
    Create a new task.

    **Required fields:**
    - name: Task name

    **Optional fields:**
    - priority: Integer priority (null for none)
    - is_completed: Completion state (default false)

    **Response:**
    - message: Confirmation message
    - id: ID of the created task
    """
    errors = get_validation_errors(payload, is_new=True)
    if errors:
        raise UnprocessableEntityError(errors)

    request = TaskCreateRequest.model_validate(payload)
    task_id = await gateway.create_for_user(user_id, request.model_dump())

    return TaskCreatedResponse(id=task_id)


@router.api_route(
    "/tasks",
    methods=["PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def tasks_method_not_allowed():
    raise MethodNotAllowedError(COLLECTION_METHODS)


@router.get(
    "/tasks/{task_id}",
    response_model=TaskResponse,
    status_code=status.HTTP_200_OK,
    summary="Get Task",
    description="Get one of the authenticated user's tasks"
)
async def get_task(
    task_id: int,
    user_id: int = Depends(require_user_id),
    gateway: TaskGateway = Depends(get_task_gateway),
):
    """
    Get a task by ID.

    A task that does not exist and a task owned by another user both
    return 404.
    """
    task = await gateway.get_for_user(user_id, task_id)
    if task is None:
        raise NotFoundError("Task", str(task_id))

    return task.to_dict()


@router.patch(
    "/tasks/{task_id}",
    response_model=TaskRowsResponse,
    status_code=status.HTTP_200_OK,
    summary="Update Task",
    description="Partially update one of the authenticated user's tasks"
)
async def update_task(
    task_id: int,
    user_id: int = Depends(require_user_id),
    payload: Any = Depends(read_json_body),
    gateway: TaskGateway = Depends(get_task_gateway),
):
    """
    Update only the fields present in the body.

    - an empty ``name`` is ignored
    - ``"priority": null`` clears the priority

    **Response:**
    - rows: 1 when the task was updated, 0 when nothing matched or nothing
      was supplied (no 404 on this path)
    """
    errors = get_validation_errors(payload, is_new=False)
    if errors:
        raise UnprocessableEntityError(errors)

    request = TaskUpdateRequest.model_validate(payload)
    rows = await gateway.update_for_user(user_id, task_id, request.supplied(payload.keys()))

    return TaskRowsResponse(message="Task updated", rows=rows)


@router.delete(
    "/tasks/{task_id}",
    response_model=TaskRowsResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete Task",
    description="Delete one of the authenticated user's tasks"
)
async def delete_task(
    task_id: int,
    user_id: int = Depends(require_user_id),
    gateway: TaskGateway = Depends(get_task_gateway),
):
    """Delete a task; ``rows`` is 0 when nothing matched."""
    rows = await gateway.delete_for_user(user_id, task_id)
    return TaskRowsResponse(message="Task deleted", rows=rows)


@router.api_route(
    "/tasks/{task_id}",
    methods=["POST", "PUT"],
    include_in_schema=False,
)
async def task_method_not_allowed(task_id: str):
    raise MethodNotAllowedError(ITEM_METHODS)
