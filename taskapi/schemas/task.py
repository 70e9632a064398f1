"""Task-related Pydantic schemas"""

from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskapi.services.task_validation import PRIORITY_MAX, PRIORITY_MIN, parse_integer


def _coerce_priority(value: Any) -> Any:
    """Turn integer strings such as " +5 " into ints; anything else is left for pydantic."""
    number = parse_integer(value)
    return value if number is None else number


class TaskResponse(BaseModel):
    """A task row as returned to its owner"""
    id: int = Field(..., description="Task ID")
    name: str = Field(..., description="Task name")
    priority: Optional[int] = Field(default=None, description="Optional priority")
    is_completed: bool = Field(..., description="Whether the task is done")
    user_id: int = Field(..., description="Owner user ID")

    model_config = ConfigDict(from_attributes=True)


class TaskCreateRequest(BaseModel):
    """Task creation payload, built after validation"""
    name: str = Field(..., min_length=1, description="Task name")
    priority: Optional[int] = Field(default=None, ge=PRIORITY_MIN, le=PRIORITY_MAX, description="Optional priority")
    is_completed: bool = Field(default=False, description="Initial completion state")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Buy milk",
                "priority": 2,
                "is_completed": False,
            }
        }
    )

    @field_validator("priority", mode="before")
    @classmethod
    def coerce_priority(cls, value: Any) -> Any:
        return _coerce_priority(value)


class TaskUpdateRequest(BaseModel):
    """
    Partial update payload

    Every field is optional. ``model_fields_set`` records which keys the
    client actually sent, so an explicit ``null`` stays distinguishable from
    an absent key.
    """
    name: Optional[str] = Field(default=None, description="New name; empty keeps the current one")
    priority: Optional[int] = Field(default=None, ge=PRIORITY_MIN, le=PRIORITY_MAX, description="New priority; null clears it")
    is_completed: Optional[bool] = Field(default=None, description="New completion state")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "priority": None,
                "is_completed": True,
            }
        }
    )

    @field_validator("priority", mode="before")
    @classmethod
    def coerce_priority(cls, value: Any) -> Any:
        return _coerce_priority(value)

    def supplied(self, key_order: Iterable[str] = ()) -> Dict[str, Any]:
        """
        Fields the client sent, with their parsed values.

        Args:
            key_order: Keys in the order they appeared in the request body;
                supplied fields not listed follow in declaration order

        Returns:
            Dict mapping field name to value, including explicit None
        """
        ordered = [key for key in key_order if key in self.model_fields_set]
        ordered += [key for key in type(self).model_fields if key in self.model_fields_set and key not in ordered]
        return {key: getattr(self, key) for key in ordered}


class TaskCreatedResponse(BaseModel):
    """Task creation response"""
    message: str = Field(default="Task created")
    id: int = Field(..., description="Generated task ID")


class TaskRowsResponse(BaseModel):
    """Update/delete response with the number of affected rows"""
    message: str
    rows: int = Field(..., ge=0, description="Rows affected")
