"""
Task Update Planner

Turns a sparse PATCH payload into the exact list of columns to update.

Only keys present in the payload are considered. Presence matters more than
value: ``{"priority": None}`` clears the priority, while a payload without a
``priority`` key leaves it alone. Per column:

- name: updated only when supplied and non-empty
- priority: updated whenever supplied; None is bound as SQL NULL
- is_completed: updated whenever supplied, bound as a boolean

The planner is pure. Rendering the plan yields one parameterized
``UPDATE ... SET ... WHERE id = :id AND user_id = :user_id`` statement with
every value bound exactly once, in the order the keys were supplied.
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple

from sqlalchemy import Boolean, Integer, String, bindparam, text
from sqlalchemy.sql.elements import TextClause
from sqlalchemy.types import NullType, TypeEngine

# Used by the WHERE clause; never valid as SET targets
RESERVED_PARAMS = frozenset({"id", "user_id"})


@dataclass(frozen=True)
class PlannedColumn:
    """One ``column = :column`` assignment with its bind value and SQL type."""
    column: str
    value: Any
    sql_type: TypeEngine


@dataclass(frozen=True)
class FieldRule:
    """How a supplied payload key becomes a column assignment."""
    column: str
    sql_type: TypeEngine
    coerce: Callable[[Any], Any]
    skip_empty: bool = False
    nullable: bool = False

    def plan(self, value: Any) -> Optional[PlannedColumn]:
        if self.skip_empty and (value is None or value == ""):
            return None
        if value is None and self.nullable:
            return PlannedColumn(self.column, None, NullType())
        return PlannedColumn(self.column, self.coerce(value), self.sql_type)


TASK_FIELDS: Tuple[FieldRule, ...] = (
    FieldRule("name", String(), str, skip_empty=True),
    FieldRule("priority", Integer(), int, nullable=True),
    FieldRule("is_completed", Boolean(), bool),
)


@dataclass(frozen=True)
class UpdatePlan:
    """Ordered column assignments for a single-row update."""
    columns: Tuple[PlannedColumn, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.columns

    def __len__(self) -> int:
        return len(self.columns)

    @property
    def column_names(self) -> Tuple[str, ...]:
        return tuple(planned.column for planned in self.columns)

    def assignments(self) -> dict:
        """Column to bind value, in plan order."""
        return {planned.column: planned.value for planned in self.columns}

    def to_sql(self, table: str) -> str:
        """Render the statement text with named placeholders."""
        if self.is_empty:
            raise ValueError("Cannot render an update without columns")

        sets = ", ".join(f"{planned.column} = :{planned.column}" for planned in self.columns)
        return f"UPDATE {table} SET {sets} WHERE id = :id AND user_id = :user_id"

    def to_statement(self, table: str, row_id: int, user_id: int) -> TextClause:
        """Render the statement with typed bind parameters for one owned row."""
        sql = self.to_sql(table)

        params = [
            bindparam(planned.column, planned.value, type_=planned.sql_type)
            for planned in self.columns
        ]
        params.append(bindparam("id", row_id, type_=Integer()))
        params.append(bindparam("user_id", user_id, type_=Integer()))

        return text(sql).bindparams(*params)


def plan_update(
    partial_data: Mapping[str, Any],
    fields: Sequence[FieldRule] = TASK_FIELDS,
) -> UpdatePlan:
    """
    Compute the columns a partial update touches.

    Args:
        partial_data: Supplied keys only; unknown keys are ignored
        fields: Column rules for the target table

    Returns:
        UpdatePlan: possibly empty, which callers treat as "0 rows affected"
    """
    rules = {rule.column: rule for rule in fields}
    overlap = RESERVED_PARAMS.intersection(rules)
    if overlap:
        raise ValueError(f"Field rules may not target {sorted(overlap)}")

    columns = []
    for key, value in partial_data.items():
        rule = rules.get(key)
        if rule is None:
            continue
        planned = rule.plan(value)
        if planned is not None:
            columns.append(planned)

    return UpdatePlan(tuple(columns))
