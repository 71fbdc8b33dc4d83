from typing import Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

TaskStatus = Literal["", "Todo", "In Progress", "Done"]

STATUS_VALUES: tuple[str, ...] = get_args(TaskStatus)


class Task(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    status: TaskStatus = ""
    time_stamp: str = Field(alias="timeStamp")


class TaskCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    status: TaskStatus = ""


class TaskPatch(BaseModel):
    """Fields to change on an existing task. None means keep the stored value."""

    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None


class TaskUpdate(BaseModel):
    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    status: TaskStatus

    # Omitted means unchanged; an explicit null is not a value.
    @field_validator("name", "description", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value

    def to_patch(self) -> TaskPatch:
        return TaskPatch(name=self.name, description=self.description, status=self.status)


class TaskDelete(BaseModel):
    id: str


class DeleteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    deleted_task: Task = Field(alias="deletedTask")


class HealthResponse(BaseModel):
    status: str
    uptime: float
    environment: str
