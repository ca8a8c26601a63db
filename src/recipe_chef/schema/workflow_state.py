"""
Per-workflow state machines: Idle -> Loading -> {Succeeded, Failed}.

Each variant is a frozen model tagged by ``status``, so a workflow is in
exactly one state at a time and cannot be loading and failed at once.
"""

from typing import Generic, Literal, TypeVar, Union

from pydantic import BaseModel, ConfigDict

from recipe_chef.schema.errors import ErrorInfo

T = TypeVar("T")


class Idle(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["idle"] = "idle"


class Loading(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["loading"] = "loading"
    request_id: int


class Succeeded(BaseModel, Generic[T]):
    model_config = ConfigDict(frozen=True)

    status: Literal["succeeded"] = "succeeded"
    value: T


class Failed(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["failed"] = "failed"
    error: ErrorInfo


WorkflowState = Union[Idle, Loading, Succeeded, Failed]
