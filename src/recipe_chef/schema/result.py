from typing import Generic, Literal, TypeVar, Union

from pydantic import BaseModel, ConfigDict

from recipe_chef.schema.errors import ErrorInfo

T = TypeVar("T")


class Ok(BaseModel, Generic[T]):
    model_config = ConfigDict(frozen=True)

    ok: Literal[True] = True
    value: T


class Err(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: Literal[False] = False
    error: ErrorInfo


# Returned by every GenerationClient operation instead of raising.
Result = Union[Ok, Err]
