"""Success-or-error envelope returned by the service layer."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Result(BaseModel, Generic[T]):
    """Either ``data`` (``ok``) or a human-readable ``error``.

    ``model_dump(by_alias=True)`` gives ``{"isSuccess", "data", "error"}``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ok: bool = Field(alias="isSuccess")
    data: T | None = None
    error: str | None = None

    @classmethod
    def success(cls, data: T) -> Result[T]:
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: str) -> Result[T]:
        return cls(ok=False, error=error)
