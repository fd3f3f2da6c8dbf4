"""Response envelopes shared by all resources."""

from typing import Generic, List, TypeVar

from pydantic import Field

from schemas.base import APIModel

T = TypeVar("T")


class Pagination(APIModel):
    page: int = Field(description="Current page, starting at 1.")
    limit: int = Field(description="Rows per page.")
    total: int = Field(description="Rows matching the filters across all pages.")
    total_pages: int = Field(description="ceil(total / limit).")


class PaginatedResponse(APIModel, Generic[T]):
    data: List[T]
    pagination: Pagination


class DataResponse(APIModel, Generic[T]):
    data: T


class CreatedId(APIModel):
    id: int
