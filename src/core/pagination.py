"""
Page-number pagination for list endpoints.
"""
from typing import TypeVar, Generic, List, Callable, Optional, Any
from pydantic import BaseModel
from fastapi import Query
from sqlalchemy.orm import Query as SQLAlchemyQuery
import math

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 50


class PageParams:
    """Query-string page selection, 1-indexed."""

    def __init__(
        self,
        page: int = Query(1, ge=1, description="Page number"),
        size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Items per page")
    ):
        self.page = page
        self.size = size

    def apply(self, query: SQLAlchemyQuery) -> List[Any]:
        """Fetch only the rows of the selected page."""
        return query.offset((self.page - 1) * self.size).limit(self.size).all()


class PageResponse(BaseModel, Generic[T]):
    items: List[T]
    total: int
    page: int
    size: int
    pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, items: List[Any], total: int, params: PageParams) -> "PageResponse":
        pages = math.ceil(total / params.size)
        return cls(
            items=items,
            total=total,
            page=params.page,
            size=params.size,
            pages=pages,
            has_next=params.page < pages,
            has_prev=params.page > 1
        )


def paginate(
    query: SQLAlchemyQuery,
    params: PageParams,
    transform: Optional[Callable[[Any], Any]] = None
) -> PageResponse:
    """
    Count a query, fetch one page of it and optionally map each row.

    Args:
        query: Ordered query to paginate
        params: Selected page
        transform: Called on every row of the page, e.g. to build a response model

    Returns:
        PageResponse: The page with its totals
    """
    total = query.count()
    rows = params.apply(query)
    items = [transform(row) for row in rows] if transform else rows
    return PageResponse.build(items, total, params)
