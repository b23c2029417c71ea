# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from enum import Enum
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


T = TypeVar("T")


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class PageRequest(BaseModel):
    """分页参数，页码从 0 开始"""

    page: int = Field(0, ge=0)
    size: int = Field(20, ge=1, le=1000)
    sort: Optional[str] = None
    direction: SortDirection = SortDirection.ASC

    @property
    def offset(self) -> int:
        return self.page * self.size


class PaginationInfo(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page: int
    size: int
    total: Optional[int] = None
    total_pages: Optional[int] = None
    has_next: bool
    has_previous: bool


class PageResponse(BaseModel, Generic[T]):
    content: List[T]
    pagination: PaginationInfo

    @classmethod
    def of(
        cls,
        content: List[T],
        *,
        page: int,
        size: int,
        total: int,
        has_next: bool = False,
    ) -> "PageResponse[T]":
        total_pages = (total + size - 1) // size if size > 0 else 0
        return cls(
            content=content,
            pagination=PaginationInfo(
                page=page,
                size=size,
                total=total,
                total_pages=total_pages,
                has_next=has_next,
                has_previous=page > 0,
            ),
        )

    @classmethod
    def of_simple(
        cls,
        content: List[T],
        *,
        page: int,
        size: int,
        has_next: bool = False,
    ) -> "PageResponse[T]":
        """不统计总数的分页"""
        return cls(
            content=content,
            pagination=PaginationInfo(
                page=page,
                size=size,
                has_next=has_next,
                has_previous=page > 0,
            ),
        )
