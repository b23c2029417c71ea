# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""统一响应结构

所有接口（成功/失败）都返回同一个信封：
{success, code, message, data, timestamp, traceId}
data / traceId 为空时不输出。
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Generic, Mapping, Optional, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.common.codes import ApiCode
from app.common.trace import get_trace_id


T = TypeVar("T")

DEFAULT_SUCCESS_MESSAGE = ApiCode.SUCCESS.message

# 仅在信封这一层省略空值，data 内部的 null 原样保留
_OMIT_WHEN_NONE = ("data", "traceId")


class ApiResponse(BaseModel, Generic[T]):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success: bool
    code: int
    message: str
    data: Optional[T] = None
    timestamp: datetime = Field(default_factory=datetime.now)
    trace_id: Optional[str] = Field(default_factory=get_trace_id, alias="traceId")

    @model_validator(mode="after")
    def check_success_matches_code(self) -> "ApiResponse[T]":
        # success 当且仅当 code 落在 2xx
        if self.success != ApiCode.is_success(self.code):
            raise ValueError(f"success={self.success} does not match code {self.code}")
        return self

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(mode="json", by_alias=True)
        for key in _OMIT_WHEN_NONE:
            if payload.get(key) is None:
                payload.pop(key, None)
        return payload


def success(data: Any = None, message: str = DEFAULT_SUCCESS_MESSAGE) -> ApiResponse:
    return ApiResponse(success=True, code=ApiCode.SUCCESS.code, message=message, data=data)


def success_with(code: ApiCode, data: Any = None, message: Optional[str] = None) -> ApiResponse:
    return ApiResponse(success=True, code=code.code, message=code.message if message is None else message, data=data)


def error(message: str, code: int = ApiCode.INTERNAL_ERROR.code) -> ApiResponse:
    return ApiResponse(success=False, code=code, message=message, data=None)


def error_with(code: ApiCode, message: Optional[str] = None) -> ApiResponse:
    return ApiResponse(success=False, code=code.code, message=code.message if message is None else message, data=None)


def validation_error(message: str) -> ApiResponse:
    return error_with(ApiCode.VALIDATION_ERROR, message)


def not_found(message: str = ApiCode.NOT_FOUND.message) -> ApiResponse:
    return error_with(ApiCode.NOT_FOUND, message)


def unauthorized(message: str = ApiCode.UNAUTHORIZED.message) -> ApiResponse:
    return error_with(ApiCode.UNAUTHORIZED, message)


def forbidden(message: str = ApiCode.FORBIDDEN.message) -> ApiResponse:
    return error_with(ApiCode.FORBIDDEN, message)


def render(
    envelope: ApiResponse,
    status_code: int = 200,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope.to_payload(), headers=headers)
