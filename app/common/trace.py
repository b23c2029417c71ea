# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import uuid
from contextvars import ContextVar
from typing import Optional


TRACE_ID_HEADER = "X-Trace-Id"
REQUEST_ID_HEADER = "X-Request-Id"

# 入站按顺序查找，出站两个都写
TRACE_HEADERS = (TRACE_ID_HEADER, REQUEST_ID_HEADER)

_trace_id_ctx: ContextVar[Optional[str]] = ContextVar("trace_id", default=None)


def new_trace_id() -> str:
    """32 位十六进制，无分隔符"""
    return uuid.uuid4().hex


def set_trace_id(trace_id: str) -> None:
    _trace_id_ctx.set(trace_id)


def get_trace_id() -> Optional[str]:
    return _trace_id_ctx.get()


def clear() -> None:
    _trace_id_ctx.set(None)


def extract_or_generate(header_value: Optional[str]) -> str:
    """请求头里有非空值就原样沿用，否则生成新的"""
    if header_value is not None and header_value.strip():
        return header_value
    return new_trace_id()
