# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import logging
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.common import trace
from app.common.exception_handlers import unhandled_error_handler

logger = logging.getLogger(__name__)


def _header_trace_id(request: Request) -> Optional[str]:
    # 按顺序取第一个存在的头，空串也算存在，交给 extract_or_generate 处理
    for name in trace.TRACE_HEADERS:
        value = request.headers.get(name)
        if value is not None:
            return value
    return None


class TraceIdMiddleware(BaseHTTPMiddleware):
    """请求入口分配 trace_id，出口回写响应头，结束后无条件清理"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        trace_id = trace.extract_or_generate(_header_trace_id(request))
        trace.set_trace_id(trace_id)
        logger.debug("request start %s %s", request.method, request.url.path)
        try:
            try:
                response: Response = await call_next(request)
            except Exception as exc:  # noqa: BLE001
                # 未注册类型的异常会穿透 ExceptionMiddleware，在这里兜底，保证响应头带上 trace_id
                response = await unhandled_error_handler(request, exc)

            for name in trace.TRACE_HEADERS:
                response.headers[name] = trace_id
            logger.debug("request done %s %s status=%s", request.method, request.url.path, response.status_code)
            return response
        finally:
            trace.clear()
