# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import logging

from fastapi import APIRouter

from app.common.response import render, success
from app.common.trace import get_trace_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trace", tags=["trace"])


@router.get("/test")
def trace_test():
    """返回当前请求的 trace_id，用来核对响应头与日志"""
    trace_id = get_trace_id()
    logger.info("trace test request")
    return render(success({"traceId": trace_id or "not found"}, "trace id fetched"))


@router.get("/log-test")
def trace_log_test():
    trace_id = get_trace_id()
    logger.debug("debug log, trace_id=%s", trace_id)
    logger.info("info log, trace_id=%s", trace_id)
    logger.warning("warning log, trace_id=%s", trace_id)
    return render(success("log test done", "logs written at every level"))
