# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""全局异常 -> 统一响应

唯一决定 HTTP 状态码和错误信封的地方。4xx 文案具体，5xx 文案笼统（细节只写日志）。
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import exc as sa_exc
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.common.codes import ApiCode
from app.common.errors import (
    BadRequestError,
    BusinessError,
    ConflictError,
    DataIntegrityError,
    DatabaseAccessError,
    ParamValidationError,
)
from app.common.response import error, error_with, render

logger = logging.getLogger(__name__)

FIELD_ERROR_DELIMITER = ", "

_PARAM_SOURCES = ("query", "path", "header", "cookie")

# pydantic 解析失败的错误类型 -> 期望类型
_PARSING_TYPES: Dict[str, str] = {
    "int_parsing": "int",
    "int_from_float": "int",
    "float_parsing": "float",
    "bool_parsing": "bool",
    "decimal_parsing": "decimal",
    "date_parsing": "date",
    "datetime_parsing": "datetime",
    "uuid_parsing": "uuid",
}

_RUNTIME_ERRORS = (RuntimeError, ValueError, TypeError, LookupError, AttributeError, ArithmeticError)

_UNIQUE_VIOLATION_SQLSTATE = "23505"


def _respond(err: BusinessError) -> JSONResponse:
    return render(error_with(err.code, err.message), err.http_status)


# ---------- 业务异常 ----------

async def business_error_handler(request: Request, exc: BusinessError) -> JSONResponse:
    status_code = exc.http_status
    if status_code >= 500:
        logger.error("business error %s: %s", exc.code.name, exc.message, exc_info=exc)
    else:
        logger.warning("business error %s: %s", exc.code.name, exc.message)
    return _respond(exc)


# ---------- 请求参数 ----------

def _field_name(loc: Sequence[Union[str, int]]) -> str:
    parts = [str(item) for item in loc]
    if parts and parts[0] in ("body",) + _PARAM_SOURCES:
        parts = parts[1:]
    return ".".join(parts)


def _is_malformed_body(err: Dict[str, Any]) -> bool:
    loc = tuple(err.get("loc", ()))
    if err.get("type") == "json_invalid":
        return True
    # 整个 body 缺失或类型不对（例如要对象给了数组）
    return loc == ("body",)


def _is_param_error(err: Dict[str, Any]) -> bool:
    loc = err.get("loc", ())
    return bool(loc) and loc[0] in _PARAM_SOURCES


def classify_validation_errors(errors: List[Dict[str, Any]]) -> BusinessError:
    """按优先级挑一种：请求体不可读 > 缺参数 > 参数类型错 > 字段校验"""
    if any(_is_malformed_body(err) for err in errors):
        return BadRequestError(message="request body is malformed")

    for err in errors:
        if _is_param_error(err) and err.get("type") == "missing":
            return BadRequestError(message=f"missing required parameter: {_field_name(err['loc'])}")

    for err in errors:
        expected = _PARSING_TYPES.get(err.get("type", ""))
        if _is_param_error(err) and expected is not None:
            return BadRequestError(
                message=f"parameter type error: {_field_name(err['loc'])} should be {expected}"
            )

    fields = [f"{_field_name(err.get('loc', ()))}: {err.get('msg')}" for err in errors]
    return ParamValidationError(message="validation failed: " + FIELD_ERROR_DELIMITER.join(fields))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    err = classify_validation_errors(list(exc.errors()))
    logger.warning("request validation failed on %s %s: %s", request.method, request.url.path, err.message)
    return _respond(err)


# ---------- 路由 / 方法 ----------

async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    headers = getattr(exc, "headers", None)

    if exc.status_code == 405:
        envelope = error_with(ApiCode.METHOD_NOT_ALLOWED, f"unsupported request method: {request.method}")
    elif exc.status_code == 404:
        # 未匹配路由也返回完整信封，而不是空 body
        envelope = error_with(ApiCode.NOT_FOUND, f"requested resource not found: {request.url.path}")
    else:
        code = ApiCode.from_code(exc.status_code)
        detail = exc.detail if isinstance(exc.detail, str) and exc.detail else None
        if code is not None:
            envelope = error_with(code, detail)
        else:
            envelope = error(detail or "request failed", exc.status_code)

    if exc.status_code >= 500:
        logger.error("http error %s on %s %s", exc.status_code, request.method, request.url.path)
    else:
        logger.warning("http error %s on %s %s", exc.status_code, request.method, request.url.path)
    return render(envelope, exc.status_code, headers=headers)


# ---------- 数据库 ----------

def _is_unique_violation(orig: Any) -> bool:
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate:
        return sqlstate == _UNIQUE_VIOLATION_SQLSTATE
    text = str(orig).lower()
    return "unique" in text or "duplicate" in text


def _constraint_name(orig: Any) -> Optional[str]:
    diag = getattr(orig, "diag", None)
    return getattr(diag, "constraint_name", None)


def _conflict_message(orig: Any) -> str:
    # 先看驱动给出的约束名，拿不到再退回到错误文本里找关键字
    for text in (_constraint_name(orig), str(orig)):
        if not text:
            continue
        lowered = text.lower()
        if "username" in lowered:
            return ApiCode.USERNAME_EXISTS.message
        if "email" in lowered:
            return ApiCode.EMAIL_EXISTS.message
    return ApiCode.DATA_EXISTS.message


def classify_integrity_error(exc: sa_exc.IntegrityError) -> BusinessError:
    orig = exc.orig if exc.orig is not None else exc
    if _is_unique_violation(orig):
        return ConflictError(message=_conflict_message(orig))
    return DataIntegrityError(message="data integrity constraint violated")


async def integrity_error_handler(request: Request, exc: sa_exc.IntegrityError) -> JSONResponse:
    err = classify_integrity_error(exc)
    logger.warning("integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return _respond(err)


async def database_error_handler(request: Request, exc: sa_exc.SQLAlchemyError) -> JSONResponse:
    logger.error("database error on %s %s", request.method, request.url.path, exc_info=exc)
    return _respond(DatabaseAccessError())


# ---------- 兜底 ----------

async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled %s on %s %s", type(exc).__name__, request.method, request.url.path, exc_info=exc
    )
    message = "system runtime error" if isinstance(exc, _RUNTIME_ERRORS) else "internal server error"
    return render(error(message, ApiCode.INTERNAL_ERROR.code), 500)


def register_exception_handlers(app: FastAPI) -> None:
    """集中注册异常处理器，匹配时按异常类的 MRO 取最具体的那个"""
    app.add_exception_handler(BusinessError, business_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(sa_exc.IntegrityError, integrity_error_handler)
    app.add_exception_handler(sa_exc.SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
