# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""示例接口：演示统一响应结构与状态码的用法"""

from __future__ import annotations

import time
from typing import List

from fastapi import APIRouter, Body, Query

from app.common import response
from app.common.codes import ApiCode
from app.common.errors import user_not_found, validation_failed
from app.common.pagination import PageRequest, PageResponse
from app.domain import schemas


router = APIRouter(prefix="/examples", tags=["examples"])

_EXAMPLE_TOTAL = 100


@router.get("/success")
def success_example():
    data = {
        "message": "this is a successful response",
        "timestamp": int(time.time() * 1000),
        "data": ["item1", "item2", "item3"],
    }
    return response.render(response.success(data))


@router.get("/success-with-custom-code")
def success_with_custom_code_example():
    return response.render(response.success_with(ApiCode.CREATED, "resource created", "custom success message"))


@router.get("/error")
def error_example():
    raise validation_failed("this is a validation error example")


# 以下几个直接返回错误信封，HTTP 状态仍是 200

@router.get("/not-found")
def not_found_example():
    return response.render(response.not_found("requested resource does not exist"))


@router.get("/unauthorized")
def unauthorized_example():
    return response.render(response.unauthorized())


@router.get("/forbidden")
def forbidden_example():
    return response.render(response.forbidden())


@router.get("/validation-error")
def validation_error_example():
    return response.render(response.validation_error("username must not be blank"))


@router.get("/business-error")
def business_error_example():
    raise user_not_found(123)


@router.get("/page")
def page_example(
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=1000),
):
    req = PageRequest(page=page, size=size)
    content = [
        {
            "id": req.offset + index,
            "name": f"Item {req.offset + index}",
            "description": f"item number {req.offset + index}",
        }
        for index in range(1, size + 1)
    ]
    total_pages = (_EXAMPLE_TOTAL + size - 1) // size
    page_response = PageResponse.of(
        content,
        page=page,
        size=size,
        total=_EXAMPLE_TOTAL,
        has_next=page < total_pages - 1,
    )
    return response.render(response.success(page_response, "page fetched"))


@router.post("/validate")
def validate_example(req: schemas.ExampleRequest):
    return response.render(response.success(req, "validation passed"))


@router.get("/codes")
def list_api_codes():
    codes = [
        {
            "code": item.code,
            "name": item.name,
            "message": item.message,
            "isSuccess": ApiCode.is_success(item.code),
            "isClientError": ApiCode.is_client_error(item.code),
            "isServerError": ApiCode.is_server_error(item.code),
            "isBusinessError": ApiCode.is_business_error(item.code),
        }
        for item in ApiCode
    ]
    return response.render(response.success(codes, "api codes fetched"))


@router.post("/batch-operation")
def batch_operation_example(ids: List[int] = Body(...)):
    result = {
        "processedCount": len(ids),
        "successCount": max(len(ids) - 1, 0),
        "failedCount": 1 if ids else 0,
        "failedIds": ids[-1:],
        "details": "batch operation finished, most items succeeded",
    }
    return response.render(response.success(result, "batch operation done"))
