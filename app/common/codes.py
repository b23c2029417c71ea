# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""API 状态码

分段约定：
- 200-299: 成功
- 400-499: 客户端错误
- 500-599: 服务端错误
- 1000+:   业务自定义（2000 用户 / 3000 认证 / 4000 数据 / 5000 系统）
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ApiCode(Enum):
    # ---------- 成功 ----------
    SUCCESS = (200, "operation succeeded")
    CREATED = (201, "created")
    UPDATED = (202, "updated")
    DELETED = (204, "deleted")

    # ---------- 客户端错误 ----------
    BAD_REQUEST = (400, "bad request")
    UNAUTHORIZED = (401, "unauthorized")
    FORBIDDEN = (403, "forbidden")
    NOT_FOUND = (404, "resource not found")
    METHOD_NOT_ALLOWED = (405, "method not allowed")
    REQUEST_TIMEOUT = (408, "request timeout")
    CONFLICT = (409, "resource conflict")
    PAYLOAD_TOO_LARGE = (413, "payload too large")
    TOO_MANY_REQUESTS = (429, "too many requests")

    # ---------- 服务端错误 ----------
    INTERNAL_ERROR = (500, "internal server error")
    NOT_IMPLEMENTED = (501, "not implemented")
    SERVICE_UNAVAILABLE = (503, "service unavailable")
    GATEWAY_TIMEOUT = (504, "gateway timeout")

    # ---------- 通用业务 ----------
    VALIDATION_ERROR = (1001, "validation failed")
    DATABASE_ERROR = (1002, "database operation failed")
    EXTERNAL_SERVICE_ERROR = (1003, "external service call failed")
    CACHE_ERROR = (1004, "cache operation failed")
    FILE_ERROR = (1005, "file operation failed")

    # ---------- 用户 ----------
    USER_NOT_FOUND = (2001, "user not found")
    USERNAME_EXISTS = (2002, "username already exists")
    EMAIL_EXISTS = (2003, "email already exists")
    USER_DISABLED = (2004, "user is disabled")
    INVALID_PASSWORD = (2005, "invalid password")
    USER_STATUS_ERROR = (2006, "user status error")
    USER_PERMISSION_DENIED = (2007, "user permission denied")
    USER_LOGIN_EXPIRED = (2008, "user login expired")
    USER_BATCH_OPERATION_FAILED = (2009, "user batch operation failed")
    USER_DATA_FORMAT_ERROR = (2010, "user data format error")

    # ---------- 认证 ----------
    INVALID_TOKEN = (3001, "invalid token")
    TOKEN_EXPIRED = (3002, "token expired")
    REFRESH_TOKEN_FAILED = (3003, "refresh token failed")
    LOGIN_FAILED = (3004, "login failed")
    LOGOUT_FAILED = (3005, "logout failed")

    # ---------- 数据 ----------
    DATA_NOT_FOUND = (4001, "data not found")
    DATA_EXISTS = (4002, "data already exists")
    DATA_FORMAT_ERROR = (4003, "data format error")
    DATA_INTEGRITY_ERROR = (4004, "data integrity error")
    DATA_VERSION_CONFLICT = (4005, "data version conflict")
    DATA_IMPORT_FAILED = (4006, "data import failed")
    DATA_EXPORT_FAILED = (4007, "data export failed")

    # ---------- 系统 ----------
    SYSTEM_MAINTENANCE = (5001, "system under maintenance")
    SYSTEM_CONFIG_ERROR = (5002, "system configuration error")
    SYSTEM_RESOURCE_INSUFFICIENT = (5003, "system resources insufficient")
    SYSTEM_RATE_LIMIT = (5004, "system rate limited")
    SYSTEM_CIRCUIT_BREAKER = (5005, "system circuit breaker open")

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message

    @classmethod
    def from_code(cls, code: int) -> Optional["ApiCode"]:
        for item in cls:
            if item.code == code:
                return item
        return None

    @staticmethod
    def is_success(code: int) -> bool:
        return 200 <= code <= 299

    @staticmethod
    def is_client_error(code: int) -> bool:
        return 400 <= code <= 499

    @staticmethod
    def is_server_error(code: int) -> bool:
        return 500 <= code <= 599

    @staticmethod
    def is_business_error(code: int) -> bool:
        return code >= 1000
