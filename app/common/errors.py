# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from app.common.codes import ApiCode


@dataclass(eq=False)
class BusinessError(Exception):
    """业务异常统一，message 缺省取状态码自带文案"""
    code: ApiCode
    message: Optional[str] = None
    status_code: Optional[int] = None

    def __post_init__(self) -> None:
        if self.message is None:
            self.message = self.code.message
        super().__init__(self.message)

    @property
    def http_status(self) -> int:
        if self.status_code is not None:
            return self.status_code
        return http_status_for_code(self.code)


class BadRequestError(BusinessError):
    def __init__(self, code: ApiCode = ApiCode.BAD_REQUEST, message: Optional[str] = None) -> None:
        super().__init__(code=code, message=message, status_code=400)


class ParamValidationError(BusinessError):
    def __init__(self, code: ApiCode = ApiCode.VALIDATION_ERROR, message: Optional[str] = None) -> None:
        super().__init__(code=code, message=message, status_code=400)


class UnauthorizedError(BusinessError):
    def __init__(self, code: ApiCode = ApiCode.UNAUTHORIZED, message: Optional[str] = None) -> None:
        super().__init__(code=code, message=message, status_code=401)


class ForbiddenError(BusinessError):
    def __init__(self, code: ApiCode = ApiCode.FORBIDDEN, message: Optional[str] = None) -> None:
        super().__init__(code=code, message=message, status_code=403)


class NotFoundError(BusinessError):
    def __init__(self, code: ApiCode = ApiCode.NOT_FOUND, message: Optional[str] = None) -> None:
        super().__init__(code=code, message=message, status_code=404)


class ConflictError(BusinessError):
    def __init__(self, code: ApiCode = ApiCode.CONFLICT, message: Optional[str] = None) -> None:
        super().__init__(code=code, message=message, status_code=409)


class TooManyRequestsError(BusinessError):
    def __init__(self, code: ApiCode = ApiCode.TOO_MANY_REQUESTS, message: Optional[str] = None) -> None:
        super().__init__(code=code, message=message, status_code=429)


class DataIntegrityError(BusinessError):
    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(code=ApiCode.DATA_INTEGRITY_ERROR, message=message, status_code=400)


class DatabaseAccessError(BusinessError):
    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(code=ApiCode.DATABASE_ERROR, message=message, status_code=500)


def http_status_for_code(code: Union[ApiCode, int]) -> int:
    """状态码 -> HTTP 状态，按分段推导"""
    value = code.code if isinstance(code, ApiCode) else code

    if ApiCode.is_success(value):
        return 200
    if value == ApiCode.NOT_FOUND.code:
        return 404
    if value == ApiCode.UNAUTHORIZED.code:
        return 401
    if value == ApiCode.FORBIDDEN.code:
        return 403
    if value == ApiCode.CONFLICT.code:
        return 409
    if value == ApiCode.TOO_MANY_REQUESTS.code:
        return 429
    if ApiCode.is_client_error(value):
        return 400
    if ApiCode.is_server_error(value):
        return 500
    return 400


# ---------- 常用业务异常 ----------

def user_not_found(user_id: Optional[int] = None) -> NotFoundError:
    message = f"user not found: {user_id}" if user_id is not None else ApiCode.USER_NOT_FOUND.message
    return NotFoundError(code=ApiCode.USER_NOT_FOUND, message=message)


def username_exists(username: str) -> ConflictError:
    return ConflictError(code=ApiCode.USERNAME_EXISTS, message=f"username already exists: {username}")


def email_exists(email: str) -> ConflictError:
    return ConflictError(code=ApiCode.EMAIL_EXISTS, message=f"email already exists: {email}")


def validation_failed(message: str) -> ParamValidationError:
    return ParamValidationError(message=message)


def user_disabled(username: Optional[str] = None) -> ForbiddenError:
    message = f"user is disabled: {username}" if username else ApiCode.USER_DISABLED.message
    return ForbiddenError(code=ApiCode.USER_DISABLED, message=message)


def data_not_found(what: Optional[str] = None) -> NotFoundError:
    message = f"data not found: {what}" if what else ApiCode.DATA_NOT_FOUND.message
    return NotFoundError(code=ApiCode.DATA_NOT_FOUND, message=message)


def data_exists(what: Optional[str] = None) -> ConflictError:
    message = f"data already exists: {what}" if what else ApiCode.DATA_EXISTS.message
    return ConflictError(code=ApiCode.DATA_EXISTS, message=message)


def too_many_requests(message: Optional[str] = None) -> TooManyRequestsError:
    return TooManyRequestsError(message=message)
