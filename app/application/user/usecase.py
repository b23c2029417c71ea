# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import hashlib
import logging
import secrets
from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from app.common.errors import email_exists, user_not_found, username_exists
from app.domain import models, schemas
from app.infra.user_repository import UserRepository

logger = logging.getLogger(__name__)

_PBKDF2_ITERATIONS = 120_000


def hash_password(password: str) -> str:
    """pbkdf2_sha256$<iterations>$<salt>$<hex>"""
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), _PBKDF2_ITERATIONS)
    return f"pbkdf2_sha256${_PBKDF2_ITERATIONS}${salt}${digest.hex()}"


def _to_response(user: models.User) -> schemas.UserResponse:
    return schemas.UserResponse.model_validate(user)


class UserUsecase:
    """用户 CRUD；唯一性等业务规则在这里抛异常，由全局异常处理转成响应"""

    def create_user(self, db: Session, *, req: schemas.CreateUserRequest) -> schemas.UserResponse:
        repo = UserRepository(db)
        if repo.exists_by_username(req.username):
            raise username_exists(req.username)
        if repo.exists_by_email(req.email):
            raise email_exists(req.email)

        user = repo.add(
            models.User(
                username=req.username,
                password_hash=hash_password(req.password),
                email=req.email,
                full_name=req.full_name,
            )
        )
        db.commit()
        db.refresh(user)
        logger.info("user created id=%s username=%s", user.id, user.username)
        return _to_response(user)

    def get_user(self, db: Session, *, user_id: int) -> schemas.UserResponse:
        user = UserRepository(db).get(user_id)
        if user is None:
            raise user_not_found(user_id)
        return _to_response(user)

    def list_users(self, db: Session, *, active_only: bool = False) -> List[schemas.UserResponse]:
        return [_to_response(u) for u in UserRepository(db).list_all(active_only=active_only)]

    def update_user(self, db: Session, *, user_id: int, req: schemas.UpdateUserRequest) -> schemas.UserResponse:
        repo = UserRepository(db)
        user = repo.get(user_id)
        if user is None:
            raise user_not_found(user_id)

        if req.email is not None and req.email != user.email and repo.exists_by_email(req.email):
            raise email_exists(req.email)

        if req.full_name is not None:
            user.full_name = req.full_name
        if req.email is not None:
            user.email = req.email
        user.updated_at = datetime.now()

        db.commit()
        db.refresh(user)
        return _to_response(user)

    def delete_user(self, db: Session, *, user_id: int) -> None:
        repo = UserRepository(db)
        user = repo.get(user_id)
        if user is None:
            raise user_not_found(user_id)
        repo.delete(user)
        db.commit()
        logger.info("user deleted id=%s", user_id)

    def search_users(self, db: Session, *, keyword: str) -> List[schemas.UserResponse]:
        return [_to_response(u) for u in UserRepository(db).search(keyword)]

    def find_users_with_conditions(
        self,
        db: Session,
        *,
        username: Optional[str] = None,
        email: Optional[str] = None,
        is_active: Optional[bool] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[schemas.UserResponse]:
        users = UserRepository(db).find_with_conditions(
            username=username,
            email=email,
            is_active=is_active,
            start_date=start_date,
            end_date=end_date,
            limit=limit,
        )
        return [_to_response(u) for u in users]

    def create_users_in_batch(
        self,
        db: Session,
        *,
        reqs: Sequence[schemas.CreateUserRequest],
    ) -> List[schemas.UserResponse]:
        # 不逐条查重，交给数据库唯一约束，冲突时整批回滚
        users = UserRepository(db).add_all(
            [
                models.User(
                    username=req.username,
                    password_hash=hash_password(req.password),
                    email=req.email,
                    full_name=req.full_name,
                )
                for req in reqs
            ]
        )
        db.commit()
        for user in users:
            db.refresh(user)
        logger.info("users created in batch count=%s", len(users))
        return [_to_response(u) for u in users]

    def update_user_status(self, db: Session, *, user_id: int, is_active: bool) -> schemas.UserResponse:
        user = UserRepository(db).get(user_id)
        if user is None:
            raise user_not_found(user_id)
        user.is_active = is_active
        user.updated_at = datetime.now()
        db.commit()
        db.refresh(user)
        return _to_response(user)

    def get_user_statistics(self, db: Session) -> schemas.UserStatistics:
        repo = UserRepository(db)
        active = repo.count_by_status(True)
        inactive = repo.count_by_status(False)
        total = active + inactive
        return schemas.UserStatistics(
            total_users=total,
            active_users=active,
            inactive_users=inactive,
            active_percentage=(active * 100.0 / total) if total > 0 else 0.0,
        )

    def find_users_by_ids(self, db: Session, *, ids: Sequence[int]) -> List[schemas.UserResponse]:
        return [_to_response(u) for u in UserRepository(db).find_by_ids(ids)]
