# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from app.domain import models


class UserRepository:
    """users 表的数据访问，只做查询/写入，不做业务判断"""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, user_id: int) -> Optional[models.User]:
        return self.db.get(models.User, user_id)

    def find_by_username(self, username: str) -> Optional[models.User]:
        stmt = select(models.User).where(models.User.username == username)
        return self.db.scalars(stmt).first()

    def find_by_email(self, email: str) -> Optional[models.User]:
        stmt = select(models.User).where(models.User.email == email)
        return self.db.scalars(stmt).first()

    def exists_by_username(self, username: str) -> bool:
        return self.find_by_username(username) is not None

    def exists_by_email(self, email: str) -> bool:
        return self.find_by_email(email) is not None

    def list_all(self, *, active_only: bool = False) -> List[models.User]:
        stmt = select(models.User).order_by(models.User.id)
        if active_only:
            stmt = stmt.where(models.User.is_active.is_(True))
        return list(self.db.scalars(stmt).all())

    def search(self, keyword: str) -> List[models.User]:
        pattern = f"%{keyword}%"
        stmt = (
            select(models.User)
            .where(or_(models.User.username.like(pattern), models.User.email.like(pattern)))
            .order_by(models.User.id)
        )
        return list(self.db.scalars(stmt).all())

    def find_with_conditions(
        self,
        *,
        username: Optional[str] = None,
        email: Optional[str] = None,
        is_active: Optional[bool] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[models.User]:
        stmt = select(models.User)
        if username:
            stmt = stmt.where(models.User.username.like(f"%{username}%"))
        if email:
            stmt = stmt.where(models.User.email.like(f"%{email}%"))
        if is_active is not None:
            stmt = stmt.where(models.User.is_active.is_(is_active))
        if start_date is not None:
            stmt = stmt.where(models.User.created_at >= start_date)
        if end_date is not None:
            stmt = stmt.where(models.User.created_at <= end_date)
        stmt = stmt.order_by(models.User.created_at.desc(), models.User.id.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.scalars(stmt).all())

    def find_by_ids(self, ids: Sequence[int]) -> List[models.User]:
        if not ids:
            return []
        stmt = select(models.User).where(models.User.id.in_(list(ids))).order_by(models.User.id)
        return list(self.db.scalars(stmt).all())

    def count_by_status(self, is_active: bool) -> int:
        stmt = select(func.count()).select_from(models.User).where(models.User.is_active.is_(is_active))
        return int(self.db.scalar(stmt) or 0)

    def add(self, user: models.User) -> models.User:
        self.db.add(user)
        self.db.flush()
        return user

    def add_all(self, users: Sequence[models.User]) -> List[models.User]:
        self.db.add_all(list(users))
        self.db.flush()
        return list(users)

    def delete(self, user: models.User) -> None:
        self.db.delete(user)
        self.db.flush()
