# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Path, Query
from pydantic import conint
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_user_usecase
from app.application.user.usecase import UserUsecase
from app.common.response import ApiResponse, render, success
from app.domain import schemas


router = APIRouter(prefix="/users", tags=["users"])

# users.id 对应 BIGINT 上限，超出的 id 在参数校验阶段就拒绝
MAX_ID = 2**63 - 1


# 固定路径要放在 /{user_id} 之前注册

@router.post("", status_code=201, response_model=ApiResponse[schemas.UserResponse])
def create_user(
    req: schemas.CreateUserRequest,
    db: Session = Depends(get_db),
    uc: UserUsecase = Depends(get_user_usecase),
):
    user = uc.create_user(db, req=req)
    return render(success(user, "user created"), 201)


@router.get("", response_model=ApiResponse[List[schemas.UserResponse]])
def list_users(
    active_only: bool = Query(False, alias="activeOnly"),
    db: Session = Depends(get_db),
    uc: UserUsecase = Depends(get_user_usecase),
):
    users = uc.list_users(db, active_only=active_only)
    return render(success(users, "users fetched"))


@router.get("/search", response_model=ApiResponse[List[schemas.UserResponse]])
def search_users(
    keyword: str = Query(...),
    db: Session = Depends(get_db),
    uc: UserUsecase = Depends(get_user_usecase),
):
    users = uc.search_users(db, keyword=keyword)
    return render(success(users, "users searched"))


@router.get("/advanced-search", response_model=ApiResponse[List[schemas.UserResponse]])
def advanced_search_users(
    username: Optional[str] = Query(None),
    email: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: Session = Depends(get_db),
    uc: UserUsecase = Depends(get_user_usecase),
):
    users = uc.find_users_with_conditions(
        db,
        username=username,
        email=email,
        is_active=is_active,
        limit=limit,
    )
    return render(success(users, "advanced search done"))


@router.get("/statistics", response_model=ApiResponse[schemas.UserStatistics])
def get_user_statistics(
    db: Session = Depends(get_db),
    uc: UserUsecase = Depends(get_user_usecase),
):
    return render(success(uc.get_user_statistics(db), "statistics fetched"))


@router.post("/batch", status_code=201, response_model=ApiResponse[List[schemas.UserResponse]])
def create_users_in_batch(
    reqs: List[schemas.CreateUserRequest],
    db: Session = Depends(get_db),
    uc: UserUsecase = Depends(get_user_usecase),
):
    users = uc.create_users_in_batch(db, reqs=reqs)
    return render(success(users, "users created in batch"), 201)


@router.post("/by-ids", response_model=ApiResponse[List[schemas.UserResponse]])
def find_users_by_ids(
    ids: List[conint(ge=1, le=MAX_ID)] = Body(...),
    db: Session = Depends(get_db),
    uc: UserUsecase = Depends(get_user_usecase),
):
    return render(success(uc.find_users_by_ids(db, ids=ids), "users fetched by ids"))


@router.get("/{user_id}", response_model=ApiResponse[schemas.UserResponse])
def get_user(
    user_id: int = Path(..., ge=1, le=MAX_ID),
    db: Session = Depends(get_db),
    uc: UserUsecase = Depends(get_user_usecase),
):
    return render(success(uc.get_user(db, user_id=user_id), "user fetched"))


@router.put("/{user_id}", response_model=ApiResponse[schemas.UserResponse])
def update_user(
    req: schemas.UpdateUserRequest,
    user_id: int = Path(..., ge=1, le=MAX_ID),
    db: Session = Depends(get_db),
    uc: UserUsecase = Depends(get_user_usecase),
):
    return render(success(uc.update_user(db, user_id=user_id, req=req), "user updated"))


@router.patch("/{user_id}/status", response_model=ApiResponse[schemas.UserResponse])
def update_user_status(
    user_id: int = Path(..., ge=1, le=MAX_ID),
    is_active: bool = Query(..., alias="isActive"),
    db: Session = Depends(get_db),
    uc: UserUsecase = Depends(get_user_usecase),
):
    user = uc.update_user_status(db, user_id=user_id, is_active=is_active)
    return render(success(user, "user status updated"))


@router.delete("/{user_id}", response_model=ApiResponse[None])
def delete_user(
    user_id: int = Path(..., ge=1, le=MAX_ID),
    db: Session = Depends(get_db),
    uc: UserUsecase = Depends(get_user_usecase),
):
    uc.delete_user(db, user_id=user_id)
    return render(success(message="user deleted"))
