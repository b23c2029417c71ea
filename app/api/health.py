# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import logging
import time
from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.common.codes import ApiCode
from app.common.response import error_with, render, success
from app.infra import db as db_infra
from app.infra.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health(db: Session = Depends(get_db)):
    data: Dict[str, Any] = {
        "status": "UP",
        "timestamp": int(time.time() * 1000),
        "service": settings.APP_NAME,
    }
    try:
        db_infra.ping(db)
        data["database"] = {"status": "UP", "dialect": db.get_bind().dialect.name}
    except SQLAlchemyError as e:
        logger.warning("health check database down: %s", e)
        data["database"] = {"status": "DOWN"}
    return render(success(data, "health check done"))


@router.get("/ready")
def readiness(db: Session = Depends(get_db)):
    """数据库可用才算就绪，否则 503"""
    try:
        db_infra.ping(db)
    except SQLAlchemyError as e:
        logger.warning("readiness check failed: %s", e)
        return render(error_with(ApiCode.SERVICE_UNAVAILABLE, "service not ready"), 503)
    return render(success({"status": "READY"}, "service ready"))


@router.get("/live")
def liveness():
    return render(success({"status": "ALIVE"}, "service alive"))
