# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import logging

from app.common.logging import setup_logging
from app.infra.db import Base, engine
from app.domain import models  # noqa: F401

logger = logging.getLogger("init_db")


def init_db() -> None:
    """本地/测试环境直接建表；生产环境用 `alembic upgrade head`"""
    logger.info("creating tables on %s", engine.url.render_as_string(hide_password=True))
    Base.metadata.create_all(bind=engine)
    logger.info("done")


if __name__ == "__main__":
    setup_logging()
    init_db()
