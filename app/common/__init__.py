# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""横切能力：trace 上下文、统一响应信封、状态码、异常与异常处理

约定：
- 业务层只抛 BusinessError（及其子类），HTTP 状态和信封由 exception_handlers 统一决定
- 每个请求的 trace_id 由 TraceIdMiddleware 写入上下文，日志与响应信封都从这里读取
"""

from __future__ import annotations
