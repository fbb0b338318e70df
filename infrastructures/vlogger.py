# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: 日志初始化 + 请求上下文（request id / 客户端 / 访问日志）

from __future__ import annotations

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

_request_id_var: ContextVar[str] = ContextVar("request_id", default="-")
_client_var: ContextVar[str] = ContextVar("client", default="-")

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [rid=%(request_id)s client=%(client)s] %(message)s"


def init_logging(level: str) -> None:
    lvl = logging.getLevelName(level.upper().strip())
    if not isinstance(lvl, int):
        lvl = logging.INFO

    old_factory = logging.getLogRecordFactory()

    def record_factory(*args, **kwargs):
        record = old_factory(*args, **kwargs)
        record.request_id = _request_id_var.get()
        record.client = _client_var.get()
        return record

    logging.setLogRecordFactory(record_factory)
    logging.basicConfig(level=lvl, format=_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S", force=True)

    # uvicorn 自带 handler 会绕过上面的格式
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        lg = logging.getLogger(name)
        lg.handlers.clear()
        lg.propagate = True

    vlogger.info("logging initialized level=%s", logging.getLevelName(lvl))


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag every log line of a request with its request id and client address.

    The client address is the same value the login/registration throttles key on,
    so rate-limit warnings can be traced back to the access line that caused them.
    """

    def __init__(
            self,
            app: ASGIApp,
            *,
            header_name: str = "X-Request-ID",
            generate_request_id: bool = True,
            log_requests: bool = True,
    ) -> None:
        super().__init__(app)
        self._header_name = header_name
        self._generate = generate_request_id
        self._log_requests = log_requests

    async def dispatch(self, request: Request, call_next) -> Response:
        rid = (request.headers.get(self._header_name) or "").strip()
        if not rid and self._generate:
            rid = uuid.uuid4().hex

        rid_token = _request_id_var.set(rid or "-")
        client_token = _client_var.set(request.client.host if request.client else "-")
        start = time.perf_counter()
        response: Response | None = None
        try:
            response = await call_next(request)
            if rid:
                response.headers[self._header_name] = rid
            return response
        finally:
            if self._log_requests:
                vlogger.info(
                    "http %s %s -> %s %sms",
                    request.method,
                    request.url.path,
                    getattr(response, "status_code", "EXC"),
                    int((time.perf_counter() - start) * 1000),
                )
            _client_var.reset(client_token)
            _request_id_var.reset(rid_token)


vlogger = logging.getLogger("KALLUBA")
