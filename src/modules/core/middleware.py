"""Request correlation for structured logs.

Every log line emitted while a request is handled carries the same
``correlation_id``: the caller's ``X-Request-ID`` when present, a fresh
UUID4 otherwise.  The id is echoed back on the response.
"""

import uuid
from contextvars import ContextVar
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

REQUEST_ID_HEADER = "X-Request-ID"

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

logger = structlog.get_logger(__name__)


class CorrelationIdMiddleware:
    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        correlation_id_var.set(cid)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid)

        log = logger.bind(method=request.method, path=request.path)
        log.info("request.started")
        try:
            response = self.get_response(request)
        finally:
            structlog.contextvars.unbind_contextvars("correlation_id")

        # Logged after unbinding, so the id is passed explicitly.
        log.info(
            "request.finished", status_code=response.status_code, correlation_id=cid
        )
        response[REQUEST_ID_HEADER] = cid
        return response
