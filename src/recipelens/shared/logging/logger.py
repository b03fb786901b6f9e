from __future__ import annotations

import logging
import time
import uuid
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from recipelens.shared.config.settings import Settings, settings as default_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
REQUEST_ID_HEADER = "X-Request-ID"


def setup_logging(cfg: Optional[Settings] = None) -> None:
    cfg = cfg or default_settings
    lvl = getattr(logging, cfg.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(level=lvl, format=LOG_FORMAT)
    # Reduce verbosity of noisy loggers
    for noisy in ("botocore", "boto3", "urllib3", "pymongo", "httpx"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request and tags the response with a request id."""

    def __init__(self, app, logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.log = logger or logging.getLogger("recipelens.http")

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self.log.exception(
                "request failed | id=%s | %s %s", request_id, request.method, request.url.path
            )
            raise
        elapsed_ms = (time.perf_counter() - start) * 1000
        self.log.info(
            "request | id=%s | %s %s | status=%s | %.1fms",
            request_id,
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
