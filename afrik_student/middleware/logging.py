# afrik_student/middleware/logging.py
"""
Request logging middleware.
"""

import time
import uuid

from fastapi import Request

from afrik_student.core.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


async def logging_middleware(request: Request, call_next):
    """
    Log every request with its duration; echo a request id back to the client.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    start_time = time.time()

    logger.info(
        "request started",
        request_id=request_id,
        method=request.method,
        path=request.url.path,
        client=request.client.host if request.client else None,
    )

    try:
        response = await call_next(request)
    except Exception:
        logger.exception(
            "request failed",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            duration_ms=round((time.time() - start_time) * 1000, 2),
        )
        raise

    logger.info(
        "request completed",
        request_id=request_id,
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round((time.time() - start_time) * 1000, 2),
    )
    response.headers[REQUEST_ID_HEADER] = request_id
    return response
