import logging
import os
import time
from typing import Optional

from fastapi import Request
from jose import JWTError

from monhub.services.auth_service import decode_token

logger = logging.getLogger("monhub.requests")

_SKIPPED_PATHS = ["/healthy", "/docs", "/openapi.json", "/redoc"]


def _user_id_from_header(auth_header: str) -> Optional[str]:
    if not auth_header.lower().startswith("bearer "):
        return None
    token = auth_header.split(" ", 1)[1].strip()
    try:
        payload = decode_token(token)
    except JWTError:
        # Endpoint dependencies reject bad tokens
        return None
    return payload.get("id") or payload.get("userId") or payload.get("sub")


async def request_log_middleware(request: Request, call_next):
    """Log one line per request with the caller, status and duration."""
    if os.getenv("TESTING") == "true":
        return await call_next(request)

    path = request.url.path
    if path in _SKIPPED_PATHS:
        return await call_next(request)

    start_time = time.time()
    method = request.method
    user_id = _user_id_from_header(request.headers.get("authorization", ""))
    ip_address = request.headers.get("x-forwarded-for") or (
        request.client.host if request.client else None
    )

    try:
        response = await call_next(request)
    except Exception:
        duration_ms = int((time.time() - start_time) * 1000)
        logger.exception(
            f"{method} {path} failed user={user_id} ip={ip_address} {duration_ms}ms"
        )
        raise

    duration_ms = int((time.time() - start_time) * 1000)
    status_code = getattr(response, "status_code", None)
    log = logger.warning if status_code and status_code >= 400 else logger.info
    log(f"{method} {path} {status_code} user={user_id} ip={ip_address} {duration_ms}ms")
    return response
