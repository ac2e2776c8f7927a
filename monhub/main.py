import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from starlette import status

from monhub.config import settings
from monhub.constants import ERROR_BOUNDARY_MESSAGE, ERROR_BOUNDARY_TITLE
from monhub.limits import limiter, RateLimitExceeded, SlowAPIMiddleware
from monhub.Middleware.request_log_middleware import request_log_middleware
from monhub.services.api_client import ApiError

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


from monhub.routers import (
    admin,
    appointments,
    chat,
    collaboration,
    legal,
    notifications,
    properties,
    search_ads,
)

app = FastAPI(title="MonHubImmo")
app.middleware("http")(request_log_middleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Rate limiting middleware and handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)


def api_error_status(exc: ApiError) -> int:
    if exc.timeout:
        return status.HTTP_504_GATEWAY_TIMEOUT
    if exc.status_code and 400 <= exc.status_code < 500:
        return exc.status_code
    return status.HTTP_502_BAD_GATEWAY


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    """Marketplace API failures surface as a toast for the page."""
    status_code = api_error_status(exc)
    if status_code >= 500:
        logger.error(f"Upstream failure on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": exc.message,
            "error": "timeout" if exc.timeout else "api_error",
            "toast": {"type": "error", "message": exc.message},
        },
    )


@app.exception_handler(Exception)
async def error_boundary_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=True)
    content = {
        "detail": ERROR_BOUNDARY_MESSAGE,
        "error": "unexpected_error",
        "title": ERROR_BOUNDARY_TITLE,
        "actions": ["retry", "reload"],
    }
    if settings.is_development:
        content["details"] = {
            "message": str(exc),
            "stack": traceback.format_exception(type(exc), exc, exc.__traceback__),
        }
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content
    )


@app.get("/healthy", status_code=status.HTTP_200_OK)
def health_check():
    return {"status": "Healthy"}


app.include_router(collaboration.router)
app.include_router(chat.router)
app.include_router(properties.router)
app.include_router(search_ads.router)
app.include_router(appointments.router)
app.include_router(admin.router)
app.include_router(notifications.router)
app.include_router(legal.router)
