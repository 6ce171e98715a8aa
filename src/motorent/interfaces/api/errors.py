"""Translation of domain exceptions to HTTP responses."""

import logging

import falcon
import falcon.asgi

from motorent.domain.exceptions import (
    DuplicateOperation,
    Forbidden,
    MotorentError,
    NotFound,
    Unauthenticated,
    UnknownOperation,
    ValidationError,
)

logger = logging.getLogger(__name__)

ERROR_STATUSES: dict[type[Exception], str] = {
    Unauthenticated: falcon.HTTP_401,
    Forbidden: falcon.HTTP_403,
    NotFound: falcon.HTTP_404,
    ValidationError: falcon.HTTP_400,
    DuplicateOperation: falcon.HTTP_400,
}


def _status_handler(status: str):
    async def handle(
        req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: Exception, params: dict
    ) -> None:
        resp.status = status
        resp.media = {"error": str(ex)}

    return handle


async def handle_unknown_operation(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: UnknownOperation, params: dict
) -> None:
    """Unregistered operation key in code - a programming error, not a client one."""
    logger.error("%s %s referenced %s", req.method, req.path, ex)
    resp.status = falcon.HTTP_500
    resp.media = {"error": str(ex)}


async def handle_unexpected(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: Exception, params: dict
) -> None:
    logger.error(
        "Unhandled error on %s %s", req.method, req.path, exc_info=(type(ex), ex, ex.__traceback__)
    )
    resp.status = falcon.HTTP_500
    resp.media = {"error": "Internal server error"}


def register_error_handlers(app: falcon.asgi.App) -> None:
    """Falcon picks the most specific handler for a raised exception."""
    app.add_error_handler(Exception, handle_unexpected)
    app.add_error_handler(MotorentError, handle_unexpected)
    app.add_error_handler(UnknownOperation, handle_unknown_operation)
    for exc_type, status in ERROR_STATUSES.items():
        app.add_error_handler(exc_type, _status_handler(status))
