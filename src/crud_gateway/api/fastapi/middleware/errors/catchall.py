from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from crud_gateway.app.core.logging import log_error


class CatchAllExceptionMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            log_error(f"{type(exc).__name__} on {request.url.path} (500): {exc}", request, exc)
            return JSONResponse(
                status_code=500,
                content={
                    "error": type(exc).__name__,
                    "detail": str(exc)
                }
            )
