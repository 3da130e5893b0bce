# shared/middleware.py
import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from shared.auth import caller_from_token
from shared.settings import RouteAccessMap

logger = logging.getLogger(__name__)


class RouteAccessMiddleware(BaseHTTPMiddleware):
    """Reject requests whose role is not listed for the requested path.

    Paths no rule covers pass through untouched.
    """

    def __init__(self, app, access_map: RouteAccessMap):
        super().__init__(app)
        self.access_map = access_map

    async def dispatch(self, request, call_next):
        roles = self.access_map.allowed_roles(request.url.path)
        if roles is None:
            return await call_next(request)

        scheme, _, token = request.headers.get("Authorization", "").partition(" ")
        caller = caller_from_token(token) if scheme.lower() == "bearer" and token else None
        if caller is None:
            return JSONResponse(
                status_code=401,
                content={"detail": "Not authenticated"},
                headers={"WWW-Authenticate": "Bearer"},
            )
        if caller.role is None or caller.role.value not in roles:
            logger.warning("Caller %s may not read %s", caller.id, request.url.path)
            return JSONResponse(status_code=403, content={"detail": "Not authorized to view this page"})
        return await call_next(request)
