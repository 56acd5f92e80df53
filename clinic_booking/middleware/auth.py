# clinic_booking/middleware/auth.py
"""
Caller identity plumbing.

auth_middleware turns "Authorization: Bearer <token>" into
request.state.identity (CallerIdentity or None). Routes declare what they
need through require_identity / require_admin.
"""

import logging

from fastapi import Depends, Request
from starlette.responses import JSONResponse

from ..config import settings
from ..services.errors import Forbidden, Unauthorized
from ..services.security import CallerIdentity, verify_token

logger = logging.getLogger(__name__)


def _deny(status: int = 401, code: str = "UNAUTHORIZED", message: str = "Unauthorized") -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={"error": {"code": code, "message": message}},
    )


async def auth_middleware(request: Request, call_next):
    request.state.identity = None

    header = request.headers.get("Authorization")
    if header:
        scheme, _, token = header.partition(" ")
        token = token.strip()
        if scheme.lower() != "bearer" or not token:
            return _deny(message="Malformed Authorization header.")

        try:
            identity = verify_token(token, settings.auth_secret, settings.token_ttl_seconds)
        except ValueError as e:
            logger.info(f"Token rejected on {request.url.path}: {e}")
            return _deny(message=str(e))

        request.state.identity = identity

    return await call_next(request)


# ===== Route dependencies =====

def require_identity(request: Request) -> CallerIdentity:
    identity = getattr(request.state, "identity", None)
    if identity is None:
        raise Unauthorized("Not authorized, no token.")
    return identity


def require_admin(identity: CallerIdentity = Depends(require_identity)) -> CallerIdentity:
    if not identity.is_admin:
        raise Forbidden("Admin access required.")
    return identity
