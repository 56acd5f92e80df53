# clinic_booking/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from redis.exceptions import RedisError
from starlette.responses import JSONResponse

from . import redis_client as redis_module
from .config import settings
from .database import SessionLocal, init_db
from .middleware.auth import auth_middleware
from .middleware.rate_limit import rate_limit_middleware
from .routers import auth, bookings, slots
from .services.errors import BookingError
from .services.users import seed_admin

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


def _error(status: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={"error": {"code": code, "message": message}},
    )


async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
    return _error(exc.status_code, exc.code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    message = first.get("msg", "Invalid request.")
    return _error(400, "BAD_REQUEST", message)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    with SessionLocal() as db:
        seed_admin(db, settings.admin_name, settings.admin_email, settings.admin_password)
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="Clinic Booking API", lifespan=lifespan)

    # ===== Middleware order (last added runs first) =====
    app.middleware("http")(rate_limit_middleware)
    app.middleware("http")(auth_middleware)
    if settings.frontend_url:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[settings.frontend_url],
            allow_methods=["GET", "POST", "DELETE"],
            allow_headers=["Authorization", "Content-Type"],
        )

    app.include_router(auth.router, prefix="/api")
    app.include_router(slots.router, prefix="/api")
    app.include_router(bookings.router, prefix="/api")

    app.add_exception_handler(BookingError, booking_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    @app.get("/health")
    def health():
        redis = redis_module.redis_client
        if redis is None:
            redis_ok = None
        else:
            try:
                redis_ok = redis.ping()
            except RedisError:
                logger.exception("Redis ping failed")
                redis_ok = False
        return {"status": "ok", "redis": redis_ok}

    return app


app = create_app()
