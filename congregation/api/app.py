import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import SQLModel

from congregation.shared_kernel import error_codes
from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))
    error_dict = {"code": error_codes.INVALID_ARGUMENT, "message": "; ".join(messages)}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": error_dict})


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    error_dict = {"code": error_codes.INTERNAL, "message": "Internal server error"}
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    import congregation.domain.entities  # noqa: F401  registers the table models
    from congregation.depends import engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield


def create_app(ApplicationConfig, create_tables: bool = True) -> FastAPI:
    app = FastAPI(
        title="Congregation API",
        version="0.1.0",
        lifespan=lifespan if create_tables else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from congregation.api.routes import (
        admin,
        announcements,
        auth,
        churches,
        events,
        health_check,
        maintenance,
        prayers,
        subscriptions,
        users,
        verses,
    )

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=prefix, tags=["Authentication"])
    app.include_router(users.router, prefix=prefix, tags=["User"])
    app.include_router(churches.router, prefix=prefix, tags=["Church"])
    app.include_router(announcements.router, prefix=prefix, tags=["Announcements"])
    app.include_router(events.router, prefix=prefix, tags=["Events"])
    app.include_router(prayers.router, prefix=prefix, tags=["Prayers"])
    app.include_router(verses.router, prefix=prefix, tags=["Daily Verses"])
    app.include_router(subscriptions.router, prefix=prefix, tags=["Subscriptions"])
    app.include_router(admin.router, prefix=prefix, tags=["Admin"])
    app.include_router(maintenance.router, prefix=prefix, tags=["Maintenance"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
